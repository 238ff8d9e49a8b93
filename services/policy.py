"""
Authorization rules for the meeting aggregate.

Membership is never stored as a foreign key: a caller is a participant of a
meeting when their account email equals one of the meeting's participant
emails. The creator is whoever ``created_by_id`` points at.
"""
from models import db, Meeting
from errors import Forbidden, NotFound


def load_meeting(meeting_id):
    meeting = db.session.get(Meeting, meeting_id)
    if meeting is None:
        raise NotFound('Meeting not found')
    return meeting


def is_creator(meeting, user):
    return user is not None and meeting.created_by_id is not None and meeting.created_by_id == user.id


def is_participant(meeting, user):
    return user is not None and meeting.find_participant(user.email) is not None


def require_creator(meeting, user, action='modify this meeting'):
    if not is_creator(meeting, user):
        raise Forbidden(f'Not authorized to {action}')


def require_member(meeting, user, action='access this meeting'):
    """Creator or participant; returns whether the caller is the creator."""
    creator = is_creator(meeting, user)
    if not creator and not is_participant(meeting, user):
        raise Forbidden(f'Not authorized to {action}')
    return creator
