"""
Meeting aggregate operations.

The creator may change every field of a meeting. A participant who is not
the creator may only touch the action points; anything else they send is
dropped before validation.
"""
import logging
from sqlalchemy import or_
from models import db, Meeting, Participant, ActionPoint, PainPoint
from errors import NotFound, ValidationError
from schemas import MeetingUpdate
from utils import normalize_email
from .policy import load_meeting, require_creator, require_member
from .invitations import add_participants, notify_invitees

logger = logging.getLogger(__name__)

SCALAR_FIELDS = ('title', 'date', 'venue', 'summary')
PARTICIPANT_EDITABLE_KEYS = ('actionPoints', 'action_points')


def _build_action_point(data, default_assignee=None):
    assignee = data.assigned_to or default_assignee
    if not assignee:
        raise ValidationError('Please specify who this is assigned to')
    return ActionPoint(
        description=data.description,
        assigned_to=assignee,
        due_date=data.due_date,
        status=data.status
    )


def create_meeting(payload, user):
    """Create a meeting owned by ``user``; initial participants are invited."""
    meeting = Meeting(
        title=payload.title,
        date=payload.date,
        venue=payload.venue,
        summary=payload.summary,
        created_by_id=user.id
    )
    db.session.add(meeting)
    db.session.flush()

    for item in payload.action_points:
        meeting.action_points.append(_build_action_point(item))
    added = add_participants(meeting, payload.participants)

    db.session.commit()
    notify_invitees(meeting, added)

    logger.info(f"[Meeting] {user.email} created meeting {meeting.id}")
    return meeting


def get_meeting(meeting_id, user):
    meeting = load_meeting(meeting_id)
    require_member(meeting, user, 'view this meeting')
    return meeting


def list_meetings(user):
    """Meetings the user created, then meetings they were invited to."""
    created = Meeting.query.filter_by(created_by_id=user.id).order_by(Meeting.date.desc()).all()
    participating = Meeting.query.join(Meeting.participants).filter(
        Participant.email == normalize_email(user.email),
        or_(Meeting.created_by_id != user.id, Meeting.created_by_id.is_(None))
    ).order_by(Meeting.date.desc()).all()
    return created + participating


def _replace_participants(meeting, incoming):
    """Make the participant list match ``incoming``; new emails get invited."""
    wanted = {}
    for item in incoming:
        wanted[normalize_email(item.email)] = item

    for participant in list(meeting.participants):
        item = wanted.pop(participant.email, None)
        if item is None:
            meeting.participants.remove(participant)
        else:
            participant.name = item.name
            participant.role = item.role

    return add_participants(meeting, wanted.values())


def _replace_action_points(meeting, incoming, default_assignee=None):
    """Update points that carry a known id, create the rest, drop the others."""
    keep = []
    for item in incoming:
        existing = meeting.find_action_point(item.id) if item.id is not None else None
        if existing is None:
            keep.append(_build_action_point(item, default_assignee))
            continue
        existing.description = item.description
        existing.assigned_to = item.assigned_to or existing.assigned_to
        existing.due_date = item.due_date
        existing.status = item.status
        keep.append(existing)

    for action_point in list(meeting.action_points):
        if action_point not in keep:
            meeting.action_points.remove(action_point)
    for action_point in keep:
        if action_point not in meeting.action_points:
            meeting.action_points.append(action_point)


def update_meeting(meeting_id, body, user):
    meeting = load_meeting(meeting_id)
    creator = require_member(meeting, user, 'update this meeting')

    if not creator:
        body = {key: value for key, value in body.items() if key in PARTICIPANT_EDITABLE_KEYS}

    payload = MeetingUpdate.model_validate(body)
    fields = payload.model_fields_set

    if 'created_by' in fields and payload.created_by is not None:
        if payload.created_by != str(meeting.created_by_id):
            raise ValidationError('createdBy cannot be changed')

    for name in SCALAR_FIELDS:
        if name in fields:
            value = getattr(payload, name)
            if value is None:
                raise ValidationError(f'{name} cannot be empty')
            setattr(meeting, name, value)

    added = []
    if 'participants' in fields and payload.participants is not None:
        added = _replace_participants(meeting, payload.participants)

    if 'action_points' in fields and payload.action_points is not None:
        default_assignee = None if creator else normalize_email(user.email)
        _replace_action_points(meeting, payload.action_points, default_assignee)

    db.session.commit()
    notify_invitees(meeting, added)
    return meeting


def delete_meeting(meeting_id, user):
    """Delete a meeting with its participants, points, invitations and tasks."""
    meeting = load_meeting(meeting_id)
    require_creator(meeting, user, 'delete this meeting')
    db.session.delete(meeting)
    db.session.commit()
    logger.info(f"[Meeting] Meeting {meeting_id} deleted by {user.email}")


# Action points

def _load_action_point(meeting, action_id):
    action_point = meeting.find_action_point(action_id)
    if action_point is None:
        raise NotFound('Action point not found')
    return action_point


def add_action_point(meeting_id, payload, user):
    meeting = load_meeting(meeting_id)
    creator = require_member(meeting, user, 'add action points to this meeting')

    # Participants get the point assigned to themselves unless they say otherwise
    default_assignee = None if creator else normalize_email(user.email)
    meeting.action_points.append(_build_action_point(payload, default_assignee))
    db.session.commit()
    return meeting


def update_action_point_status(meeting_id, action_id, status, user):
    meeting = load_meeting(meeting_id)
    require_member(meeting, user, 'update this action point')
    action_point = _load_action_point(meeting, action_id)

    action_point.status = status
    db.session.commit()
    return action_point


def edit_action_point(meeting_id, action_id, patch, user):
    meeting = load_meeting(meeting_id)
    require_creator(meeting, user, 'edit this action point')
    action_point = _load_action_point(meeting, action_id)

    for name in patch.model_fields_set:
        value = getattr(patch, name)
        if value is None:
            raise ValidationError(f'{name} cannot be empty')
        setattr(action_point, name, value)
    db.session.commit()
    return meeting


def delete_action_point(meeting_id, action_id, user):
    meeting = load_meeting(meeting_id)
    require_member(meeting, user, 'delete this action point')
    action_point = _load_action_point(meeting, action_id)

    meeting.action_points.remove(action_point)
    db.session.commit()
    return meeting


# Pain points (admin routes)

def list_pain_points(meeting_id, user):
    meeting = load_meeting(meeting_id)
    if not user.is_admin:
        require_member(meeting, user, 'view pain points for this meeting')
    return meeting.pain_points


def add_pain_point(meeting_id, description, user):
    meeting = load_meeting(meeting_id)
    meeting.pain_points.append(PainPoint(
        description=description,
        added_by_id=user.id,
        status='open'
    ))
    db.session.commit()
    return meeting


def update_pain_point(meeting_id, point_id, status):
    meeting = load_meeting(meeting_id)
    pain_point = meeting.find_pain_point(point_id)
    if pain_point is None:
        raise NotFound('Pain point not found')

    pain_point.status = status
    db.session.commit()
    return meeting
