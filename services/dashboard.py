"""
Read-only dashboard aggregates.
"""
from datetime import datetime
from models import Meeting, Task, User
from .meetings import list_meetings

RECENT_LIMIT = 5


def _actions_with_meeting(meetings, predicate):
    items = []
    for meeting in meetings:
        for action_point in meeting.action_points:
            if predicate(action_point):
                item = action_point.to_dict()
                item['meetingTitle'] = meeting.title
                item['meetingId'] = meeting.id
                items.append(item)
    return items[:RECENT_LIMIT]


def user_dashboard(user):
    meetings = list_meetings(user)
    created = [m for m in meetings if m.created_by_id == user.id]
    invited = [m for m in meetings if m.created_by_id != user.id]
    now = datetime.utcnow()

    all_points = [ap for m in meetings for ap in m.action_points]
    stats = {
        'totalMeetings': len(meetings),
        'upcomingMeetings': len([m for m in meetings if m.date > now]),
        'pendingActions': len([ap for ap in all_points if ap.status == 'pending']),
        'completedActions': len([ap for ap in all_points if ap.status == 'completed']),
    }

    return {
        'stats': stats,
        'recentMeetings': [m.to_dict() for m in created[:RECENT_LIMIT]],
        'upcomingMeetings': [m.to_dict() for m in created if m.date > now][:RECENT_LIMIT],
        'pendingActions': _actions_with_meeting(meetings, lambda ap: ap.status == 'pending'),
        'myAssignedActions': _actions_with_meeting(
            meetings,
            lambda ap: ap.status == 'pending' and ap.assigned_to.lower() == user.email
        ),
        'invitedMeetings': [m.to_dict() for m in invited[:RECENT_LIMIT]],
    }


def admin_dashboard():
    meetings = Meeting.query.order_by(Meeting.date.desc()).all()
    stats = {
        'totalMeetings': len(meetings),
        'totalParticipants': User.query.filter_by(role='participant').count(),
        'totalTasks': Task.query.count(),
        'completedTasks': Task.query.filter_by(status='completed').count(),
    }
    return {'stats': stats, 'meetings': [m.to_dict() for m in meetings]}


def participant_dashboard(user):
    meetings = [m for m in list_meetings(user) if m.created_by_id != user.id]
    tasks = Task.query.filter_by(assigned_to_id=user.id).order_by(Task.deadline).all()
    now = datetime.utcnow()

    stats = {
        'upcomingMeetings': len([m for m in meetings if m.date > now]),
        'pendingTasks': len([t for t in tasks if t.status != 'completed']),
        'completedTasks': len([t for t in tasks if t.status == 'completed']),
    }
    return {
        'stats': stats,
        'meetings': [m.to_dict() for m in meetings],
        'tasks': [t.to_dict() for t in tasks],
    }
