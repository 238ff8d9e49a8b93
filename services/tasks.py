import logging
from models import db, Task, User
from errors import Forbidden, NotFound, ValidationError
from utils import normalize_email
from .policy import load_meeting, require_member

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ('title', 'description', 'deadline', 'priority', 'status')


def _load_task(task_id):
    task = db.session.get(Task, task_id)
    if task is None:
        raise NotFound('Task not found')
    return task


def create_task(meeting_id, payload, user):
    """Create a task for a user already listed on the meeting (admin routes)."""
    meeting = load_meeting(meeting_id)

    assignee = User.query.filter_by(email=normalize_email(payload.assigned_to_email)).first()
    if assignee is None:
        raise NotFound('User not found with provided email')

    if meeting.find_participant(assignee.email) is None:
        raise ValidationError('User is not a participant in this meeting')

    task = Task(
        title=payload.title,
        description=payload.description,
        deadline=payload.deadline,
        priority=payload.priority,
        status='pending',
        meeting_id=meeting.id,
        assigned_to_id=assignee.id,
        created_by_id=user.id
    )
    db.session.add(task)
    db.session.commit()
    logger.info(f"[Task] Task {task.id} assigned to {assignee.email} on meeting {meeting.id}")
    return task


def list_tasks(meeting_id, user):
    meeting = load_meeting(meeting_id)
    if not user.is_admin:
        require_member(meeting, user, 'view tasks for this meeting')
    return Task.query.filter_by(meeting_id=meeting.id).order_by(Task.created_at).all()


def update_task(task_id, payload, user):
    """Task creator, assignee or an admin may update the allow-listed fields."""
    task = _load_task(task_id)
    if user.id not in (task.created_by_id, task.assigned_to_id) and not user.is_admin:
        raise Forbidden('Not authorized to update this task')

    for name in UPDATABLE_FIELDS:
        if name in payload.model_fields_set:
            value = getattr(payload, name)
            if value is None and name != 'deadline':
                raise ValidationError(f'{name} cannot be empty')
            setattr(task, name, value)
    db.session.commit()
    return task


def delete_task(task_id):
    task = _load_task(task_id)
    db.session.delete(task)
    db.session.commit()
