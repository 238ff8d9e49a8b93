from flask import Blueprint, g
from schemas import TaskCreate, TaskUpdate
from services import login_required, admin_required
from services import tasks
from utils import respond, json_body

meeting_tasks_bp = Blueprint('meeting_tasks', __name__, url_prefix='/api/meetings')
tasks_bp = Blueprint('tasks', __name__, url_prefix='/api/tasks')


@meeting_tasks_bp.route('/<int:meeting_id>/tasks', methods=['POST'])
@admin_required
def create_task(meeting_id):
    """Assign a task to a meeting participant (admin only)"""
    payload = TaskCreate.model_validate(json_body())
    task = tasks.create_task(meeting_id, payload, g.user)
    return respond(task.to_dict(), 201)


@meeting_tasks_bp.route('/<int:meeting_id>/tasks', methods=['GET'])
@login_required
def list_tasks(meeting_id):
    items = tasks.list_tasks(meeting_id, g.user)
    return respond([t.to_dict() for t in items], count=len(items))


@tasks_bp.route('/<int:task_id>', methods=['PUT'])
@login_required
def update_task(task_id):
    payload = TaskUpdate.model_validate(json_body())
    return respond(tasks.update_task(task_id, payload, g.user).to_dict())


@tasks_bp.route('/<int:task_id>', methods=['DELETE'])
@admin_required
def delete_task(task_id):
    tasks.delete_task(task_id)
    return respond({})
