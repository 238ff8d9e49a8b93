from flask import Blueprint, g
from schemas import (MeetingCreate, ActionPointIn, ActionPointPatch, ActionPointStatusPayload,
                     PainPointIn, PainPointStatusPayload)
from services import login_required, admin_required
from services import meetings
from utils import respond, json_body

meetings_bp = Blueprint('meetings', __name__, url_prefix='/api/meetings')


@meetings_bp.route('', methods=['POST'])
@login_required
def create_meeting():
    payload = MeetingCreate.model_validate(json_body())
    meeting = meetings.create_meeting(payload, g.user)
    return respond(meeting.to_dict(), 201)


@meetings_bp.route('', methods=['GET'])
@login_required
def list_meetings():
    """Meetings the caller created or was invited to"""
    items = meetings.list_meetings(g.user)
    return respond([m.to_dict() for m in items], count=len(items))


@meetings_bp.route('/<int:meeting_id>', methods=['GET'])
@login_required
def get_meeting(meeting_id):
    return respond(meetings.get_meeting(meeting_id, g.user).to_dict())


@meetings_bp.route('/<int:meeting_id>', methods=['PUT'])
@login_required
def update_meeting(meeting_id):
    # Raw body: the service drops fields a participant may not change before validating
    meeting = meetings.update_meeting(meeting_id, json_body(), g.user)
    return respond(meeting.to_dict())


@meetings_bp.route('/<int:meeting_id>', methods=['DELETE'])
@login_required
def delete_meeting(meeting_id):
    meetings.delete_meeting(meeting_id, g.user)
    return respond({})


# Action points

@meetings_bp.route('/<int:meeting_id>/action-points', methods=['POST'])
@login_required
def add_action_point(meeting_id):
    payload = ActionPointIn.model_validate(json_body())
    meeting = meetings.add_action_point(meeting_id, payload, g.user)
    return respond(meeting.to_dict(), 201)


@meetings_bp.route('/<int:meeting_id>/action-points/<int:action_id>', methods=['PUT'])
@login_required
def update_action_point_status(meeting_id, action_id):
    """Change the status of one action point (creator or participant)"""
    payload = ActionPointStatusPayload.model_validate(json_body())
    action_point = meetings.update_action_point_status(meeting_id, action_id, payload.status, g.user)
    return respond(action_point.to_dict())


@meetings_bp.route('/<int:meeting_id>/action-points/<int:action_id>', methods=['PATCH'])
@login_required
def edit_action_point(meeting_id, action_id):
    """Edit any field of an action point (creator only)"""
    payload = ActionPointPatch.model_validate(json_body())
    meeting = meetings.edit_action_point(meeting_id, action_id, payload, g.user)
    return respond(meeting.to_dict())


@meetings_bp.route('/<int:meeting_id>/action-points/<int:action_id>', methods=['DELETE'])
@login_required
def delete_action_point(meeting_id, action_id):
    meeting = meetings.delete_action_point(meeting_id, action_id, g.user)
    return respond(meeting.to_dict())


# Pain points

@meetings_bp.route('/<int:meeting_id>/painpoints', methods=['GET'])
@login_required
def list_pain_points(meeting_id):
    points = meetings.list_pain_points(meeting_id, g.user)
    return respond([p.to_dict() for p in points], count=len(points))


@meetings_bp.route('/<int:meeting_id>/painpoints', methods=['POST'])
@admin_required
def add_pain_point(meeting_id):
    payload = PainPointIn.model_validate(json_body())
    meeting = meetings.add_pain_point(meeting_id, payload.description, g.user)
    return respond(meeting.to_dict())


@meetings_bp.route('/<int:meeting_id>/painpoints/<int:point_id>', methods=['PUT'])
@admin_required
def update_pain_point(meeting_id, point_id):
    payload = PainPointStatusPayload.model_validate(json_body())
    meeting = meetings.update_pain_point(meeting_id, point_id, payload.status)
    return respond(meeting.to_dict())
