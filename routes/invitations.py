from flask import Blueprint, g
from schemas import SendInvitationsPayload, InvitationStatusPayload
from services import login_required, login_optional
from services import invitations
from utils import respond, json_body

# Invitations managed by the meeting creator
meeting_invitations_bp = Blueprint('meeting_invitations', __name__, url_prefix='/api/meetings')


@meeting_invitations_bp.route('/<int:meeting_id>/invitations', methods=['POST'])
@login_required
def send_invitations(meeting_id):
    """Add participants to a meeting and send them invitation links"""
    payload = SendInvitationsPayload.model_validate(json_body())
    added = invitations.send_invitations(meeting_id, payload.participants, g.user)
    return respond({'addedParticipants': added})


@meeting_invitations_bp.route('/<int:meeting_id>/invitations', methods=['GET'])
@login_required
def list_invitations(meeting_id):
    items = invitations.list_for_meeting(meeting_id, g.user)
    return respond([i.to_dict() for i in items], count=len(items))


# Public invitation links
invite_bp = Blueprint('invite', __name__, url_prefix='/api/invite')


@invite_bp.route('/<token>', methods=['GET'])
def verify_invitation(token):
    """Show the invitation and a redacted view of its meeting"""
    return respond(invitations.resolve(token))


@invite_bp.route('/<token>/status', methods=['PUT'])
@login_optional
def update_invitation_status(token):
    """Accept or decline; works with or without a bearer token"""
    payload = InvitationStatusPayload.model_validate(json_body())
    invitation = invitations.update_status(token, payload.status, g.user)
    return respond({
        'status': invitation.status,
        'email': invitation.email,
        'meetingId': invitation.meeting_id,
    })
