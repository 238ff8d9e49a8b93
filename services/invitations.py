"""
Invitation ledger.

Tokenized Invitation rows are the source of truth for whether an invitee has
responded. The Participant rows embedded in a meeting carry a copy of that
answer; every path that moves an invitation out of ``pending`` also updates
the participant with the same email.
"""
import logging
from datetime import datetime, timedelta
from flask import current_app
from models import db, Invitation, Participant
from errors import Conflict, Expired, NotFound
from utils import generate_invitation_token, normalize_email, invitation_url
from utils.notifications import send_invitation_email
from .policy import load_meeting, require_creator

logger = logging.getLogger(__name__)


def create_invitation(meeting, email):
    """Add a pending invitation for ``email``; one per email per meeting."""
    email = normalize_email(email)
    if Invitation.query.filter_by(meeting_id=meeting.id, email=email).first():
        raise Conflict(f'An invitation has already been sent to {email}')

    ttl = current_app.config.get('INVITATION_TTL_DAYS', 30)
    invitation = Invitation(
        token=generate_invitation_token(),
        meeting_id=meeting.id,
        email=email,
        status='pending',
        expires_at=datetime.utcnow() + timedelta(days=ttl)
    )
    db.session.add(invitation)
    return invitation


def add_participants(meeting, invitees):
    """
    Append participants whose email is not on the meeting yet and open an
    invitation for each of them. Known emails are skipped, not merged.

    The meeting must already be flushed so it has an id. Returns a list of
    ``(participant, invitation)`` pairs; nothing is committed here.
    """
    added = []
    for invitee in invitees:
        email = normalize_email(invitee.email)
        if meeting.find_participant(email) is not None:
            continue

        participant = Participant(
            name=invitee.name,
            email=email,
            role=invitee.role or 'viewer',
            status='invited'
        )
        meeting.participants.append(participant)

        invitation = Invitation.query.filter_by(meeting_id=meeting.id, email=email).first()
        if invitation is None:
            invitation = create_invitation(meeting, email)
        elif not invitation.is_pending:
            # Re-added after removal; keep the answer already on record
            participant.status = invitation.status
        added.append((participant, invitation))
    return added


def notify_invitees(meeting, added):
    """Email each pending invitation produced by ``add_participants``."""
    for participant, invitation in added:
        if invitation.is_pending:
            send_invitation_email(invitation, meeting, name=participant.name)


def send_invitations(meeting_id, invitees, user):
    """Invite people to a meeting (creator only)."""
    meeting = load_meeting(meeting_id)
    require_creator(meeting, user, 'send invitations for this meeting')

    added = add_participants(meeting, invitees)
    db.session.commit()
    notify_invitees(meeting, added)

    logger.info(f"[Invitation] {len(added)} participant(s) invited to meeting {meeting.id}")
    base_url = current_app.config['BASE_URL']
    return [
        {
            'name': participant.name,
            'email': participant.email,
            'token': invitation.token,
            'inviteUrl': invitation_url(base_url, invitation.token),
        }
        for participant, invitation in added
    ]


def load_invitation(token):
    """Look up a live invitation; expiry is checked here, never purged."""
    invitation = Invitation.query.filter_by(token=token).first()
    if invitation is None:
        raise NotFound('Invalid invitation link')
    if invitation.is_expired():
        raise Expired('Invitation has expired')
    return invitation


def resolve(token):
    """Public view of an invitation and its (redacted) meeting."""
    invitation = load_invitation(token)
    meeting = invitation.meeting
    if meeting is None:
        raise NotFound('Meeting not found')

    return {
        'meeting': meeting.to_dict(redact=True),
        'invitation': {
            'email': invitation.email,
            'status': invitation.status,
            'expiresAt': invitation.expires_at.isoformat(),
        }
    }


def sync_participant(invitation):
    """Copy the invitation's answer onto the matching participant, if any."""
    meeting = invitation.meeting
    if meeting is None:
        return False
    participant = meeting.find_participant(invitation.email)
    if participant is None:
        return False
    if participant.status != invitation.status:
        participant.status = invitation.status
        db.session.commit()
    return True


def update_status(token, status, user=None):
    """
    Accept or decline an invitation.

    ``pending`` may move to ``accepted`` or ``declined``; both are terminal.
    Repeating the recorded answer succeeds without change, a different
    answer is a Conflict. The invitation and the participant are written in
    two separate commits.
    """
    invitation = load_invitation(token)

    if not invitation.is_pending and invitation.status != status:
        raise Conflict(f'Invitation has already been {invitation.status}')

    if invitation.is_pending:
        invitation.status = status
        db.session.commit()
        logger.info(f"[Invitation] {invitation.email} {status} meeting {invitation.meeting_id}")

    sync_participant(invitation)

    if user is not None and normalize_email(user.email) == invitation.email:
        logger.info(f"[Invitation] Response recorded by account holder {user.id}")

    return invitation


def list_for_meeting(meeting_id, user):
    meeting = load_meeting(meeting_id)
    require_creator(meeting, user, 'view invitations for this meeting')
    return Invitation.query.filter_by(meeting_id=meeting.id).order_by(Invitation.created_at).all()


def accept_pending_for_email(email):
    """Accept every live pending invitation of a newly registered address."""
    email = normalize_email(email)
    now = datetime.utcnow()
    pending = Invitation.query.filter(
        Invitation.email == email,
        Invitation.status == 'pending',
        Invitation.expires_at >= now
    ).all()
    if not pending:
        return 0

    for invitation in pending:
        invitation.status = 'accepted'
    db.session.commit()

    for invitation in pending:
        sync_participant(invitation)

    logger.info(f"[Invitation] Auto-accepted {len(pending)} invitation(s) for {email}")
    return len(pending)
