"""
Email notification utilities for meeting invitations
"""
import logging
from email.utils import formataddr
from flask import current_app
from flask_mail import Message, Mail
from .helpers import invitation_url

logger = logging.getLogger(__name__)


def send_invitation_email(invitation, meeting, name=None):
    """
    Send the invitation link for a meeting to the invitee.

    Args:
        invitation: The freshly created Invitation
        meeting: The Meeting the invitation points at
        name: Display name of the invitee, if known

    Returns:
        bool: True when the message was sent (or simulated)
    """
    link = invitation_url(current_app.config['BASE_URL'], invitation.token)

    # Check if mail is configured
    if not current_app.config.get('MAIL_SERVER'):
        logger.info(f"[Mail] Simulation mode - invitation for '{meeting.title}' to {invitation.email}")
        logger.info(f"[Mail] Invitation URL: {link}")
        return True

    recipient = formataddr((name, invitation.email)) if name else invitation.email
    when = meeting.date.strftime('%Y-%m-%d %H:%M')
    mail = Mail(current_app)

    try:
        msg = Message(
            subject=f"Invitation: {meeting.title} ({when})",
            recipients=[recipient],
            sender=current_app.config.get('MAIL_DEFAULT_SENDER')
        )

        msg.body = f"""Hi{' ' + name if name else ''},

You have been invited to a meeting on MePad:

Title: {meeting.title}
When: {when}
Venue: {meeting.venue}

Accept or decline the invitation here:
{link}

The link expires on {invitation.expires_at.strftime('%Y-%m-%d')}.

MePad
"""

        msg.html = f"""
<html>
<body style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
    <h2 style="color: #2563eb;">You're invited: {meeting.title}</h2>

    <div style="background-color: #eff6ff; border-left: 4px solid #2563eb; padding: 15px; margin: 20px 0;">
        <p style="margin: 5px 0;"><strong>When:</strong> {when}</p>
        <p style="margin: 5px 0;"><strong>Venue:</strong> {meeting.venue}</p>
    </div>

    <p>
        <a href="{link}"
           style="background-color: #2563eb; color: white; padding: 10px 20px; text-decoration: none; border-radius: 5px; display: inline-block;">
            Respond to invitation
        </a>
    </p>

    <p style="color: #6b7280; font-size: 12px; margin-top: 30px;">
        This link expires on {invitation.expires_at.strftime('%Y-%m-%d')}.
    </p>
</body>
</html>
"""

        mail.send(msg)
        logger.info(f"[Mail] Sent invitation for meeting {meeting.id} to {invitation.email}")
        return True

    except Exception as e:
        logger.error(f"[Mail] Failed to send invitation to {invitation.email}: {e}")
        return False
