from datetime import datetime, timedelta
from .database import db

INVITATION_STATUSES = ('pending', 'accepted', 'declined')
DEFAULT_TTL_DAYS = 30


def default_expiry():
    return datetime.utcnow() + timedelta(days=DEFAULT_TTL_DAYS)


class Invitation(db.Model):
    """Tokenized invitation of an email address to a meeting."""
    __tablename__ = 'invitations'
    __table_args__ = (
        db.UniqueConstraint('email', 'meeting_id', name='uq_invitation_email_meeting'),
    )

    id = db.Column(db.Integer, primary_key=True)
    token = db.Column(db.String(100), nullable=False, unique=True, index=True)
    meeting_id = db.Column(db.Integer, db.ForeignKey('meetings.id'), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    status = db.Column(db.String(20), nullable=False, default='pending')  # pending, accepted, declined
    expires_at = db.Column(db.DateTime, nullable=False, default=default_expiry)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def is_expired(self, now=None):
        return (now or datetime.utcnow()) > self.expires_at

    @property
    def is_pending(self):
        return self.status == 'pending'

    def to_dict(self):
        return {
            '_id': self.id,
            'token': self.token,
            'meetingId': self.meeting_id,
            'email': self.email,
            'status': self.status,
            'expiresAt': self.expires_at.isoformat(),
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }
