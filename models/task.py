from datetime import datetime
from .database import db


class Task(db.Model):
    """Work item assigned to a meeting participant."""
    __tablename__ = 'tasks'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, default='')
    deadline = db.Column(db.DateTime)
    priority = db.Column(db.String(20), nullable=False, default='medium')  # low, medium, high
    status = db.Column(db.String(20), nullable=False, default='pending')  # pending, in-progress, completed

    meeting_id = db.Column(db.Integer, db.ForeignKey('meetings.id'), nullable=False)
    assigned_to_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='SET NULL'))
    created_by_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='SET NULL'))

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships - two FKs to users, so each side names its column
    assigned_to = db.relationship('User', foreign_keys=[assigned_to_id])
    created_by = db.relationship('User', foreign_keys=[created_by_id])

    def to_dict(self):
        return {
            '_id': self.id,
            'title': self.title,
            'description': self.description,
            'deadline': self.deadline.isoformat() if self.deadline else None,
            'priority': self.priority,
            'status': self.status,
            'meetingId': self.meeting_id,
            'assignedTo': _user_ref(self.assigned_to),
            'createdBy': _user_ref(self.created_by),
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }


def _user_ref(user):
    if user is None:
        return None
    return {'_id': user.id, 'email': user.email}
