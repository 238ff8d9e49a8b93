from datetime import datetime
from .database import db

PARTICIPANT_STATUSES = ('invited', 'accepted', 'declined')
PARTICIPANT_ROLES = ('viewer', 'contributor', 'organizer')
ACTION_POINT_STATUSES = ('pending', 'in-progress', 'completed')


def _iso(value):
    return value.isoformat() if value else None


class Meeting(db.Model):
    """Meeting aggregate root; participants and points live and die with it."""
    __tablename__ = 'meetings'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(50), nullable=False)
    date = db.Column(db.DateTime, nullable=False)
    venue = db.Column(db.String(255), nullable=False)
    summary = db.Column(db.Text, nullable=False)
    created_by_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='SET NULL'))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    creator = db.relationship('User', foreign_keys=[created_by_id])
    participants = db.relationship('Participant', backref='meeting', lazy=True,
                                   cascade='all, delete-orphan', order_by='Participant.id')
    action_points = db.relationship('ActionPoint', backref='meeting', lazy=True,
                                    cascade='all, delete-orphan', order_by='ActionPoint.id')
    pain_points = db.relationship('PainPoint', backref='meeting', lazy=True,
                                  cascade='all, delete-orphan', order_by='PainPoint.id')

    # Side records that reference the meeting; removed with it
    invitations = db.relationship('Invitation', backref='meeting', lazy=True,
                                  cascade='all, delete-orphan')
    tasks = db.relationship('Task', backref='meeting', lazy=True,
                            cascade='all, delete-orphan')

    def find_participant(self, email):
        email = (email or '').lower()
        for participant in self.participants:
            if participant.email == email:
                return participant
        return None

    def find_action_point(self, action_id):
        for action_point in self.action_points:
            if action_point.id == action_id:
                return action_point
        return None

    def find_pain_point(self, point_id):
        for pain_point in self.pain_points:
            if pain_point.id == point_id:
                return pain_point
        return None

    def to_dict(self, redact=False):
        """Serialize the aggregate.

        ``redact`` hides participant emails and action point assignees and
        expands the creator to ``{_id, email}``; it is used on the public
        invitation page.
        """
        data = {
            '_id': self.id,
            'title': self.title,
            'date': _iso(self.date),
            'venue': self.venue,
            'summary': self.summary,
            'participants': [p.to_dict(redact=redact) for p in self.participants],
            'actionPoints': [a.to_dict(redact=redact) for a in self.action_points],
            'painPoints': [p.to_dict() for p in self.pain_points],
            'createdBy': self.created_by_id,
            'createdAt': _iso(self.created_at),
            'updatedAt': _iso(self.updated_at),
        }
        if redact:
            creator = self.creator
            data['createdBy'] = {'_id': creator.id, 'email': creator.email} if creator else None
        return data


class Participant(db.Model):
    """Invited person on a meeting; membership is matched by email."""
    __tablename__ = 'participants'
    __table_args__ = (
        db.UniqueConstraint('meeting_id', 'email', name='uq_participant_meeting_email'),
    )

    id = db.Column(db.Integer, primary_key=True)
    meeting_id = db.Column(db.Integer, db.ForeignKey('meetings.id'), nullable=False)
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    status = db.Column(db.String(20), nullable=False, default='invited')  # invited, accepted, declined
    role = db.Column(db.String(20), nullable=False, default='viewer')  # viewer, contributor, organizer

    def to_dict(self, redact=False):
        data = {
            '_id': self.id,
            'name': self.name,
            'email': self.email,
            'status': self.status,
            'role': self.role,
        }
        if redact:
            del data['email']
        return data


class ActionPoint(db.Model):
    __tablename__ = 'action_points'

    id = db.Column(db.Integer, primary_key=True)
    meeting_id = db.Column(db.Integer, db.ForeignKey('meetings.id'), nullable=False)
    description = db.Column(db.Text, nullable=False)
    assigned_to = db.Column(db.String(255), nullable=False)  # free-text email, not a user FK
    due_date = db.Column(db.DateTime, nullable=False)
    status = db.Column(db.String(20), nullable=False, default='pending')  # pending, in-progress, completed
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self, redact=False):
        data = {
            '_id': self.id,
            'description': self.description,
            'assignedTo': self.assigned_to,
            'dueDate': _iso(self.due_date),
            'status': self.status,
            'createdAt': _iso(self.created_at),
            'updatedAt': _iso(self.updated_at),
        }
        if redact:
            del data['assignedTo']
        return data


class PainPoint(db.Model):
    __tablename__ = 'pain_points'

    id = db.Column(db.Integer, primary_key=True)
    meeting_id = db.Column(db.Integer, db.ForeignKey('meetings.id'), nullable=False)
    description = db.Column(db.Text, nullable=False)
    added_by_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='SET NULL'))
    added_at = db.Column(db.DateTime, default=datetime.utcnow)
    status = db.Column(db.String(30), nullable=False, default='open')

    def to_dict(self):
        return {
            '_id': self.id,
            'description': self.description,
            'addedBy': self.added_by_id,
            'addedAt': _iso(self.added_at),
            'status': self.status,
        }
