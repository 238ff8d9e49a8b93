import logging
from models import db, User, Meeting, PainPoint, Task
from errors import Conflict, NotFound, Unauthenticated
from utils import normalize_email
from .auth import issue_token
from .invitations import accept_pending_for_email

logger = logging.getLogger(__name__)


def _session_payload(user):
    data = user.to_dict()
    data['token'] = issue_token(user.id)
    return data


def register(email, password):
    """Create a participant account and accept its pending invitations."""
    email = normalize_email(email)
    if User.query.filter_by(email=email).first():
        raise Conflict('User already exists')

    user = User(email=email, role='participant')
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    logger.info(f"[Auth] Registered {email}")

    accept_pending_for_email(email)
    return _session_payload(user)


def login(email, password):
    user = User.query.filter_by(email=normalize_email(email)).first()
    if not user or not user.check_password(password):
        raise Unauthenticated('Invalid credentials')
    return _session_payload(user)


def _release_references(user_id):
    """Null out every column that points at the account being deleted."""
    Meeting.query.filter_by(created_by_id=user_id).update({'created_by_id': None})
    PainPoint.query.filter_by(added_by_id=user_id).update({'added_by_id': None})
    Task.query.filter_by(assigned_to_id=user_id).update({'assigned_to_id': None})
    Task.query.filter_by(created_by_id=user_id).update({'created_by_id': None})


def delete_user(user_id):
    """Delete an account; the last admin cannot be removed."""
    user = db.session.get(User, user_id)
    if user is None:
        raise NotFound('User not found')

    if user.is_admin and User.query.filter_by(role='admin').count() <= 1:
        raise Conflict('Cannot delete the last admin user')

    _release_references(user.id)
    db.session.delete(user)
    db.session.commit()
    logger.info(f"[Auth] Deleted user {user_id}")


def create_admin(email, password):
    """Create an admin account, or promote and re-key an existing one."""
    email = normalize_email(email)
    user = User.query.filter_by(email=email).first()
    if user is None:
        user = User(email=email)
        db.session.add(user)
    user.role = 'admin'
    user.set_password(password)
    db.session.commit()
    return user
