import logging
from functools import wraps
from flask import current_app, g, request
from itsdangerous import URLSafeTimedSerializer, BadData
from models import db, User
from errors import Unauthenticated, Forbidden

logger = logging.getLogger(__name__)

TOKEN_SALT = 'access-token'


def get_serializer():
    """Get the bearer token serializer"""
    return URLSafeTimedSerializer(current_app.config['SECRET_KEY'], salt=TOKEN_SALT)


def issue_token(user_id):
    """Sign a bearer token for the user; validity is enforced on load"""
    return get_serializer().dumps({'id': user_id})


def verify_token(token):
    """Return the user a bearer token belongs to, or raise Unauthenticated"""
    try:
        payload = get_serializer().loads(token, max_age=current_app.config['TOKEN_MAX_AGE'])
    except BadData:
        raise Unauthenticated('Not authorized to access this route')

    user_id = payload.get('id') if isinstance(payload, dict) else None
    user = db.session.get(User, user_id) if user_id is not None else None
    if user is None:
        raise Unauthenticated('Not authorized to access this route')
    return user


def _bearer_token():
    header = request.headers.get('Authorization', '')
    scheme, _, token = header.partition(' ')
    if scheme != 'Bearer' or not token.strip():
        return None
    return token.strip()


def login_required(f):
    """Decorator to require a valid bearer token"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        token = _bearer_token()
        if token is None:
            raise Unauthenticated('Not authorized to access this route')
        g.user = verify_token(token)
        return f(*args, **kwargs)
    return decorated_function


def login_optional(f):
    """Decorator that attaches the caller when a valid token is sent"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        g.user = None
        token = _bearer_token()
        if token is not None:
            try:
                g.user = verify_token(token)
            except Unauthenticated:
                logger.info("[Auth] Invalid token on optional route, continuing anonymously")
        return f(*args, **kwargs)
    return decorated_function


def admin_required(f):
    """Decorator to require an admin account"""
    @wraps(f)
    @login_required
    def decorated_function(*args, **kwargs):
        if not g.user.is_admin:
            raise Forbidden('Not authorized to access this route')
        return f(*args, **kwargs)
    return decorated_function
