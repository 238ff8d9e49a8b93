from flask import Blueprint, g
from schemas import RegisterPayload, LoginPayload
from services import login_required, admin_required
from services import users
from utils import respond, json_body

auth_bp = Blueprint('auth', __name__, url_prefix='/api/auth')


@auth_bp.route('/register', methods=['POST'])
def register():
    """Create an account; pending invitations for the email are accepted"""
    payload = RegisterPayload.model_validate(json_body())
    return respond(users.register(payload.email, payload.password), 201)


@auth_bp.route('/login', methods=['POST'])
def login():
    payload = LoginPayload.model_validate(json_body())
    return respond(users.login(payload.email, payload.password))


@auth_bp.route('/me')
@login_required
def me():
    return respond(g.user.to_dict())


@auth_bp.route('/users/<int:user_id>', methods=['DELETE'])
@admin_required
def delete_user(user_id):
    """Delete an account (admin only, never the last admin)"""
    users.delete_user(user_id)
    return respond({})
