import secrets
from flask import jsonify, request

# 32 random bytes, hex encoded
INVITATION_TOKEN_BYTES = 32


def generate_invitation_token():
    """Generate an unguessable invitation token"""
    return secrets.token_hex(INVITATION_TOKEN_BYTES)


def normalize_email(email):
    """Normalize an email address for membership comparisons"""
    return (email or '').strip().lower()


def invitation_url(base_url, token):
    """Public link an invitee opens to respond"""
    return f"{base_url.rstrip('/')}/invite/{token}"


def respond(data, status=200, count=None):
    """Wrap a payload in the success envelope"""
    body = {'success': True}
    if count is not None:
        body['count'] = count
    body['data'] = data
    return jsonify(body), status


def json_body():
    """Request body as a dict; anything else counts as empty"""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}
