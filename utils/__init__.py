from .helpers import generate_invitation_token, normalize_email, invitation_url, respond, json_body

__all__ = ['generate_invitation_token', 'normalize_email', 'invitation_url', 'respond', 'json_body']
