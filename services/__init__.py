from .auth import login_required, login_optional, admin_required, issue_token, verify_token

__all__ = ['login_required', 'login_optional', 'admin_required', 'issue_token', 'verify_token']
