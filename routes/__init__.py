from .auth import auth_bp
from .meetings import meetings_bp
from .invitations import meeting_invitations_bp, invite_bp
from .tasks import meeting_tasks_bp, tasks_bp
from .dashboard import dashboard_bp
from .assistant import assistant_bp

def register_blueprints(app):
    """Register all blueprints with the Flask app"""
    app.register_blueprint(auth_bp)
    app.register_blueprint(meetings_bp)
    app.register_blueprint(meeting_invitations_bp)
    app.register_blueprint(invite_bp)
    app.register_blueprint(meeting_tasks_bp)
    app.register_blueprint(tasks_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(assistant_bp)
