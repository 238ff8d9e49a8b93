from flask import Blueprint, g
from services import login_required, admin_required
from services import dashboard as dashboard_service
from utils import respond

dashboard_bp = Blueprint('dashboard', __name__, url_prefix='/api/dashboard')


@dashboard_bp.route('')
@login_required
def dashboard():
    """Stats and recent items across the caller's meetings"""
    return respond(dashboard_service.user_dashboard(g.user))


@dashboard_bp.route('/admin')
@admin_required
def admin_dashboard():
    return respond(dashboard_service.admin_dashboard())


@dashboard_bp.route('/participant')
@login_required
def participant_dashboard():
    return respond(dashboard_service.participant_dashboard(g.user))
