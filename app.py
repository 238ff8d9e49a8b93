#!/usr/bin/env python3
"""
MePad API
A Flask application for managing meetings, invitations and action points.
"""

import logging
import click
from dotenv import load_dotenv
from flask import Flask, request
from flask_mail import Mail
from flask_migrate import Migrate

# Import our modules
from config import Config
from models import db
from errors import register_error_handlers
from utils.banner import print_startup_banner
from routes import register_blueprints

# Load environment variables from .env file
load_dotenv()

CORS_ALLOWED_METHODS = 'GET, POST, PUT, PATCH, DELETE, OPTIONS'
CORS_ALLOWED_HEADERS = 'Origin, X-Requested-With, Content-Type, Accept, Authorization'


def configure_cors(app):
    """Echo the Origin header back only for allow-listed origins"""
    allowed = set(app.config['CORS_ALLOWED_ORIGINS'])

    @app.before_request
    def answer_preflight():
        if request.method == 'OPTIONS':
            return app.make_default_options_response()

    @app.after_request
    def add_cors_headers(response):
        origin = request.headers.get('Origin')
        if origin and origin in allowed:
            response.headers['Access-Control-Allow-Origin'] = origin
            response.headers['Access-Control-Allow-Credentials'] = 'true'
            response.headers['Access-Control-Allow-Methods'] = CORS_ALLOWED_METHODS
            response.headers['Access-Control-Allow-Headers'] = CORS_ALLOWED_HEADERS
            response.headers['Vary'] = 'Origin'
        return response


def register_commands(app):
    @app.cli.command('create-admin')
    @click.argument('email')
    @click.argument('password')
    def create_admin_command(email, password):
        """Create an admin account (or promote an existing one)."""
        from services.users import create_admin
        user = create_admin(email, password)
        click.echo(f"Admin user ready: {user.email}")


def create_app(config=None):
    """Application factory pattern"""
    app = Flask(__name__)
    app.config.from_object(config or Config())

    # Printed once per process, skipped under tests
    print_startup_banner(app.config)

    logging.basicConfig(
        level=app.config.get('LOG_LEVEL', 'INFO'),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    # Initialize extensions
    db.init_app(app)
    Mail(app)
    Migrate(app, db)

    configure_cors(app)
    register_error_handlers(app)
    register_blueprints(app)
    register_commands(app)

    # Database migrations are handled by Flask-Migrate
    # Run: flask db upgrade (in production)

    return app


# Create the application
app = create_app()

if __name__ == '__main__':
    app.run(debug=True, host='0.0.0.0', port=app.config['PORT'])
