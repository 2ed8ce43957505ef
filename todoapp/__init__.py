"""
To-Do List - Application Factory

This module provides the Flask application factory pattern for creating
and configuring the application instance.
"""

import logging
import os

from flask import Flask
from flask_login import current_user

from todoapp.extensions import db, login_manager
from todoapp.config import Config
from todoapp.errors import register_error_handlers
from todoapp.sessions import SqlAlchemySessionInterface, check_session_loaded


def create_app(config_class=Config):
    """Create and configure the Flask application.

    Args:
        config_class: Configuration class to use (default: Config)

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)
    app.config.from_object(config_class)
    logging.basicConfig(
        level=app.config.get('LOG_LEVEL', 'INFO'),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    # Sessions live in the database; the cookie carries only a signed id
    app.session_interface = SqlAlchemySessionInterface()
    app.before_request(check_session_loaded)

    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)
    login_manager.login_view = 'auth.login'
    login_manager.login_message = 'Please log in to access this page.'
    login_manager.login_message_category = 'info'

    # Register blueprints
    from todoapp.auth import auth_bp
    from todoapp.admin import admin_bp
    from todoapp.todos import todos_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(admin_bp, url_prefix='/users')
    app.register_blueprint(todos_bp)

    register_error_handlers(app)

    from todoapp.commands import register_commands
    register_commands(app)

    @app.context_processor
    def inject_is_admin_flag():
        """Inject `is_admin` flag into templates based on the loaded user."""
        return dict(is_admin=current_user.is_authenticated and current_user.is_admin)

    # Deserialize the id stored in the session; a deleted user yields an anonymous request
    @login_manager.user_loader
    def load_user(user_id):
        from todoapp.services import store
        return store.find_user_by_id(user_id)

    # Create database tables
    with app.app_context():
        _ensure_sqlite_dir(app.config['SQLALCHEMY_DATABASE_URI'])
        db.create_all()

    return app


def _ensure_sqlite_dir(uri):
    """Create the directory of a file-backed SQLite database."""
    prefix = 'sqlite:///'
    if not uri.startswith(prefix) or uri.endswith(':memory:'):
        return
    directory = os.path.dirname(uri[len(prefix):])
    if directory:
        os.makedirs(directory, exist_ok=True)
