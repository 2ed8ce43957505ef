"""
Flask Extensions

The database handle and the login manager are created unbound here and
attached to the application inside ``create_app``.
"""

from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager

# Database instance
db = SQLAlchemy()

# Login manager: serializes the user id into the session and loads it back
login_manager = LoginManager()
