"""
User Model
"""

from datetime import datetime

from flask_login import UserMixin

from todoapp.extensions import db


class User(UserMixin, db.Model):
    """Registered account. ``get_id`` (from UserMixin) is what the session stores."""
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False, index=True)
    password_hash = db.Column('password', db.String(255), nullable=False)
    is_admin = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f'<User {self.username}>'
