"""
Stored Session Model

Server-side half of a browser session; the cookie only carries ``id``.
"""

from datetime import datetime

from todoapp.extensions import db


class StoredSession(db.Model):
    __tablename__ = 'sessions'

    id = db.Column(db.String(64), primary_key=True)
    data = db.Column(db.Text, nullable=False)
    expires_at = db.Column(db.DateTime, nullable=False, index=True)

    def is_expired(self, now=None):
        return (now or datetime.utcnow()) >= self.expires_at

    def __repr__(self):
        return f'<StoredSession expires:{self.expires_at}>'
