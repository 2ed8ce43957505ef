"""
Todo Model

A row owns exactly one encoded payload. The payload carries its own id,
which is what URLs use; ``Todo.id`` is only the storage address.
"""

import json
from dataclasses import dataclass, asdict

from todoapp.extensions import db


class Todo(db.Model):
    __tablename__ = 'todos'

    id = db.Column(db.Integer, primary_key=True)
    # No ON DELETE CASCADE; store.delete_user removes owned rows itself
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    payload = db.Column('todo', db.Text, nullable=False)

    def __repr__(self):
        return f'<Todo row:{self.id} user:{self.user_id}>'


@dataclass
class TodoPayload:
    id: str
    title: str
    completed: bool = False

    def encode(self) -> str:
        return json.dumps(asdict(self))

    @classmethod
    def decode(cls, raw: str) -> 'TodoPayload':
        """Parse a stored payload, raising ``ValueError`` if it is unusable."""
        data = json.loads(raw)
        if not isinstance(data, dict) or not isinstance(data.get('id'), str) or not data['id']:
            raise ValueError('todo payload has no id')
        return cls(
            id=data['id'],
            title=str(data.get('title', '')),
            completed=bool(data.get('completed', False)),
        )
