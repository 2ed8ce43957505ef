"""
Todo Identity Scheme

Todos are addressed by the id inside their encoded payload, never by the
row id. ``PayloadIndex`` remembers which row holds which payload id so
most lookups touch a single row; it is only a cache, and any miss or
stale hit falls back to scanning the user's rows.
"""

import logging
import threading
import uuid
from collections import OrderedDict

from todoapp.errors import TodoNotFound, ValidationError
from todoapp.models.todo import TodoPayload
from todoapp.services import store

logger = logging.getLogger(__name__)

DEFAULT_MAX_USERS = 1024


class PayloadIndex:
    """Per-process map of ``user_id -> {payload_id: row_id}``.

    Holds at most ``max_users`` users; the least recently used one is
    dropped first and simply rebuilt by a scan when it comes back.
    """

    def __init__(self, max_users=DEFAULT_MAX_USERS):
        self.max_users = max_users
        self._by_user = OrderedDict()
        self._lock = threading.Lock()

    def lookup(self, user_id, payload_id):
        with self._lock:
            entries = self._by_user.get(user_id)
            if entries is None:
                return None
            self._by_user.move_to_end(user_id)
            return entries.get(payload_id)

    def _store(self, user_id, entries):
        self._by_user[user_id] = entries
        self._by_user.move_to_end(user_id)
        while len(self._by_user) > self.max_users:
            self._by_user.popitem(last=False)

    def replace(self, user_id, entries):
        with self._lock:
            self._store(user_id, dict(entries))

    def add(self, user_id, payload_id, row_id):
        with self._lock:
            entries = dict(self._by_user.get(user_id, {}))
            entries[payload_id] = row_id
            self._store(user_id, entries)

    def discard(self, user_id, payload_id):
        with self._lock:
            entries = dict(self._by_user.get(user_id, {}))
            entries.pop(payload_id, None)
            self._store(user_id, entries)

    def __len__(self):
        return len(self._by_user)

    def forget(self, user_id):
        with self._lock:
            self._by_user.pop(user_id, None)

    def clear(self):
        with self._lock:
            self._by_user.clear()

    def __contains__(self, user_id):
        return user_id in self._by_user


payload_index = PayloadIndex()


def _decode_row(row):
    try:
        return TodoPayload.decode(row.payload)
    except (TypeError, ValueError) as e:
        logger.warning('Skipping undecodable todo row %s: %s', row.id, e)
        return None


def _require_payload_id(payload_id):
    payload_id = (payload_id or '').strip()
    if not payload_id:
        raise ValidationError('No Todo ID provided.')
    return payload_id


def _require_title(title):
    title = (title or '').strip()
    if not title:
        raise ValidationError('Todo must not be empty.')
    return title


def _scan(user_id):
    """Decode every row the user owns and rebuild their index entries."""
    found = []
    entries = {}
    for row in store.list_todos_for_user(user_id):
        payload = _decode_row(row)
        if payload is None:
            continue
        found.append((row.id, payload))
        entries.setdefault(payload.id, row.id)
    payload_index.replace(user_id, entries)
    logger.debug('Rebuilt payload index for user %s (%d todos)', user_id, len(entries))
    return found


def list_payloads(user_id):
    """Return the user's todos in creation order."""
    return [payload for _, payload in _scan(user_id)]


def find_by_payload_id(user_id, payload_id):
    """Resolve ``payload_id`` among the user's todos.

    Returns ``(row_id, TodoPayload)``; raises ``TodoNotFound`` when the user
    owns no todo with that id.
    """
    payload_id = _require_payload_id(payload_id)

    row_id = payload_index.lookup(user_id, payload_id)
    if row_id is not None:
        row = store.get_todo_row(row_id)
        if row is not None and row.user_id == user_id:
            payload = _decode_row(row)
            if payload is not None and payload.id == payload_id:
                return row.id, payload

    for row_id, payload in _scan(user_id):
        if payload.id == payload_id:
            return row_id, payload
    raise TodoNotFound(payload_id)


def create_todo(user_id, title):
    """Store a new, not yet completed todo and return its payload id."""
    payload = TodoPayload(id=str(uuid.uuid4()), title=_require_title(title), completed=False)
    row_id = store.insert_todo(user_id, payload.encode())
    payload_index.add(user_id, payload.id, row_id)
    return payload.id


def update_by_payload_id(user_id, payload_id, title, completed):
    """Replace the payload of an existing todo, keeping its payload id."""
    title = _require_title(title)
    row_id, current = find_by_payload_id(user_id, payload_id)
    payload = TodoPayload(id=current.id, title=title, completed=bool(completed))
    store.update_todo(row_id, payload.encode())
    return payload


def delete_by_payload_id(user_id, payload_id):
    row_id, payload = find_by_payload_id(user_id, payload_id)
    store.delete_todo(row_id)
    payload_index.discard(user_id, payload.id)
