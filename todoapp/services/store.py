"""
Credential Store

Reads and writes users and todo rows. Every write commits on its own;
a failed round-trip rolls the session back and surfaces as ``StoreFailure``.
"""

import logging
from functools import wraps

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from todoapp.errors import DuplicateUsername, StoreFailure
from todoapp.extensions import db
from todoapp.models import Todo, User

logger = logging.getLogger(__name__)


def _store_operation(f):
    """Translate SQLAlchemy errors into ``StoreFailure`` after rolling back."""
    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.exception('Store operation %s failed', f.__name__)
            raise StoreFailure() from e
    return wrapper


def _as_int(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------

@_store_operation
def find_user_by_username(username):
    if not username:
        return None
    return User.query.filter_by(username=username).first()


@_store_operation
def find_user_by_id(user_id):
    user_id = _as_int(user_id)
    if user_id is None:
        return None
    return db.session.get(User, user_id)


def insert_user(username, password_hash, is_admin=False):
    """Create a user and return its id.

    Raises ``DuplicateUsername`` if the name is taken, including when a
    concurrent registration wins the race to the unique index.
    """
    if find_user_by_username(username) is not None:
        raise DuplicateUsername(username)

    user = User(username=username, password_hash=password_hash, is_admin=is_admin)
    try:
        db.session.add(user)
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        raise DuplicateUsername(username) from e
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception('Could not insert user %s', username)
        raise StoreFailure() from e
    return user.id


@_store_operation
def delete_user(user_id):
    """Delete a user together with every todo row it owns.

    Both deletes share one transaction, so a failure leaves neither applied.
    """
    Todo.query.filter_by(user_id=user_id).delete(synchronize_session=False)
    User.query.filter_by(id=user_id).delete(synchronize_session=False)
    db.session.commit()

    from todoapp.services.todos import payload_index
    payload_index.forget(user_id)


@_store_operation
def list_non_admin_users():
    return User.query.filter_by(is_admin=False).order_by(User.id).all()


@_store_operation
def set_admin(user_id, is_admin=True):
    updated = User.query.filter_by(id=user_id).update({User.is_admin: is_admin})
    db.session.commit()
    return updated > 0


# ---------------------------------------------------------------------------
# Todo rows
# ---------------------------------------------------------------------------

@_store_operation
def list_todos_for_user(user_id):
    return Todo.query.filter_by(user_id=user_id).order_by(Todo.id).all()


@_store_operation
def get_todo_row(row_id):
    return db.session.get(Todo, row_id)


@_store_operation
def insert_todo(user_id, payload):
    todo = Todo(user_id=user_id, payload=payload)
    db.session.add(todo)
    db.session.commit()
    return todo.id


@_store_operation
def update_todo(row_id, payload):
    Todo.query.filter_by(id=row_id).update({Todo.payload: payload})
    db.session.commit()


@_store_operation
def delete_todo(row_id):
    Todo.query.filter_by(id=row_id).delete()
    db.session.commit()
