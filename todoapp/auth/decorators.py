"""
Identity Gate
"""

from functools import wraps

from flask_login import current_user

from todoapp.errors import Unauthorized


def identity_required(f):
    """Reject anonymous requests with 401 instead of redirecting to the login page.

    Use Flask-Login's ``login_required`` where a redirect is wanted.
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        if not current_user.is_authenticated:
            raise Unauthorized()
        return f(*args, **kwargs)
    return wrapper
