"""
Admin Blueprint

User management, restricted to accounts with ``is_admin`` set.
"""

from flask import Blueprint

admin_bp = Blueprint('admin', __name__)

from todoapp.admin import routes  # noqa: E402, F401
