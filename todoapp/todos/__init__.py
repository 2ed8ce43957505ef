"""
Todos Blueprint

Home page and the todo create/edit/delete routes.
"""

from flask import Blueprint

todos_bp = Blueprint('todos', __name__)

from todoapp.todos import routes  # noqa: E402, F401
