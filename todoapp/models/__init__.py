"""
Models Package

Exports all models for easy importing.
"""

from todoapp.models.user import User
from todoapp.models.todo import Todo
from todoapp.models.session import StoredSession

__all__ = ['User', 'Todo', 'StoredSession']
