"""
Services Package

Persistence, password hashing and todo addressing used by the blueprints.
"""

from todoapp.services import passwords, store, todos

__all__ = ['passwords', 'store', 'todos']
