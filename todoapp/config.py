"""
Configuration settings for the To-Do application
"""
import os
import secrets
from datetime import timedelta

from dotenv import load_dotenv

load_dotenv()


class Config:
    """Flask application configuration"""

    # Generated once per process when not provided; never per request.
    # Set SECRET_KEY when running more than one worker.
    SECRET_KEY = os.environ.get('SECRET_KEY') or secrets.token_hex(32)

    # Database configuration
    basedir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'instance', 'todo.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Password hashing work factor
    BCRYPT_ROUNDS = int(os.environ.get('BCRYPT_ROUNDS', '10'))

    # Server-side sessions
    SESSION_COOKIE_NAME = os.environ.get('SESSION_COOKIE_NAME', 'todo_session')
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    SESSION_COOKIE_SECURE = os.environ.get('SESSION_COOKIE_SECURE', '').lower() in ('1', 'true', 'yes')
    PERMANENT_SESSION_LIFETIME = timedelta(minutes=int(os.environ.get('SESSION_IDLE_MINUTES', '120')))
    SESSION_SAVE_UNINITIALIZED = False

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')


class TestConfig(Config):
    """Testing configuration"""
    TESTING = True
    SECRET_KEY = 'test-secret-key'
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    BCRYPT_ROUNDS = 4
    LOG_LEVEL = 'DEBUG'
