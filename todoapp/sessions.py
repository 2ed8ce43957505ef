"""
Server-Side Sessions

The browser only holds a signed, opaque session id. Everything stored in
``flask.session`` (the logged-in user id, flash messages) lives in the
``sessions`` table. Flask persists the session while processing the
response, so a redirect issued after ``login_user`` is never sent before
the new state is committed; a failed commit turns into a 500.
"""

import logging
import secrets
from datetime import datetime

from flask import session
from flask.json.tag import TaggedJSONSerializer
from flask.sessions import SessionInterface, SessionMixin
from itsdangerous import BadSignature, Signer
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.datastructures import CallbackDict

from todoapp.errors import StoreFailure
from todoapp.extensions import db
from todoapp.models import StoredSession

logger = logging.getLogger(__name__)

SESSION_SALT = 'todoapp.session'


def generate_session_id():
    return secrets.token_urlsafe(32)


class ServerSideSession(CallbackDict, SessionMixin):
    """Session dict that knows its id and whether it must be destroyed."""

    def __init__(self, initial=None, sid=None, new=False):
        def on_update(self):
            self.modified = True

        CallbackDict.__init__(self, initial, on_update)
        self.sid = sid
        self.new = new
        self.modified = False
        self.destroyed = False
        self.previous_sid = None
        self.load_failed = False

    def regenerate(self):
        """Move the contents to a fresh id; the old row is removed on save."""
        if not self.new and self.previous_sid is None:
            self.previous_sid = self.sid
        self.sid = generate_session_id()
        self.modified = True

    def destroy(self):
        """Drop the contents and the server-side row at the end of the request."""
        self.clear()
        self.destroyed = True


class SqlAlchemySessionInterface(SessionInterface):
    session_class = ServerSideSession
    serializer = TaggedJSONSerializer()

    def _signer(self, app):
        return Signer(app.secret_key, salt=SESSION_SALT)

    def _unsign(self, app, cookie_value):
        try:
            return self._signer(app).unsign(cookie_value).decode('utf-8')
        except (BadSignature, UnicodeDecodeError):
            return None

    def _load(self, sid):
        row = db.session.get(StoredSession, sid)
        if row is None:
            return None
        if row.is_expired():
            db.session.delete(row)
            db.session.commit()
            return None
        try:
            return self.serializer.loads(row.data)
        except ValueError:
            logger.warning('Discarding unreadable session data')
            return None

    def open_session(self, app, request):
        if not app.secret_key:
            return None

        cookie_value = request.cookies.get(self.get_cookie_name(app))
        if cookie_value:
            sid = self._unsign(app, cookie_value)
            if sid:
                try:
                    data = self._load(sid)
                except SQLAlchemyError:
                    db.session.rollback()
                    logger.exception('Could not load session')
                    failed = self.session_class(sid=generate_session_id(), new=True)
                    failed.load_failed = True
                    return failed
                if data is not None:
                    return self.session_class(data, sid=sid)

        # Never adopt an id chosen by the client
        return self.session_class(sid=generate_session_id(), new=True)

    def _delete_rows(self, *sids):
        sids = [sid for sid in sids if sid]
        if sids:
            StoredSession.query.filter(StoredSession.id.in_(sids)).delete(synchronize_session=False)

    def save_session(self, app, session, response):
        name = self.get_cookie_name(app)
        domain = self.get_cookie_domain(app)
        path = self.get_cookie_path(app)
        secure = self.get_cookie_secure(app)
        samesite = self.get_cookie_samesite(app)
        httponly = self.get_cookie_httponly(app)

        keep_empty = app.config.get('SESSION_SAVE_UNINITIALIZED', False)
        try:
            if session.destroyed or (not session and not keep_empty):
                if not session.new or session.previous_sid:
                    self._delete_rows(session.sid, session.previous_sid)
                    db.session.commit()
                    response.delete_cookie(
                        name, domain=domain, path=path, secure=secure, samesite=samesite, httponly=httponly
                    )
                return

            if not (session.modified or session.new or app.config.get('SESSION_REFRESH_EACH_REQUEST', True)):
                return

            self._delete_rows(session.previous_sid)
            expires_at = datetime.utcnow() + app.permanent_session_lifetime
            data = self.serializer.dumps(dict(session))
            row = db.session.get(StoredSession, session.sid)
            if row is None:
                db.session.add(StoredSession(id=session.sid, data=data, expires_at=expires_at))
            else:
                row.data = data
                row.expires_at = expires_at
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.exception('Could not persist session')
            raise StoreFailure() from e

        response.vary.add('Cookie')
        response.set_cookie(
            name,
            self._signer(app).sign(session.sid).decode('utf-8'),
            expires=self.get_expiration_time(app, session),
            httponly=httponly,
            domain=domain,
            path=path,
            secure=secure,
            samesite=samesite,
        )


def purge_expired_sessions(now=None):
    """Delete every expired session row and return how many were removed."""
    now = now or datetime.utcnow()
    removed = StoredSession.query.filter(StoredSession.expires_at <= now).delete(synchronize_session=False)
    db.session.commit()
    return removed


def check_session_loaded():
    """``before_request`` hook: fail the request if its session could not be read."""
    if getattr(session, 'load_failed', False):
        raise StoreFailure()
