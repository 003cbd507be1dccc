"""Key Management Service.

Admin password and web session handling for the layout editor:
- Admin password (bcrypt hash in the meta table)
- Session tokens (write-through: memory cache + sessions table)

Architecture Notes:
- Database is injected at construction time.
- Instantiated once during app wiring (see Application.start() in app.py).
"""

from __future__ import annotations

import logging
import secrets
from typing import TYPE_CHECKING

import bcrypt

from deskmap.helpers.time_helper import now_s
from deskmap.services.infrastructure.config_svc import INTERNAL_SESSION_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)
if TYPE_CHECKING:
    from deskmap.persistence.db import Database

ADMIN_PASSWORD_KEY = "admin_password_hash"


class KeyManagementService:
    """Service for the admin password and sessions.

    Use the instance from Application.services["keys"].
    """

    def __init__(self, db: Database, session_timeout: int = INTERNAL_SESSION_TIMEOUT_SECONDS) -> None:
        """Initialize the key management service.

        Args:
            db: Database instance for persistence
            session_timeout: Session lifetime in seconds
        """
        self._db = db
        self.session_timeout = session_timeout
        self._sessions: dict[str, float] = {}

    @staticmethod
    def hash_password(password: str) -> str:
        """Hash a password using bcrypt."""
        pwd_hash = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=12))
        return pwd_hash.decode("utf-8")

    @staticmethod
    def verify_password(password: str, password_hash: str) -> bool:
        """Verify a password against a stored bcrypt hash."""
        try:
            return bool(bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8")))
        except ValueError:
            return False

    def get_admin_password_hash(self) -> str | None:
        return self._db.meta.get(ADMIN_PASSWORD_KEY)

    def get_or_create_admin_password(self, config_password: str | None = None) -> str:
        """Ensure an admin password exists.

        On first run the configured password is hashed and stored; without one a
        random password is generated and logged once.

        Args:
            config_password: Optional password from config

        Returns:
            Plaintext password if auto-generated, empty string otherwise
        """
        if self.get_admin_password_hash():
            return ""
        if config_password:
            self._db.meta.set(ADMIN_PASSWORD_KEY, self.hash_password(config_password))
            logger.info("[KeyManagement] Admin password set from config.")
            return ""

        random_password = secrets.token_urlsafe(16)
        self._db.meta.set(ADMIN_PASSWORD_KEY, self.hash_password(random_password))
        logger.warning("[KeyManagement] ========================================")
        logger.warning("[KeyManagement] AUTO-GENERATED ADMIN PASSWORD:")
        logger.warning(f"[KeyManagement]   {random_password}")
        logger.warning("[KeyManagement] ========================================")
        logger.warning("[KeyManagement] Save this password - it won't be shown again!")
        return random_password

    def check_admin_password(self, password: str) -> bool:
        password_hash = self.get_admin_password_hash()
        if not password_hash:
            return False
        return self.verify_password(password, password_hash)

    def reset_admin_password(self, new_password: str) -> None:
        """Set a new admin password and invalidate every session."""
        self._db.meta.set(ADMIN_PASSWORD_KEY, self.hash_password(new_password))
        self._sessions.clear()
        self._db.sessions.delete_all()
        logger.warning("[KeyManagement] Admin password reset - all sessions invalidated")

    def create_session(self) -> str:
        """Create a new session token (memory + DB)."""
        session_token = secrets.token_urlsafe(32)
        expiry = now_s() + self.session_timeout
        self._sessions[session_token] = expiry
        self._db.sessions.create(session_token, expiry)
        logger.info(f"[KeyManagement] Created new session (expires in {self.session_timeout}s)")
        return session_token

    def validate_session(self, session_token: str) -> bool:
        """Check a session token against the in-memory cache."""
        expiry = self._sessions.get(session_token)
        if expiry is None:
            return False
        if now_s() > expiry:
            self._sessions.pop(session_token, None)
            return False
        return True

    def invalidate_session(self, session_token: str) -> None:
        self._sessions.pop(session_token, None)
        self._db.sessions.delete(session_token)
        logger.info("[KeyManagement] Session invalidated (logout)")

    def load_sessions_from_db(self) -> int:
        """Load non-expired sessions into memory on startup."""
        sessions = self._db.sessions.load_all()
        self._sessions.update(sessions)
        self._db.sessions.cleanup_expired()
        logger.info(f"[KeyManagement] Loaded {len(sessions)} active session(s) from database")
        return len(sessions)
