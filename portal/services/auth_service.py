"""
Auth Service - Account directory and current session.

Architecture Decision: Hashed passwords, explicit sessions
Credentials are stored as bcrypt hashes. Login still succeeds exactly when
email and password match a registered account; only the stored form differs.
The current session is persisted (so it survives restarts) and is also
handed back to the caller as a Session object, which is what the dashboard
takes instead of reading global state.
"""

import logging
from typing import List, Optional

import bcrypt
from pydantic import TypeAdapter, ValidationError

from portal.domain.demo_data import DEMO_OWNERS, DEMO_PASSWORD
from portal.domain.errors import (
    DuplicateAccountError, FormValidationError, InvalidCredentialsError, MalformedSessionDataError,
    PersistenceError,
)
from portal.domain.models import Credential, PortalOptions, Session, User
from portal.infra.config import get_settings
from portal.infra.kv_store import KeyValueStore
from portal.services import latency
from portal.services.latency import SimulatedLatency

logger = logging.getLogger(__name__)

USERS_KEY = "data_portal_users"
CURRENT_USER_KEY = "data_portal_current_user"

_credentials = TypeAdapter(List[Credential])


def hash_password(password: str, rounds: int = 12) -> str:
    """Hash a password using bcrypt"""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its hash"""
    try:
        return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
    except ValueError:
        # Not a bcrypt hash
        return False


class AuthService:
    """
    Registers accounts, checks credentials and tracks the current session.
    """

    def __init__(self, store: Optional[KeyValueStore] = None,
                 options: Optional[PortalOptions] = None):
        self.store = store or KeyValueStore()
        self.options = options or get_settings().options
        self.latency = SimulatedLatency(self.options.latency_scale)
        self._demo_checked = False

    async def _load_credentials(self) -> List[Credential]:
        data = await self.store.get_json(USERS_KEY, [])
        try:
            return _credentials.validate_python(data)
        except ValidationError as e:
            raise PersistenceError(f"Corrupt account list: {e}") from e

    @staticmethod
    def _dump_credentials(credentials: List[Credential]) -> list:
        return [c.model_dump(mode="json") for c in credentials]

    async def ensure_demo_users(self) -> None:
        """Seed the demo accounts when the directory is empty"""
        if self._demo_checked or not self.options.seed_demo_users:
            return

        credentials = await self._load_credentials()
        if not credentials:
            demo = [
                Credential(email=email, password_hash=hash_password(DEMO_PASSWORD, self.options.bcrypt_rounds))
                for email in DEMO_OWNERS
            ]
            await self.store.set_json(USERS_KEY, self._dump_credentials(demo))
            logger.info("Demo users initialized")
        self._demo_checked = True

    async def register(self, email: str, password: str) -> User:
        """
        Create an account and log it in.

        Raises:
            DuplicateAccountError: an account with this email exists
            FormValidationError: the email is empty
        """
        logger.info(f"Registering user: {email}")
        await self.latency.wait(latency.REGISTER_DELAY)
        await self.ensure_demo_users()

        credentials = await self._load_credentials()
        if any(c.email == email for c in credentials):
            raise DuplicateAccountError(email)

        try:
            credential = Credential(
                email=email,
                password_hash=hash_password(password, self.options.bcrypt_rounds)
            )
            session = Session(email=email)
        except ValidationError as e:
            raise FormValidationError(f"Invalid account data: {e}") from e

        credentials.append(credential)
        await self.store.set_many_json({
            USERS_KEY: self._dump_credentials(credentials),
            CURRENT_USER_KEY: session.model_dump(mode="json"),
        })

        logger.info(f"User registered successfully: {email}")
        return session.user

    async def login(self, email: str, password: str) -> User:
        """
        Check credentials and start a session.

        Raises:
            InvalidCredentialsError: no account matches email and password
        """
        logger.info(f"Logging in user: {email}")
        await self.latency.wait(latency.LOGIN_DELAY)
        await self.ensure_demo_users()

        credentials = await self._load_credentials()
        match = next((c for c in credentials if c.email == email), None)
        if match is None or not verify_password(password, match.password_hash):
            raise InvalidCredentialsError()

        session = Session(email=email)
        await self.store.set_json(CURRENT_USER_KEY, session.model_dump(mode="json"))

        logger.info(f"User logged in successfully: {email}")
        return session.user

    async def _read_session(self) -> Optional[Session]:
        raw = await self.store.get(CURRENT_USER_KEY)
        if raw is None:
            return None
        try:
            return Session.model_validate_json(raw)
        except ValidationError as e:
            raise MalformedSessionDataError(str(e)) from e

    async def get_current_session(self) -> Optional[Session]:
        """Get the persisted session, or None if absent or unreadable"""
        await self.latency.wait(latency.CURRENT_USER_DELAY)
        try:
            return await self._read_session()
        except MalformedSessionDataError as e:
            logger.warning(f"Ignoring malformed session data: {e}")
            return None

    async def get_current_user(self) -> Optional[User]:
        session = await self.get_current_session()
        return session.user if session else None

    async def logout(self) -> None:
        """Clear the current session. Succeeds even when nobody is logged in."""
        logger.info("Logging out user")
        await self.latency.wait(latency.LOGOUT_DELAY)
        await self.store.remove(CURRENT_USER_KEY)
        logger.info("User logged out successfully")

    async def count_accounts(self) -> int:
        return len(await self._load_credentials())
