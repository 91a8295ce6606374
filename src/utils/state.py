from __future__ import annotations

import asyncio
import json
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Literal, Optional

import db.crud as crud
from utils.config import DEFAULT_LOGIN_DELAY
from utils.logger import get_logger

_logger = get_logger(__name__)

TOKEN_KEY = "auth-token"
USER_KEY = "user-data"

Role = Literal["admin", "user"]
ROLES = ("admin", "user")


@dataclass(frozen=True)
class SessionUser:
    id: int
    username: str
    role: Role

    def to_json(self) -> str:
        return json.dumps(asdict(self))

    @classmethod
    def from_json(cls, raw: str) -> "SessionUser":
        """Raises ValueError when raw is not a serialized SessionUser."""
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError("user data is not an object")
        uid, username, role = data.get("id"), data.get("username"), data.get("role")
        if not isinstance(uid, int) or isinstance(uid, bool):
            raise ValueError(f"invalid user id {uid!r}")
        if not isinstance(username, str) or not username:
            raise ValueError(f"invalid username {username!r}")
        if role not in ROLES:
            raise ValueError(f"invalid role {role!r}")
        return cls(id=uid, username=username, role=role)


@dataclass(frozen=True)
class DemoAccount:
    id: int
    username: str
    password: str
    role: Role


DEMO_ACCOUNTS = (
    DemoAccount(1, "admin", "admin123", "admin"),
    DemoAccount(2, "user", "user123", "user"),
)


class SessionStatus(str, Enum):
    UNKNOWN = "unknown"
    AUTHENTICATED = "authenticated"
    ANONYMOUS = "anonymous"


class InvalidCredentialsError(Exception):
    def __init__(self):
        super().__init__("Invalid credentials")


class SessionStore:
    """
    The logged-in user, persisted in the local key/value store.

    Lifecycle:
      - UNKNOWN until restore() has read the persisted entries
      - AUTHENTICATED(user) after restore() or login() succeeds
      - ANONYMOUS when nothing valid is persisted, or after logout()
    """

    def __init__(
        self,
        db_path: Optional[str] = None,
        login_delay: float = DEFAULT_LOGIN_DELAY,
        accounts=DEMO_ACCOUNTS,
    ):
        self.db_path = db_path
        self.login_delay = login_delay
        self.accounts = tuple(accounts)
        self.status = SessionStatus.UNKNOWN
        self.user: Optional[SessionUser] = None

    @property
    def is_authenticated(self) -> bool:
        return self.status is SessionStatus.AUTHENTICATED

    @property
    def role(self) -> Optional[Role]:
        return self.user.role if self.user else None

    def _set_anonymous(self) -> None:
        self.user = None
        self.status = SessionStatus.ANONYMOUS

    def _set_user(self, user: SessionUser) -> None:
        self.user = user
        self.status = SessionStatus.AUTHENTICATED

    async def restore(self) -> SessionStatus:
        """Leave UNKNOWN, based on what was persisted by a previous run."""
        stored = await crud.get_values((TOKEN_KEY, USER_KEY), self.db_path)
        token, user_data = stored[TOKEN_KEY], stored[USER_KEY]

        if not token or not user_data:
            self._set_anonymous()
            return self.status

        try:
            user = SessionUser.from_json(user_data)
        except ValueError as e:
            _logger.warning(f"Discarding malformed persisted session: {e}")
            await crud.delete_values((TOKEN_KEY, USER_KEY), self.db_path)
            self._set_anonymous()
            return self.status

        _logger.info(f"Restored session of '{user.username}'.")
        self._set_user(user)
        return self.status

    async def login(self, username: str, password: str) -> SessionUser:
        """
        Match username/password against the demo accounts.

        Raises InvalidCredentialsError without changing state when nothing
        matches.
        """
        account = next(
            (
                a
                for a in self.accounts
                if a.username == username and a.password == password
            ),
            None,
        )
        if account is None:
            _logger.info(f"Rejected login for '{username}'.")
            raise InvalidCredentialsError()

        if self.login_delay > 0:
            await asyncio.sleep(self.login_delay)

        user = SessionUser(id=account.id, username=account.username, role=account.role)
        await crud.set_values(
            {TOKEN_KEY: f"mock-jwt-token-{user.id}", USER_KEY: user.to_json()},
            self.db_path,
        )
        self._set_user(user)
        _logger.info(f"'{user.username}' logged in as {user.role}.")
        return user

    async def logout(self) -> None:
        await crud.delete_values((TOKEN_KEY, USER_KEY), self.db_path)
        if self.user:
            _logger.info(f"'{self.user.username}' logged out.")
        self._set_anonymous()
