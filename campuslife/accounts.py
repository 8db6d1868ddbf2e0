"""User registration and login backed by a JSON file of hashed passwords."""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any


class AccountError(Exception):
    """Raised when an account operation cannot be carried out."""


class UsernameTakenError(AccountError):
    """Raised when registering a name that already belongs to a user."""


def hash_password(password: str) -> str:
    """Return the lower-case hex SHA-256 digest of the UTF-8 password."""
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


def _checked(username: str, password: str) -> str:
    name = username.strip()
    if not name or not password:
        raise AccountError("username and password must not be empty")
    return name


class UserStore:
    """Accounts kept in a JSON document of the form ``{"users": [...]}``."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _read_root(self) -> dict[str, Any] | None:
        """Return the stored document, ``None`` if the file cannot be read."""
        try:
            raw = self.path.read_bytes()
        except OSError:
            return None
        try:
            document = json.loads(raw)
        except ValueError:
            return {}
        return document if isinstance(document, dict) else {}

    @staticmethod
    def _user_list(root: dict[str, Any]) -> list[Any]:
        users = root.get("users")
        return list(users) if isinstance(users, list) else []

    @staticmethod
    def _records(users: list[Any]) -> list[dict[str, Any]]:
        return [user for user in users if isinstance(user, dict)]

    def register(self, username: str, password: str) -> None:
        """Add a new user; raise ``UsernameTakenError`` if the name exists."""
        name = _checked(username, password)
        root = self._read_root() or {}
        users = self._user_list(root)
        if any(user.get("username") == name for user in self._records(users)):
            raise UsernameTakenError(f"username {name!r} already exists")
        users.append({"username": name, "password": hash_password(password)})
        root["users"] = users
        try:
            self.path.write_text(
                json.dumps(root, indent=4, ensure_ascii=False) + "\n",
                encoding="utf-8",
            )
        except OSError as exc:
            raise AccountError(f"cannot save users to {self.path}") from exc

    def verify(self, username: str, password: str) -> bool:
        """Return whether the name and password match a stored account."""
        name = _checked(username, password)
        root = self._read_root()
        if root is None:
            return False
        hashed = hash_password(password)
        return any(
            user.get("username") == name and user.get("password") == hashed
            for user in self._records(self._user_list(root))
        )