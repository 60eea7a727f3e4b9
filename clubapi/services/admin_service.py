"""
Admin accounts and credential checks.

There are no sessions: the login endpoint only confirms a username/password
pair and returns the role the front-end should show.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from clubapi.core.config import Settings
from clubapi.core.security import hash_password, needs_upgrade, verify_password
from clubapi.domain.documents import ADMINS, seed_values
from clubapi.domain.records import ROLE_ADMIN, ROLE_SUPER, AdminAccount, find_index, new_record_id
from clubapi.repositories.document_store import DocumentStore
from clubapi.repositories.errors import PersistenceError

from .errors import ConflictError, ForbiddenError, InvalidCredentialsError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 4


def _text(value: Any) -> str:
    return "" if value is None else str(value)


@dataclass
class LoginResult:
    role: str
    username: str
    image_url: str

    def to_dict(self) -> dict:
        return {"success": True, "role": self.role, "username": self.username, "imageUrl": self.image_url}


def default_documents(settings: Settings) -> dict[str, Any]:
    """Seed values for the first start, with the super admin password hashed."""
    return seed_values(settings.super_admin_username, hash_password(settings.super_admin_password))


class AdminService:
    """CRUD over the ``admins`` document plus the login check."""

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    def _load(self) -> list[AdminAccount]:
        admins = self.store.read(ADMINS)
        if not isinstance(admins, list):
            return []
        return [AdminAccount.from_dict(a) for a in admins if isinstance(a, Mapping)]

    def _save(self, admins: list[AdminAccount]) -> None:
        self.store.write(ADMINS, [a.to_dict() for a in admins])

    @staticmethod
    def _username_taken(admins: list[AdminAccount], username: str, *, exclude_id: Optional[str] = None) -> bool:
        wanted = username.strip().lower()
        return any(a.username.lower() == wanted and a.id != exclude_id for a in admins)

    # -------------------------------------- login --------------------------------------
    def authenticate(self, username: Any, password: Any) -> LoginResult:
        username = _text(username).strip()
        password = _text(password)
        if not username or not password:
            raise ValidationError("Username and password are required")
        admins = self._load()
        for admin in admins:
            if admin.username.lower() != username.lower():
                continue
            if not verify_password(password, admin.password):
                break
            if needs_upgrade(admin.password):
                self._upgrade_hash(admins, admin, password)
            logger.info("Admin %s logged in", admin.username)
            return LoginResult(role=admin.role, username=admin.username, image_url=admin.image_url)
        logger.warning("Failed login for %s", username)
        raise InvalidCredentialsError("Invalid credentials")

    def _upgrade_hash(self, admins: list[AdminAccount], admin: AdminAccount, password: str) -> None:
        """Store a fresh argon2 hash in place of a plaintext or outdated one."""
        admin.password = hash_password(password)
        try:
            self._save(admins)
        except PersistenceError as exc:
            logger.error("Could not store upgraded password of %s: %s", admin.username, exc)
            return
        logger.info("Upgraded stored password of %s to argon2", admin.username)

    # -------------------------------------- CRUD --------------------------------------
    def list_public(self) -> list[dict]:
        admins = sorted(self._load(), key=lambda a: (0 if a.role == ROLE_SUPER else 1, a.username.lower()))
        return [a.public_dict() for a in admins]

    def create(self, payload: Mapping[str, Any]) -> dict:
        username = _text(payload.get("username")).strip()
        password = _text(payload.get("password"))
        if not username or not password:
            raise ValidationError("Username and password are required")
        if len(username) < MIN_USERNAME_LENGTH:
            raise ValidationError(f"Username must be at least {MIN_USERNAME_LENGTH} characters")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        admins = self._load()
        if self._username_taken(admins, username):
            raise ConflictError("Username already taken")
        admin = AdminAccount(
            id=new_record_id(),
            username=username,
            password=hash_password(password),
            role=ROLE_ADMIN,
            image_url=_text(payload.get("imageUrl")),
        )
        admins.append(admin)
        self._save(admins)
        logger.info("Created admin %s", admin.username)
        return admin.public_dict()

    def update(self, admin_id: str, payload: Mapping[str, Any]) -> dict:
        admins = self._load()
        index = find_index([a.to_dict() for a in admins], admin_id)
        if index < 0:
            raise NotFoundError("Admin not found")
        admin = admins[index]
        username = _text(payload.get("username")).strip()
        if username and username != admin.username:
            if self._username_taken(admins, username, exclude_id=admin.id):
                raise ConflictError("Username already taken")
            admin.username = username
        password = _text(payload.get("password"))
        if password:
            if len(password) < MIN_PASSWORD_LENGTH:
                raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
            admin.password = hash_password(password)
        if payload.get("imageUrl") is not None:
            admin.image_url = _text(payload["imageUrl"])
        self._save(admins)
        return admin.public_dict()

    def delete(self, admin_id: str) -> None:
        admins = self._load()
        index = find_index([a.to_dict() for a in admins], admin_id)
        if index < 0:
            raise NotFoundError("Admin not found")
        if admins[index].is_super:
            raise ForbiddenError("Super Admin accounts cannot be deleted!")
        removed = admins.pop(index)
        self._save(admins)
        logger.info("Deleted admin %s", removed.username)
