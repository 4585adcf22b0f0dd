"""JSON-file-backed implementation of UserRepository (read-only)."""

from __future__ import annotations

from pathlib import Path

from storefront.domain.model.user import User
from storefront.domain.repository.user_repository import UserRepository
from storefront.infrastructure.persistence.json_collection import JsonCollection


class JsonUserRepository(UserRepository):

    def __init__(self, file_path: Path) -> None:
        self._collection = JsonCollection(file_path)

    def get_by_id(self, user_id: str) -> User | None:
        for raw in self._collection.load():
            if raw["id"] == user_id:
                return User(id=raw["id"], name=raw.get("name", ""), email=raw.get("email", ""))
        return None
