"""Profile and training-system store contracts.

The engine never persists anything. Callers (session completion, the CLI)
talk to a store through these protocols. Two implementations ship here:
an in-memory store for tests and embedding, and a JSON-file store laid
out per user::

    <root>/users/<user_id>/profile.json
    <root>/users/<user_id>/training_systems/<system_id>.json
"""

from __future__ import annotations

import json
import logging
import uuid
from datetime import datetime
from pathlib import Path
from typing import Protocol

from regain.models import UserProfile, WeeklySystem

logger = logging.getLogger(__name__)


class ProfileStore(Protocol):
    def get_profile(self, user_id: str) -> UserProfile | None: ...

    def save_profile(self, user_id: str, profile: UserProfile) -> None: ...


class TrainingSystemStore(Protocol):
    def get_training_system(self, user_id: str, system_id: str) -> WeeklySystem | None: ...

    def save_training_system(self, user_id: str, system: WeeklySystem) -> str: ...

    def get_all_training_systems(self, user_id: str) -> list[WeeklySystem]: ...

    def delete_training_system(self, user_id: str, system_id: str) -> None: ...


def _newest_first(systems: list[WeeklySystem]) -> list[WeeklySystem]:
    return sorted(systems, key=lambda s: s.created_at, reverse=True)


class InMemoryStore:
    """Dict-backed store implementing both protocols."""

    def __init__(self) -> None:
        self._profiles: dict[str, dict] = {}
        self._systems: dict[str, dict[str, dict]] = {}

    def get_profile(self, user_id: str) -> UserProfile | None:
        data = self._profiles.get(user_id)
        return UserProfile.from_dict(data) if data is not None else None

    def save_profile(self, user_id: str, profile: UserProfile) -> None:
        self._profiles[user_id] = profile.to_dict()

    def get_training_system(self, user_id: str, system_id: str) -> WeeklySystem | None:
        data = self._systems.get(user_id, {}).get(system_id)
        return WeeklySystem.from_dict(data) if data is not None else None

    def save_training_system(self, user_id: str, system: WeeklySystem) -> str:
        self._systems.setdefault(user_id, {})[system.id] = system.to_dict()
        return system.id

    def get_all_training_systems(self, user_id: str) -> list[WeeklySystem]:
        return _newest_first(
            [WeeklySystem.from_dict(d) for d in self._systems.get(user_id, {}).values()]
        )

    def delete_training_system(self, user_id: str, system_id: str) -> None:
        self._systems.get(user_id, {}).pop(system_id, None)


class JsonFileStore:
    """File-backed store implementing both protocols."""

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def _user_dir(self, user_id: str) -> Path:
        if not user_id or "/" in user_id or user_id in (".", ".."):
            raise ValueError(f"Invalid user id: {user_id!r}")
        return self.root / "users" / user_id

    def _systems_dir(self, user_id: str) -> Path:
        return self._user_dir(user_id) / "training_systems"

    def _system_path(self, user_id: str, system_id: str) -> Path:
        if not system_id or "/" in system_id or system_id in (".", ".."):
            raise ValueError(f"Invalid training system id: {system_id!r}")
        return self._systems_dir(user_id) / f"{system_id}.json"

    @staticmethod
    def _read(path: Path) -> dict | None:
        if not path.exists():
            return None
        with path.open(encoding="utf-8") as f:
            return json.load(f)

    @staticmethod
    def _write(path: Path, data: dict) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(f".{uuid.uuid4().hex}.tmp")
        with tmp.open("w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        tmp.replace(path)

    def get_profile(self, user_id: str) -> UserProfile | None:
        data = self._read(self._user_dir(user_id) / "profile.json")
        return UserProfile.from_dict(data) if data is not None else None

    def save_profile(self, user_id: str, profile: UserProfile) -> None:
        data = profile.to_dict()
        data["updatedAt"] = datetime.now().astimezone().isoformat()
        self._write(self._user_dir(user_id) / "profile.json", data)

    def get_training_system(self, user_id: str, system_id: str) -> WeeklySystem | None:
        data = self._read(self._system_path(user_id, system_id))
        return WeeklySystem.from_dict(data) if data is not None else None

    def save_training_system(self, user_id: str, system: WeeklySystem) -> str:
        self._write(self._system_path(user_id, system.id), system.to_dict())
        logger.debug("Saved training system %s for user %s", system.id, user_id)
        return system.id

    def get_all_training_systems(self, user_id: str) -> list[WeeklySystem]:
        directory = self._systems_dir(user_id)
        if not directory.is_dir():
            return []
        systems = []
        for path in sorted(directory.glob("*.json")):
            data = self._read(path)
            if data is not None:
                systems.append(WeeklySystem.from_dict(data))
        return _newest_first(systems)

    def delete_training_system(self, user_id: str, system_id: str) -> None:
        self._system_path(user_id, system_id).unlink(missing_ok=True)
