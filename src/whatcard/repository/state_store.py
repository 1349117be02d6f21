import json
import logging
import re
import threading
from pathlib import Path
from typing import Protocol

from whatcard.domain.errors import InputValidationError
from whatcard.domain.models import WalletState

logger = logging.getLogger(__name__)

STATE_VERSION = 1
_USER_ID_PATTERN = re.compile(r"^[A-Za-z0-9_.-]{1,128}$")


def validate_user_id(user_id: str) -> str:
    if not user_id or not _USER_ID_PATTERN.match(user_id) or user_id in {".", ".."}:
        raise InputValidationError(f"Invalid user id: {user_id!r}")
    return user_id


class StateStore(Protocol):
    """Whole-snapshot storage for one wallet per user.

    Writes replace the full snapshot; there is no compare-and-swap, so two
    writers for the same user race and the later save wins.
    """

    def load(self, user_id: str) -> WalletState | None:
        ...

    def save(self, user_id: str, state: WalletState) -> None:
        ...


class InMemoryStateStore:
    def __init__(self) -> None:
        self._states: dict[str, str] = {}
        self._lock = threading.Lock()

    def load(self, user_id: str) -> WalletState | None:
        with self._lock:
            raw = self._states.get(validate_user_id(user_id))
        return WalletState.model_validate_json(raw) if raw is not None else None

    def save(self, user_id: str, state: WalletState) -> None:
        payload = state.model_copy(update={"version": STATE_VERSION}).model_dump_json(by_alias=True)
        with self._lock:
            self._states[validate_user_id(user_id)] = payload


class JsonFileStateStore:
    def __init__(self, directory: str):
        self.directory = Path(directory)

    def _path(self, user_id: str) -> Path:
        return self.directory / f"user-{validate_user_id(user_id)}.json"

    def load(self, user_id: str) -> WalletState | None:
        path = self._path(user_id)
        if not path.exists():
            return None

        with path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
        return WalletState.model_validate(data)

    def save(self, user_id: str, state: WalletState) -> None:
        path = self._path(user_id)
        path.parent.mkdir(parents=True, exist_ok=True)
        payload = state.model_copy(update={"version": STATE_VERSION}).to_json_dict()

        tmp_path = path.with_suffix(".json.tmp")
        with tmp_path.open("w", encoding="utf-8") as fh:
            json.dump(payload, fh, ensure_ascii=False, indent=2)
        tmp_path.replace(path)
        logger.debug("Saved wallet state for %s to %s", user_id, path)
