from pathlib import Path

import orjson

from mailfinder.config.settings import settings
from mailfinder.models.schemas import ValidationSettings
from mailfinder.utils.log import get_logger

logger = get_logger("mailfinder-settings")


class SettingsStore:
    """
    Holds the active ValidationSettings and persists them to a JSON file.

    The file is a small key/value document so several entries can share it;
    validation settings live under `key`. A store without a path keeps
    everything in memory.
    """

    def __init__(self, path: str | Path | None = None, key: str | None = None):
        self.path = Path(path) if path else None
        self.key = key or settings.SETTINGS_KEY
        self._current = self._load()

    @classmethod
    def from_settings(cls) -> "SettingsStore":
        return cls(path=(settings.SETTINGS_PATH or "").strip() or None)

    def _read_document(self) -> dict:
        if not self.path or not self.path.exists():
            return {}
        try:
            doc = orjson.loads(self.path.read_bytes())
        except (OSError, orjson.JSONDecodeError) as exc:
            logger.warning("settings file %s unreadable: %s", self.path, exc)
            return {}
        return doc if isinstance(doc, dict) else {}

    def _load(self) -> ValidationSettings:
        saved = self._read_document().get(self.key)
        if saved is None:
            return ValidationSettings()
        try:
            return ValidationSettings.model_validate(saved)
        except ValueError as exc:
            logger.warning("persisted settings invalid, using defaults: %s", exc)
            return ValidationSettings()

    def get(self) -> ValidationSettings:
        return self._current.model_copy()

    def save(self, new: ValidationSettings) -> None:
        self._current = new.model_copy()
        if not self.path:
            return
        doc = self._read_document()
        doc[self.key] = self._current.model_dump(by_alias=True)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_bytes(orjson.dumps(doc))
        except OSError as exc:
            logger.warning("settings file %s write failed: %s", self.path, exc)
