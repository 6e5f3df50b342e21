"""
Configuration Document Store

Local JSON file persistence for the settings document.
Maintains the current document and a rotating set of backups.
"""

import json
import shutil
from pathlib import Path
from typing import Any

from hybrid_config.common.config import CONFIG_VERSION, MAX_BACKUPS
from hybrid_config.common.exceptions import StorageError
from hybrid_config.common.logging_setup import get_service_logger
from hybrid_config.common.timestamp import filename_timestamp, utc_now_iso

logger = get_service_logger("config.cache")

CONFIG_FILENAME = "settings.json"
BACKUP_DIRNAME = "backups"
BACKUP_PREFIX = "config_backup_"


class ConfigDocumentStore:
    """
    Local config document storage.

    Stores:
    - Current document at <config_dir>/settings.json
    - Backup history (last 7 documents) in <config_dir>/backups
    """

    def __init__(
        self,
        config_dir: Path | str | None = None,
        max_backups: int = MAX_BACKUPS,
    ):
        self.config_dir = Path(config_dir or "config")
        self.config_file = self.config_dir / CONFIG_FILENAME
        self.backup_dir = self.config_dir / BACKUP_DIRNAME
        self.max_backups = max_backups

    def ensure_directories(self) -> None:
        """Create the config and backup directories if missing"""
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            self.backup_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot create config directories: {e}", str(self.config_dir)) from e

    def exists(self) -> bool:
        return self.config_file.exists()

    def create_default(self, settings: dict[str, str], session_id: str) -> dict[str, Any]:
        """
        Write a fresh document with the given settings.

        Returns:
            The document that was written
        """
        document = {
            "metadata": {
                "version": CONFIG_VERSION,
                "created": utc_now_iso(),
                "sessionId": session_id,
            },
            "settings": dict(settings),
        }

        self._write_json(self.config_file, document)
        logger.info("Default config created", extra={"path": str(self.config_file)})
        return document

    def read(self) -> dict[str, Any]:
        """
        Load the current document from disk.

        Raises:
            StorageError: File missing, unreadable, not valid JSON, or
                settings that are not a JSON object
        """
        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                document = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Cannot read config document: {e}", str(self.config_file)) from e

        if not isinstance(document, dict):
            raise StorageError("Config document is not a JSON object", str(self.config_file))

        settings = document.get("settings")
        if settings is not None and not isinstance(settings, dict):
            raise StorageError("Config settings are not a JSON object", str(self.config_file))

        return document

    def write(self, document: dict[str, Any]) -> None:
        """
        Back up the current file, then replace it atomically.

        The new document is written to a temp file and renamed over the
        canonical path so readers never see a partial file.
        """
        self.create_backup()

        temp_file = self.config_file.with_name(self.config_file.name + ".tmp")
        self._write_json(temp_file, document)

        try:
            temp_file.replace(self.config_file)
        except OSError as e:
            raise StorageError(f"Cannot replace config document: {e}", str(self.config_file)) from e

    def create_backup(self) -> Path | None:
        """
        Copy the current document into the backup directory, then rotate.

        Failures are logged and never abort the caller's save.

        Returns:
            Path of the new backup, or None if nothing was copied
        """
        backup_file = None

        try:
            if self.config_file.exists():
                backup_file = self.backup_dir / f"{BACKUP_PREFIX}{filename_timestamp()}.json"
                shutil.copyfile(self.config_file, backup_file)
                logger.debug(f"Backup created: {backup_file.name}")

            self.rotate_backups()
        except OSError as e:
            logger.error(f"Backup creation failed: {e}", extra={"path": str(self.backup_dir)})
            return None

        return backup_file

    def list_backups(self) -> list[str]:
        """Backup filenames, newest first"""
        if not self.backup_dir.exists():
            return []

        return sorted(
            (p.name for p in self.backup_dir.iterdir() if p.name.startswith(BACKUP_PREFIX)),
            reverse=True,
        )

    def rotate_backups(self) -> None:
        """Remove backups beyond max_backups"""
        backups = self.list_backups()

        if len(backups) > self.max_backups:
            for old_name in backups[self.max_backups:]:
                (self.backup_dir / old_name).unlink()
                logger.debug(f"Removed old backup: {old_name}")

    def _write_json(self, path: Path, document: dict[str, Any]) -> None:
        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise StorageError(f"Cannot write {path.name}: {e}", str(path)) from e
