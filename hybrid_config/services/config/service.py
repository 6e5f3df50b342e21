"""
Config Store - Settings Management

Responsible for:
- Maintaining the in-memory settings cache (source of truth for reads)
- Persisting the cache to the local document with rotating backups
- Pulling updated values from the remote config-vars store
- Pushing each local write to the remote store when available
"""

import os
import secrets
import string
import time
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from hybrid_config.common.config import MAX_BACKUPS, build_default_settings
from hybrid_config.common.exceptions import RemoteSyncError, StorageError
from hybrid_config.common.logging_setup import get_service_logger
from hybrid_config.common.timestamp import utc_now_iso

from .cache import ConfigDocumentStore
from .sync import HerokuConfigSync

logger = get_service_logger("config")

SESSION_SUFFIX_ALPHABET = string.digits + string.ascii_lowercase
SESSION_SUFFIX_LENGTH = 9


def generate_session_id() -> str:
    """Process-unique id: session_<epoch millis>_<random base-36 suffix>"""
    suffix = "".join(secrets.choice(SESSION_SUFFIX_ALPHABET) for _ in range(SESSION_SUFFIX_LENGTH))
    return f"session_{int(time.time() * 1000)}_{suffix}"


class ConfigStore:
    """
    Local-first key/value settings store with optional remote sync.

    Construct once at process start and pass the instance to whatever
    needs settings. Every public operation logs its own failures and
    degrades (cache-only, local-only) instead of raising.
    """

    def __init__(
        self,
        config_dir: Path | str | None = None,
        environ: Mapping[str, str] | None = None,
        remote: HerokuConfigSync | None = None,
        max_backups: int = MAX_BACKUPS,
    ):
        self.environ: Mapping[str, str] = environ if environ is not None else os.environ
        self.documents = ConfigDocumentStore(config_dir, max_backups=max_backups)
        self.session_id = generate_session_id()
        self.cache: dict[str, str] = {}

        # Remote config-vars store, only when credentials are supplied
        self.remote = remote or self._build_remote()
        self.app_name = self.remote.app_name if self.remote else None
        self._remote_available = False

        self.initialize_storage()

    def _build_remote(self) -> HerokuConfigSync | None:
        api_key = self.environ.get("HEROKU_API_KEY")
        app_name = self.environ.get("HEROKU_APP_NAME")

        if api_key and app_name:
            return HerokuConfigSync(api_key=api_key, app_name=app_name)
        return None

    @property
    def config_file(self) -> Path:
        return self.documents.config_file

    @property
    def is_remote_available(self) -> bool:
        return self._remote_available

    def initialize_storage(self) -> None:
        """Create directories and the default document, then load the cache"""
        try:
            self.documents.ensure_directories()

            if not self.documents.exists():
                self.documents.create_default(
                    build_default_settings(self.environ),
                    self.session_id,
                )

            self.load_config_to_cache()
            logger.info("Hybrid config manager initialized")

        except StorageError as e:
            logger.error(f"Config manager initialization failed: {e}", extra={"path": e.path})

    def load_config_to_cache(self) -> int:
        """
        Replace the cache with the settings from the on-disk document.

        Returns:
            Number of settings loaded (0 on failure, cache left untouched)
        """
        try:
            document = self.documents.read()
        except StorageError as e:
            logger.error(f"Failed to load config to cache: {e}", extra={"path": e.path})
            return 0

        settings = document.get("settings") or {}
        self.cache.clear()
        self.cache.update({str(key): str(value) for key, value in settings.items()})

        logger.info(f"Loaded {len(self.cache)} settings into cache")
        return len(self.cache)

    def reload(self) -> int:
        """Re-read the document from disk (picks up manual edits)"""
        logger.info("Reloading configuration from disk")
        return self.load_config_to_cache()

    async def start(self) -> None:
        """Probe the remote store and pull its values if reachable"""
        await self.check_remote_availability()

    async def close(self) -> None:
        """Release the remote HTTP client"""
        if self.remote:
            await self.remote.close()

    async def check_remote_availability(self) -> bool:
        """
        Probe the remote config-vars endpoint.

        On success marks remote available and pulls remote values into the
        cache. Any failure leaves the store in local-only mode.

        Returns:
            True if remote sync is available
        """
        if self.remote is None:
            logger.info("Remote credentials not available, using local storage only")
            self._remote_available = False
            return False

        try:
            await self.remote.fetch_config_vars()
        except RemoteSyncError as e:
            logger.warning(
                f"Remote API unavailable, using local storage only: {e}",
                extra={"operation": e.operation, "status_code": e.status_code},
            )
            self._remote_available = False
            return False

        self._remote_available = True
        logger.info(f"Remote API available (app: {self.app_name})")

        await self.sync_from_remote()
        return True

    async def sync_from_remote(self) -> int:
        """
        Pull remote values for keys that already exist locally.

        Remote-only keys are ignored. The merged cache is persisted when
        anything changed but is never pushed back.

        Returns:
            Number of settings updated from remote
        """
        if not self._remote_available or self.remote is None:
            return 0

        try:
            remote_vars = await self.remote.fetch_config_vars()
        except RemoteSyncError as e:
            logger.error(f"Remote sync failed: {e}", extra={"operation": e.operation})
            return 0

        sync_count = 0
        for key, value in remote_vars.items():
            if key in self.cache and self.cache[key] != value:
                self.cache[key] = value
                sync_count += 1

        if sync_count > 0:
            self.save_config_from_cache()
            logger.info(f"Synced {sync_count} settings from remote")

        return sync_count

    def save_config_from_cache(self) -> bool:
        """
        Persist the full cache to the local document.

        Returns:
            True if the document was written
        """
        try:
            document = self.documents.read()
            document["settings"] = dict(self.cache)

            metadata = document.get("metadata")
            if not isinstance(metadata, dict):
                metadata = document["metadata"] = {}
            metadata["lastUpdated"] = utc_now_iso()
            metadata["sessionId"] = self.session_id

            self.documents.write(document)

        except StorageError as e:
            logger.error(f"Failed to save config: {e}", extra={"path": e.path})
            return False

        logger.info("Config saved to local storage")
        return True

    async def set_setting(self, key: str, value: str) -> bool:
        """
        Update a setting: cache, then local document, then remote.

        The cache keeps the new value even if persistence fails, and the
        remote push is still attempted. A failed remote push is logged and
        does not roll back the local write.

        Returns:
            True if the local write completed
        """
        try:
            self.cache[key] = value
            saved = self.save_config_from_cache()

            if self._remote_available and self.remote is not None:
                try:
                    await self.remote.update_config_var(key, value)
                    logger.info(f"Setting {key} synced to remote", extra={"key": key})
                except RemoteSyncError as e:
                    logger.warning(
                        f"Remote sync failed for {key}, saved locally: {e}",
                        extra={"key": key, "status_code": e.status_code},
                    )

            return saved

        except Exception as e:
            logger.error(f"Failed to set {key}: {e}", extra={"key": key}, exc_info=True)
            return False

    def get_setting(
        self,
        key: str,
        default: str | None = None,
        empty_as_missing: bool = True,
    ) -> str | None:
        """
        Read a setting from the cache.

        By default an empty stored value is treated like a missing one and
        the default is returned. Pass empty_as_missing=False to get the
        stored value whenever the key exists.
        """
        if not empty_as_missing:
            return self.cache.get(key, default)
        return self.cache.get(key) or default

    def get_all_settings(self) -> dict[str, str]:
        """Snapshot of every cached setting"""
        return dict(self.cache)

    def get_session_id(self) -> str:
        return self.session_id

    def status(self) -> dict[str, Any]:
        """Summary for health endpoints and the CLI"""
        return {
            "session_id": self.session_id,
            "remote_available": self._remote_available,
            "app_name": self.app_name,
            "settings_count": len(self.cache),
            "config_file": str(self.config_file),
            "backup_count": len(self.documents.list_backups()),
        }
