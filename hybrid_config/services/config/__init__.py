"""
Config Store - Settings Management

Responsibilities:
- Local-first settings cache with JSON document persistence
- Rotating backups of the persisted document
- Optional pull/push sync with the remote config-vars store
"""

from .cache import ConfigDocumentStore
from .service import ConfigStore, generate_session_id
from .sync import HerokuConfigSync

__all__ = ["ConfigStore", "ConfigDocumentStore", "HerokuConfigSync", "generate_session_id"]
