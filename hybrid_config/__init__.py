"""
Hybrid Config Manager

Runtime settings for a chat-bot process: local JSON persistence with
rotating backups, optional sync with a remote config-vars store, and
tiered restart signaling.
"""

from hybrid_config.bot_settings import BotSettings
from hybrid_config.services.config.service import ConfigStore
from hybrid_config.services.system.control_server import ControlServer
from hybrid_config.services.system.restart_handler import RestartHandler

__version__ = "1.0.0"

__all__ = ["BotSettings", "ConfigStore", "ControlServer", "RestartHandler"]
