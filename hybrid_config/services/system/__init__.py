"""
System Services - Process Control

Responsibilities:
- Tiered restart (local control endpoint, platform dyno restart, process exit)
- Local HTTP control endpoint (/health, /restart, /settings)
"""

from .restart_handler import RestartHandler
from .control_server import ControlServer

__all__ = ["RestartHandler", "ControlServer"]
