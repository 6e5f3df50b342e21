"""
Custom Exception Classes for the Hybrid Config Manager

Hierarchical exception structure. Components raise these internally;
the public ConfigStore operations catch and log them.
"""


class HybridConfigError(Exception):
    """Base exception for all config manager errors"""

    def __init__(self, message: str, recoverable: bool = True):
        self.message = message
        self.recoverable = recoverable
        super().__init__(message)


class StorageError(HybridConfigError):
    """Local config file or directory errors"""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(f"Storage Error: {message}", recoverable=True)


class RemoteSyncError(HybridConfigError):
    """Remote config-vars API errors"""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        status_code: int | None = None,
    ):
        self.operation = operation
        self.status_code = status_code
        super().__init__(f"Sync Error: {message}", recoverable=True)


class RestartError(HybridConfigError):
    """A restart tier failed"""

    def __init__(self, message: str, tier: str):
        self.tier = tier
        super().__init__(f"Restart [{tier}]: {message}", recoverable=True)
