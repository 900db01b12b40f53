"""huginn error hierarchy.

Every error here is recoverable: the code that owns the fallback catches
it, logs it and carries on with a default so the panel always renders.

- HuginnError: base class
- ConfigError: the config file could not be read or parsed
- InstallDateError: a custom install date is not ``YYYY-MM-DD``
- HookError: a pre/post fetch script failed
"""


class HuginnError(Exception):
    """Base exception for all huginn errors."""


class ConfigError(HuginnError):
    """Raised when the configuration file is unreadable or malformed."""

    def __init__(self, message, path=None):
        super().__init__(message)
        self.path = path


class InstallDateError(HuginnError, ValueError):
    """Raised when a custom install date cannot be parsed."""


class HookError(HuginnError):
    """Raised when a hook script cannot be started or exits non-zero."""

    def __init__(self, message, returncode=None):
        super().__init__(message)
        self.returncode = returncode
