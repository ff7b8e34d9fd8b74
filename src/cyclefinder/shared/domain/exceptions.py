"""
Domain exceptions for Cycle Finder.

Follows the "Fail Fast" principle: loading a whitelist either fully succeeds
or raises one of these errors. All application errors inherit from
CycleFinderError.
"""


class CycleFinderError(Exception):
    """Base class for all Cycle Finder exceptions."""

    def __init__(self, message: str, context: dict = None):
        super().__init__(message)
        self.context = context or {}


class WhitelistError(CycleFinderError):
    """Base class for errors raised while loading a whitelist."""

    pass


class MalformedRuleError(WhitelistError, ValueError):
    """Raised when a whitelist entry cannot be parsed into a rule."""

    def __init__(self, entry: str, path: str | None = None, line: int | None = None):
        message = f"Invalid whitelist entry: {entry}"
        if path is not None:
            location = f"{path}:{line}" if line is not None else path
            message = f"{message} ({location})"
        elif line is not None:
            message = f"{message} (line {line})"
        super().__init__(message, context={"entry": entry, "path": path, "line": line})
        self.entry = entry
        self.path = path
        self.line = line


class FileAccessError(WhitelistError, OSError):
    """Raised when a whitelist file cannot be opened or read."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Cannot read whitelist file {path}: {reason}",
            context={"path": path},
        )
        self.path = path


class ConfigurationError(CycleFinderError):
    """Raised when configuration is invalid or corrupt."""

    pass
