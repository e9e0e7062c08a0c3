"""Exception types raised by a grammar build pass."""

from typing import Optional


class GrammarBuildError(Exception):
    """Base class for failures that abort a build pass."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DiscoveryError(GrammarBuildError):
    """Raised when the source tree cannot be scanned for grammar files."""

    pass


class EngineUnavailableError(GrammarBuildError):
    """Raised when the grammar engine cannot be constructed."""

    pass


class CompilationError(GrammarBuildError):
    """Raised when the grammar engine ran but reported errors.

    Attributes
    ----------
    error_count : int
        Number of errors reported by the engine
    """

    def __init__(self, error_count: int, message: Optional[str] = None):
        super().__init__(message or f"ANTLR caught {error_count} build errors.")
        self.error_count = error_count


class SourceRootViolation(GrammarBuildError, ValueError):
    """Raised when a discovered file does not lie under its source root."""

    pass
