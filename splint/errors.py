class SplintError(Exception):
    """Base class for every error raised by splint."""


class RulesConfigError(SplintError, ValueError):
    """The rules file is missing, unreadable, malformed or semantically invalid."""


class SourceReadError(SplintError, OSError):
    """A source file could not be read or decoded."""


class TokenizeError(SplintError, ValueError):
    """A source file is not valid tokenizable input."""


class CanonicalPathError(SplintError, ValueError):
    """A diagnostic file path could not be resolved to an absolute path."""


class InvariantError(SplintError, RuntimeError):
    """Internal contract violation. Indicates a bug, never user input."""
