"""Exception hierarchy shared across VerifyZen.

Module-specific errors (configuration, candidate files) derive from
VerifyZenError so the CLI can report them uniformly.
"""


class VerifyZenError(Exception):
    """Base exception for all VerifyZen errors."""

    pass


class CandidateFileError(VerifyZenError):
    """Raised when a candidate history file cannot be read or decoded.

    Attributes:
        path: The offending file.
    """

    def __init__(self, message: str, path: object = None) -> None:
        self.path = path
        super().__init__(message)
