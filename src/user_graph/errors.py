"""Exception types raised by the user graph pipeline."""


class UserGraphError(Exception):
    """Base class for all pipeline errors."""


class ParseError(UserGraphError, ValueError):
    """A transaction record could not be parsed. Fatal for the whole run."""

    # Keep error messages readable for multi-megabyte records.
    MAX_CONTEXT = 200

    def __init__(self, message: str, line_number: int, line: str):
        self.line_number = line_number
        self.line = line
        context = line if len(line) <= self.MAX_CONTEXT else line[: self.MAX_CONTEXT] + "..."
        super().__init__(f"line {line_number}: {message}: {context!r}")


class InternalInvariantError(UserGraphError, AssertionError):
    """An id fell outside its valid range. Signals a bug, never bad user data."""


class IoError(UserGraphError, OSError):
    """Input could not be read or output could not be written."""
