"""Exception hierarchy for togglPy."""


class TogglPyError(Exception):
    """Base class for all togglPy errors."""


class ConfigError(TogglPyError):
    """A required configuration value is missing or invalid."""


class InvalidDateFormat(TogglPyError):
    """A user supplied date or month literal could not be parsed."""


class TimeConversionError(TogglPyError):
    """A local wall-clock time does not map to exactly one instant."""


class RemoteRequestError(TogglPyError):
    """The Toggl API could not be reached or answered with an error status."""


class DeserializationError(TogglPyError):
    """The Toggl API answered with a body of an unexpected shape."""


class MalformedTimestamp(TogglPyError):
    """A timestamp in an API response could not be parsed."""


class ExportError(TogglPyError):
    """Writing or validating an exported report failed."""


def iter_causes(err: BaseException):
    """Yield an exception followed by every exception in its cause chain."""
    seen = set()
    current = err
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__
