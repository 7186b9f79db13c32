"""
Listener Exceptions

Only malformed input is an expected failure. Everything else that escapes
a route is an internal fault and is answered with a generic 500.
"""


class ListenerError(Exception):
    """Base class for listener errors."""


class EventValidationError(ListenerError):
    """A submitted event is missing required fields. The log is untouched."""


class ReporterError(ListenerError):
    """The reporter client was configured with an unusable endpoint."""
