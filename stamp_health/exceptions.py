"""Exceptions raised by stamp health clients."""


class StampHealthError(Exception):
    """Base class for stamp health errors."""


class ServiceNotStartedError(StampHealthError, RuntimeError):
    """A client was used before start() connected it."""


class StorageUnavailableError(StampHealthError):
    """Object storage could not answer an existence or read request."""


class TelemetryQueryError(StampHealthError):
    """The telemetry backend returned a response that could not be read."""
