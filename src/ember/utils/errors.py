"""Typed exceptions raised by the EMBER reconstruction tools."""


class ConfigurationError(Exception):
    """Raised when the reconstruction is asked to do something that its
    environment cannot support (e.g. a space charge correction while the
    space charge provider is disabled).

    This signals a misconfigured pipeline: the candidate being processed
    must be abandoned, not silently degraded.
    """


class MissingElementError(KeyError):
    """Raised when an element is requested from a store which does not hold it."""
