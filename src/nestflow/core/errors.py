"""Core interpreter errors."""


class NestflowError(Exception):
    """Base class for all Nestflow errors."""

    pass


class ConfigurationError(NestflowError):
    """Raised when a flow graph or configuration is malformed.

    Unknown node names, managers whose root is not one of their children,
    cycles between managers and decision functions returning an unexpected
    shape all end up here. These are never retried.
    """


class ProtocolViolation(NestflowError):
    """Raised when the caller drives the interpreter out of protocol.

    Examples: delivering input while no expectation is pending, delivering
    input after the session ended, executing a node that was never assigned.
    """
