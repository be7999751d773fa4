"""
Error types raised by the stores and translated by the routes.
"""


class SmartHomeError(Exception):
    """Base class for all store-level failures"""


class ValidationError(SmartHomeError):
    """Caller-supplied input failed a required-field or parse check"""


class NotFoundError(SmartHomeError):
    """A keyed lookup found no matching record"""


class PersistenceError(SmartHomeError):
    """The storage layer is unreachable or rejected an operation"""


class ConnectionFailure(PersistenceError):
    """MongoDB could not be reached while establishing the connection"""
