"""
Domain error taxonomy shared by the API, the store clients and the
scheduling view.

Mutation entry points raise one of these instead of returning a sentinel,
so callers can tell "applied" apart from "rejected".
"""


class ClinicError(Exception):
    """Base class for every domain error"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ClinicError):
    """Malformed input to a mutation (end <= start, missing required fields...)"""

    status_code = 422


class NotFoundError(ClinicError):
    """Referenced patient, session or assessment does not exist"""

    status_code = 404


class InvalidRangeError(NotFoundError):
    """Date range whose start is after its end"""


class TransportError(ClinicError):
    """Network or server failure between a store client and the API"""

    status_code = 502


class AuthError(ClinicError):
    """Missing, invalid or expired credential"""

    status_code = 401
