class ReservationError(Exception):
    """Base class for reservation domain errors."""


class ValidationError(ReservationError):
    pass


class ConflictError(ReservationError):
    pass


class NotFoundError(ReservationError):
    pass


class PersistenceError(ReservationError):
    pass


class AuthorizationError(ReservationError):
    pass
