# app/core/exceptions.py
"""Domain errors raised by the service layer; routers turn them into HTTPExceptions via status_code"""


class DomainError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(DomainError):
    status_code = 404


class PermissionDeniedError(DomainError):
    status_code = 403


class InvalidRequestError(DomainError):
    status_code = 400


class ConflictError(DomainError):
    status_code = 409


# Booking specific
class ServiceNotFoundError(NotFoundError):
    pass


class VendorNotFoundError(NotFoundError):
    pass


class WorkerNotFoundError(NotFoundError):
    pass


class BookingValidationError(InvalidRequestError):
    pass


class SlotUnavailableError(ConflictError):
    pass


class InvalidStatusTransitionError(ConflictError):
    pass
