from typing import Dict

from fastapi import status


class ServiceError(Exception):
    """Base exception for service layer errors."""

    code = "ServiceError"

    def __init__(self, message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def to_detail(self) -> Dict[str, str]:
        return {"code": self.code, "message": self.message}


# --- Taxonomy ---
class AuthenticationError(ServiceError):
    """Credentials did not match an active account."""

    code = "InvalidCredentials"

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message, status.HTTP_401_UNAUTHORIZED)


class NotFoundError(ServiceError):
    """An id did not resolve to a known entity."""

    code = "NotFound"

    def __init__(self, message: str) -> None:
        super().__init__(message, status.HTTP_404_NOT_FOUND)


class InvalidStateError(ServiceError):
    """The operation is not valid for the entity's current status."""

    code = "InvalidState"

    def __init__(self, message: str) -> None:
        super().__init__(message, status.HTTP_409_CONFLICT)


class CapacityExceededError(ServiceError):
    code = "CapacityExceeded"

    def __init__(self, message: str) -> None:
        super().__init__(message, status.HTTP_409_CONFLICT)


class ConstraintViolationError(ServiceError):
    """A business rule such as an amount bound or uniqueness was broken."""

    code = "ConstraintViolation"

    def __init__(self, message: str) -> None:
        super().__init__(message, status.HTTP_422_UNPROCESSABLE_ENTITY)


# --- NotFound ---
class UnknownStudent(NotFoundError):
    code = "UnknownStudent"


class UnknownCourse(NotFoundError):
    code = "UnknownCourse"


class UnknownHostel(NotFoundError):
    code = "UnknownHostel"


class UnknownRoom(NotFoundError):
    code = "UnknownRoom"


class FeeNotFound(NotFoundError):
    code = "FeeNotFound"


class AllocationNotFound(NotFoundError):
    code = "AllocationNotFound"


class AdmissionNotFound(NotFoundError):
    code = "AdmissionNotFound"


# --- InvalidState ---
class AlreadyPaid(InvalidStateError):
    code = "AlreadyPaid"


class FeeNotPaid(InvalidStateError):
    code = "FeeNotPaid"


class NotYetDue(InvalidStateError):
    code = "NotYetDue"


class AlreadyVacated(InvalidStateError):
    code = "AlreadyVacated"


class RoomInactive(InvalidStateError):
    code = "RoomInactive"


class InvalidTransition(InvalidStateError):
    code = "InvalidTransition"


# --- CapacityExceeded ---
class RoomFull(CapacityExceededError):
    code = "RoomFull"


# --- ConstraintViolation ---
class StudentAlreadyAllocated(ConstraintViolationError):
    code = "StudentAlreadyAllocated"


class InvalidAmount(ConstraintViolationError):
    code = "InvalidAmount"


class InvalidPaymentMethod(ConstraintViolationError):
    code = "InvalidPaymentMethod"


class DuplicateRollNumber(ConstraintViolationError):
    code = "DuplicateRollNumber"


class DuplicateRoomNumber(ConstraintViolationError):
    code = "DuplicateRoomNumber"


class DuplicateEmail(ConstraintViolationError):
    code = "DuplicateEmail"
