class RentalMSException(Exception):
    """Base exception for the rental management API"""

    pass


class NotFoundException(RentalMSException):
    """Raised when resource not found"""

    pass


class ValidationException(RentalMSException):
    """Raised for business logic validation errors"""

    pass


class ConstraintException(RentalMSException):
    """Raised when a delete would break a reference held by another record"""

    pass
