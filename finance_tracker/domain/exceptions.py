"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidBillingConfigError(DomainException):
    """Card closing/due day is missing, non-integer or outside 1..31"""

    pass


class InvalidCalendarInputError(DomainException):
    """Month outside 1..12, day below 1 or year outside the supported range"""

    pass


class InvalidMonthFormatError(DomainException):
    """Invoice month string is not in YYYY-MM format"""

    pass


class CardNotFoundError(DomainException):
    """Card does not exist or belongs to another user"""

    pass
