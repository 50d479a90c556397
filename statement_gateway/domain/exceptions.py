"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class NotFoundError(DomainException):
    """Account identifier does not resolve to a known account"""

    pass


class InvalidArgumentError(DomainException):
    """Malformed period tag or out-of-range cutoff/due day"""

    pass


class StoreConflictError(DomainException):
    """Statement store lost an insert-if-absent race for the same (account, statement date)"""

    pass
