"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidSplitError(DomainException):
    """Expense splits are inconsistent with the expense amount"""

    pass


class InvalidExpenseError(DomainException):
    """Expense data is malformed or invalid"""

    pass
