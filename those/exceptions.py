class ThoseBaseException(Exception):
    """Root of every exception raised by the those package."""

    def __init__(self, message: str = None):
        super().__init__(message)
        self.message = message


class ThoseValidationException(ThoseBaseException):
    """The caller handed in something the library cannot work with."""


class ThosePredicateException(ThoseBaseException):
    """A caller supplied predicate raised while being evaluated."""
