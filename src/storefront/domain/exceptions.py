"""Domain-level exceptions.

Only invalid *values* raise (a negative amount, a zero quantity).  Business
outcomes such as an unknown product or insufficient stock are returned as
structured results by the catalog and the application handlers, so the CLI
layer only ever has to catch DomainException for malformed input.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A value failed its invariant checks."""
