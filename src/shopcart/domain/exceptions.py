"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.

Storage problems are not business rule violations and therefore live
outside that hierarchy.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A caller supplied an invalid argument or an invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity (cart item or product) does not exist."""


class StorageError(Exception):
    """The backing store failed (I/O, connectivity, corrupt data).

    Always raised with the original exception chained as ``__cause__``.
    """
