"""Domain-level error hierarchy.

All domain exceptions inherit from DomainError so that interface layers
can catch a single base class and translate to HTTP-appropriate
responses without leaking domain internals.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainError):
    """A domain invariant or input constraint was violated."""


class EntityNotFoundError(DomainError):
    """A requested entity does not exist."""

    def __init__(self, entity: str, identifier: object) -> None:
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} not found: {identifier}")


class StoreUnavailableError(DomainError):
    """The issue store could not be reached or queried.

    Distinct from a store that exists but holds no scans: a missing scan
    is fixed by running one, this is fixed by repairing infrastructure.
    """

    def __init__(self, operation: str, reason: object = None) -> None:
        self.operation = operation
        self.reason = reason
        message = f"Issue store unavailable during {operation}"
        if reason is not None:
            message = f"{message}: {reason}"
        super().__init__(message)
