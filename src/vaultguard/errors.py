from __future__ import annotations


class VaultGuardError(Exception):
    """Base class for all vaultguard errors."""


class InvalidInputError(VaultGuardError, ValueError):
    """Raised when a user, resource or system state violates the model invariants.

    This is distinct from a policy denial: malformed input is never turned into
    a granted or denied verdict.
    """

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class UnauthorizedError(VaultGuardError):
    """Raised by workflow services when the acting user may not perform an operation."""


class NotFoundError(VaultGuardError, LookupError):
    """Raised when a referenced user, resource or request does not exist."""


__all__ = ["VaultGuardError", "InvalidInputError", "UnauthorizedError", "NotFoundError"]
