from __future__ import annotations


class DomainError(Exception):
    """Base class for errors raised by the dashboard domain."""


class ValidationError(DomainError):
    pass


class RemoteStoreError(DomainError):
    """Any failure talking to the remote table store (transport or server side)."""


class AuthError(DomainError):
    pass


class AlreadyRegisteredError(AuthError):
    pass


class InvalidCredentialsError(AuthError):
    pass
