"""Errors raised by the use-case layer and translated by the HTTP routers."""


class ServiceError(Exception):
    """Base class for caller-facing failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    """Required fields are missing or malformed."""


class AccountExistsError(ServiceError):
    pass


class InvalidCredentialsError(ServiceError):
    pass
