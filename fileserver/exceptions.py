"""Custom exception classes for the file server."""


class UpzloadError(Exception):
    """
    Base exception class for all service errors.
    """
    pass


class InvalidInputError(UpzloadError):
    """
    Raised when a request field is missing, empty or malformed.
    """
    pass


class UserAlreadyExistsError(UpzloadError):
    """
    Raised when attempting to register a username that already exists.
    """
    pass


class NotFoundError(UpzloadError):
    """
    Base class for lookups that found nothing.
    """
    pass


class UserNotFoundError(NotFoundError):
    """
    Raised when authenticating with an unknown username.
    """
    pass


class ResourceNotFoundError(NotFoundError):
    """
    Raised when a requested share folder or file does not exist.
    """
    pass


class WrongSecretError(UpzloadError):
    """
    Raised when the supplied password does not match the stored verifier.
    """
    pass


class InvalidAPIKeyError(UpzloadError):
    """
    Raised when a request carries no session token or an unknown one.
    """
    pass


class ForbiddenError(UpzloadError):
    """
    Raised when a user attempts to access a namespace they don't own.
    """
    pass


class EmptyBatchError(UpzloadError):
    """
    Raised when an upload contains no usable files.
    """
    pass


class AllocationExhaustedError(UpzloadError):
    """
    Raised when no free share folder id was found within the retry budget.
    """
    pass


class StorageError(UpzloadError):
    """
    Raised when the underlying filesystem fails. Never retried automatically.
    """
    pass
