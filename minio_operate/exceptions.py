"""
Exception Module
Error kinds surfaced by the MinIO file operator.

Storage errors always chain the original SDK exception as ``__cause__``.
"""
from contextlib import contextmanager
from typing import Dict, Optional

from minio.error import InvalidResponseError, MinioException, S3Error, ServerError
from urllib3.exceptions import HTTPError as Urllib3HTTPError


class MinioOperateError(Exception):
    """Base exception for all minio-operate errors."""

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigError(MinioOperateError):
    """Raised when MinIO configuration is missing or malformed."""
    pass


class StorageError(MinioOperateError):
    """Raised when a storage operation fails."""
    pass


class StorageUnavailableError(StorageError):
    """Raised when the object-storage endpoint cannot be reached."""
    pass


class AuthError(StorageError):
    """Raised when credentials are rejected."""
    pass


class NotFoundError(StorageError):
    """Raised when a bucket, object or bucket policy does not exist."""
    pass


class AlreadyExistsError(StorageError):
    """Raised when a bucket is created twice."""
    pass


class PolicyError(StorageError):
    """Raised when the server rejects a bucket policy."""
    pass


class IoError(StorageError):
    """Raised on local filesystem or stream failures."""
    pass


NOT_FOUND_CODES = frozenset({
    "NoSuchBucket",
    "NoSuchKey",
    "NoSuchObject",
    "NoSuchBucketPolicy",
    "ResourceNotFound",
})

AUTH_CODES = frozenset({
    "AccessDenied",
    "InvalidAccessKeyId",
    "SignatureDoesNotMatch",
    "ExpiredToken",
    "InvalidToken",
})

ALREADY_EXISTS_CODES = frozenset({
    "BucketAlreadyOwnedByYou",
    "BucketAlreadyExists",
})

POLICY_CODES = frozenset({
    "MalformedPolicy",
    "InvalidPolicyDocument",
})


def translate_error(
    exc: Exception,
    action: str,
    bucket_name: Optional[str] = None,
    object_name: Optional[str] = None,
    default: type = StorageError,
) -> MinioOperateError:
    """
    Tag an exception raised by the storage client with its error kind.

    Args:
        exc: Exception raised by the MinIO client or the local filesystem
        action: Short description of the failed operation, used in the message
        bucket_name: Bucket the operation targeted
        object_name: Object the operation targeted
        default: Error class for S3 error codes with no specific kind

    Returns:
        MinioOperateError: Tagged error; callers raise it ``from exc``
    """
    details = {}
    if bucket_name is not None:
        details['bucket'] = bucket_name
    if object_name is not None:
        details['object'] = object_name

    if isinstance(exc, S3Error):
        details['code'] = exc.code
        if exc.code in NOT_FOUND_CODES:
            error_cls = NotFoundError
        elif exc.code in AUTH_CODES:
            error_cls = AuthError
        elif exc.code in ALREADY_EXISTS_CODES:
            error_cls = AlreadyExistsError
        elif exc.code in POLICY_CODES:
            error_cls = PolicyError
        else:
            error_cls = default
    elif isinstance(exc, (ServerError, InvalidResponseError, Urllib3HTTPError)):
        error_cls = StorageUnavailableError
    elif isinstance(exc, OSError):
        error_cls = IoError
    else:
        error_cls = default

    return error_cls(f"MinIO {action} failed: {exc}", details)


@contextmanager
def storage_errors(
    action: str,
    bucket_name: Optional[str] = None,
    object_name: Optional[str] = None,
    default: type = StorageError,
):
    """
    Re-raise storage client failures inside the block as tagged errors.

    ValueError from the client's argument validation passes through unchanged.
    """
    try:
        yield
    except (MinioException, Urllib3HTTPError, OSError) as e:
        raise translate_error(e, action, bucket_name, object_name, default) from e
