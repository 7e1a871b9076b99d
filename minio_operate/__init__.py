"""
minio-operate
Convenience layer over the MinIO client with a provisioned, publicly readable default bucket
"""
from minio_operate.config import MinioProperties, load_properties
from minio_operate.exceptions import (
    AlreadyExistsError,
    AuthError,
    ConfigError,
    IoError,
    MinioOperateError,
    NotFoundError,
    PolicyError,
    StorageError,
    StorageUnavailableError,
)
from minio_operate.storage_service import MinioFileOperator, TimeUnit

__all__ = [
    "MinioProperties",
    "load_properties",
    "MinioFileOperator",
    "TimeUnit",
    "MinioOperateError",
    "ConfigError",
    "StorageError",
    "StorageUnavailableError",
    "AuthError",
    "NotFoundError",
    "AlreadyExistsError",
    "PolicyError",
    "IoError",
]

__version__ = "1.0.0"
