"""
Storage Service Package
MinIO client initialization, bucket policies and file operations
"""
from minio_operate.storage_service.file_operate import MinioFileOperator, TimeUnit
from minio_operate.storage_service.minio_service import StorageClient, get_minio_client
from minio_operate.storage_service.policy import is_public_read_policy, public_read_policy

__all__ = [
    'MinioFileOperator',
    'TimeUnit',
    'StorageClient',
    'get_minio_client',
    'is_public_read_policy',
    'public_read_policy'
]
