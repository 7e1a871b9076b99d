"""
MinIO Service Module
Provides MinIO client initialization and the client interface the file operator depends on
"""
from datetime import timedelta
from typing import Any, BinaryIO, Iterable, Iterator, Protocol, runtime_checkable

from minio import Minio

from minio_operate.config import MinioProperties
from minio_operate.logger import get_logger

logger = get_logger(__name__)


@runtime_checkable
class StorageClient(Protocol):
    """
    Subset of the ``minio.Minio`` API used by MinioFileOperator.

    Every method either succeeds or raises ``minio.error.S3Error`` (or a
    transport error); argument validation failures raise ``ValueError``.
    """

    def bucket_exists(self, bucket_name: str) -> bool:
        ...

    def make_bucket(self, bucket_name: str) -> None:
        ...

    def get_bucket_policy(self, bucket_name: str) -> str:
        ...

    def set_bucket_policy(self, bucket_name: str, policy: str) -> None:
        ...

    def fput_object(self, bucket_name: str, object_name: str, file_path: str) -> Any:
        ...

    def put_object(
        self,
        bucket_name: str,
        object_name: str,
        data: BinaryIO,
        length: int,
        part_size: int = 0,
    ) -> Any:
        ...

    def fget_object(self, bucket_name: str, object_name: str, file_path: str) -> Any:
        ...

    def remove_object(self, bucket_name: str, object_name: str) -> None:
        ...

    def remove_objects(self, bucket_name: str, delete_object_list: Iterable[Any]) -> Iterator[Any]:
        ...

    def list_objects(self, bucket_name: str, recursive: bool = False) -> Iterator[Any]:
        ...

    def presigned_get_object(self, bucket_name: str, object_name: str, expires: timedelta) -> str:
        ...


def get_minio_client(properties: MinioProperties) -> Minio:
    """
    Create a MinIO client from connection properties.

    The scheme of the endpoint decides whether TLS is used.

    Args:
        properties: MinIO connection properties

    Returns:
        Minio: MinIO client instance
    """
    logger.info(f"Connecting MinIO client to {properties.endpoint}")
    return Minio(
        endpoint=properties.host,
        access_key=properties.access_key,
        secret_key=properties.secret_key,
        secure=properties.secure
    )
