"""
MinIO File Operate Module
Bucket provisioning, uploads with public URL resolution and object operations,
each available on an explicit bucket and on the configured default bucket
"""
import functools
import os
from datetime import timedelta
from enum import Enum
from typing import Any, BinaryIO, List, Optional, Union

from minio_operate.config import MinioProperties
from minio_operate.exceptions import AlreadyExistsError, NotFoundError, PolicyError, storage_errors
from minio_operate.logger import get_logger
from minio_operate.storage_service.minio_service import StorageClient, get_minio_client
from minio_operate.storage_service.policy import is_public_read_policy, public_read_policy_json
from minio_operate.storage_service.reset_minio import clear_bucket

logger = get_logger(__name__)


class TimeUnit(Enum):
    SECONDS = 'seconds'
    MINUTES = 'minutes'
    HOURS = 'hours'
    DAYS = 'days'

    def to_timedelta(self, amount: int) -> timedelta:
        return timedelta(**{self.value: amount})


def _on_default_bucket(method):
    """Bind the bucket argument of an operation to the default bucket."""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        return method(self, self.properties.default_bucket_name, *args, **kwargs)

    wrapper.__name__ = f"{method.__name__}_on_default_bucket"
    wrapper.__qualname__ = f"MinioFileOperator.{wrapper.__name__}"
    wrapper.__doc__ = f"{method.__name__} on the configured default bucket."
    # Keep help() from showing the bucket_name parameter of the general form
    del wrapper.__wrapped__
    return wrapper


class MinioFileOperator:
    """
    File operations against a MinIO server.

    Constructing the operator provisions the default bucket: it is created if
    missing and made publicly readable. Provisioning failures are logged and
    do not fail construction unless ``strict_startup`` is set.

    Args:
        properties: MinIO connection properties
        client: Storage client; built from ``properties`` if omitted
        strict_startup: Re-raise default bucket provisioning failures
    """

    def __init__(
        self,
        properties: MinioProperties,
        client: Optional[StorageClient] = None,
        strict_startup: bool = False
    ):
        self.properties = properties
        self.client = client if client is not None else get_minio_client(properties)
        self._provision_default_bucket(strict_startup)

    def _provision_default_bucket(self, strict_startup: bool):
        bucket = self.properties.default_bucket_name
        try:
            self.ensure_bucket(bucket, make_public=True)
        except Exception as e:
            logger.error(f"Failed to create default bucket '{bucket}': {e}")
            if strict_startup:
                raise

    def ensure_bucket(self, bucket_name: str, make_public: bool = False) -> bool:
        """
        Ensure a bucket exists, create it if it doesn't.

        Args:
            bucket_name: Bucket name
            make_public: Install the public-read policy on the bucket

        Returns:
            bool: True if bucket was newly created, False if it already existed
        """
        with storage_errors('bucket check', bucket_name):
            exists = self.client.bucket_exists(bucket_name=bucket_name)

        created = False
        if exists:
            logger.info(f"MinIO bucket '{bucket_name}' already exists")
        else:
            try:
                with storage_errors('bucket creation', bucket_name):
                    self.client.make_bucket(bucket_name=bucket_name)
                created = True
                logger.info(f"MinIO bucket '{bucket_name}' created successfully")
            except AlreadyExistsError:
                # Another process created it between the check and our request
                logger.info(f"MinIO bucket '{bucket_name}' was created concurrently")

        if make_public:
            self.make_bucket_public(bucket_name)
        return created

    def make_bucket_public(self, bucket_name: str):
        """Install the public-read policy on a bucket."""
        with storage_errors('bucket policy update', bucket_name, default=PolicyError):
            self.client.set_bucket_policy(
                bucket_name=bucket_name,
                policy=public_read_policy_json(bucket_name)
            )
        logger.info(f"Public read policy installed on bucket '{bucket_name}'")

    def public_url_for(self, bucket_name: str, object_name: str) -> Optional[str]:
        """
        Public URL of an object, if its bucket is publicly readable.

        The URL is ``endpoint/bucket/object`` built by plain concatenation:
        neither the endpoint nor the object name is normalized or encoded.

        Returns:
            str: Public URL, or None if the bucket policy is not the public-read policy
        """
        try:
            with storage_errors('bucket policy read', bucket_name):
                policy = self.client.get_bucket_policy(bucket_name=bucket_name)
        except NotFoundError as e:
            if e.details.get('code') != 'NoSuchBucketPolicy':
                raise
            return None

        if is_public_read_policy(bucket_name, policy):
            return self.properties.endpoint + "/" + bucket_name + "/" + object_name
        return None

    def upload_file(
        self,
        bucket_name: str,
        object_name: str,
        local_file: Union[str, os.PathLike]
    ) -> Optional[str]:
        """
        Upload a local file to a bucket.

        Args:
            bucket_name: Bucket name
            object_name: Object name in MinIO
            local_file: Local file path

        Returns:
            str: Public URL, or None if the bucket is not publicly readable
        """
        with storage_errors('upload', bucket_name, object_name):
            self.client.fput_object(
                bucket_name=bucket_name,
                object_name=object_name,
                file_path=os.fspath(local_file)
            )
        logger.info(f"File '{object_name}' uploaded to bucket '{bucket_name}'")
        return self.public_url_for(bucket_name, object_name)

    def put_file(
        self,
        bucket_name: str,
        object_name: str,
        stream: BinaryIO,
        object_size: int,
        part_size: int = 0
    ):
        """
        Upload a stream to a bucket. No public URL is resolved.

        Args:
            bucket_name: Bucket name
            object_name: Object name in MinIO
            stream: Readable binary stream
            object_size: Total size of the stream, -1 if unknown
            part_size: Multipart part size, 0 to let the client choose
        """
        with storage_errors('stream upload', bucket_name, object_name):
            self.client.put_object(
                bucket_name=bucket_name,
                object_name=object_name,
                data=stream,
                length=object_size,
                part_size=part_size
            )
        logger.info(f"File '{object_name}' updated in bucket '{bucket_name}'")

    def download_file(self, bucket_name: str, object_name: str, local_save_path: Union[str, os.PathLike]):
        with storage_errors('download', bucket_name, object_name):
            self.client.fget_object(
                bucket_name=bucket_name,
                object_name=object_name,
                file_path=os.fspath(local_save_path)
            )
        logger.info(f"File '{object_name}' downloaded from bucket '{bucket_name}'")

    def delete_file(self, bucket_name: str, object_name: str):
        with storage_errors('deletion', bucket_name, object_name):
            self.client.remove_object(bucket_name=bucket_name, object_name=object_name)
        logger.info(f"File '{object_name}' deleted from bucket '{bucket_name}'")

    def list_files(self, bucket_name: str) -> List[Any]:
        """
        List all objects in a bucket, including those under sub-prefixes.

        Returns:
            list: Object descriptors in the order the server returns them
        """
        with storage_errors('listing', bucket_name):
            return list(self.client.list_objects(bucket_name=bucket_name, recursive=True))

    def get_file_temp_url(
        self,
        bucket_name: str,
        object_name: str,
        expire_time: int,
        time_unit: Union[TimeUnit, str] = TimeUnit.SECONDS
    ) -> str:
        """
        Presigned GET URL for an object.

        Args:
            bucket_name: Bucket name
            object_name: Object name in MinIO
            expire_time: Expiry, counted in ``time_unit``
            time_unit: Unit of ``expire_time``

        Returns:
            str: Presigned URL

        Raises:
            ValueError: If the client rejects the expiry (not positive, or above seven days)
        """
        expires = TimeUnit(time_unit).to_timedelta(expire_time)
        with storage_errors('presign', bucket_name, object_name):
            return self.client.presigned_get_object(
                bucket_name=bucket_name,
                object_name=object_name,
                expires=expires
            )

    def clear_bucket(self, bucket_name: str) -> int:
        """Remove every object from a bucket and return how many were removed."""
        with storage_errors('bucket clear', bucket_name):
            return clear_bucket(self.client, bucket_name)

    upload_file_on_default_bucket = _on_default_bucket(upload_file)
    put_file_on_default_bucket = _on_default_bucket(put_file)
    download_file_on_default_bucket = _on_default_bucket(download_file)
    delete_file_on_default_bucket = _on_default_bucket(delete_file)
    list_files_on_default_bucket = _on_default_bucket(list_files)
    get_file_temp_url_on_default_bucket = _on_default_bucket(get_file_temp_url)
    clear_bucket_on_default_bucket = _on_default_bucket(clear_bucket)
