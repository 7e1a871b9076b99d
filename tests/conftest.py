import io
import json
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Set

import pytest
from minio.deleteobjects import DeleteError
from minio.error import S3Error

from minio_operate.config import MinioProperties
from minio_operate.storage_service import MinioFileOperator

ENDPOINT = "http://s:9000"
MAX_PRESIGN_EXPIRY = timedelta(days=7)


def s3_error(code: str, bucket_name: Optional[str] = None, object_name: Optional[str] = None) -> S3Error:
    return S3Error(
        code=code,
        message=f"{code} raised by fake server",
        resource=f"/{bucket_name or ''}",
        request_id="req-1",
        host_id="host-1",
        response=None,
        bucket_name=bucket_name,
        object_name=object_name,
    )


@dataclass
class FakeObject:
    object_name: str
    size: int
    last_modified: datetime
    etag: str


class FakeMinioClient:
    """In-memory stand-in for minio.Minio covering the calls the operator makes."""

    def __init__(self, endpoint: str = ENDPOINT):
        self.endpoint = endpoint
        self.buckets: Dict[str, Dict[str, bytes]] = {}
        self.policies: Dict[str, str] = {}
        self.calls: List[str] = []
        # method name -> exception raised on the next call
        self.errors: Dict[str, Exception] = {}
        # object names remove_objects reports as failed
        self.undeletable: Set[str] = set()

    def _record(self, method: str):
        self.calls.append(method)
        error = self.errors.pop(method, None)
        if error is not None:
            raise error

    def count(self, method: str) -> int:
        return self.calls.count(method)

    @staticmethod
    def _check_names(bucket_name: str, object_name: Optional[str] = None):
        if not bucket_name:
            raise ValueError("Bucket name cannot be empty.")
        if object_name is not None and not object_name:
            raise ValueError("object name must not be empty")

    def _bucket(self, bucket_name: str) -> Dict[str, bytes]:
        if bucket_name not in self.buckets:
            raise s3_error("NoSuchBucket", bucket_name)
        return self.buckets[bucket_name]

    def bucket_exists(self, bucket_name: str) -> bool:
        self._check_names(bucket_name)
        self._record("bucket_exists")
        return bucket_name in self.buckets

    def make_bucket(self, bucket_name: str):
        self._check_names(bucket_name)
        self._record("make_bucket")
        if bucket_name in self.buckets:
            raise s3_error("BucketAlreadyOwnedByYou", bucket_name)
        self.buckets[bucket_name] = {}

    def get_bucket_policy(self, bucket_name: str) -> str:
        self._check_names(bucket_name)
        self._record("get_bucket_policy")
        self._bucket(bucket_name)
        if bucket_name not in self.policies:
            raise s3_error("NoSuchBucketPolicy", bucket_name)
        return self.policies[bucket_name]

    def set_bucket_policy(self, bucket_name: str, policy: str):
        self._check_names(bucket_name)
        self._record("set_bucket_policy")
        self._bucket(bucket_name)
        try:
            document = json.loads(policy)
        except ValueError:
            raise s3_error("MalformedPolicy", bucket_name)
        # Servers hand policies back re-serialized
        self.policies[bucket_name] = json.dumps(document, sort_keys=True, separators=(",", ":"))

    def fput_object(self, bucket_name: str, object_name: str, file_path: str):
        self._check_names(bucket_name, object_name)
        self._record("fput_object")
        bucket = self._bucket(bucket_name)
        with open(file_path, "rb") as f:
            bucket[object_name] = f.read()

    def put_object(self, bucket_name: str, object_name: str, data, length: int, part_size: int = 0):
        self._check_names(bucket_name, object_name)
        self._record("put_object")
        bucket = self._bucket(bucket_name)
        payload = data.read(length)
        if len(payload) != length:
            raise IOError(f"stream having not enough data; expected: {length}, got: {len(payload)} bytes")
        bucket[object_name] = payload

    def fget_object(self, bucket_name: str, object_name: str, file_path: str):
        self._check_names(bucket_name, object_name)
        self._record("fget_object")
        bucket = self._bucket(bucket_name)
        if object_name not in bucket:
            raise s3_error("NoSuchKey", bucket_name, object_name)
        with open(file_path, "wb") as f:
            f.write(bucket[object_name])

    def remove_object(self, bucket_name: str, object_name: str):
        self._check_names(bucket_name, object_name)
        self._record("remove_object")
        self._bucket(bucket_name).pop(object_name, None)

    def remove_objects(self, bucket_name: str, delete_object_list):
        self._record("remove_objects")
        return self._remove_lazily(bucket_name, delete_object_list)

    def _remove_lazily(self, bucket_name: str, delete_object_list):
        # Like the SDK, nothing is deleted until the result is iterated
        bucket = self._bucket(bucket_name)
        for obj in delete_object_list:
            name = getattr(obj, "name", None) or obj._name
            if name in self.undeletable:
                yield DeleteError(code="AccessDenied", message="Access Denied.", name=name, version_id=None)
                continue
            bucket.pop(name, None)

    def list_objects(self, bucket_name: str, recursive: bool = False):
        self._check_names(bucket_name)
        self._record("list_objects")
        return self._iter_objects(bucket_name, recursive)

    def _iter_objects(self, bucket_name: str, recursive: bool):
        bucket = self._bucket(bucket_name)
        for name in sorted(bucket):
            if not recursive and "/" in name:
                continue
            yield FakeObject(
                object_name=name,
                size=len(bucket[name]),
                last_modified=datetime(2024, 1, 1, tzinfo=timezone.utc),
                etag=f"etag-{len(bucket[name])}",
            )

    def presigned_get_object(self, bucket_name: str, object_name: str, expires: timedelta) -> str:
        self._check_names(bucket_name, object_name)
        if expires.total_seconds() < 1 or expires > MAX_PRESIGN_EXPIRY:
            raise ValueError("expires must be between 1 second to 7 days")
        self._record("presigned_get_object")
        self._bucket(bucket_name)
        return f"{self.endpoint}/{bucket_name}/{object_name}?X-Amz-Expires={int(expires.total_seconds())}"


@pytest.fixture()
def properties() -> MinioProperties:
    return MinioProperties(
        endpoint=ENDPOINT,
        access_key="access",
        secret_key="secret",
        default_bucket_name="media",
    )


@pytest.fixture()
def client() -> FakeMinioClient:
    return FakeMinioClient()


@pytest.fixture()
def operator(properties, client) -> MinioFileOperator:
    return MinioFileOperator(properties, client=client)


@pytest.fixture()
def local_file(tmp_path):
    path = tmp_path / "b.png"
    path.write_bytes(b"\x89PNG fake image bytes")
    return path


@pytest.fixture()
def stream():
    return io.BytesIO(b"streamed content")
