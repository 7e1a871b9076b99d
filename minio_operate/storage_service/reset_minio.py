"""
MinIO Reset Module
Clears all objects from a bucket
"""
from minio.deleteobjects import DeleteObject

from minio_operate.logger import get_logger

logger = get_logger(__name__)


def clear_bucket(client, bucket_name: str) -> int:
    """
    Remove every object from a bucket.

    Args:
        client: Storage client
        bucket_name: Bucket to clear

    Returns:
        int: Number of objects removed; 0 if the bucket does not exist
    """
    logger.info(f"Clearing MinIO bucket '{bucket_name}'...")

    if not client.bucket_exists(bucket_name=bucket_name):
        logger.warning(f"Bucket '{bucket_name}' does not exist, skipping clear.")
        return 0

    objects = client.list_objects(bucket_name=bucket_name, recursive=True)
    object_names = [obj.object_name for obj in objects]

    if not object_names:
        logger.info(f"Bucket '{bucket_name}' is already empty.")
        return 0

    delete_object_list = [DeleteObject(name) for name in object_names]
    errors = client.remove_objects(bucket_name=bucket_name, delete_object_list=delete_object_list)

    # remove_objects is lazy; nothing is deleted until the errors are consumed
    error_count = 0
    for error in errors:
        logger.error(f"Error deleting {error.name}: {error.code} {error.message}")
        error_count += 1

    deleted_count = len(object_names) - error_count
    logger.info(f"Cleared {deleted_count} objects from MinIO bucket '{bucket_name}'")
    return deleted_count
