"""
Command-line bootstrap: provision the default bucket and show its contents.

Usage:
    python -m minio_operate [--config PATH] [--reset]
"""
import argparse
import sys

from minio_operate.config import load_properties
from minio_operate.exceptions import ConfigError
from minio_operate.logger import get_logger, init_logger
from minio_operate.storage_service import MinioFileOperator

logger = get_logger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="minio_operate", description=__doc__.splitlines()[1])
    parser.add_argument("--config", help="Path to config.yaml (default: MINIO_OPERATE_CONFIG or ./config.yaml)")
    parser.add_argument("--reset", action="store_true", help="Remove every object from the default bucket")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    try:
        init_logger(args.config)
    except ConfigError as e:
        # Logging is not configured yet
        print(f"Configuration failed: {e}", file=sys.stderr)
        return 1
    separator = "=" * 60

    # 1. Provision default bucket
    print(separator)
    print("Provisioning default bucket...\n")
    try:
        properties = load_properties(args.config)
        operator = MinioFileOperator(properties, strict_startup=True)
        logger.info(f"Default bucket '{properties.default_bucket_name}' is ready.")
    except Exception as e:
        logger.error(f"Provisioning failed: {e}")
        return 1
    print(separator + "\n")

    # 2. Reset default bucket (if --reset)
    if args.reset:
        print(separator)
        print("Resetting default bucket...\n")
        try:
            operator.clear_bucket_on_default_bucket()
        except Exception as e:
            logger.error(f"Error resetting bucket: {e}")
            return 1
        print(separator + "\n")

    # 3. Summary
    print(separator)
    try:
        items = operator.list_files_on_default_bucket()
    except Exception as e:
        logger.error(f"Listing failed: {e}")
        return 1
    print(f"Bucket '{properties.default_bucket_name}' holds {len(items)} object(s)")
    for item in items:
        print(f"  {item.object_name}  {item.size} bytes")
    print(separator + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
