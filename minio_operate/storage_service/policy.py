"""
Bucket Policy Module
Builds the anonymous-read bucket policy and recognizes it in installed policies
"""
import json
from typing import Any, Dict, Optional

POLICY_VERSION = "2012-10-17"


def public_read_policy(bucket_name: str) -> Dict[str, Any]:
    """
    Policy allowing anonymous users to read every object in the bucket.

    Args:
        bucket_name: Bucket the policy applies to

    Returns:
        dict: Policy document
    """
    return {
        "Version": POLICY_VERSION,
        "Statement": [{
            "Effect": "Allow",
            "Principal": {"AWS": ["*"]},
            "Action": ["s3:GetObject"],
            "Resource": [f"arn:aws:s3:::{bucket_name}/*"],
        }],
    }


def public_read_policy_json(bucket_name: str) -> str:
    return json.dumps(public_read_policy(bucket_name), indent=2)


def parse_policy(policy_text: Optional[str]) -> Optional[Any]:
    """
    Parse an installed policy.

    Returns:
        The decoded JSON value, or None for an empty or unparseable policy
    """
    if not policy_text or not policy_text.strip():
        return None
    try:
        return json.loads(policy_text)
    except ValueError:
        return None


def is_public_read_policy(bucket_name: str, policy_text: Optional[str]) -> bool:
    """
    Whether an installed policy is the public-read policy for the bucket.

    Both documents are compared as decoded JSON values: object key order and
    whitespace do not matter, arrays must match element by element, and a
    scalar is never equal to a one-element array.

    Args:
        bucket_name: Bucket the policy is installed on
        policy_text: Policy JSON as returned by the server

    Returns:
        bool: True if the policy is semantically the public-read policy
    """
    installed = parse_policy(policy_text)
    if installed is None:
        return False
    return installed == public_read_policy(bucket_name)
