"""
Configuration Module
Loads MinIO connection properties from config.yaml and environment variables
"""
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union
from urllib.parse import urlparse

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from minio_operate.exceptions import ConfigError

load_dotenv()

DEFAULT_CONFIG_FILE = 'config.yaml'
DEFAULT_BUCKET_NAME = 'default'

# Environment variable -> property name; environment wins over config.yaml
ENV_KEYS = {
    'MINIO_ENDPOINT': 'endpoint',
    'MINIO_ACCESS_KEY': 'access_key',
    'MINIO_SECRET_KEY': 'secret_key',
    'MINIO_DEFAULT_BUCKET_NAME': 'default_bucket_name',
}


class MinioProperties(BaseModel):
    """MinIO connection properties, bound from the ``minio`` config section"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    endpoint: str
    access_key: str = Field(alias='accessKey')
    secret_key: str = Field(alias='secretKey')
    default_bucket_name: str = Field(default=DEFAULT_BUCKET_NAME, alias='defaultBucketName')

    @field_validator('endpoint')
    @classmethod
    def _check_endpoint(cls, value: str) -> str:
        parsed = urlparse(value)
        if parsed.scheme not in ('http', 'https') or not parsed.netloc:
            raise ValueError("endpoint must look like scheme://host[:port]")
        if parsed.path not in ('', '/') or parsed.query or parsed.fragment:
            raise ValueError("endpoint must not contain a path, query or fragment")
        return value

    @field_validator('access_key', 'secret_key', 'default_bucket_name')
    @classmethod
    def _check_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("value cannot be empty")
        return value

    @property
    def host(self) -> str:
        """host[:port] part of the endpoint, as the MinIO client expects it"""
        return urlparse(self.endpoint).netloc

    @property
    def secure(self) -> bool:
        return urlparse(self.endpoint).scheme == 'https'


def get_config_path(config_path: Optional[Union[str, Path]] = None) -> Path:
    if config_path:
        return Path(config_path)
    return Path(os.getenv('MINIO_OPERATE_CONFIG', DEFAULT_CONFIG_FILE))


def load_config(config_path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Read the YAML configuration file.

    Returns:
        dict: Parsed configuration, empty if the file does not exist

    Raises:
        ConfigError: If the file is not valid YAML or not a mapping
    """
    path = get_config_path(config_path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            payload = yaml.safe_load(f)
    except FileNotFoundError:
        return {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}", {'path': str(path)}) from e

    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ConfigError(f"Configuration file {path} must contain a mapping", {'path': str(path)})
    return payload


def load_properties(config_path: Optional[Union[str, Path]] = None) -> MinioProperties:
    """
    Load MinIO properties from the ``minio`` section of config.yaml,
    overridden by MINIO_* environment variables.

    Args:
        config_path: Optional path to the YAML file. Defaults to
            MINIO_OPERATE_CONFIG or ./config.yaml.

    Returns:
        MinioProperties: Immutable connection properties

    Raises:
        ConfigError: If a required property is missing or malformed
    """
    section = load_config(config_path).get('minio') or {}
    if not isinstance(section, dict):
        raise ConfigError("'minio' configuration section must be a mapping")

    values = dict(section)
    for env_name, field_name in ENV_KEYS.items():
        env_value = os.getenv(env_name)
        if env_value:
            # Drop the camelCase alias so the environment value is the only one bound
            alias = MinioProperties.model_fields[field_name].alias
            values.pop(alias, None)
            values[field_name] = env_value

    try:
        return MinioProperties(**values)
    except ValidationError as e:
        raise ConfigError(f"Invalid MinIO configuration: {e}") from e
