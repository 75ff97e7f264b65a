"""Database configuration loaded from the Lambda environment."""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0
DEFAULT_WARRIORS_TABLE = "warriors"


@dataclass(frozen=True)
class DatabaseConfig:
    """Supabase connection settings."""

    url: Optional[str] = None
    service_role_key: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    warriors_table: str = DEFAULT_WARRIORS_TABLE

    @property
    def is_configured(self) -> bool:
        return bool(self.url) and bool(self.service_role_key)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "DatabaseConfig":
        """
        Build configuration from environment variables.

        The service role key is read from SUPABASE_SERVICE_ROLE_KEY, or from the
        SSM parameter named by SUPABASE_SERVICE_ROLE_KEY_PARAM when the plain
        variable is empty.

        Args:
            environ: Mapping to read from (default: os.environ)

        Returns:
            DatabaseConfig

        Raises:
            ConfigurationError: If SUPABASE_TIMEOUT is not a positive number
        """
        if environ is None:
            environ = os.environ

        url = environ.get("SUPABASE_URL") or None
        key = environ.get("SUPABASE_SERVICE_ROLE_KEY") or None

        key_param = environ.get("SUPABASE_SERVICE_ROLE_KEY_PARAM")
        if not key and key_param:
            key = get_ssm_parameter(key_param)

        raw_timeout = environ.get("SUPABASE_TIMEOUT")
        timeout = DEFAULT_TIMEOUT
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ConfigurationError(f"SUPABASE_TIMEOUT must be a number, got {raw_timeout!r}")
            if timeout <= 0:
                raise ConfigurationError("SUPABASE_TIMEOUT must be positive")

        config = cls(
            url=url,
            service_role_key=key,
            timeout=timeout,
            warriors_table=environ.get("WARRIORS_TABLE") or DEFAULT_WARRIORS_TABLE,
        )

        if not config.is_configured:
            logger.warning("Supabase environment variables are not configured properly")

        return config


def get_ssm_parameter(name: str) -> Optional[str]:
    """
    Fetch a decrypted SecureString from SSM Parameter Store.

    Args:
        name: Parameter name

    Returns:
        Parameter value, or None if the lookup failed
    """
    try:
        ssm_client = boto3.client("ssm")
        response = ssm_client.get_parameter(Name=name, WithDecryption=True)
        return response["Parameter"]["Value"]
    except (ClientError, BotoCoreError) as e:
        logger.error(f"Error reading SSM parameter {name}: {e}")
        return None
