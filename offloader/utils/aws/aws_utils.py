"""AWS utilities for session management.

Builds boto3 sessions and S3 clients from an :class:`OffloadConfig`
using the explicit access key pair it carries.
"""
import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ..logger import get_logger

log = get_logger(__name__)


def create_boto3_session(config):
    """Create a boto3 session from explicit credentials.

    Args:
        config: OffloadConfig with access key, secret key and region

    Returns:
        boto3.Session object
    """
    return boto3.Session(
        aws_access_key_id=config.access_key,
        aws_secret_access_key=config.secret_key,
        region_name=config.region,
    )


def create_s3_client(config):
    """Create an S3 client, or None when credentials are missing.

    Calls fail fast: one attempt with the configured connect/read
    timeouts, leaving retries to whoever triggered the operation.

    Args:
        config: OffloadConfig

    Returns:
        botocore S3 client or None

    Example:
        >>> s3 = create_s3_client(config)
        >>> s3.put_object(Bucket=config.bucket, Key='2024/a.jpg', Body=b'...')
    """
    if not config.has_credentials:
        log.debug("No AWS credentials configured, S3 client not created")
        return None

    session = create_boto3_session(config)
    client_config = Config(
        connect_timeout=config.connect_timeout,
        read_timeout=config.read_timeout,
        retries={"max_attempts": 1, "mode": "standard"},
        max_pool_connections=max(10, config.max_workers),
    )
    return session.client('s3', endpoint_url=config.endpoint_url or None, config=client_config)


def verify_credentials(config):
    """Validate credentials against STS.

    Returns:
        Tuple of (ok, account_or_error)
    """
    try:
        identity = create_boto3_session(config).client('sts').get_caller_identity()
        return True, identity.get('Account', '')
    except (BotoCoreError, ClientError) as e:
        return False, str(e)
