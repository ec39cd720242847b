"""
Low-level S3 primitive operations.

Provides the base class for all object-store interactions. Provider
failures are translated into :class:`~offloader.exceptions.ProviderError`
so callers deal with a single error type.
"""
from botocore.exceptions import BotoCoreError, ClientError

from ...exceptions import ProviderError
from ...utils.aws.aws_utils import create_s3_client
from ...utils.logger import get_logger

log = get_logger(__name__)


def _error_detail(error):
    """Extract the provider message from a botocore error."""
    if isinstance(error, ClientError):
        info = error.response.get('Error', {})
        code = info.get('Code', '')
        message = info.get('Message', '') or str(error)
        return f"{code}: {message}" if code else message
    return str(error)


class S3Operations:
    """Base class providing primitive S3 operations.

    Args:
        config: OffloadConfig
        client: Optional pre-built S3 client (defaults to one built
            from the config's credentials)
    """

    def __init__(self, config, client=None):
        self.config = config
        self.bucket_name = config.bucket
        self.s3_client = client

        if self.s3_client is None and config.has_credentials:
            try:
                self.s3_client = create_s3_client(config)
            except (BotoCoreError, ValueError) as e:
                log.warning("Could not initialize S3 client: %s", e)

    def is_enabled(self):
        """Check if offloading is properly configured.

        Returns:
            True if a client exists and a bucket is set
        """
        return self.s3_client is not None and bool(self.bucket_name)

    def put_object(self, key, local_path, content_type):
        """Upload a local file under *key*.

        Raises:
            ProviderError: If the provider call fails
            OSError: If the local file cannot be read
        """
        try:
            with open(local_path, 'rb') as body:
                self.s3_client.put_object(
                    Bucket=self.bucket_name,
                    Key=key,
                    Body=body,
                    ContentType=content_type,
                )
        except (ClientError, BotoCoreError) as e:
            raise ProviderError('put_object', key, _error_detail(e)) from e

    def delete_object(self, key):
        """Delete the object stored under *key*.

        Raises:
            ProviderError: If the provider call fails
        """
        try:
            self.s3_client.delete_object(Bucket=self.bucket_name, Key=key)
        except (ClientError, BotoCoreError) as e:
            raise ProviderError('delete_object', key, _error_detail(e)) from e

    def object_exists(self, key):
        """Check if an object exists.

        Returns:
            True if a HEAD request succeeds
        """
        if not self.is_enabled():
            return False

        try:
            self.s3_client.head_object(Bucket=self.bucket_name, Key=key)
            return True
        except (ClientError, BotoCoreError):
            return False
