"""
Immutable offload configuration
"""
from dataclasses import dataclass
from typing import Optional

DEFAULT_REGION = "us-east-1"


def derive_remote_base_url(bucket: str, region: str, cloudfront_domain: str = "") -> str:
    """Build the public base URL for offloaded objects.

    Args:
        bucket: S3 bucket name
        region: AWS region
        cloudfront_domain: Optional CDN domain, takes precedence when set

    Returns:
        Base URL without a trailing slash

    Example:
        >>> derive_remote_base_url("media", "eu-west-1")
        'https://media.s3.eu-west-1.amazonaws.com'
        >>> derive_remote_base_url("media", "eu-west-1", "https://cdn.test/")
        'https://cdn.test'
    """
    if cloudfront_domain:
        return cloudfront_domain.strip().rstrip('/')
    return f"https://{bucket}.s3.{region or DEFAULT_REGION}.amazonaws.com"


@dataclass(frozen=True)
class OffloadConfig:
    """Configuration loaded once at startup and shared read-only.

    ``local_base_dir`` is expected in normalized form (forward slashes,
    no trailing slash); :class:`~offloader.utils.config_loader.ConfigLoader`
    takes care of that.
    """

    bucket: str = ""
    region: str = DEFAULT_REGION
    access_key: str = ""
    secret_key: str = ""
    local_base_url: str = ""
    local_base_dir: str = ""
    remote_base_url: str = ""
    endpoint_url: Optional[str] = None
    max_workers: int = 1
    connect_timeout: float = 5.0
    read_timeout: float = 30.0

    @property
    def has_credentials(self) -> bool:
        return bool(self.access_key and self.secret_key)

    @property
    def is_remote_configured(self) -> bool:
        """True when an S3 client can be built and a bucket is set."""
        return self.has_credentials and bool(self.bucket)
