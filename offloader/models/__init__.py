"""Data models."""
from .media_asset import MediaAsset, SCALED_MARKER
from .offload_config import OffloadConfig, DEFAULT_REGION, derive_remote_base_url

__all__ = [
    'MediaAsset',
    'SCALED_MARKER',
    'OffloadConfig',
    'DEFAULT_REGION',
    'derive_remote_base_url',
]
