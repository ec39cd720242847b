"""Utility modules for the offloader.

Sub-packages:
- persistence/ — file I/O, data-directory paths, media registry
- aws/ — boto3 session and S3 client construction
"""

from .logger import get_logger, setup_logging, mask_secret, register_secret
from .persistence.file_utils import ensure_dir, save_json, load_json

__all__ = [
    'get_logger',
    'setup_logging',
    'mask_secret',
    'register_secret',
    'ensure_dir',
    'save_json',
    'load_json',
]
