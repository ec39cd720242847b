"""Persistence utilities sub-package.

Contains file I/O, data-directory paths and the JSON media registry.
"""
from .file_utils import (
    ensure_dir,
    save_json,
    load_json,
    get_data_dir,
    get_credential_file_path,
    get_settings_path,
    get_media_registry_path,
    delete_local_file,
)
from .media_registry import MediaLibrary, MediaRegistry

__all__ = [
    # file_utils
    'ensure_dir',
    'save_json',
    'load_json',
    'get_data_dir',
    'get_credential_file_path',
    'get_settings_path',
    'get_media_registry_path',
    'delete_local_file',
    # media_registry
    'MediaLibrary',
    'MediaRegistry',
]
