"""
File system utilities
"""
import json
import os
from pathlib import Path

from ..logger import get_logger

log = get_logger(__name__)


def ensure_dir(directory, mode=0o777):
    """
    Ensure directory exists, create if it doesn't.

    Args:
        directory: Directory path
        mode: Permission bits for newly created directories
    """
    if directory:
        os.makedirs(directory, mode=mode, exist_ok=True)


def save_json(filepath, data, compact=True, mode=None):
    """
    Save data to JSON file.

    Args:
        filepath: Path to JSON file
        data: Data to serialize
        compact: If True, use single-line format (default)
        mode: Permission bits applied before anything is written (the file
            is created with them, and an existing file is narrowed to them)

    Returns:
        True if successful
    """
    try:
        ensure_dir(os.path.dirname(filepath))

        if mode is None:
            f = open(filepath, 'w')
        else:
            fd = os.open(filepath, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
            try:
                os.fchmod(fd, mode)
            except OSError:
                os.close(fd)
                raise
            f = os.fdopen(fd, 'w')

        with f:
            if compact:
                json.dump(data, f, separators=(',', ':'))
            else:
                json.dump(data, f, indent=2)
        return True
    except (OSError, TypeError, ValueError) as e:
        log.error("Error saving JSON to %s: %s", filepath, e)
        return False


def load_json(filepath, default=None):
    """
    Load data from JSON file.

    Args:
        filepath: Path to JSON file
        default: Default value if file doesn't exist

    Returns:
        Loaded data or default value
    """
    if not os.path.exists(filepath):
        return default

    try:
        with open(filepath, 'r') as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError, ValueError) as e:
        log.error("Error loading JSON from %s: %s", filepath, e)
        return default


def get_data_dir():
    """Get the offloader data directory.

    Honours ``OFFLOADER_HOME`` and falls back to ``~/.offloader``.

    Returns:
        Absolute path to the data directory
    """
    override = os.environ.get('OFFLOADER_HOME', '').strip()
    if override:
        return str(Path(override).expanduser().resolve())
    return str(Path.home() / ".offloader")


def get_credential_file_path(data_dir=None):
    """Get path to the AES key file.

    Returns:
        Path to ``secure-data/crypto.json`` under the data directory
    """
    return os.path.join(data_dir or get_data_dir(), "secure-data", "crypto.json")


def get_settings_path(data_dir=None):
    """Get path to the persisted settings record.

    Returns:
        Path to ``settings.json`` under the data directory
    """
    return os.path.join(data_dir or get_data_dir(), "settings.json")


def get_media_registry_path(data_dir=None):
    """Get path to the attachment registry.

    Returns:
        Path to ``media.json`` under the data directory
    """
    return os.path.join(data_dir or get_data_dir(), "media.json")


def delete_local_file(filepath):
    """
    Delete a local file if it exists.

    Args:
        filepath: Path to the file

    Returns:
        True if the file was removed, False if it was already gone
    """
    try:
        os.remove(filepath)
        return True
    except FileNotFoundError:
        return False
