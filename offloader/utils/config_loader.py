"""
Configuration loader for the offload settings record
"""
import json
import os
from typing import Any, Dict, Optional

from colorama import Fore, Style

from ..models.offload_config import DEFAULT_REGION, OffloadConfig, derive_remote_base_url
from ..services.path_translator import normalize_path
from .logger import get_logger, mask_secret, register_secret
from .persistence.file_utils import get_settings_path, load_json, save_json

log = get_logger(__name__)

SENSITIVE_KEYS = ("AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY")

# Every key accepted in settings.json. Environment variables of the same
# name take precedence over the stored value.
DEFAULT_SETTINGS: Dict[str, Any] = {
    "AWS_ACCESS_KEY_ID": "",
    "AWS_SECRET_ACCESS_KEY": "",
    "AWS_S3_BUCKET": "",
    "AWS_DEFAULT_REGION": "",
    "AWS_CLOUDFRONT_DOMAIN": "",
    "AWS_ENDPOINT_URL": "",
    "OFFLOADER_LOCAL_BASE_URL": "",
    "OFFLOADER_LOCAL_BASE_DIR": "",
    "OFFLOADER_MAX_WORKERS": "1",
}


class ConfigLoader:
    """Resolves the offload configuration from env and settings.json.

    Args:
        store: CredentialStore used to encrypt/decrypt the sensitive keys
        settings_path: Path to settings.json (defaults to the data directory)
        environ: Environment mapping (defaults to ``os.environ``)
    """

    def __init__(self, store, settings_path: Optional[str] = None, environ=None):
        self.store = store
        self.settings_path = settings_path or get_settings_path()
        self.environ = os.environ if environ is None else environ

    # ── Settings record ────────────────────────────────────────────────

    def load_settings(self) -> Dict[str, Any]:
        """
        Load settings.json.

        Returns:
            Stored settings (values of sensitive keys still encrypted)
        """
        data = load_json(self.settings_path, {})
        if not isinstance(data, dict):
            log.warning("Ignoring malformed settings file %s", self.settings_path)
            return {}
        return data

    def sanitize_settings(self, values: Dict[str, Any]) -> Dict[str, str]:
        """
        Clean submitted settings and encrypt sensitive ones.

        Values are trimmed. In the sensitive keys, spaces are turned back
        into ``+`` (form encoding eats them out of base64) and the value is
        encrypted unless it already is ciphertext. Unknown keys are dropped.

        Args:
            values: Raw submitted values

        Returns:
            Values ready to be stored
        """
        output = {}
        for key, value in values.items():
            if key not in DEFAULT_SETTINGS:
                log.warning("Ignoring unknown setting: %s", key)
                continue

            value = "" if value is None else str(value).strip()

            if key in SENSITIVE_KEYS and value:
                value = value.replace(' ', '+')
                if not self.store.is_encrypted(value):
                    value = self.store.encrypt(value)

            output[key] = value
        return output

    def save_settings(self, values: Dict[str, Any]) -> bool:
        """
        Merge sanitized values into settings.json.

        Returns:
            True if successful
        """
        settings = self.load_settings()
        settings.update(self.sanitize_settings(values))
        return save_json(self.settings_path, settings, compact=False, mode=0o600)

    # ── Resolution ─────────────────────────────────────────────────────

    def resolve(self, key: str, settings: Optional[Dict[str, Any]] = None):
        """
        Resolve one key.

        Returns:
            Tuple of (value, source) where source is ``env``, ``settings``
            or ``default``. Sensitive values from settings are decrypted.
        """
        env_value = str(self.environ.get(key, '') or '').strip()
        if env_value:
            return env_value, 'env'

        if settings is None:
            settings = self.load_settings()

        stored = str(settings.get(key, '') or '').strip()
        if stored:
            if key in SENSITIVE_KEYS:
                decrypted = self.store.decrypt(stored)
                if decrypted is None:
                    log.warning("%s in settings is not encrypted, using it as stored", key)
                    return stored, 'settings'
                return decrypted, 'settings'
            return stored, 'settings'

        return DEFAULT_SETTINGS.get(key, ''), 'default'

    def build_config(self) -> OffloadConfig:
        """
        Build the immutable configuration.

        Returns:
            OffloadConfig

        Raises:
            CredentialsUnavailable: If stored secrets cannot be decrypted
                because the key file is missing or corrupt
        """
        settings = self.load_settings()

        def value(key):
            return self.resolve(key, settings)[0]

        bucket = value("AWS_S3_BUCKET")
        region = value("AWS_DEFAULT_REGION") or DEFAULT_REGION

        try:
            max_workers = max(1, int(value("OFFLOADER_MAX_WORKERS") or 1))
        except ValueError:
            log.warning("OFFLOADER_MAX_WORKERS is not a number, using 1")
            max_workers = 1

        config = OffloadConfig(
            bucket=bucket,
            region=region,
            access_key=value("AWS_ACCESS_KEY_ID"),
            secret_key=value("AWS_SECRET_ACCESS_KEY"),
            local_base_url=value("OFFLOADER_LOCAL_BASE_URL").rstrip('/'),
            local_base_dir=normalize_path(value("OFFLOADER_LOCAL_BASE_DIR")),
            remote_base_url=derive_remote_base_url(bucket, region, value("AWS_CLOUDFRONT_DOMAIN")),
            endpoint_url=value("AWS_ENDPOINT_URL") or None,
            max_workers=max_workers,
        )

        register_secret(config.access_key)
        register_secret(config.secret_key)

        log.debug("bucket = %s", config.bucket)
        log.debug("region = %s", config.region)
        log.debug("access_key = %s", mask_secret(config.access_key))
        log.debug("secret_key = %s", mask_secret(config.secret_key))
        log.debug("local_base_url = %s", config.local_base_url)
        log.debug("remote_base_url = %s", config.remote_base_url)
        return config

    def describe_settings(self) -> Dict[str, Dict[str, str]]:
        """
        Describe where every setting comes from.

        Returns:
            Mapping of key to ``{"source", "value"}`` with secrets masked
        """
        settings = self.load_settings()
        described = {}
        for key in DEFAULT_SETTINGS:
            value, source = self.resolve(key, settings)
            if key in SENSITIVE_KEYS:
                value = mask_secret(value)
            described[key] = {"source": source, "value": value}
        return described


def handle_config_update(config_json_string, loader):
    """Handle config update command.

    Args:
        config_json_string: JSON string with settings updates
        loader: ConfigLoader used to sanitize and save

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        config_updates = json.loads(config_json_string)
    except json.JSONDecodeError as e:
        print(f"{Fore.RED}[ERROR] Invalid JSON in --set argument: {e}{Style.RESET_ALL}")
        return 1

    if not isinstance(config_updates, dict):
        print(f"{Fore.RED}[ERROR] --set must be a JSON object (dictionary){Style.RESET_ALL}")
        return 1

    invalid_keys = [key for key in config_updates if key not in DEFAULT_SETTINGS]
    if invalid_keys:
        print(f"{Fore.RED}[ERROR] Invalid setting key(s): {', '.join(invalid_keys)}{Style.RESET_ALL}")
        print(f"\n{Fore.YELLOW}Valid keys:{Style.RESET_ALL}")
        for key in DEFAULT_SETTINGS:
            print(f"  • {key}")
        return 1

    if not loader.save_settings(config_updates):
        print(f"{Fore.RED}[ERROR] Failed to save {loader.settings_path}{Style.RESET_ALL}")
        return 1

    print(f"\n{Fore.GREEN}[SUCCESS] Settings updated successfully{Style.RESET_ALL}")
    print(f"\n{Fore.CYAN}Updated values:{Style.RESET_ALL}")
    for key, value in config_updates.items():
        display_value = mask_secret(value) if key in SENSITIVE_KEYS else value
        print(f"  {key}: {display_value}")

    print(f"\n{Fore.CYAN}Settings file: {loader.settings_path}{Style.RESET_ALL}\n")
    return 0
