"""
JSON-backed media library.

Stores attachments in ``media.json`` as::

    {"attachments": {"<id>": {"attached_file": "/abs/path.jpg",
                              "metadata": {"file": "2024/05/a.jpg", "sizes": {...}}}}}

Used by the CLI and tests as the media-library collaborator.
"""
from typing import Optional, Protocol

from ...models.media_asset import MediaAsset
from ..logger import get_logger
from .file_utils import get_media_registry_path, load_json, save_json

log = get_logger(__name__)


class MediaLibrary(Protocol):
    """What the offloader needs from the media library."""

    def get_attached_file(self, attachment_id) -> Optional[str]:
        """Absolute path of the attachment's primary file."""

    def get_metadata(self, attachment_id) -> Optional[MediaAsset]:
        """Metadata of the attachment, or None if unknown."""

    def find_by_url(self, url) -> Optional[str]:
        """Attachment id whose primary file is served at *url*."""


class MediaRegistry:
    """Media library stored in a JSON file.

    Args:
        registry_path: Path to media.json (defaults to the data directory)
        local_base_url: Base URL used to match URLs in :meth:`find_by_url`
    """

    def __init__(self, registry_path=None, local_base_url=""):
        self.registry_path = registry_path or get_media_registry_path()
        self.local_base_url = (local_base_url or "").rstrip('/')

    def _load(self):
        registry = load_json(self.registry_path, {"attachments": {}})
        if not isinstance(registry, dict) or not isinstance(registry.get("attachments"), dict):
            registry = {"attachments": {}}
        return registry

    def _entry(self, attachment_id):
        return self._load()["attachments"].get(str(attachment_id))

    def register(self, attachment_id, attached_file, metadata=None):
        """
        Register or update an attachment.

        Args:
            attachment_id: Attachment identifier
            attached_file: Absolute path of the primary file
            metadata: Metadata dictionary (``file``, ``width``, ``height``, ``sizes``)

        Returns:
            True if successful
        """
        registry = self._load()
        registry["attachments"][str(attachment_id)] = {
            "attached_file": attached_file,
            "metadata": metadata or {},
        }
        return save_json(self.registry_path, registry, compact=False)

    def unregister(self, attachment_id):
        """
        Remove an attachment from the registry.

        Returns:
            True if an entry was removed
        """
        registry = self._load()
        if registry["attachments"].pop(str(attachment_id), None) is None:
            return False
        return save_json(self.registry_path, registry, compact=False)

    def get_attached_file(self, attachment_id):
        entry = self._entry(attachment_id)
        return entry.get("attached_file") if entry else None

    def get_metadata(self, attachment_id):
        entry = self._entry(attachment_id)
        if not entry:
            return None
        return MediaAsset.from_dict(str(attachment_id), entry.get("metadata"))

    def find_by_url(self, url):
        if not url or not self.local_base_url:
            return None

        prefix = self.local_base_url + '/'
        if not url.startswith(prefix):
            return None
        relative = url[len(prefix):].split('?', 1)[0]

        for attachment_id, entry in self._load()["attachments"].items():
            metadata = entry.get("metadata") or {}
            if metadata.get("file") == relative:
                return attachment_id
        return None
