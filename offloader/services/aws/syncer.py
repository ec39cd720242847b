"""
Upload and delete of media objects with local cleanup.

Every public method is best-effort: provider and filesystem failures are
logged and reported through the return value, never raised, so a broken
bucket cannot block the media library's own upload or delete.
"""
import mimetypes
import os
from concurrent.futures import ThreadPoolExecutor

from ...exceptions import PathOutOfScope, ProviderError
from ...utils.logger import get_logger
from ...utils.persistence.file_utils import delete_local_file
from ..directory_reclaimer import DirectoryReclaimer
from ..path_translator import PathTranslator
from .operations import S3Operations

log = get_logger(__name__)

DEFAULT_CONTENT_TYPE = 'application/octet-stream'


def detect_content_type(path):
    """Guess a file's MIME type from its name.

    Example:
        >>> detect_content_type('2024/a.webp')
        'image/webp'
    """
    content_type, _ = mimetypes.guess_type(path)
    return content_type or DEFAULT_CONTENT_TYPE


class ObjectSyncer(S3Operations):
    """Mirrors local media files into the bucket.

    Args:
        config: OffloadConfig
        client: Optional pre-built S3 client
        translator: Optional PathTranslator (built from config by default)
        reclaimer: Optional DirectoryReclaimer (built from config by default)
    """

    def __init__(self, config, client=None, translator=None, reclaimer=None):
        super().__init__(config, client=client)
        self.translator = translator or PathTranslator.from_config(config)
        self.reclaimer = reclaimer or DirectoryReclaimer(config.local_base_dir)
        self.max_workers = max(1, int(config.max_workers or 1))

    # ── Single objects ─────────────────────────────────────────────────

    def upload(self, local_path):
        """Upload one local file under its object key.

        Re-uploading the same key overwrites it, so this is safe to retry.

        Args:
            local_path: Absolute path under the local base directory

        Returns:
            True if the object was stored
        """
        if not self.is_enabled():
            log.info("Skipping S3 upload - S3 client or bucket not configured.")
            return False

        key = self.translator.to_object_key(local_path)
        if not key:
            log.info("Skipping S3 upload - %s is outside the media directory", local_path)
            return False

        try:
            self.put_object(key, local_path, detect_content_type(local_path))
        except ProviderError as e:
            log.warning("S3 upload error for %s: %s", e.key, e.detail)
            return False
        except OSError as e:
            log.warning("S3 upload error for %s: cannot read %s: %s", key, local_path, e)
            return False

        log.info("Uploaded to S3: %s", key)
        return True

    def remove_local(self, local_path):
        """Delete a local copy and reclaim its empty parent directories.

        Returns:
            True if a file was removed
        """
        try:
            removed = delete_local_file(local_path)
        except OSError as e:
            log.warning("Could not delete local file %s: %s", local_path, e)
            return False

        if not removed:
            log.info("Local file not found (already deleted?): %s", local_path)
            return False

        log.info("Deleted local: %s", local_path)
        self.reclaimer.reclaim(local_path)
        return True

    def delete(self, relative_path):
        """Delete an object remotely, then its local copy.

        The local copy is removed whether or not the remote delete
        succeeded.

        Args:
            relative_path: Object key / path relative to the base directory

        Returns:
            True if the remote delete succeeded
        """
        if not self.is_enabled():
            log.info("Skipping S3 delete - S3 client or bucket not configured.")
            return False

        try:
            local_path = self.translator.to_local_path(relative_path)
        except PathOutOfScope as e:
            log.warning("Skipping S3 delete - %s", e)
            return False

        key = self.translator.object_key_or_raise(local_path)
        log.info("Preparing to delete S3 key: %s", key)

        deleted = False
        try:
            self.delete_object(key)
            deleted = True
            log.info("Successfully deleted from S3: %s", key)
        except ProviderError as e:
            log.warning("S3 delete error for %s: %s", e.key, e.detail)

        self.remove_local(local_path)
        return deleted

    def offload(self, local_path):
        """Upload a file, then drop the local copy.

        A file whose upload failed keeps its local copy so it can be
        offloaded again later.

        Returns:
            True if the upload succeeded
        """
        if not os.path.exists(local_path):
            log.warning("File not found for S3 upload: %s", local_path)
            return False

        if not self.upload(local_path):
            log.warning("Keeping local copy after failed upload: %s", local_path)
            return False

        self.remove_local(local_path)
        return True

    # ── Batches ────────────────────────────────────────────────────────

    def _run_batch(self, func, items):
        """Apply *func* to every item; one failure never stops the rest.

        Returns:
            Number of items for which *func* returned True
        """
        items = list(items)
        if not items:
            return 0

        if self.max_workers > 1 and len(items) > 1:
            with ThreadPoolExecutor(max_workers=min(self.max_workers, len(items))) as pool:
                results = list(pool.map(func, items))
        else:
            results = [func(item) for item in items]

        return sum(1 for result in results if result)

    def upload_many(self, local_paths):
        """Upload several files. Returns the number uploaded."""
        return self._run_batch(self.upload, local_paths)

    def offload_many(self, local_paths):
        """Upload and remove several files. Returns the number uploaded."""
        return self._run_batch(self.offload, local_paths)

    def delete_many(self, relative_paths):
        """Delete several objects and their local copies.

        Returns:
            Number of successful remote deletes
        """
        return self._run_batch(self.delete, relative_paths)
