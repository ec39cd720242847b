"""
Entry points for media-library lifecycle events.

One method per event replaces the host's string-keyed filter callbacks:

==========================  ==============================================
Event                       Method
==========================  ==============================================
file uploaded               :meth:`MediaLifecycle.on_file_uploaded`
variants generated          :meth:`MediaLifecycle.on_variants_generated`
public URL requested        :meth:`MediaLifecycle.on_url_requested`
image size requested        :meth:`MediaLifecycle.image_downsize`
asset deleted               :meth:`MediaLifecycle.on_asset_deleted`
content rendered            :meth:`MediaLifecycle.on_content_rendered`
block rendered              :meth:`MediaLifecycle.on_block_rendered`
image src / srcset built    :meth:`on_image_src` / :meth:`on_srcset`
==========================  ==============================================

No method raises because of object-store trouble.
"""
import os
import posixpath

from ..models.media_asset import SCALED_MARKER, MediaAsset
from ..utils.logger import get_logger
from .aws.syncer import ObjectSyncer
from .content_rewriter import SubstringRewriter
from .path_translator import PathTranslator, normalize_path

log = get_logger(__name__)


class MediaLifecycle:
    """Reacts to media-library events by syncing with the bucket.

    Rewriting only happens while offloading is enabled; in local-only
    mode every URL and piece of content passes through untouched, and
    :meth:`public_url` / :meth:`image_downsize` return their fallback.
    This differs from the WordPress plugin this replaces, which rewrote
    URLs whether or not an S3 client could be built, so pages pointed at
    a bucket that never received the files.

    Args:
        config: OffloadConfig
        library: MediaLibrary collaborator (see
            :class:`~offloader.utils.persistence.media_registry.MediaLibrary`)
        syncer: Optional ObjectSyncer (built from config by default)
        rewriter: Optional ContentRewriter (SubstringRewriter by default)
    """

    def __init__(self, config, library, syncer=None, rewriter=None):
        self.config = config
        self.library = library
        self.translator = PathTranslator.from_config(config)
        self.syncer = syncer or ObjectSyncer(config, translator=self.translator)
        self.rewriter = rewriter or SubstringRewriter.from_config(config)

    @property
    def enabled(self):
        return self.syncer.is_enabled()

    # ── Uploads ────────────────────────────────────────────────────────

    def on_file_uploaded(self, upload):
        """Mirror a freshly uploaded file; the local copy is kept.

        Args:
            upload: Upload details with the absolute path under ``file``

        Returns:
            *upload*, unchanged
        """
        if not upload or not upload.get("file"):
            return upload

        self.syncer.upload(upload["file"])
        return upload

    def _generated_paths(self, attached_file, asset):
        """Absolute paths to offload once variants exist."""
        attached_file = normalize_path(attached_file)
        dirname = posixpath.dirname(attached_file)
        paths = [attached_file]

        basename = posixpath.basename(attached_file)
        if SCALED_MARKER in basename:
            original = f"{dirname}/{basename.replace(SCALED_MARKER, '')}"
            if os.path.exists(original):
                log.info("Found original file to offload: %s", original)
                paths.append(original)

        for size in asset.sizes.values():
            if size.get("file"):
                paths.append(f"{dirname}/{size['file']}")

        return paths

    def on_variants_generated(self, metadata, attachment_id):
        """Offload the primary file, the un-scaled original and every size.

        Each file that exists is uploaded, its local copy deleted and
        empty directories reclaimed. Missing files are logged and skipped.

        Args:
            metadata: Attachment metadata (``file``, ``sizes``, ...)
            attachment_id: Attachment identifier

        Returns:
            *metadata*, unchanged
        """
        attached_file = self.library.get_attached_file(attachment_id)
        if not attached_file or not metadata:
            return metadata

        if not self.enabled:
            log.info("Skipping offload of attachment %s - S3 client or bucket not configured.",
                     attachment_id)
            return metadata

        asset = MediaAsset.from_dict(attachment_id, metadata)
        paths = self._generated_paths(attached_file, asset)
        uploaded = self.syncer.offload_many(paths)
        log.info("Offloaded %d of %d file(s) for attachment %s", uploaded, len(paths), attachment_id)
        return metadata

    # ── URLs ───────────────────────────────────────────────────────────

    def public_url(self, attachment_id, fallback=None):
        """Remote URL of an attachment's primary file.

        Returns:
            The remote URL, or *fallback* when metadata is missing
        """
        if not self.enabled:
            return fallback

        asset = self.library.get_metadata(attachment_id)
        if not asset or not asset.file:
            return fallback
        return self.translator.to_public_url(asset.file)

    def on_url_requested(self, url):
        """Map a local attachment URL to its remote URL.

        Returns:
            The remote URL, or *url* when the attachment is unknown
        """
        attachment_id = self.library.find_by_url(url)
        if not attachment_id:
            return url
        return self.public_url(attachment_id, fallback=url)

    def image_downsize(self, attachment_id, size):
        """Remote URL and dimensions of an attachment at a given size.

        Args:
            attachment_id: Attachment identifier
            size: ``"full"`` or a registered size name

        Returns:
            ``(url, width, height, True)`` or None when the size is unknown
        """
        if not self.enabled or not isinstance(size, str):
            return None

        asset = self.library.get_metadata(attachment_id)
        if not asset or not asset.file:
            return None

        if size == "full":
            return (self.translator.to_public_url(asset.file), asset.width, asset.height, True)

        path = asset.size_path(size)
        if not path:
            return None

        size_meta = asset.sizes[size]
        return (
            self.translator.to_public_url(path),
            size_meta.get("width"),
            size_meta.get("height"),
            True,
        )

    # ── Deletion ───────────────────────────────────────────────────────

    def on_asset_deleted(self, attachment_id):
        """Delete every variant of an attachment remotely and locally.

        Returns:
            Number of objects deleted from the bucket
        """
        if not self.enabled:
            log.info("Skipping S3 delete - S3 client or bucket not configured.")
            return 0

        asset = self.library.get_metadata(attachment_id)
        if not asset or not asset.file:
            log.info("No metadata found for attachment ID %s", attachment_id)
            return 0

        log.info("Starting delete for attachment ID %s", attachment_id)
        return self.syncer.delete_many(asset.variant_paths())

    # ── Content ────────────────────────────────────────────────────────

    def on_content_rendered(self, content):
        if not self.enabled:
            return content
        return self.rewriter.rewrite_html_fragment(content)

    def on_block_rendered(self, html, block_kind):
        if not self.enabled:
            return html
        return self.rewriter.rewrite_block_fragment(html, block_kind)

    def on_image_src(self, image):
        if not self.enabled:
            return image
        return self.rewriter.rewrite_image_src(image)

    def on_srcset(self, sources):
        if not self.enabled:
            return sources
        return self.rewriter.rewrite_source_set(sources)

    def supports_image_editing(self):
        """Local image editing is unavailable once originals are offloaded."""
        return False
