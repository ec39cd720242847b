"""
MediaAsset model for attachments owned by the media library
"""
import posixpath

SCALED_MARKER = "-scaled"


class MediaAsset:
    """
    Represents an attachment's metadata: a primary file plus zero or more
    resized "size" variants stored next to it.
    """

    def __init__(self, attachment_id, file, width=None, height=None, sizes=None):
        """
        Initialize a MediaAsset.

        Args:
            attachment_id: Identifier assigned by the media library
            file: Primary file path relative to the base directory
                (e.g. ``2024/05/photo-scaled.jpg``)
            width: Primary image width in pixels
            height: Primary image height in pixels
            sizes: Mapping of size name to ``{"file", "width", "height"}``
                where ``file`` is a bare file name in the primary's directory
        """
        self.attachment_id = attachment_id
        self.file = file or ""
        self.width = width
        self.height = height
        self.sizes = dict(sizes) if sizes else {}

    @property
    def directory(self):
        """Directory of the primary file, relative to the base directory."""
        dirname = posixpath.dirname(self.file)
        return dirname if dirname else ""

    def _in_directory(self, filename):
        if self.directory:
            return f"{self.directory}/{filename}"
        return filename

    def original_path(self):
        """
        Get the un-scaled original path for a ``-scaled`` primary file.

        Returns:
            Relative path of the original, or None if the primary is not scaled
        """
        basename = posixpath.basename(self.file)
        if SCALED_MARKER not in basename:
            return None
        return self._in_directory(basename.replace(SCALED_MARKER, ""))

    def size_path(self, size_name):
        """
        Get the relative path of a named size variant.

        Returns:
            Relative path, or None if the size is not known
        """
        size = self.sizes.get(size_name)
        if not size or not size.get("file"):
            return None
        return self._in_directory(size["file"])

    def variant_paths(self, include_original=True):
        """
        List every relative path belonging to this asset.

        Order is the primary file, the un-scaled original (when the primary
        is a ``-scaled`` copy), then each size variant.

        Args:
            include_original: Whether to add the un-scaled original

        Returns:
            List of relative paths
        """
        if not self.file:
            return []

        paths = [self.file]

        original = self.original_path() if include_original else None
        if original:
            paths.append(original)

        for size in self.sizes.values():
            if size.get("file"):
                paths.append(self._in_directory(size["file"]))

        return paths

    def to_dict(self):
        """Serialize to dictionary"""
        data = {"file": self.file, "sizes": self.sizes}
        if self.width is not None:
            data["width"] = self.width
        if self.height is not None:
            data["height"] = self.height
        return data

    @classmethod
    def from_dict(cls, attachment_id, data):
        """Deserialize from a metadata dictionary"""
        if not data:
            return None
        return cls(
            attachment_id=attachment_id,
            file=data.get("file", ""),
            width=data.get("width"),
            height=data.get("height"),
            sizes=data.get("sizes") or {},
        )
