"""
Local path ⇄ object key ⇄ public URL translation.
"""
import posixpath
import re

from ..exceptions import PathOutOfScope
from ..utils.logger import get_logger

log = get_logger(__name__)

_DUPLICATE_SLASHES = re.compile(r'/{2,}')


def normalize_path(path) -> str:
    """Normalize separators the way the media library stores paths.

    Backslashes become forward slashes, duplicate slashes collapse
    (a leading slash is kept), ``.`` and ``..`` segments are resolved and
    a trailing slash is dropped.

    Example:
        >>> normalize_path('C:\\\\uploads\\\\2024\\\\a.jpg')
        'C:/uploads/2024/a.jpg'
        >>> normalize_path('/var//www/uploads/')
        '/var/www/uploads'
        >>> normalize_path('/var/www/uploads/../etc/passwd')
        '/var/www/etc/passwd'
    """
    if not path:
        return ""
    path = _DUPLICATE_SLASHES.sub('/', str(path).replace('\\', '/'))
    return posixpath.normpath(path)


class PathTranslator:
    """Maps local file paths to object keys and public URLs.

    Args:
        local_base_dir: Root directory of the local media library
        remote_base_url: Base URL of the bucket or CDN
    """

    def __init__(self, local_base_dir, remote_base_url):
        self.local_base_dir = normalize_path(local_base_dir)
        self.remote_base_url = remote_base_url or ""

    @classmethod
    def from_config(cls, config):
        return cls(config.local_base_dir, config.remote_base_url)

    def is_in_scope(self, absolute_local_path) -> bool:
        if not self.local_base_dir:
            return False
        path = normalize_path(absolute_local_path)
        return path.startswith(self.local_base_dir + '/') and len(path) > len(self.local_base_dir) + 1

    def object_key_or_raise(self, absolute_local_path) -> str:
        """Translate a local path to its object key.

        Raises:
            PathOutOfScope: If the path is not under the local base directory
        """
        if not self.is_in_scope(absolute_local_path):
            raise PathOutOfScope(absolute_local_path, self.local_base_dir)

        path = normalize_path(absolute_local_path)
        key = path[len(self.local_base_dir):].lstrip('/')
        log.debug("Object key for %s = %s", absolute_local_path, key)
        return key

    def to_object_key(self, absolute_local_path) -> str:
        """Translate a local path to its object key.

        Returns:
            The key relative to the base directory, or ``""`` when the path
            is outside it
        """
        try:
            return self.object_key_or_raise(absolute_local_path)
        except PathOutOfScope:
            log.debug("Path outside %s ignored: %s", self.local_base_dir, absolute_local_path)
            return ""

    def to_local_path(self, relative_path) -> str:
        """Absolute local path of an object key.

        Raises:
            PathOutOfScope: If the key resolves outside the local base
                directory (e.g. ``../outside/a.jpg``)
        """
        path = normalize_path(f"{self.local_base_dir}/{str(relative_path).lstrip('/')}")
        if not self.is_in_scope(path):
            raise PathOutOfScope(relative_path, self.local_base_dir)
        return path

    def to_public_url(self, relative_path) -> str:
        """Public URL of an object key.

        Example:
            >>> PathTranslator('/srv/up', 'https://cdn.test/').to_public_url('/2024/a.jpg')
            'https://cdn.test/2024/a.jpg'
        """
        return f"{self.remote_base_url.rstrip('/')}/{str(relative_path).lstrip('/')}"
