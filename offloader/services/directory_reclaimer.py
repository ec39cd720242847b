"""
Removal of empty directories left behind by offloaded files.
"""
import os
import threading

from ..utils.logger import get_logger
from .path_translator import normalize_path

log = get_logger(__name__)

LOCK_STRIPES = 64


class DirectoryReclaimer:
    """Walks upward from a deleted file removing empty ancestors.

    The base directory itself is never removed. Work on one directory is
    serialized by a lock picked from a fixed pool by the directory's hash,
    so two deletions in the same folder cannot race on the emptiness check
    and the number of locks stays constant.

    Args:
        local_base_dir: Root directory of the local media library
    """

    def __init__(self, local_base_dir):
        self.local_base_dir = normalize_path(local_base_dir)
        self._locks = tuple(threading.Lock() for _ in range(LOCK_STRIPES))

    def _lock_for(self, directory):
        return self._locks[hash(directory) % LOCK_STRIPES]

    def _is_inside_base(self, directory):
        return bool(self.local_base_dir) and directory.startswith(self.local_base_dir + '/')

    def reclaim(self, path):
        """Remove now-empty directories above *path*.

        Args:
            path: The deleted file (or directory) to start from

        Returns:
            List of removed directories, deepest first
        """
        removed = []
        directory = normalize_path(os.path.dirname(normalize_path(path)))

        while directory and directory != self.local_base_dir:
            if not self._is_inside_base(directory):
                break

            with self._lock_for(directory):
                if not os.path.isdir(directory):
                    break
                if os.listdir(directory):
                    break
                try:
                    os.rmdir(directory)
                except OSError as e:
                    # Another writer added a file between the check and rmdir
                    log.debug("Could not remove %s: %s", directory, e)
                    break

            log.info("Removed empty directory: %s", directory)
            removed.append(directory)

            parent = normalize_path(os.path.dirname(directory))
            if parent == directory:
                break
            directory = parent

        return removed
