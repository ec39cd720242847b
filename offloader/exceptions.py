"""
Exception hierarchy for the offloader.

Bootstrap and configuration errors are fatal; provider errors are
logged by the syncer and never reach the media-library collaborator.
"""


class OffloaderError(Exception):
    """Base class for all offloader errors."""


class StorageUnavailable(OffloaderError):
    """The credential file or its directory could not be written."""


class CredentialsUnavailable(OffloaderError):
    """Key material is missing or corrupt."""


class ProviderError(OffloaderError):
    """An object-store call failed.

    Args:
        operation: Name of the failed call (``put_object``, ``delete_object``)
        key: Object key involved
        detail: Provider error message
    """

    def __init__(self, operation, key, detail):
        self.operation = operation
        self.key = key
        self.detail = detail
        super().__init__(f"{operation} failed for {key}: {detail}")


class PathOutOfScope(OffloaderError):
    """A path does not live under the configured local base directory."""

    def __init__(self, path, base_dir):
        self.path = path
        self.base_dir = base_dir
        super().__init__(f"{path} is not under {base_dir}")
