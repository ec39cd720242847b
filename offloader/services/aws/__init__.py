"""
S3 synchronization service package.

- :mod:`operations` — primitive S3 put/delete helpers
- :mod:`syncer`     — upload/delete with local cleanup and batching
"""
from .operations import S3Operations
from .syncer import ObjectSyncer, detect_content_type

__all__ = [
    'S3Operations',
    'ObjectSyncer',
    'detect_content_type',
]
