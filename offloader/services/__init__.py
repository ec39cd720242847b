"""
Offload services.

Provides modular service packages:
- crypto/ - credential encryption
- aws/ - S3 operations and the object syncer
- path_translator, content_rewriter, directory_reclaimer - URL/path logic
- media_lifecycle - entry points for media-library events
"""
