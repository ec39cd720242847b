"""
Media Offloader — mirror a local media library into S3.

Uploads media files and their resized variants to an S3-compatible
object store, rewrites public URLs to S3/CloudFront, and reclaims
local storage once files are offloaded.
"""

__version__ = "1.0.0"
