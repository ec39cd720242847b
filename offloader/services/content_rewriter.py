"""
Rewriting of local media URLs to remote ones.

The shipped :class:`SubstringRewriter` is a blind string replace across
whatever it is given; it does not parse URLs or HTML, so URLs inside
attributes, text and comments are all rewritten alike.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

REWRITE_BLOCK_KINDS = ("core/image", "core/gallery", "core/cover")


class ContentRewriter(ABC):
    """Interface for replacing local base URLs with remote ones."""

    @abstractmethod
    def rewrite_url(self, url: str) -> str:
        pass

    @abstractmethod
    def rewrite_html_fragment(self, html: str) -> str:
        pass

    def rewrite_source_set(self, sources: Sequence[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Rewrite the ``url`` of each srcset entry.

        Returns a new list of new dicts; the caller's sequence is not
        mutated. Order and every other field are preserved, and entries
        with an empty ``url`` are copied unchanged.
        """
        rewritten = []
        for source in sources or []:
            entry = dict(source)
            if entry.get("url"):
                entry["url"] = self.rewrite_url(entry["url"])
            rewritten.append(entry)
        return rewritten

    def rewrite_block_fragment(self, html: str, block_kind: Optional[str]) -> str:
        """Rewrite a rendered block only when it is an image-bearing kind."""
        if block_kind and block_kind in REWRITE_BLOCK_KINDS:
            return self.rewrite_html_fragment(html)
        return html

    def rewrite_image_src(self, image):
        """Rewrite the URL of an ``(url, width, height, is_intermediate)`` entry.

        Returns:
            A new tuple with the URL rewritten, or *image* unchanged when it
            is empty or has no URL
        """
        if not image or isinstance(image, (str, bytes)) or not image[0]:
            return image
        return (self.rewrite_url(image[0]),) + tuple(image[1:])


class SubstringRewriter(ContentRewriter):
    """Blind substring substitution of the local base URL.

    Args:
        local_base_url: Base URL local media is served from
        remote_base_url: Base URL of the bucket or CDN
    """

    def __init__(self, local_base_url, remote_base_url):
        self.local_base_url = local_base_url or ""
        self.remote_base_url = remote_base_url or ""

    @classmethod
    def from_config(cls, config):
        return cls(config.local_base_url, config.remote_base_url)

    def _replace(self, text):
        if not text or not self.local_base_url:
            return text
        return text.replace(self.local_base_url, self.remote_base_url)

    def rewrite_url(self, url: str) -> str:
        return self._replace(url)

    def rewrite_html_fragment(self, html: str) -> str:
        return self._replace(html)
