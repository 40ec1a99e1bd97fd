# navtemplate/cached_image.py
import base64
from dataclasses import dataclass
from typing import Any, Dict, Optional, Set

from .base import Key, Widget, render_attrs
from .image_cache import ImageCache, image_mime_type

WEB_FOLDER = "web"
ICON_FOLDER = "projecticon"


@dataclass(frozen=True)
class ImageSource:
    """Where an image comes from: ``kind`` is ``"url"`` or ``"local"``."""
    kind: str
    value: str

    @classmethod
    def url(cls, url: str) -> 'ImageSource':
        return cls("url", url)

    @classmethod
    def local(cls, filename: str) -> 'ImageSource':
        return cls("local", filename)

    @property
    def source_id(self) -> str:
        return f"{self.kind}-{self.value}"


class CachedAsyncImage(Widget):
    """
    An image loaded through the ImageCache.

    Shows a progress placeholder until `load()` has produced the bytes. When
    the source changes, the image is cleared and must be loaded again; a load
    that finishes after the source changed is discarded.
    """
    def __init__(self, source: ImageSource, width: float, height: float,
                 cache: ImageCache, key: Optional[Key] = None):
        super().__init__(key=key)
        self._source = source
        self.width = width
        self.height = height
        self.cache = cache
        self.image: Optional[bytes] = None
        self._loaded_for: Optional[str] = None

    @property
    def source(self) -> ImageSource:
        return self._source

    @source.setter
    def source(self, source: ImageSource):
        if source.source_id != self._source.source_id:
            self.image = None
            self._loaded_for = None
        self._source = source

    @property
    def source_id(self) -> str:
        return self._source.source_id

    @property
    def is_loaded(self) -> bool:
        return self.image is not None and self._loaded_for == self.source_id

    async def load(self) -> Optional[bytes]:
        source = self._source
        if source.kind == "url":
            image = await self.cache.get_image_from_web(WEB_FOLDER, source.value)
        else:
            image = await self.cache.get_local_image(ICON_FOLDER, source.value)
        if source.source_id != self.source_id:
            return None
        self.image = image
        self._loaded_for = source.source_id
        return image

    def render_props(self) -> Dict[str, Any]:
        return {"source_id": self.source_id, "width": self.width,
                "height": self.height, "loaded": self.is_loaded}

    def get_required_css_classes(self) -> Set[str]:
        return {"nt-image", "nt-progress"}

    def render(self) -> str:
        size = f"width: {self.width}px; height: {self.height}px;"
        if not self.is_loaded:
            attrs = render_attrs({"class": "nt-progress", "data-id": str(self.id),
                                  "data-source": self.source_id, "style": size})
            return f"<div{attrs}></div>"
        encoded = base64.b64encode(self.image).decode("ascii")
        attrs = render_attrs({
            "class": "nt-image",
            "data-id": str(self.id),
            "src": f"data:{image_mime_type(self.image)};base64,{encoded}",
            "style": f"{size} object-fit: contain;",
            "alt": "",
        })
        return f"<img{attrs}>"
