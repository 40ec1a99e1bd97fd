# navtemplate/image_cache.py
"""
Two-tier image cache: an in-memory LRU in front of the shared defaults.

Images are kept as raw encoded bytes (PNG, JPEG, GIF, WebP). Web images are
downloaded on a miss; local images are read from the project icon folder.
"""
import asyncio
import logging
import urllib.error
import urllib.request
from collections import OrderedDict
from pathlib import Path
from typing import Callable, Iterable, Optional
from urllib.parse import urlparse

from .defaults import DefaultsStore

logger = logging.getLogger(__name__)

KEY_PREFIX = "image_"
DOWNLOAD_TIMEOUT = 15

_SIGNATURES = (
    b"\x89PNG\r\n\x1a\n",
    b"\xff\xd8\xff",
    b"GIF87a",
    b"GIF89a",
)


def looks_like_image(data: Optional[bytes]) -> bool:
    """True if ``data`` starts with a known image signature."""
    if not data:
        return False
    if data.startswith(_SIGNATURES):
        return True
    return data[:4] == b"RIFF" and data[8:12] == b"WEBP"


def image_mime_type(data: bytes) -> str:
    if data.startswith(b"\x89PNG"):
        return "image/png"
    if data.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if data.startswith(b"GIF8"):
        return "image/gif"
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    return "application/octet-stream"


def urllib_fetcher(url: str) -> bytes:
    """Blocking download used by default; runs in a worker thread."""
    with urllib.request.urlopen(url, timeout=DOWNLOAD_TIMEOUT) as response:
        return response.read()


class ImageCache:
    """
    :param store: Shared defaults used as the persistent tier.
    :param icon_dir: Folder searched by `get_local_image`.
    :param memory_limit: Maximum number of images kept in memory.
    :param fetcher: Blocking ``url -> bytes`` download function.
    """
    def __init__(self, store: DefaultsStore, icon_dir=None, memory_limit: int = 100,
                 fetcher: Callable[[str], bytes] = urllib_fetcher):
        self.store = store
        self.icon_dir = Path(icon_dir).expanduser() if icon_dir else None
        self.memory_limit = memory_limit
        self.fetcher = fetcher
        self._memory: "OrderedDict[str, bytes]" = OrderedDict()

    @staticmethod
    def make_cache_key(folder: str, filename: str) -> str:
        return f"{KEY_PREFIX}{folder}_{filename}"

    # --- memory tier ---
    def _memory_get(self, key: str) -> Optional[bytes]:
        data = self._memory.get(key)
        if data is not None:
            self._memory.move_to_end(key)
        return data

    def _memory_set(self, key: str, data: bytes) -> None:
        self._memory[key] = data
        self._memory.move_to_end(key)
        while len(self._memory) > self.memory_limit:
            self._memory.popitem(last=False)

    def in_memory(self, folder: str, filename: str) -> bool:
        return self.make_cache_key(folder, filename) in self._memory

    # --- public API ---
    async def get_image_from_web(self, folder: str, url: str) -> Optional[bytes]:
        """Return the image for ``url`` from memory, the defaults, or the network."""
        logger.debug("Attempting to load image from: %s", url)
        cached = self.get_image_from_defaults(folder, url)
        if cached is not None:
            return cached
        return await self._download_and_cache(folder, url)

    async def get_local_image(self, folder: str, filename: str) -> Optional[bytes]:
        """Return a project icon from memory, the defaults, or the icon folder."""
        cached = self.get_image_from_defaults(folder, filename)
        if cached is not None:
            return cached
        path = self._icon_path(filename)
        if path is None:
            return None
        try:
            data = await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            logger.error("Cannot read icon %s - Error: %s", path, e)
            return None
        if not looks_like_image(data):
            return None
        self._store(folder, filename, data)
        return data

    def get_image_from_defaults(self, folder: str, key: str) -> Optional[bytes]:
        """Memory then defaults; never touches disk folders or the network."""
        cache_key = self.make_cache_key(folder, key)
        data = self._memory_get(cache_key)
        if data is not None:
            return data
        data = self.store.get_bytes(cache_key)
        if data is not None:
            self._memory_set(cache_key, data)
        return data

    def remove_image(self, folder: str, filename: str) -> None:
        cache_key = self.make_cache_key(folder, filename)
        self._memory.pop(cache_key, None)
        self.store.remove(cache_key)

    def remove_unused_images(self, folder: str, currently_used_filenames: Iterable[str]) -> int:
        """
        Drop cached images of ``folder`` whose filename is not in use anymore.

        :return: Number of images removed.
        """
        used = set(currently_used_filenames)
        prefix = self.make_cache_key(folder, "")
        stale = [key for key in self.store.keys()
                 if key.startswith(prefix) and key[len(prefix):] not in used]
        for key in stale:
            logger.info("Removing unused image from %s: %s", folder, key[len(prefix):])
            self._memory.pop(key, None)
        self.store.remove_many(stale)
        return len(stale)

    # --- internals ---
    def _icon_path(self, filename: str) -> Optional[Path]:
        if self.icon_dir is None:
            return None
        path = (self.icon_dir / filename).resolve()
        if self.icon_dir.resolve() not in path.parents:
            logger.warning("Refusing icon path outside the icon folder: %s", filename)
            return None
        return path if path.is_file() else None

    def _store(self, folder: str, filename: str, data: bytes) -> None:
        cache_key = self.make_cache_key(folder, filename)
        self._memory_set(cache_key, data)
        self.store.set_bytes(cache_key, data)

    async def _download_and_cache(self, folder: str, url: str) -> Optional[bytes]:
        if urlparse(url).scheme not in ("http", "https", "file"):
            return None
        try:
            data = await asyncio.to_thread(self.fetcher, url)
        except (urllib.error.URLError, OSError, ValueError) as e:
            logger.error("Error downloading image %s - Error: %s", url, e)
            return None
        if not looks_like_image(data):
            logger.warning("Downloaded data from %s is not an image", url)
            return None
        self._store(folder, url, data)
        return data
