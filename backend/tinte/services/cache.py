"""
Tinte Palette Cache
Keeps synthesized palettes keyed by image path, modification time and mode.
File-backed for the CLI, in-memory LRU for the HTTP service.
"""
import hashlib
import json
import os
import time
from abc import ABC, abstractmethod
from pathlib import Path
from threading import Lock
from typing import Any, Dict, Optional, Union

from loguru import logger

from ..utils.metrics import get_metrics
from .colors.model import rgb_from_hex
from .colors.palette import SEMANTIC_NAMES, Mode, Palette, SemanticColors


CACHE_VERSION = 3


def default_cache_dir() -> Path:
    """~/.cache/tinte/color-cache, honoring XDG_CACHE_HOME."""
    base = os.environ.get("XDG_CACHE_HOME") or os.path.join(os.path.expanduser("~"), ".cache")
    return Path(base) / "tinte" / "color-cache"


class CacheBackend(ABC):
    """Abstract base class for cache backends."""

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """Get value from cache."""
        pass

    @abstractmethod
    def set(self, key: str, value: Any) -> bool:
        """Store a JSON-serializable value."""
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Delete key from cache."""
        pass

    @abstractmethod
    def clear(self) -> bool:
        """Clear all cache entries."""
        pass

    def exists(self, key: str) -> bool:
        return self.get(key) is not None


class InMemoryLRUCache(CacheBackend):
    """Bounded in-memory cache evicting the least recently used entry."""

    def __init__(self, max_size: int = 256):
        self.max_size = max_size
        self._lock = Lock()
        self._cache: Dict[str, Any] = {}
        self._access_times: Dict[str, float] = {}
        self._clock = 0

    def _touch(self, key: str):
        # Logical clock; wall-clock reads can collide
        self._clock += 1
        self._access_times[key] = self._clock

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            if key in self._cache:
                self._touch(key)
                return self._cache[key]
            return None

    def set(self, key: str, value: Any) -> bool:
        with self._lock:
            if len(self._cache) >= self.max_size and key not in self._cache:
                self._evict_lru()
            self._cache[key] = value
            self._touch(key)
            return True

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._delete(key)

    def clear(self) -> bool:
        with self._lock:
            self._cache.clear()
            self._access_times.clear()
            return True

    def __len__(self) -> int:
        return len(self._cache)

    def _delete(self, key: str) -> bool:
        if key in self._cache:
            del self._cache[key]
            self._access_times.pop(key, None)
            return True
        return False

    def _evict_lru(self):
        """Evict least recently used entry. Caller holds the lock."""
        if not self._access_times:
            return

        lru_key = min(self._access_times.keys(), key=lambda k: self._access_times[k])
        self._delete(lru_key)


class FileCache(CacheBackend):
    """One JSON file per key under a cache directory."""

    def __init__(self, directory: Optional[Union[str, Path]] = None):
        self.directory = Path(directory) if directory else default_cache_dir()

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[Any]:
        path = self._path(key)
        if not path.is_file():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to read cache entry {path}: {e}")
            return None

    def set(self, key: str, value: Any) -> bool:
        tmp = None
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            path = self._path(key)
            tmp = path.with_name(path.name + ".tmp")
            tmp.write_text(json.dumps(value, indent=2), encoding="utf-8")
            os.replace(tmp, path)
            return True
        except OSError as e:
            logger.warning(f"Failed to write cache entry {key}: {e}")
            if tmp is not None:
                tmp.unlink(missing_ok=True)
            return False

    def delete(self, key: str) -> bool:
        try:
            self._path(key).unlink()
            return True
        except FileNotFoundError:
            return False

    def clear(self) -> bool:
        if not self.directory.is_dir():
            return True
        for entry in self.directory.glob("*.json"):
            try:
                entry.unlink()
            except OSError as e:
                logger.warning(f"Failed to remove cache entry {entry}: {e}")
                return False
        return True


def palette_to_dict(palette: Palette) -> Dict[str, Any]:
    """Serialize a palette into a versioned cache entry."""
    return {
        "version": CACHE_VERSION,
        "palette": palette.to_hex_list(),
        "semantic": {name: color.to_hex() for name, color in palette.semantic.as_dict().items()},
        "strategy": palette.strategy,
    }


def palette_from_dict(data: Any) -> Optional[Palette]:
    """Rebuild a palette from a cache entry; None for stale or malformed data."""
    if not isinstance(data, dict) or data.get("version") != CACHE_VERSION:
        return None

    try:
        colors = tuple(rgb_from_hex(h) for h in data["palette"])
        semantic = SemanticColors(**{name: rgb_from_hex(data["semantic"][name]) for name in SEMANTIC_NAMES})
        return Palette(colors=colors, semantic=semantic, strategy=str(data.get("strategy", "default")))
    except (KeyError, TypeError, ValueError):
        return None


class PaletteCache:
    """Palette lookups keyed by image identity and mode."""

    def __init__(self, backend: Optional[CacheBackend] = None):
        self.backend = backend if backend is not None else FileCache()

    @staticmethod
    def cache_key(path: Union[str, Path], mode: Mode) -> Optional[str]:
        """
        md5 of '<absolute path>-<mtime seconds>-<mode>'.

        Returns None when the file cannot be stat'ed.
        """
        try:
            resolved = Path(path).resolve()
            mtime = int(resolved.stat().st_mtime)
        except OSError as e:
            logger.debug(f"Cannot build cache key for {path}: {e}")
            return None

        raw = f"{resolved}-{mtime}-{mode.value}"
        return hashlib.md5(raw.encode("utf-8")).hexdigest()

    @staticmethod
    def content_key(data: bytes, mode: Mode) -> str:
        """md5 of the image bytes plus mode, for uploads with throwaway paths."""
        digest = hashlib.md5(data)
        digest.update(f"-{mode.value}".encode("utf-8"))
        return digest.hexdigest()

    def lookup(self, key: Optional[str]) -> Optional[Palette]:
        metrics = get_metrics()
        palette = palette_from_dict(self.backend.get(key)) if key else None

        if palette is None:
            metrics.increment_cache_miss()
            return None

        metrics.increment_cache_hit()
        logger.debug(f"Cache hit for {key}")
        return palette

    def store(self, key: Optional[str], palette: Palette) -> bool:
        if key is None:
            return False
        start_time = time.time()
        stored = self.backend.set(key, palette_to_dict(palette))
        get_metrics().record_timing("cache_write", (time.time() - start_time) * 1000)
        return stored

    def get(self, path: Union[str, Path], mode: Mode) -> Optional[Palette]:
        return self.lookup(self.cache_key(path, mode))

    def put(self, path: Union[str, Path], mode: Mode, palette: Palette) -> bool:
        return self.store(self.cache_key(path, mode), palette)
