import logging
import os
from collections import deque

import pygame

from settings import ASSET_DIR, ASTEROID_IMAGE, INTRO_IMAGE, WATERMARK_IMAGE

logger = logging.getLogger(__name__)

DEFAULT_ASSETS = {
    "watermark": WATERMARK_IMAGE,
    "intro": INTRO_IMAGE,
    "asteroid": ASTEROID_IMAGE,
}


class ImageCache:
    """Caching for scaled images.

    Keys use id() of the source image, so only long-lived images (loaded
    assets) belong in here.
    """

    def __init__(self, max_cache_size=100):
        self.scale_cache = {}
        self.max_cache_size = max_cache_size
        self.cache_hits = 0
        self.cache_misses = 0

    def get_scaled_image(self, base_image, size):
        """Get image scaled to an exact (width, height) from cache or create new one"""
        size = (max(1, int(size[0])), max(1, int(size[1])))
        cache_key = (id(base_image), size)

        if cache_key in self.scale_cache:
            self.cache_hits += 1
            return self.scale_cache[cache_key]

        self.cache_misses += 1
        if len(self.scale_cache) > self.max_cache_size:
            self.scale_cache.clear()

        if base_image.get_bitsize() in (24, 32):
            scaled = pygame.transform.smoothscale(base_image, size)
        else:
            # palette images (gif) only support plain scaling
            scaled = pygame.transform.scale(base_image, size)
        self.scale_cache[cache_key] = scaled
        return scaled

    def get_cache_stats(self):
        total_requests = self.cache_hits + self.cache_misses
        hit_rate = (self.cache_hits / total_requests * 100) if total_requests > 0 else 0
        return {
            'hits': self.cache_hits,
            'misses': self.cache_misses,
            'hit_rate': hit_rate,
            'total_entries': len(self.scale_cache)
        }


# Global image cache instance
image_cache = ImageCache()


class Asset:
    """One image resource. Rendering code only asks `ready` and `natural_size`."""

    def __init__(self, name, path):
        self.name = name
        self.path = path
        self.image = None
        self.settled = False

    @property
    def ready(self):
        return self.image is not None and self.image.get_width() != 0

    @property
    def natural_size(self):
        if not self.ready:
            return (0, 0)
        return self.image.get_size()

    def load(self):
        """Load the image; a failure leaves the asset settled but not ready"""
        try:
            image = pygame.image.load(self.path)
            # convert_alpha needs a display mode, headless loads keep the raw surface
            if pygame.display.get_init() and pygame.display.get_surface() is not None:
                image = image.convert_alpha()
            self.image = image
            logger.info("Loaded %s image from %s %s", self.name, self.path, image.get_size())
        except (pygame.error, OSError) as e:
            self.image = None
            logger.warning("Could not load %s image from %s: %s", self.name, self.path, e)
        finally:
            self.settled = True
        return self.ready


class AssetLoader:
    """Settles the known set of images one at a time.

    `poll()` loads the next pending image and notifies `on_settled(asset)`;
    the game polls once per frame while in its loading state.
    """

    def __init__(self, sources=None, asset_dir=ASSET_DIR, on_settled=None):
        sources = DEFAULT_ASSETS if sources is None else sources
        self.assets = {
            name: Asset(name, os.path.join(asset_dir, filename))
            for name, filename in sources.items()
        }
        self.on_settled = on_settled
        self._pending = deque(self.assets.values())

    @property
    def total(self):
        return len(self.assets)

    @property
    def done(self):
        return not self._pending

    def get(self, name):
        return self.assets.get(name)

    def is_ready(self, name):
        asset = self.assets.get(name)
        return asset is not None and asset.ready

    def poll(self):
        if not self._pending:
            return None
        asset = self._pending.popleft()
        asset.load()
        if self.on_settled:
            self.on_settled(asset)
        return asset
