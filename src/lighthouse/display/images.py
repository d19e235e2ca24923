from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Optional, Tuple

import pygame

from lighthouse.display.geometry import EMPTY_IMAGE, ImageFormat, Offset, scale_to_fit
from lighthouse.paths import expand_path

logger = logging.getLogger(__name__)

_IMAGE_CACHE_LIMIT = 64
_IMAGE_CACHE: Dict[Tuple[str, float, Tuple[int, int]], pygame.Surface] = {}


def clear_image_cache() -> None:
    _IMAGE_CACHE.clear()


def _rescale(image: pygame.Surface, size: Tuple[int, int]) -> pygame.Surface:
    # smoothscale only handles 24 and 32 bit surfaces.
    if image.get_bitsize() in (24, 32):
        return pygame.transform.smoothscale(image, size)
    return pygame.transform.scale(image, size)


def _load_scaled(path: Path, mtime: float, box: Tuple[int, int]) -> Optional[pygame.Surface]:
    key = (str(path), mtime, box)
    cached = _IMAGE_CACHE.get(key)
    if cached is not None:
        return cached
    try:
        image = pygame.image.load(str(path))
    except (pygame.error, OSError) as exc:
        logger.warning("Cannot decode image file %s: %s", path, exc)
        return None
    if pygame.display.get_surface() is not None:
        image = image.convert_alpha()

    width, height = image.get_size()
    if width == 0 or height == 0:
        logger.warning("Image file %s is empty", path)
        return None
    target = scale_to_fit(width, height, *box)
    if target != (width, height):
        target = (max(1, target[0]), max(1, target[1]))
        image = _rescale(image, target)
        logger.debug("Resizing the image to %ix%i", target[0], target[1])

    if len(_IMAGE_CACHE) >= _IMAGE_CACHE_LIMIT:
        _IMAGE_CACHE.clear()
    _IMAGE_CACHE[key] = image
    return image


def draw_image(canvas, raw_path: str, offset: Offset, max_width: int, max_height: int) -> ImageFormat:
    """Draw the image at ``(offset.x, offset.image_y)`` shrunk to fit the box.

    Returns the drawn size, or ``ImageFormat(0, 0)`` when nothing was drawn.
    """
    path = Path(expand_path(raw_path))
    if not os.access(path, os.R_OK) or not path.is_file():
        logger.warning("Cannot open image file %s", path)
        return EMPTY_IMAGE
    if max_width <= 0 or max_height <= 0:
        logger.debug("No room left for image %s", path)
        return EMPTY_IMAGE

    try:
        mtime = path.stat().st_mtime
    except OSError as exc:
        logger.warning("Cannot open image file %s: %s", path, exc)
        return EMPTY_IMAGE
    image = _load_scaled(path, mtime, (max_width, max_height))
    if image is None:
        return EMPTY_IMAGE

    logger.debug("Drawing the picture in x:%i, y:%i", offset.x, offset.image_y)
    canvas.blit(image, offset.x, offset.image_y)
    width, height = image.get_size()
    return ImageFormat(width, height)
