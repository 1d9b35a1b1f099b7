"""
Output writer: full-size portrait plus a square thumbnail.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Tuple

from PIL import Image, ImageOps

from songart.domain.errors import ArtifactWriteError

logger = logging.getLogger(__name__)

THUMBNAIL_HEIGHT = 400
THUMBNAIL_SIZE = (400, 400)
THUMBNAIL_OFFSET_X = 280
SMALL_SUFFIX = "_small"


def thumbnail_path_for(path: Path) -> Path:
    """`foo.png` -> `foo_small.png` in the same directory."""
    path = Path(path)
    return path.with_name(f"{path.stem}{SMALL_SUFFIX}{path.suffix}")


def make_thumbnail(img: Image.Image) -> Image.Image:
    """
    Scale to 400px high, take the 400x400 window starting 280px in,
    then normalise orientation.

    When the scaled image is too narrow for the offset, the window slides
    left so it stays inside the image.
    """
    width, height = img.size
    scaled_width = max(1, round(width * THUMBNAIL_HEIGHT / height))
    resized = img.resize((scaled_width, THUMBNAIL_HEIGHT), resample=Image.Resampling.LANCZOS)

    crop_w, crop_h = THUMBNAIL_SIZE
    left = min(THUMBNAIL_OFFSET_X, max(0, scaled_width - crop_w))
    cropped = resized.crop((left, 0, left + crop_w, crop_h))
    return ImageOps.exif_transpose(cropped)


def write_artifacts(img: Image.Image, destination: Path) -> Tuple[Path, Path]:
    """
    Write `img` as a PNG at `destination`, then derive `<stem>_small.png`
    from the file that was just written.

    Returns (full_path, thumbnail_path).
    """
    destination = Path(destination)
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        img.save(destination, format="PNG")
    except (OSError, ValueError) as exc:
        raise ArtifactWriteError(destination, str(exc)) from exc
    logger.info("[output] %s created (%sx%s)", destination, img.width, img.height)

    small_path = thumbnail_path_for(destination)
    try:
        with Image.open(destination) as written:
            written.load()
            thumb = make_thumbnail(written)
        thumb.save(small_path, format="PNG")
    except (OSError, ValueError) as exc:
        raise ArtifactWriteError(small_path, str(exc)) from exc
    logger.debug("[output] %s created", small_path)
    return destination, small_path
