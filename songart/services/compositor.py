"""
Compositor: background + ordered layers -> one flattened RGBA image.

Layers are painted strictly in the order given, each one anchored at the
top-left corner of the canvas.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable, Optional

from PIL import Image, UnidentifiedImageError

from songart.domain.errors import AssetLoadError, RenderCancelled
from songart.domain.models import BackgroundSpec, ImageFile, SolidColor

logger = logging.getLogger(__name__)


def load_rgba(path: Path) -> Image.Image:
    """Open `path` fully into memory as RGBA."""
    try:
        with Image.open(path) as img:
            img.load()
            return img.convert("RGBA")
    except (OSError, UnidentifiedImageError) as exc:
        raise AssetLoadError(Path(path), str(exc)) from exc


def render_background(spec: BackgroundSpec) -> Image.Image:
    if isinstance(spec, SolidColor):
        return Image.new("RGBA", spec.size, spec.css)
    if isinstance(spec, ImageFile):
        return load_rgba(spec.path)
    raise TypeError(f"unsupported background spec: {spec!r}")


def _fit_to_canvas(layer: Image.Image, size: tuple[int, int]) -> Image.Image:
    if layer.size == size:
        return layer
    # crop() pads with transparent pixels when the layer is smaller
    return layer.crop((0, 0, size[0], size[1]))


def composite_layers(
    base: Image.Image,
    layers: Iterable[Path],
    should_stop: Optional[Callable[[], bool]] = None,
) -> Image.Image:
    """
    Fold `layers` onto `base` one at a time.

    `should_stop` is polled before each layer; when it returns True the
    render is abandoned with RenderCancelled.
    """
    buffer = base.convert("RGBA")
    for path in layers:
        if should_stop is not None and should_stop():
            raise RenderCancelled(f"stopped before {Path(path).name}")
        layer = _fit_to_canvas(load_rgba(path), buffer.size)
        buffer = Image.alpha_composite(buffer, layer)
    return buffer


def render_composite(
    background: BackgroundSpec,
    layers: Iterable[Path],
    should_stop: Optional[Callable[[], bool]] = None,
) -> Image.Image:
    """Render the background, then composite every layer onto it."""
    base = render_background(background)
    return composite_layers(base, layers, should_stop=should_stop)
