"""
Exceptions raised while turning catalog entries into artwork.

Everything a render job can raise derives from `SongArtError`, so the batch
runner can contain failures at the job boundary.
"""
from pathlib import Path
from typing import Optional


class SongArtError(Exception):
    """Base class for all rendering errors."""


class CatalogError(SongArtError):
    """The catalog export could not be read or a record failed validation."""


class LayerResolutionError(SongArtError):
    """A required attribute is missing, so no layer path can be built."""

    def __init__(self, number: int, attribute: str):
        super().__init__(f"song #{number} has no {attribute}")
        self.number = number
        self.attribute = attribute


class MissingAssetError(SongArtError):
    """A resolved layer points at a file the asset library does not have."""

    def __init__(self, path: Path):
        super().__init__(f"layer asset not found: {path}")
        self.path = path


class AssetLoadError(SongArtError):
    """A layer or background file could not be decoded."""

    def __init__(self, path: Path, reason: Optional[str] = None):
        msg = f"could not load {path}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)
        self.path = path


class ArtifactWriteError(SongArtError):
    """The full-size image or its thumbnail could not be written."""

    def __init__(self, path: Path, reason: Optional[str] = None):
        msg = f"could not write {path}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)
        self.path = path


class RenderCancelled(SongArtError):
    """Compositing stopped early (batch cancelled or job deadline passed)."""
