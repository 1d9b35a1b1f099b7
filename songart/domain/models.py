"""
Core domain models for the song portrait generator.
These are framework-agnostic and can be used across all services.
"""
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple, Union


CANVAS_SIZE: Tuple[int, int] = (1792, 768)


class JobStatus(str, Enum):
    """Outcome of a single render job."""
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class Tag:
    """
    A categorical attribute attached to a song.

    Locations, topics, moods, instruments, beards and keys are all tags.
    `image` is the configured asset filename (only locations rely on it).
    """
    name: str
    image: Optional[str] = None


@dataclass(frozen=True)
class CatalogEntry:
    """
    A fully attributed song, as handed over by the persistence layer.

    Every tag is already resolved; the renderer never looks anything up.
    """
    number: int
    title: str
    date: date
    location: Optional[Tag] = None
    topic: Optional[Tag] = None
    mood: Optional[Tag] = None
    main_instrument: Optional[Tag] = None
    secondary_instrument: Optional[Tag] = None
    beard: Optional[Tag] = None
    key: Optional[Tag] = None
    tempo: Optional[float] = None
    length: Optional[float] = None


@dataclass(frozen=True)
class LayerSpec:
    """Asset paths in back-to-front paint order."""
    layers: Tuple[Path, ...] = ()

    def __iter__(self):
        return iter(self.layers)

    def __len__(self) -> int:
        return len(self.layers)

    def __getitem__(self, index):
        return self.layers[index]

    @property
    def names(self) -> List[str]:
        return [p.name for p in self.layers]


@dataclass(frozen=True)
class SolidColor:
    """A procedurally filled canvas."""
    hue: float
    saturation: float
    lightness: float
    size: Tuple[int, int] = CANVAS_SIZE

    @property
    def css(self) -> str:
        return f"hsl({self.hue % 360:g}, {self.saturation:g}%, {self.lightness:g}%)"


@dataclass(frozen=True)
class ImageFile:
    """A pre-rendered background image."""
    path: Path


BackgroundSpec = Union[SolidColor, ImageFile]


@dataclass
class RenderJob:
    """One unit of work: everything needed to render a single entry."""
    entry: CatalogEntry
    layers: LayerSpec
    background: BackgroundSpec
    output_path: Path


@dataclass
class RenderResult:
    """What happened to a single entry during a batch run."""
    number: int
    title: str
    status: JobStatus
    output_path: Optional[Path] = None
    image_path: Optional[Path] = None
    thumbnail_path: Optional[Path] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == JobStatus.SUCCEEDED


@dataclass
class BatchReport:
    """Results of a batch run, in submission order."""
    results: List[RenderResult] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.status == JobStatus.SUCCEEDED)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if r.status == JobStatus.FAILED)

    @property
    def cancelled(self) -> int:
        return sum(1 for r in self.results if r.status == JobStatus.CANCELLED)

    @property
    def attempted(self) -> int:
        return len(self.results)
