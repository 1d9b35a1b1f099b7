"""
Asset library abstraction.

Layer resolution only needs two things from the filesystem: the full path of
an asset name, and whether that asset exists. Keeping both behind this small
interface lets tests swap in an in-memory library.
"""
from pathlib import Path
from typing import Iterable, Optional, Protocol, Set


class AssetLibrary(Protocol):
    root: Path

    def path(self, name: str) -> Path:
        ...

    def exists(self, name: str) -> bool:
        ...


class FileSystemAssets:
    """
    Layer assets stored as PNG files in a single directory.

    Naming conventions:
    - mood_<name>.png, topic_<name>.png, instrument_<name>.png
    - topic_<name><weekday>.png, topic_<name>-uke.png
    - beard_<name>.png / beard_na.png
    - per-location files named by the location tag's image
    """

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def path(self, name: str) -> Path:
        return self.root / name

    def exists(self, name: str) -> bool:
        return self.path(name).is_file()

    def __repr__(self) -> str:
        return f"FileSystemAssets({str(self.root)!r})"


class InMemoryAssets:
    """An asset library whose contents are a fixed set of names."""

    def __init__(self, names: Optional[Iterable[str]] = None, root: str | Path = "/assets"):
        self.root = Path(root)
        self.names: Set[str] = set(names or [])

    def path(self, name: str) -> Path:
        return self.root / name

    def exists(self, name: str) -> bool:
        return name in self.names
