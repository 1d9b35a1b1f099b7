"""
Output storage.

Decides where a batch run writes its artwork. Currently uses the local
filesystem. Songs whose titles slug to the same name are told apart by their
song number, so no two entries of a run share a file.
"""
import re
import threading
from pathlib import Path
from typing import Dict

from songart.domain.models import CatalogEntry
from songart.services.output_writer import thumbnail_path_for
from songart.services.slug import slugify

_WHITESPACE = re.compile(r"\s")


class OutputStorage:
    """
    Local output storage for one batch run.

    Files are organized as:
    - {output_root}/{slug}.png        - Full-size portrait
    - {output_root}/{slug}_small.png  - 400x400 thumbnail
    - {output_root}/{slug}-{number}.png when an earlier song already took {slug}
    """

    def __init__(self, output_root: str | Path):
        self.output_root = Path(output_root)
        self._claimed: Dict[str, int] = {}
        self._by_number: Dict[int, str] = {}
        self._lock = threading.Lock()

    def ensure_root(self) -> Path:
        """Create the run directory if needed."""
        self.output_root.mkdir(parents=True, exist_ok=True)
        return self.output_root

    def _stem(self, entry: CatalogEntry) -> str:
        # titles that slug to nothing (all punctuation, non-Latin script)
        return slugify(entry.title) or f"song-{entry.number}"

    def claim(self, entry: CatalogEntry) -> str:
        """
        Reserve a filename for `entry`.

        The first song to claim a slug keeps `<slug>.png`; later songs with
        the same slug get `<slug>-<number>.png`. Claiming again returns the
        same name.
        """
        with self._lock:
            if entry.number in self._by_number:
                return self._by_number[entry.number]
            stem = self._stem(entry)
            name = _WHITESPACE.sub("_", f"{stem}.png")
            suffix = f"-{entry.number}"
            while self._claimed.get(name, entry.number) != entry.number:
                name = _WHITESPACE.sub("_", f"{stem}{suffix}.png")
                suffix += f"-{entry.number}"
            self._claimed[name] = entry.number
            self._by_number[entry.number] = name
            return name

    def filename_for(self, entry: CatalogEntry) -> str:
        """`<slug>.png` for the entry's title (see `claim`)."""
        return self.claim(entry)

    def image_path(self, entry: CatalogEntry) -> Path:
        return self.output_root / self.filename_for(entry)

    def thumbnail_path(self, entry: CatalogEntry) -> Path:
        return thumbnail_path_for(self.image_path(entry))
