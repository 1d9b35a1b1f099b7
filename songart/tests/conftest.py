import sys
from pathlib import Path

import pytest
from PIL import Image

# Ensure the repository root is on sys.path for direct pytest runs
REPO_ROOT = Path(__file__).resolve().parents[2]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from songart.domain.models import CANVAS_SIZE, CatalogEntry, Tag  # noqa: E402


def make_layer(path: Path, color=(255, 0, 0, 255), size=CANVAS_SIZE, box=None) -> Path:
    """Write a transparent PNG with an optional filled box."""
    path.parent.mkdir(parents=True, exist_ok=True)
    img = Image.new("RGBA", size, (0, 0, 0, 0))
    if box is None:
        img.paste(color, (0, 0, size[0], size[1]))
    else:
        img.paste(color, box)
    img.save(path, format="PNG")
    return path


@pytest.fixture
def entry_factory():
    def _make(**overrides) -> CatalogEntry:
        from datetime import date

        fields = {
            "number": 1,
            "title": "Test Song",
            "date": date(2015, 5, 4),
            "location": Tag(name="Kitchen", image="location_kitchen.png"),
            "topic": Tag(name="Love"),
            "mood": Tag(name="Happy"),
            "main_instrument": Tag(name="guitar"),
            "secondary_instrument": None,
            "beard": None,
        }
        fields.update(overrides)
        return CatalogEntry(**fields)

    return _make
