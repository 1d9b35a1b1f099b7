"""Render a small deterministic fixture catalog with placeholder layer art.

Usage:
    python -m songart.scripts.render_fixture_catalog [--out DIR]

Outputs go to `songart/tests/artifacts/fixture_run/` by default and are gitignored.

Placeholder layers are simple Pillow drawings (a coloured band per layer kind)
generated on first run, so the whole pipeline can be exercised without the
real artwork.
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import List, Optional

from PIL import Image, ImageDraw

from songart.domain.models import CANVAS_SIZE, BatchReport
from songart.services.assets import FileSystemAssets
from songart.services.batch import BatchRenderer
from songart.services.catalog import load_catalog
from songart.storage.file_storage import OutputStorage

ROOT = Path(__file__).resolve().parents[1]
ARTIFACTS_DIR = ROOT / "tests" / "artifacts" / "fixture_run"

LOG = logging.getLogger("render_fixture_catalog")

FIXTURE_SONGS = [
    {
        "number": 1,
        "title": "Test Song",
        "date": "2015-05-04",
        "location": {"name": "Kitchen", "image": "location_kitchen.png"},
        "topic": {"name": "Poetic"},
        "mood": {"name": "Happy"},
        "mainInstrument": {"name": "guitar"},
        "secondaryInstrument": {"name": "uke"},
        "beard": None,
    },
    {
        "number": 2,
        "title": "Synth City!",
        "date": "2015-05-05",
        "location": {"name": "Studio", "image": "location_studio.png"},
        "topic": {"name": "Love"},
        "mood": {"name": "Sad"},
        "mainInstrument": {"name": "vocals"},
        "secondaryInstrument": {"name": "synths"},
        "beard": {"name": "Full/Grown"},
    },
    {
        "number": 3,
        "title": "Ukulele   Morning",
        "date": "2015-05-06",
        "location": {"name": "Kitchen", "image": "location_kitchen.png"},
        "topic": {"name": "Love"},
        "mood": {"name": "Happy"},
        "mainInstrument": {"name": "vocals"},
        "secondaryInstrument": {"name": "baritone uke"},
        "beard": {"name": "Stubble"},
    },
]

# (name, colour, vertical band) -- bands keep each layer visible in the result
FIXTURE_LAYERS = [
    ("location_kitchen.png", (180, 120, 60, 255), (0.70, 1.00)),
    ("location_studio.png", (60, 60, 90, 255), (0.70, 1.00)),
    ("topic_poetic2.png", (90, 160, 200, 200), (0.00, 0.15)),
    ("topic_love.png", (220, 80, 120, 200), (0.00, 0.15)),
    ("topic_love-uke.png", (240, 160, 60, 200), (0.00, 0.15)),
    ("instrument_guitar.png", (120, 80, 40, 255), (0.45, 0.70)),
    ("instrument_synths.png", (40, 200, 160, 255), (0.45, 0.70)),
    ("instrument_baritoneuke.png", (200, 170, 90, 255), (0.45, 0.70)),
    ("instrument_vocals_no_hands.png", (250, 220, 200, 255), (0.30, 0.45)),
    ("mood_happy.png", (255, 230, 0, 180), (0.15, 0.30)),
    ("mood_sad.png", (80, 100, 200, 180), (0.15, 0.30)),
    ("beard_na.png", (0, 0, 0, 0), (0.40, 0.45)),
    ("beard_fullgrown.png", (90, 50, 20, 255), (0.40, 0.45)),
    ("beard_stubble.png", (60, 40, 30, 160), (0.40, 0.45)),
]


def ensure_fixture_layers(layers_dir: Path) -> List[Path]:
    layers_dir.mkdir(parents=True, exist_ok=True)
    width, height = CANVAS_SIZE
    written = []
    for name, colour, (top, bottom) in FIXTURE_LAYERS:
        p = layers_dir / name
        if p.exists():
            continue
        img = Image.new("RGBA", (width, height), (0, 0, 0, 0))
        d = ImageDraw.Draw(img)
        d.rectangle((0, int(height * top), width, int(height * bottom)), fill=colour)
        img.save(p, format="PNG")
        written.append(p)
        LOG.debug("Generated fixture layer %s", p)
    return written


def write_fixture_catalog(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(FIXTURE_SONGS, indent=2), encoding="utf-8")
    return path


def run_fixture(out_dir: Path) -> BatchReport:
    layers_dir = out_dir / "layers"
    ensure_fixture_layers(layers_dir)
    catalog = write_fixture_catalog(out_dir / "catalog.json")
    renderer = BatchRenderer(
        assets=FileSystemAssets(layers_dir),
        storage=OutputStorage(out_dir / "portraits"),
        delay_seconds=0,
    )
    return renderer.run(load_catalog(catalog))


def main(argv: Optional[list[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO)
    parser = argparse.ArgumentParser(description="Render the fixture catalog with placeholder layers.")
    parser.add_argument("--out", default=str(ARTIFACTS_DIR))
    args = parser.parse_args(argv)

    out_dir = Path(args.out)
    report = run_fixture(out_dir)
    LOG.info("Rendered %s/%s fixture songs", report.succeeded, report.attempted)
    print(f"Portraits: {out_dir / 'portraits'}")
    return 0 if report.failed == 0 else 1


if __name__ == "__main__":
    raise SystemExit(main())
