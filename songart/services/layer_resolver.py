"""
Layer resolution: which pre-drawn assets make up a song's portrait.

The stack is always, back to front:
    location, topic, instrument(s), mood, beard
"""
from __future__ import annotations

import logging
import re
from datetime import date
from pathlib import Path
from typing import List, Optional

from songart.domain.errors import LayerResolutionError, MissingAssetError
from songart.domain.models import CatalogEntry, LayerSpec, Tag
from songart.services.assets import AssetLibrary

logger = logging.getLogger(__name__)

POETIC_TOPIC = "Poetic"
UKULELE_NAMES = ("uke", "baritone uke")
SYNTHS = "synths"
VOCALS = "vocals"
VOCALS_NO_HANDS = "instrument_vocals_no_hands.png"
NO_BEARD = "beard_na.png"

_WHITESPACE = re.compile(r"\s")


def _compact(name: str) -> str:
    return _WHITESPACE.sub("", name.lower())


def _require(entry: CatalogEntry, attribute: str) -> Tag:
    tag = getattr(entry, attribute)
    if tag is None or not tag.name:
        raise LayerResolutionError(entry.number, attribute)
    return tag


def weekday_variant(day: date) -> int:
    """Sunday=1 .. Saturday=7 (Monday is 2)."""
    return day.isoweekday() % 7 + 1


def _secondary(entry: CatalogEntry) -> Optional[Tag]:
    secondary = entry.secondary_instrument
    if secondary is None or not secondary.name:
        return None
    return secondary


def _topic_layer(entry: CatalogEntry, assets: AssetLibrary) -> str:
    topic = _require(entry, "topic")
    basic = _compact(topic.name)
    if topic.name == POETIC_TOPIC:
        return f"topic_{basic}{weekday_variant(entry.date)}.png"

    secondary = _secondary(entry)
    if secondary is not None and secondary.name in UKULELE_NAMES:
        uke_variant = f"topic_{basic}-uke.png"
        if assets.exists(uke_variant):
            return uke_variant
    return f"topic_{basic}.png"


def _instrument_layers(entry: CatalogEntry) -> List[str]:
    main = _require(entry, "main_instrument")
    secondary = _secondary(entry)
    if secondary is not None and secondary.name.lower() == SYNTHS:
        return [f"instrument_{_compact(secondary.name)}.png", VOCALS_NO_HANDS]
    if secondary is not None and main.name.lower() == VOCALS:
        # vocals first so the secondary instrument's hands sit on top
        return [VOCALS_NO_HANDS, f"instrument_{_compact(secondary.name)}.png"]
    return [f"instrument_{_compact(main.name)}.png"]


def _beard_layer(entry: CatalogEntry) -> str:
    if entry.beard is None or not entry.beard.name:
        return NO_BEARD
    return f"beard_{entry.beard.name.lower().replace('/', '')}.png"


def build_layer_names(entry: CatalogEntry, assets: AssetLibrary) -> List[str]:
    """Asset names for `entry`, back to front."""
    location = _require(entry, "location")
    if not location.image:
        raise LayerResolutionError(entry.number, "location image")

    names = [location.image, _topic_layer(entry, assets)]
    names.extend(_instrument_layers(entry))
    names.append(f"mood_{_require(entry, 'mood').name.lower()}.png")
    names.append(_beard_layer(entry))
    return names


def build_layer_spec(entry: CatalogEntry, assets: AssetLibrary, strict: bool = False) -> LayerSpec:
    """
    Resolve the ordered layer stack for `entry`.

    With `strict`, every resolved asset must exist in `assets`; otherwise a
    missing file only shows up when the compositor tries to load it.
    """
    names = build_layer_names(entry, assets)
    if strict:
        for name in names:
            if not assets.exists(name):
                raise MissingAssetError(assets.path(name))
    paths: List[Path] = [assets.path(name) for name in names]
    logger.debug("[layers] #%s %s -> %s", entry.number, entry.title, names)
    return LayerSpec(layers=tuple(paths))
