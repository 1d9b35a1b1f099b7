"""
Background selection for a song's date.

Most dates get a solid colour whose hue walks around the colour wheel over
the course of the year. Dates with a pre-rendered background in the
background library get that image instead.
"""
import calendar
import logging
import re
from datetime import date, datetime
from pathlib import Path
from typing import Callable, Optional, Union

from songart.domain.models import BackgroundSpec, ImageFile, SolidColor
from songart.services.assets import AssetLibrary

logger = logging.getLogger(__name__)

BACKGROUND_SATURATION = 55.0
BACKGROUND_LIGHTNESS = 65.0

_HSL_RE = re.compile(
    r"hsl\(\s*(?P<h>-?\d+(?:\.\d+)?)\s*,\s*(?P<s>\d+(?:\.\d+)?)%\s*,\s*(?P<l>\d+(?:\.\d+)?)%\s*\)",
    re.IGNORECASE,
)

BackgroundProvider = Callable[[date], Union[BackgroundSpec, str]]


def _as_date(value: Union[date, datetime]) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def hue_for_date(day: Union[date, datetime], backgrounds: Optional[AssetLibrary] = None) -> BackgroundSpec:
    """
    Deterministic date -> background mapping.

    Returns ImageFile when `backgrounds` holds `<YYYY-MM-DD>.png` for the date,
    otherwise a SolidColor with hue = day-of-year / days-in-year * 360.
    """
    day = _as_date(day)
    if backgrounds is not None:
        name = f"{day.isoformat()}.png"
        if backgrounds.exists(name):
            return ImageFile(path=backgrounds.path(name))

    days_in_year = 366 if calendar.isleap(day.year) else 365
    day_of_year = day.timetuple().tm_yday - 1
    hue = round(day_of_year * 360 / days_in_year) % 360
    return SolidColor(hue=hue, saturation=BACKGROUND_SATURATION, lightness=BACKGROUND_LIGHTNESS)


def parse_background_descriptor(descriptor: str) -> BackgroundSpec:
    """
    Turn a descriptor string into a BackgroundSpec.

    "hsl(h, s%, l%)" is a solid colour canvas; anything else is taken as the
    path of a background image.
    """
    text = descriptor.strip()
    match = _HSL_RE.fullmatch(text)
    if match:
        return SolidColor(
            hue=float(match.group("h")) % 360,
            saturation=float(match.group("s")),
            lightness=float(match.group("l")),
        )
    return ImageFile(path=Path(text))


def resolve_background(day: Union[date, datetime], provider: Optional[BackgroundProvider] = None) -> BackgroundSpec:
    """Ask `provider` (default: hue_for_date) for the background of `day`."""
    provider = provider or hue_for_date
    result = provider(_as_date(day))
    if isinstance(result, str):
        result = parse_background_descriptor(result)
    if not isinstance(result, (SolidColor, ImageFile)):
        raise TypeError(f"background provider returned {type(result).__name__}")
    logger.debug("[background] %s -> %s", day, result)
    return result
