import os
from pathlib import Path
from typing import Optional

# Basic settings helper to read environment configuration.

BASE_DIR = Path(__file__).resolve().parent


def _as_bool(val: str | None, default: bool = False) -> bool:
    if val is None:
        return default
    return val.lower() in ("1", "true", "yes", "on")


def _as_float(val: str | None, default: Optional[float] = None) -> Optional[float]:
    if val is None or val.strip() == "":
        return default
    return float(val)


class Settings:
    def __init__(self) -> None:
        self.LAYERS_DIR: Path = Path(os.getenv("SONGART_LAYERS_DIR", str(BASE_DIR / "artlayers")))
        self.BACKGROUNDS_DIR: Path = Path(
            os.getenv("SONGART_BACKGROUNDS_DIR", str(BASE_DIR / "artlayers" / "backgrounds"))
        )
        self.OUTPUT_DIR: Path = Path(os.getenv("SONGART_OUTPUT_DIR", str(BASE_DIR / "build")))
        self.CONCURRENCY: int = int(os.getenv("SONGART_CONCURRENCY", "1"))
        # Pause before each job starts; the image engine does not like being hammered.
        self.JOB_DELAY_SECONDS: float = float(os.getenv("SONGART_JOB_DELAY_MS", "100")) / 1000.0
        self.JOB_TIMEOUT_SECONDS: Optional[float] = _as_float(os.getenv("SONGART_JOB_TIMEOUT"))
        self.STRICT_ASSETS: bool = _as_bool(os.getenv("SONGART_STRICT_ASSETS"), False)
        self.LOG_LEVEL: str = os.getenv("SONGART_LOG_LEVEL", "INFO").upper()


settings = Settings()
