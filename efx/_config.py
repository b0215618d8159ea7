"""Konfiguracja EpubFixer - zmienne środowiskowe, opcjonalnie z pliku .env."""

from __future__ import annotations

import os
import pathlib
from collections.abc import Callable
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv(pathlib.Path(__file__).resolve().parent.parent / ".env")


@dataclass(frozen=True, slots=True)
class Settings:
    locale: str          # język segmentacji, gdy EPUB nie podaje dc:language
    segmenter: str       # auto | icu | regex
    diff_timeout: float  # sekundy; 0 = bez limitu
    workers: int         # wątki przebudowy (1 = sekwencyjnie)
    log_level: str


def _getenv_as[T](name: str, default: str, cast: Callable[[str], T]) -> T:
    raw = os.getenv(name, default)
    try:
        return cast(raw)
    except ValueError:
        raise ValueError(f"niepoprawna wartość {name}={raw!r}") from None


def get_settings() -> Settings:
    """Czyta ustawienia przy każdym wywołaniu; zła liczba w env -> ValueError."""
    return Settings(
        locale       = os.getenv("EFX_LOCALE",       "ko"),
        segmenter    = os.getenv("EFX_SEGMENTER",    "auto"),
        diff_timeout = _getenv_as("EFX_DIFF_TIMEOUT", "1.0", float),
        workers      = max(1, _getenv_as("EFX_WORKERS", "1", int)),
        log_level    = os.getenv("EFX_LOG_LEVEL",    "WARNING").upper(),
    )
