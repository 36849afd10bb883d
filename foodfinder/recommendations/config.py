from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_BUNDLED_VOCABULARY = Path(__file__).resolve().parent.parent / "data" / "vocabulary.json"


@dataclass(frozen=True)
class Vocabulary:
    """Known keywords, in priority order: the first hit in a prompt wins."""

    cities: tuple[str, ...] = ()
    cuisines: tuple[str, ...] = ()


@dataclass(frozen=True)
class RecommendationConfig:
    vocabulary_path: Path = Path(
        os.getenv("FOODFINDER_VOCABULARY_PATH", str(_BUNDLED_VOCABULARY))
    )
    filtered_cap: int = 50
    unfiltered_cap: int = 30
    max_results: int = 6
    prefiltered_fallback_size: int = 5
    # (budget_max strictly below, highest price-range tier allowed)
    price_tier_thresholds: tuple[tuple[int, int], ...] = field(
        default=((500, 1), (1000, 2), (2000, 3))
    )


DEFAULT_RECOMMENDATION_CONFIG = RecommendationConfig()


def load_vocabulary(path: Path) -> Vocabulary:
    with open(path, encoding="utf-8") as fh:
        raw = json.load(fh)
    return Vocabulary(
        cities=tuple(c.strip().lower() for c in raw.get("cities", []) if c.strip()),
        cuisines=tuple(c.strip().lower() for c in raw.get("cuisines", []) if c.strip()),
    )
