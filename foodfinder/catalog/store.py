from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, Protocol

import pandas as pd

from .config import DEFAULT_CATALOG_CONFIG, CatalogConfig
from .models import CatalogItem

logger = logging.getLogger(__name__)


class CatalogSource(Protocol):
    def list_all(self) -> list[CatalogItem]:
        """Return every catalog item, newest first."""
        ...


def _frame_to_items(df: pd.DataFrame) -> list[CatalogItem]:
    if "created_at" in df.columns:
        df = df.assign(
            created_at=pd.to_datetime(df["created_at"], utc=True, errors="coerce", format="ISO8601")
        )
        df = df.sort_values("created_at", ascending=False, na_position="last", kind="mergesort")

    # NaN / NaT -> None so optional fields stay absent
    df = df.astype(object).where(df.notna(), None)

    return [CatalogItem.model_validate(record) for record in df.to_dict(orient="records")]


class FrameCatalog:
    """
    Read-only catalog backed by a pandas DataFrame.

    The snapshot is loaded on first access and never mutated afterwards.
    """

    def __init__(
        self,
        frame: pd.DataFrame | None = None,
        config: CatalogConfig = DEFAULT_CATALOG_CONFIG,
    ):
        self._config = config
        self._frame = frame
        self._items: list[CatalogItem] | None = None

    @classmethod
    def from_records(cls, records: Iterable[dict[str, Any]]) -> FrameCatalog:
        return cls(frame=pd.DataFrame.from_records(list(records)))

    @classmethod
    def from_json(cls, path: Path | str) -> FrameCatalog:
        return cls(config=CatalogConfig(catalog_path=Path(path)))

    def _load_frame(self) -> pd.DataFrame:
        path = self._config.catalog_path
        df = pd.read_json(path, orient="records", convert_dates=["created_at"])
        logger.info("Loaded %d catalog items from %s", len(df), path)
        return df

    def list_all(self) -> list[CatalogItem]:
        if self._items is None:
            frame = self._frame if self._frame is not None else self._load_frame()
            self._items = [] if frame.empty else _frame_to_items(frame)
        return list(self._items)
