from __future__ import annotations

from typing import Any

import pytest

from foodfinder.catalog.models import CatalogItem


def _item(title: str, **overrides: Any) -> CatalogItem:
    data: dict[str, Any] = {
        "title": title,
        "description": f"{title} description",
        "cuisine_type": "Indian",
        "vendor_name": f"{title} Kitchen",
        "city": "Mumbai",
        "address": "Main Road, Mumbai",
        "price": 250,
        "price_range": "₹₹",
    }
    data.update(overrides)
    return CatalogItem.model_validate(data)


@pytest.fixture
def make_item():
    return _item
