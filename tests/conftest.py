"""Shared fixtures for listing board tests."""
from __future__ import annotations

import pytest


def _listing(**fields) -> dict:
    listing = {
        "name": "Listing",
        "description": "A place to stay.",
        "price": "$100.00",
        "host_id": 1,
        "neighbourhood_cleansed": "Mission",
    }
    listing.update(fields)
    return listing


@pytest.fixture
def make_listing():
    return _listing


@pytest.fixture
def listings() -> list[dict]:
    return [
        _listing(name="Sunny Loft", price="$150.00", host_id=1, neighbourhood_cleansed="Mission"),
        _listing(name="cozy room", price="$80.00", host_id=2, neighbourhood_cleansed="Nob Hill",
                 description="Quiet <b>garden</b> view"),
        _listing(name="Bay Flat", price="$1,200.00", host_id=1, neighbourhood_cleansed="Marina"),
        _listing(name="Attic", price="$80.00", host_id=None, neighbourhood_cleansed="Mission"),
    ]
