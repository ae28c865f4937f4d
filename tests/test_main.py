"""Tests for the command line entry point."""
from __future__ import annotations

import json

import pytest

import main


def test_demo_data_shape():
    records = main.generate_demo_data(20)

    assert len(records) == 20
    for record in records:
        assert record["price"].startswith("$")
        assert record["amenities"].startswith("[")
        assert record["name"]


def test_static_generation_applies_search_and_sort(tmp_path, make_listing):
    source = tmp_path / "data.json"
    source.write_text(json.dumps([
        make_listing(name="Cheap Mission", price="$50.00"),
        make_listing(name="Pricey Mission", price="$150.00"),
        make_listing(name="Marina", price="$90.00", neighbourhood_cleansed="Marina"),
    ]))
    out = tmp_path / "out"

    html_path = main.main([
        "--source", str(source), "--output-dir", str(out),
        "--search", "mission", "--sort", "price-high",
    ])

    assert html_path == str(out / "index.html")
    data = json.loads((out / "listings.json").read_text())
    assert [l["title"] for l in data["listings"]] == ["Pricey Mission", "Cheap Mission"]
    assert data["stats"]["avg_price"] == 100
    assert data["sort"] == "price-high"


def test_demo_mode(tmp_path):
    html_path = main.main(["--demo", "--output-dir", str(tmp_path)])
    assert (tmp_path / "index.html").exists()
    assert html_path.endswith("index.html")


def test_load_failure_exits_nonzero(tmp_path):
    with pytest.raises(SystemExit) as exc:
        main.main(["--source", str(tmp_path / "missing.json"), "--output-dir", str(tmp_path)])
    assert exc.value.code == 1
