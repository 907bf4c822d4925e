import json

import pytest
from pydantic import ValidationError

from fixgeni.domain.seed.catalog import CatalogError, load_catalog, parse_catalog


def test_packaged_catalog_loads():
    catalog = load_catalog()

    assert catalog.category_slugs == ("plumbing", "electrical", "hvac", "appliances", "roofing")
    assert catalog.article_slugs == ("fix-running-toilet",)
    article = catalog.articles[0]
    assert article.category_slug in catalog.category_slugs
    assert article.tools[0].name == "Adjustable Wrench"


def test_slug_is_derived_from_name_when_missing():
    catalog = parse_catalog({"categories": [{"name": "Heating & Cooling"}, {"name": "HVAC"}]})

    assert catalog.category_slugs == ("heating-cooling", "hvac")


def test_duplicate_slugs_are_rejected():
    with pytest.raises(CatalogError, match="duplicate category slug"):
        parse_catalog({"categories": [{"slug": "hvac", "name": "HVAC"}, {"name": "Hvac"}]})


@pytest.mark.parametrize("article", [
    {"slug": "a", "title": "A", "category_slug": "plumbing", "time_estimate_min": 0},
    {"slug": "a", "title": "A", "category_slug": "plumbing", "time_estimate_min": 5, "difficulty": "expert"},
    {"slug": "a", "title": "A", "category_slug": "plumbing", "time_estimate_min": 5, "status": "archived"},
    {"slug": "Not A Slug", "title": "A", "category_slug": "plumbing", "time_estimate_min": 5},
])
def test_invalid_articles_are_rejected(article):
    with pytest.raises(CatalogError):
        parse_catalog({"articles": [article]})


def test_entries_are_read_only():
    catalog = parse_catalog({"categories": [{"slug": "hvac", "name": "HVAC"}]})

    with pytest.raises(ValidationError):
        catalog.categories[0].name = "Changed"


def test_catalog_from_custom_path(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({"categories": [{"slug": "cleaning", "name": "Cleaning"}]}), encoding="utf-8")

    assert load_catalog(path).category_slugs == ("cleaning",)


def test_unreadable_or_malformed_catalog(tmp_path):
    with pytest.raises(CatalogError):
        load_catalog(tmp_path / "missing.json")

    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(CatalogError):
        load_catalog(bad)

    wrong_shape = tmp_path / "list.json"
    wrong_shape.write_text("[]", encoding="utf-8")
    with pytest.raises(CatalogError):
        load_catalog(wrong_shape)
