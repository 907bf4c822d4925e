"""
Reference-data catalog: the desired end state of default categories and
knowledge-base articles.

The catalog is data (`catalog.json` next to this module, or the file named by
SEED_CATALOG_PATH). Entries are frozen once loaded.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from slugify import slugify

DEFAULT_CATALOG_PATH = Path(__file__).resolve().with_name("catalog.json")

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


class CatalogError(ValueError):
    pass


class ToolRef(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    purpose: str = ""
    affiliate_url: str | None = None


class CategorySeed(BaseModel):
    model_config = ConfigDict(frozen=True)

    slug: str = Field(..., pattern=SLUG_PATTERN, max_length=80)
    name: str = Field(..., min_length=1, max_length=120)
    is_active: bool = True
    description: str | None = None
    icon: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _derive_slug(cls, data):
        # Entries declared by name only get the same slug the create endpoint would give them.
        if isinstance(data, dict) and not data.get("slug") and data.get("name"):
            data = {**data, "slug": slugify(str(data["name"]), lowercase=True)}
        return data

    def fields(self) -> dict:
        # description/icon only when declared, so values edited in the store survive
        fields = {"name": self.name, "is_active": self.is_active}
        if self.description is not None:
            fields["description"] = self.description
        if self.icon is not None:
            fields["icon"] = self.icon
        return fields


class ArticleSeed(BaseModel):
    model_config = ConfigDict(frozen=True)

    slug: str = Field(..., pattern=SLUG_PATTERN, max_length=160)
    title: str = Field(..., min_length=1, max_length=255)
    category_slug: str = Field(..., min_length=1)
    content: str = ""
    difficulty: Literal["easy", "medium", "hard"] = "easy"
    time_estimate_min: int = Field(..., gt=0)
    tools: tuple[ToolRef, ...] = ()
    steps: tuple[str, ...] = ()
    status: Literal["draft", "published"] = "published"

    def fields(self, category_id: int) -> dict:
        return {
            "title": self.title,
            "content": self.content,
            "category_id": category_id,
            "difficulty": self.difficulty,
            "time_estimate_min": self.time_estimate_min,
            "tools_json": [t.model_dump() for t in self.tools],
            "steps_json": list(self.steps),
            "status": self.status,
        }


class Catalog(BaseModel):
    model_config = ConfigDict(frozen=True)

    categories: tuple[CategorySeed, ...] = ()
    articles: tuple[ArticleSeed, ...] = ()

    @model_validator(mode="after")
    def _unique_slugs(self):
        for kind, entries in (("category", self.categories), ("article", self.articles)):
            seen: set[str] = set()
            for entry in entries:
                if entry.slug in seen:
                    raise ValueError(f"duplicate {kind} slug in catalog: {entry.slug}")
                seen.add(entry.slug)
        return self

    @property
    def category_slugs(self) -> tuple[str, ...]:
        return tuple(c.slug for c in self.categories)

    @property
    def article_slugs(self) -> tuple[str, ...]:
        return tuple(a.slug for a in self.articles)


def parse_catalog(data: dict) -> Catalog:
    try:
        return Catalog.model_validate(data)
    except ValidationError as exc:
        raise CatalogError(str(exc)) from exc


def load_catalog(path: str | Path | None = None) -> Catalog:
    p = Path(path) if path else DEFAULT_CATALOG_PATH
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except OSError as exc:
        raise CatalogError(f"cannot read catalog {p}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise CatalogError(f"catalog {p} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise CatalogError(f"catalog {p} must be a JSON object")
    return parse_catalog(data)
