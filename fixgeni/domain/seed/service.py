from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from fixgeni.db import Store, StoreUnavailable
from fixgeni.db import repository
from fixgeni.db.repository import UpsertOutcome
from fixgeni.domain.seed.catalog import Catalog
from fixgeni.models.category import Category
from fixgeni.models.kb_article import KbArticle

log = logging.getLogger("seed")


class IntegrityViolation(Exception):
    """A catalog entry references a parent that is neither in the catalog nor in the store."""

    def __init__(self, entry: str, kind: str, missing: str) -> None:
        super().__init__(f"{kind} '{entry}' references missing category '{missing}'")
        self.entry = entry
        self.kind = kind
        self.missing = missing

    def to_dict(self) -> dict:
        return {"entry": self.entry, "kind": self.kind, "missing": self.missing}


@dataclass
class SeedResult:
    created: int = 0
    updated: int = 0
    unchanged: int = 0
    violations: list[IntegrityViolation] = field(default_factory=list)

    @property
    def seeded(self) -> bool:
        return bool(self.created or self.updated)

    def count(self, outcome: UpsertOutcome) -> None:
        if outcome.created:
            self.created += 1
        elif outcome.updated:
            self.updated += 1
        else:
            self.unchanged += 1

    def to_dict(self) -> dict:
        return {
            "created": self.created,
            "updated": self.updated,
            "unchanged": self.unchanged,
            "errors": [v.to_dict() for v in self.violations],
        }


def ensure_seeded(db: Session, catalog: Catalog) -> SeedResult:
    """
    Upsert every catalog entry by slug, categories first, then articles.

    Rows missing from the catalog are left alone. Articles whose category
    cannot be resolved are skipped and reported in the result.
    """
    result = SeedResult()

    for entry in catalog.categories:
        outcome = repository.upsert(db, Category, entry.slug, entry.fields())
        result.count(outcome)
        if outcome.created:
            log.info("category created: %s", entry.slug)
        elif outcome.updated:
            log.info("category updated: %s (%s)", entry.slug, ", ".join(outcome.changed))

    # Parents are resolved only after every category upsert above has committed.
    for entry in catalog.articles:
        parent = repository.find_by_key(db, Category, entry.category_slug)
        if parent is None:
            violation = IntegrityViolation(entry.slug, "article", entry.category_slug)
            log.warning("skipping %s", violation)
            result.violations.append(violation)
            continue

        outcome = repository.upsert(db, KbArticle, entry.slug, entry.fields(parent.id))
        result.count(outcome)
        if outcome.created:
            log.info("article created: %s", entry.slug)
        elif outcome.updated:
            log.info("article updated: %s (%s)", entry.slug, ", ".join(outcome.changed))

    log.info(
        "seed pass done: created=%d updated=%d unchanged=%d skipped=%d",
        result.created, result.updated, result.unchanged, len(result.violations),
    )
    return result


def missing_keys(db: Session, catalog: Catalog) -> dict[str, list[str]]:
    categories = set(catalog.category_slugs) - repository.existing_keys(db, Category, catalog.category_slugs)
    articles = set(catalog.article_slugs) - repository.existing_keys(db, KbArticle, catalog.article_slugs)
    return {"categories": sorted(categories), "articles": sorted(articles)}


def seed_if_needed(db: Session, catalog: Catalog, *, force: bool = False) -> SeedResult | None:
    """
    Run `ensure_seeded` unless every catalog key is already present.

    The presence check only saves work on warm boots; `force` always runs the
    full pass so drifted fields are brought back too. Returns None when skipped.
    """
    if not force:
        missing = missing_keys(db, catalog)
        if not missing["categories"] and not missing["articles"]:
            log.info("seed skipped: all %d catalog keys present", len(catalog.category_slugs) + len(catalog.article_slugs))
            return None
    return ensure_seeded(db, catalog)


def seed_status(db: Session) -> dict:
    latest = repository.query(
        db,
        Category,
        order_by=(Category.created_at.desc(), Category.id.desc()),
        limit=1,
    )
    return {
        "categoryCount": repository.count(db, Category),
        "latest": latest[0] if latest else None,
    }


def run_boot_seed(store: Store, catalog: Catalog, *, force: bool = False) -> SeedResult | None:
    """Boot-time entry point: failures are logged, never raised, so the API keeps serving."""
    try:
        with store.session_scope() as db:
            result = seed_if_needed(db, catalog, force=force)
    except StoreUnavailable as exc:
        log.error("boot seed failed, store unavailable: %s", exc)
        return None
    except Exception:
        log.exception("boot seed failed")
        return None

    if result is not None:
        log.info("seed completed: %s", result.to_dict())
    return result
