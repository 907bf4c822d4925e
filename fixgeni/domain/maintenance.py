"""
Named maintenance operations runnable from the admin API.

The set is fixed and the operations take no parameters; each one runs
in-process against the app's store.
"""

from __future__ import annotations

import logging
from typing import Callable

from fixgeni.core.settings import REPO_ROOT, Settings
from fixgeni.db import Base, Store, store_errors
from fixgeni.domain.seed.catalog import Catalog
from fixgeni.domain.seed.service import ensure_seeded

log = logging.getLogger("maintenance")

ALEMBIC_DIR = REPO_ROOT / "alembic"

MaintenanceOp = Callable[[Store, Settings, Catalog], dict]


class UnknownOperation(KeyError):
    pass


def _seed_run(store: Store, settings: Settings, catalog: Catalog) -> dict:
    with store.session_scope() as db:
        return ensure_seeded(db, catalog).to_dict()


def _schema_create(store: Store, settings: Settings, catalog: Catalog) -> dict:
    store.create_schema()
    return {"tables": sorted(Base.metadata.tables)}


def _migrate_deploy(store: Store, settings: Settings, catalog: Catalog) -> dict:
    from alembic import command
    from alembic.config import Config

    # No ini file here: alembic.ini's logging section would reconfigure ours.
    cfg = Config()
    cfg.set_main_option("script_location", str(ALEMBIC_DIR))
    cfg.set_main_option("sqlalchemy.url", store.url.replace("%", "%%"))
    with store_errors():
        command.upgrade(cfg, "head")
    return {"revision": "head"}


OPERATIONS: dict[str, MaintenanceOp] = {
    "seed:run": _seed_run,
    "schema:create": _schema_create,
    "migrate:deploy": _migrate_deploy,
}


def list_operations() -> list[str]:
    return list(OPERATIONS)


def run_operation(name: str, store: Store, settings: Settings, catalog: Catalog) -> dict:
    """Run one registered operation against the app's store and catalog."""
    op = OPERATIONS.get(name)
    if op is None:
        raise UnknownOperation(name)
    log.info("running maintenance operation %s", name)
    result = op(store, settings, catalog)
    log.info("maintenance operation %s done", name)
    return result
