# scripts/seed_catalog.py
import sys
import argparse
from pathlib import Path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from fixgeni.core.log_config import configure_logging
from fixgeni.core.settings import load_settings
from fixgeni.db import Store, StoreUnavailable
from fixgeni.domain.seed.catalog import load_catalog
from fixgeni.domain.seed.service import seed_if_needed

def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Upsert the default categories and KB articles.")
    parser.add_argument("--force", action="store_true", help="reconcile every entry even if all keys exist")
    parser.add_argument("--catalog", type=Path, default=None, help="catalog JSON (default: packaged catalog)")
    args = parser.parse_args(argv)

    settings = load_settings()
    configure_logging(settings.log_level)
    catalog = load_catalog(args.catalog or settings.seed_catalog_path)

    store = Store(settings.database_url, timeout_sec=settings.store_timeout_sec)
    store.init()
    try:
        if settings.auto_create_schema:
            store.create_schema()
        with store.session_scope() as db:
            result = seed_if_needed(db, catalog, force=args.force or settings.force_seed)
    except StoreUnavailable as exc:
        print(f"Seed failed, store unavailable: {exc}", file=sys.stderr)
        return 1
    finally:
        store.close()

    if result is None:
        print("Seed skipped (already seeded)")
    else:
        print("Seed OK:", result.to_dict())
    return 0

if __name__ == "__main__":
    sys.exit(main())
