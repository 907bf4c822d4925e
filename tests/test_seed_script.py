import runpy
from pathlib import Path

from fixgeni.db import Store, repository
from fixgeni.models.category import Category

SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "seed_catalog.py"


def _script_main():
    return runpy.run_path(str(SCRIPT), run_name="seed_catalog")["main"]


def test_script_seeds_then_skips(tmp_path, monkeypatch, capsys):
    url = f"sqlite:///{tmp_path / 'cli.db'}"
    monkeypatch.setenv("DATABASE_URL", url)
    monkeypatch.delenv("FORCE_SEED", raising=False)
    monkeypatch.delenv("SEED_CATALOG_PATH", raising=False)
    main = _script_main()

    assert main([]) == 0
    assert "Seed OK" in capsys.readouterr().out
    assert main([]) == 0
    assert "Seed skipped" in capsys.readouterr().out
    assert main(["--force"]) == 0
    assert "'created': 0" in capsys.readouterr().out

    store = Store(url)
    store.init()
    try:
        with store.session_scope() as db:
            assert repository.count(db, Category) == 5
    finally:
        store.close()
