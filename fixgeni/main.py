import logging
import threading
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from fixgeni import __version__
from fixgeni.core.log_config import configure_logging
from fixgeni.core.middleware import install_middleware
from fixgeni.core.settings import Settings, load_settings
from fixgeni.db import Store, StoreUnavailable
from fixgeni.domain.seed.catalog import Catalog, load_catalog
from fixgeni.domain.seed.service import run_boot_seed

from fixgeni.routers import health as health_router
from fixgeni.routers import kb as kb_router
from fixgeni.routers import categories as categories_router
from fixgeni.routers import admin as admin_router

log = logging.getLogger("fixgeni")


def create_app(
    settings: Settings | None = None,
    *,
    store: Store | None = None,
    catalog: Catalog | None = None,
) -> FastAPI:
    settings = settings or load_settings()
    store = store or Store(settings.database_url, timeout_sec=settings.store_timeout_sec)
    catalog = catalog or load_catalog(settings.seed_catalog_path)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings.log_level)
        store.init()

        if settings.auto_create_schema:
            try:
                store.create_schema()
            except StoreUnavailable as exc:
                log.error("schema create failed, serving without store: %s", exc)

        # Seed in the background so health checks answer while it runs.
        if settings.seed_on_boot:
            worker = threading.Thread(
                target=run_boot_seed,
                args=(store, catalog),
                kwargs={"force": settings.force_seed},
                name="boot-seed",
                daemon=True,
            )
            app.state.boot_seed_thread = worker
            worker.start()

        log.info(
            "FixGeni API %s ready on :%d (security=%s)",
            __version__, settings.port, "on" if settings.has_security else "off",
        )
        try:
            yield
        finally:
            worker = app.state.boot_seed_thread
            if worker is not None:
                worker.join(timeout=settings.store_timeout_sec)
            store.close()

    app = FastAPI(title="FixGeni API", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store
    app.state.catalog = catalog
    app.state.boot_seed_thread = None

    install_middleware(app, settings)

    @app.exception_handler(StoreUnavailable)
    async def store_unavailable(request: Request, exc: StoreUnavailable):
        log.error("%s %s failed: store unavailable: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=500, content={"detail": "store unavailable"})

    # ==== Routers ====
    app.include_router(health_router.router)
    app.include_router(kb_router.router)
    app.include_router(kb_router.status_router)
    app.include_router(categories_router.router)
    app.include_router(admin_router.router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=app.state.settings.port)
