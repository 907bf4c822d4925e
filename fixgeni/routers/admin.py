from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from fixgeni.core.settings import Settings
from fixgeni.db import Store, get_db
from fixgeni.deps import get_catalog, get_settings, get_store, require_admin
from fixgeni.domain import maintenance
from fixgeni.domain.seed.catalog import Catalog
from fixgeni.domain.seed.service import ensure_seeded
from fixgeni.schemas.seed import SeedRunOut, MaintenanceOut

router = APIRouter(prefix="/api/admin", tags=["admin"])

@router.get("/_gate")
def gate(settings: Settings = Depends(get_settings)):
    if not settings.has_security:
        raise HTTPException(status_code=503, detail="Security not configured")
    return {"ok": True}

@router.post("/seed", response_model=SeedRunOut, dependencies=[Depends(require_admin)])
def run_seed(db: Session = Depends(get_db), catalog: Catalog = Depends(get_catalog)):
    """Full reconcile pass: always runs, regardless of what is already stored."""
    result = ensure_seeded(db, catalog)
    return {"ok": True, **result.to_dict()}

@router.get("/maintenance", dependencies=[Depends(require_admin)])
def list_maintenance():
    return {"operations": maintenance.list_operations()}

@router.post("/maintenance/{name}", response_model=MaintenanceOut, dependencies=[Depends(require_admin)])
def run_maintenance(
    name: str,
    store: Store = Depends(get_store),
    settings: Settings = Depends(get_settings),
    catalog: Catalog = Depends(get_catalog),
):
    try:
        result = maintenance.run_operation(name, store, settings, catalog)
    except maintenance.UnknownOperation:
        raise HTTPException(status_code=404, detail=f"unknown operation: {name}")
    return {"ok": True, "operation": name, "result": result}
