from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from fixgeni.db import get_db
from fixgeni.domain import kb as kb_service
from fixgeni.schemas.category import CategoryOut, CategoryCreate

router = APIRouter(prefix="/api/categories", tags=["categories"])

@router.get("", response_model=list[CategoryOut])
def list_categories(db: Session = Depends(get_db)):
    return kb_service.list_categories(db)

@router.post("", response_model=CategoryOut, status_code=201)
def create_category(payload: CategoryCreate, db: Session = Depends(get_db)):
    try:
        return kb_service.create_category(db, payload)
    except kb_service.CategoryExists:
        raise HTTPException(status_code=409, detail="slug already exists")
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
