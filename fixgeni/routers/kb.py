from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from fixgeni.db import get_db
from fixgeni.domain import kb as kb_service
from fixgeni.domain.seed.service import seed_status
from fixgeni.models.kb_article import ArticleStatus
from fixgeni.schemas.category import CategoryList
from fixgeni.schemas.kb_article import ArticlePage, ArticleEnvelope
from fixgeni.schemas.seed import SeedStatusOut

router = APIRouter(prefix="/api/kb", tags=["kb"])

@router.get("/categories", response_model=CategoryList)
def list_categories(
    active_only: bool = Query(default=True, alias="activeOnly"),
    db: Session = Depends(get_db),
):
    rows = kb_service.list_categories(db, active_only=active_only)
    return {"items": rows, "total": len(rows)}

@router.get("/articles", response_model=ArticlePage)
def list_articles(
    page: int = Query(default=1),
    page_size: int = Query(default=kb_service.DEFAULT_PAGE_SIZE, alias="pageSize"),
    status: ArticleStatus = Query(default=ArticleStatus.published),
    db: Session = Depends(get_db),
):
    """Newest first. Out-of-range page/pageSize are clamped, not rejected."""
    items, total, page, page_size = kb_service.list_articles(
        db, page=page, page_size=page_size, status=status
    )
    return {"items": items, "page": page, "pageSize": page_size, "total": total}

@router.get("/articles/{slug}", response_model=ArticleEnvelope)
def get_article(slug: str, db: Session = Depends(get_db)):
    article = kb_service.get_article_by_slug(db, slug)
    if article is None:
        raise HTTPException(status_code=404, detail="not_found")
    return {"article": article}

@router.get("/seed-status", response_model=SeedStatusOut)
def get_seed_status(db: Session = Depends(get_db)):
    return seed_status(db)

# Same status view at the root, where deploy tooling probes for it.
status_router = APIRouter(tags=["kb"])
status_router.add_api_route("/seed-status", get_seed_status, methods=["GET"], response_model=SeedStatusOut)
