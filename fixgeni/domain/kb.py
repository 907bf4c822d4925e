from sqlalchemy.orm import Session
from slugify import slugify
from sqlalchemy.exc import IntegrityError
from fixgeni.db import repository, store_errors
from fixgeni.models.category import Category
from fixgeni.models.kb_article import KbArticle, ArticleStatus
from fixgeni.schemas.category import CategoryCreate

MAX_PAGE_SIZE = 50
DEFAULT_PAGE_SIZE = 20

class CategoryExists(Exception): ...

def clamp_page(page: int | None, page_size: int | None) -> tuple[int, int]:
    """page >= 1, page_size in [1, MAX_PAGE_SIZE]."""
    page = 1 if page is None else int(page)
    page_size = DEFAULT_PAGE_SIZE if page_size is None else int(page_size)
    return max(page, 1), min(max(page_size, 1), MAX_PAGE_SIZE)

def list_categories(db: Session, *, active_only: bool = False) -> list[Category]:
    filters = {"is_active": True} if active_only else None
    return repository.query(db, Category, filters=filters, order_by=(Category.name.asc(), Category.id.asc()))

def list_articles(
    db: Session,
    *,
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
    status: ArticleStatus | None = ArticleStatus.published,
) -> tuple[list[KbArticle], int, int, int]:
    """Returns (items, total, page, page_size) with page and page_size clamped."""
    page, page_size = clamp_page(page, page_size)
    filters = {"status": status} if status is not None else {}
    items = repository.query(
        db,
        KbArticle,
        filters=filters,
        order_by=(KbArticle.created_at.desc(), KbArticle.id.desc()),
        limit=page_size,
        offset=(page - 1) * page_size,
    )
    total = repository.count(db, KbArticle, **filters)
    return items, total, page, page_size

def get_article_by_slug(db: Session, slug: str) -> KbArticle | None:
    return repository.find_by_key(db, KbArticle, slug)

def create_category(db: Session, payload: CategoryCreate) -> Category:
    slug = payload.slug or slugify(payload.name, lowercase=True)
    if not slug:
        raise ValueError("name does not produce a usable slug")
    if repository.find_by_key(db, Category, slug) is not None:
        raise CategoryExists(slug)
    row = Category(
        slug=slug,
        name=payload.name,
        description=payload.description,
        icon=payload.icon,
        is_active=payload.is_active,
    )
    db.add(row)
    with store_errors(db):
        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            raise CategoryExists(slug) from exc
        db.refresh(row)
    return row
