from typing import Optional, List
from pydantic import BaseModel
from datetime import datetime
from fixgeni.models.kb_article import Difficulty, ArticleStatus
from fixgeni.schemas.base import CamelModel

class ToolOut(BaseModel):
    # stored as-is in tools_json, keys stay snake_case
    name: str
    purpose: str = ""
    affiliate_url: Optional[str] = None

class ArticleSummary(CamelModel):
    id: int
    slug: str
    title: str
    category_id: int
    time_estimate_min: int
    difficulty: Difficulty
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class ArticleOut(ArticleSummary):
    content: str
    tools_json: List[ToolOut] = []
    steps_json: List[str] = []
    status: ArticleStatus

class ArticlePage(CamelModel):
    items: List[ArticleSummary]
    page: int
    page_size: int
    total: int

class ArticleEnvelope(CamelModel):
    article: ArticleOut
