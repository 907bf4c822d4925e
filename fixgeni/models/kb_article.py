from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, JSON, Enum, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from enum import Enum as PyEnum
from fixgeni.db import Base

class Difficulty(str, PyEnum):
    easy = "easy"
    medium = "medium"
    hard = "hard"

class ArticleStatus(str, PyEnum):
    draft = "draft"
    published = "published"

class KbArticle(Base):
    __tablename__ = "kb_articles"

    id = Column(Integer, primary_key=True, index=True)
    slug = Column(String(160), unique=True, index=True, nullable=False)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False, default="")                 # HTML
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="RESTRICT"), index=True, nullable=False)
    difficulty = Column(Enum(Difficulty, name="kb_difficulty"), nullable=False, default=Difficulty.easy)
    time_estimate_min = Column(Integer, nullable=False, default=15)
    tools_json = Column(JSON, nullable=False, default=list)            # [{name, purpose, affiliate_url}]
    steps_json = Column(JSON, nullable=False, default=list)            # ["step 1", ...]
    status = Column(Enum(ArticleStatus, name="kb_status"), nullable=False, default=ArticleStatus.draft, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    category = relationship("Category", lazy="joined")

    __table_args__ = (
        CheckConstraint("time_estimate_min > 0", name="time_estimate_positive"),
    )
