from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field

PRIORITIES = ("High", "Medium", "Low")
STATUSES = ("planned", "in_progress", "written", "published")


# --- API Request/Response Models (Pydantic V2) ---


class ArticleIn(BaseModel):
    """Create-or-update payload, keyed by the natural `article_id`.

    The fallback seed dataset spells the natural key `id` and the word count
    `wordCount`; both spellings are accepted.
    """

    article_id: str = Field(
        ...,
        min_length=1,
        max_length=10,
        validation_alias=AliasChoices("article_id", "id"),
        description="Natural key, unique across all plans",
    )
    title: str = Field(..., min_length=1)
    keyword: Optional[str] = None
    intent: Optional[str] = None
    funnel: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[str] = None
    word_count: Optional[int] = Field(
        default=None, ge=0, validation_alias=AliasChoices("word_count", "wordCount")
    )
    category: Optional[str] = None
    week: Optional[int] = None
    status: Optional[str] = Field(
        default=None, description="Kept as stored when omitted on update"
    )
    notes: Optional[str] = Field(
        default=None, description="Kept as stored when omitted on update"
    )


class ArticlePatch(BaseModel):
    status: Optional[str] = None
    notes: Optional[str] = None
    week: Optional[int] = None


class ArticleRead(BaseModel):
    # id is None only for plans that never reached the store (fallback data)
    id: Optional[int] = None
    article_id: str
    title: str
    keyword: Optional[str] = None
    intent: Optional[str] = None
    funnel: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[str] = None
    word_count: Optional[int] = None
    category: Optional[str] = None
    week: Optional[int] = None
    status: str = "planned"
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class BulkRequest(BaseModel):
    articles: List[ArticleIn]


class BulkResult(BaseModel):
    success: bool = True
    count: int


class DeleteResult(BaseModel):
    success: bool = True


class Stats(BaseModel):
    total: int = 0
    high_priority: int = 0
    medium_priority: int = 0
    low_priority: int = 0
    planned: int = 0
    in_progress: int = 0
    written: int = 0
    published: int = 0
