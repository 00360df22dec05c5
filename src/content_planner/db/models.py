from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    DateTime,
    func,
)

from sqlalchemy.orm import declarative_base

Base = declarative_base()

DEFAULT_STATUS = "planned"


class ArticlePlan(Base):
    __tablename__ = "article_plans"
    # Ids are never handed out twice, even after the newest row is deleted
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    # Natural key used for upserts and seeding
    article_id = Column(String(10), unique=True, nullable=False, index=True)

    title = Column(Text, nullable=False)
    keyword = Column(String(255), nullable=True)
    intent = Column(String(100), nullable=True)
    funnel = Column(String(50), nullable=True)
    description = Column(Text, nullable=True)
    priority = Column(String(20), nullable=True)
    word_count = Column(Integer, nullable=True)
    category = Column(String(100), nullable=True)
    week = Column(Integer, nullable=True, index=True)

    status = Column(String(50), nullable=False, default=DEFAULT_STATUS)
    notes = Column(Text, nullable=True)

    created_at = Column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    def __repr__(self):
        return f"<ArticlePlan(article_id={self.article_id}, week={self.week})>"
