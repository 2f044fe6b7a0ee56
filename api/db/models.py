from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional, List

from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy import (
    Boolean,
    Integer,
    String,
    Text,
    ForeignKey,
    DateTime,
    Index,
    func,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import ARRAY


def _new_id() -> str:
    return uuid.uuid4().hex


class Base(DeclarativeBase):
    pass


class Title(Base):
    __tablename__ = "titles"
    __table_args__ = (
        UniqueConstraint("provider", "provider_id", name="uq_title_provider"),
        Index("ix_titles_genres", "genres", postgresql_using="gin"),
        Index("ix_titles_countries", "countries", postgresql_using="gin"),
        Index("ix_titles_languages", "languages", postgresql_using="gin"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    provider: Mapped[str] = mapped_column(String(32), nullable=False, default="tmdb")
    provider_id: Mapped[str] = mapped_column(String(64), nullable=False)
    type: Mapped[str] = mapped_column(String(10), nullable=False)  # 'movie' or 'tv'
    title: Mapped[str] = mapped_column(String(512), nullable=False, index=True)
    original_title: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    year: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, index=True)
    runtime_minutes: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    overview: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    poster_url: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    backdrop_url: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    genres: Mapped[List[str]] = mapped_column(
        ARRAY(String(64)), nullable=False, default=list
    )
    countries: Mapped[List[str]] = mapped_column(
        ARRAY(String(8)), nullable=False, default=list
    )
    languages: Mapped[List[str]] = mapped_column(
        ARRAY(String(16)), nullable=False, default=list
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    trailers: Mapped[List["Trailer"]] = relationship(
        back_populates="title",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Trailer.id",
    )


# Same order as the feed query.
Index("ix_titles_created_at_id", Title.created_at.desc(), Title.id.desc())


class Trailer(Base):
    __tablename__ = "trailers"
    __table_args__ = (
        UniqueConstraint("source", "source_video_id", name="uq_trailer_source_video"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title_id: Mapped[str] = mapped_column(
        ForeignKey("titles.id", ondelete="CASCADE"), index=True, nullable=False
    )
    source: Mapped[str] = mapped_column(String(32), nullable=False)  # 'youtube'
    source_video_id: Mapped[str] = mapped_column(String(128), nullable=False)
    kind: Mapped[str] = mapped_column(
        String(32), nullable=False, default="trailer"
    )  # trailer, teaser, clip, ...
    is_official: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    language: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    duration_seconds: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    title: Mapped[Title] = relationship(back_populates="trailers")


class Collection(Base):
    __tablename__ = "collections"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    slug: Mapped[str] = mapped_column(String(128), unique=True, index=True)
    title: Mapped[str] = mapped_column(String(256), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )


class CollectionItem(Base):
    __tablename__ = "collection_items"
    __table_args__ = (
        UniqueConstraint("collection_id", "title_id", name="uq_collection_title"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    collection_id: Mapped[int] = mapped_column(
        ForeignKey("collections.id", ondelete="CASCADE"), index=True, nullable=False
    )
    title_id: Mapped[str] = mapped_column(
        ForeignKey("titles.id", ondelete="CASCADE"), index=True, nullable=False
    )
    order_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    title: Mapped[Title] = relationship()
