from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class TrailerOut(BaseModel):
    source: str
    video_id: str
    kind: str
    is_official: bool


class FeedItem(BaseModel):
    id: str
    title: str
    year: Optional[int] = None
    countries: List[str] = Field(default_factory=list)
    genres: List[str] = Field(default_factory=list)
    overview_short: str = ""
    poster_url: Optional[str] = None
    backdrop_url: Optional[str] = None
    trailer: Optional[TrailerOut] = None


class FeedPage(BaseModel):
    items: List[FeedItem] = Field(default_factory=list)
    next_cursor: Optional[str] = None


class TitleResponse(BaseModel):
    item: FeedItem


class CollectionOut(BaseModel):
    id: int
    slug: str
    title: str
    description: Optional[str] = None
    items: List[FeedItem] = Field(default_factory=list)


class CollectionsResponse(BaseModel):
    collections: List[CollectionOut] = Field(default_factory=list)
