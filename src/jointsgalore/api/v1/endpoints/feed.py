"""Feed endpoints: latest, top and random."""

from __future__ import annotations

from fastapi import APIRouter, Query

from jointsgalore.models.post import Post
from jointsgalore.repositories.pagination import Page
from jointsgalore.schemas.post import RandomPost
from jointsgalore.services.feed import feed_page, random_post, top_page

from ..dependencies import PostRepoDep

router = APIRouter(prefix="/feed", tags=["feed"])


@router.get("", response_model=Page[Post])
def latest(posts: PostRepoDep, page: str | None = Query(None)) -> Page[Post]:
    """Newest joints first."""
    return feed_page(posts, page)


@router.get("/top", response_model=Page[Post])
def top(posts: PostRepoDep, page: str | None = Query(None)) -> Page[Post]:
    """Most liked joints first."""
    return top_page(posts, page)


@router.get("/random", response_model=RandomPost)
def random(posts: PostRepoDep) -> RandomPost:
    """A single joint chosen at random."""
    return RandomPost(post=random_post(posts))
