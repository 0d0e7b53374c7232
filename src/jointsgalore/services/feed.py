"""Feed orderings and paging over the post collection."""
from __future__ import annotations

import random
from collections.abc import Iterable

from jointsgalore.core.settings import settings
from jointsgalore.models.post import Post
from jointsgalore.repositories.pagination import Page, paginate
from jointsgalore.repositories.post_repo import PostRepository


def sort_recent(posts: Iterable[Post]) -> list[Post]:
    """Return posts newest first."""
    return sorted(posts, key=lambda post: (post.created_at, post.id), reverse=True)


def sort_top(posts: Iterable[Post]) -> list[Post]:
    """Return posts by likes, newest first among equally liked posts."""
    return sorted(posts, key=lambda post: (post.likes, post.created_at, post.id), reverse=True)


def feed_page(repo: PostRepository, page: int | str | None, page_size: int | None = None) -> Page[Post]:
    """Return one page of the reverse-chronological main feed."""
    return paginate(sort_recent(repo.list_all()), page, page_size or settings.posts_per_page)


def top_page(repo: PostRepository, page: int | str | None, page_size: int | None = None) -> Page[Post]:
    """Return one page of the engagement-ranked feed."""
    return paginate(sort_top(repo.list_all()), page, page_size or settings.posts_per_page)


def random_post(repo: PostRepository, rng: random.Random | None = None) -> Post | None:
    """Return a uniformly chosen post, or ``None`` when there are none."""
    # count and pick must see the same collection
    with repo.store.locked(repo.collection):
        total = repo.count()
        if total == 0:
            return None
        return repo.pick((rng or random).randrange(total))
