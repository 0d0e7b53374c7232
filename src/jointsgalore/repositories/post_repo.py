"""Data access helpers for working with posts."""
from __future__ import annotations

import logging

import pydantic

from jointsgalore.core.errors import ForbiddenError, NotFoundError, StorageError, ValidationError
from jointsgalore.db.normalize import load_posts
from jointsgalore.db.store import DocumentStore
from jointsgalore.db.time import now_ms
from jointsgalore.models.post import DEFAULT_TITLE, Comment, Post
from jointsgalore.repositories.pagination import paginate
from jointsgalore.services.ids import next_id

__all__ = ["PostRepository", "DEFAULT_TITLE"]

logger = logging.getLogger(__name__)


class PostRepository:
    """Post collection access: uploads, likes and comments.

    Every mutation runs one load, normalise, mutate, save cycle while
    holding the collection lock.
    """

    paginate = staticmethod(paginate)

    def __init__(self, store: DocumentStore, collection: str = "posts") -> None:
        """Initialize the repository over ``collection`` in ``store``."""
        self.store = store
        self.collection = collection

    def _load(self) -> list[Post]:
        docs = load_posts(self.store, self.collection)
        try:
            return [Post.model_validate(doc) for doc in docs]
        except pydantic.ValidationError as exc:
            logger.error("Unreadable document in %s: %s", self.collection, exc)
            raise StorageError(self.collection, f"malformed post document: {exc}") from exc

    def _save(self, posts: list[Post]) -> None:
        self.store.save(self.collection, [post.to_document() for post in posts])

    @staticmethod
    def _require(posts: list[Post], post_id: int) -> Post:
        post = next((p for p in posts if p.id == post_id), None)
        if post is None:
            raise NotFoundError("post", post_id)
        return post

    def list_all(self) -> list[Post]:
        """Return every post in storage order."""
        return self._load()

    def list_by_author(self, username: str) -> list[Post]:
        """Return the posts authored by ``username`` in storage order."""
        return [post for post in self._load() if post.author == username]

    def get(self, post_id: int) -> Post:
        """Return the post with ``post_id``.

        Raises:
            NotFoundError: If the post does not exist.
        """
        return self._require(self._load(), post_id)

    def count(self) -> int:
        """Return the number of stored posts."""
        return len(self._load())

    def pick(self, index: int) -> Post:
        """Return the post at position ``index`` in storage order.

        Raises:
            NotFoundError: If ``index`` is out of range.
        """
        posts = self._load()
        if not 0 <= index < len(posts):
            raise NotFoundError("post index", index)
        return posts[index]

    def create(
        self,
        *,
        author: str,
        title: str | None,
        caption: str | None,
        image_filename: str,
    ) -> Post:
        """Insert a new post and return it.

        Args:
            author: Username of the uploader.
            title: Display title; blank becomes ``DEFAULT_TITLE``.
            caption: Optional caption.
            image_filename: Name the upload handler stored the image under.
        """
        with self.store.locked(self.collection):
            posts = self._load()
            created_at = now_ms()
            post = Post(
                id=next_id((p.id for p in posts), now=created_at),
                title=title or DEFAULT_TITLE,
                caption=caption or "",
                image_filename=image_filename,
                author=author,
                created_at=created_at,
            )
            posts.append(post)
            self._save(posts)

        logger.info("Post %s created by %s", post.id, author)
        return post

    def delete(self, post_id: int, requester: str) -> None:
        """Delete a post on behalf of its author.

        Raises:
            NotFoundError: If the post does not exist.
            ForbiddenError: If ``requester`` is not the author.
        """
        with self.store.locked(self.collection):
            posts = self._load()
            post = self._require(posts, post_id)
            if post.author != requester:
                raise ForbiddenError("You can only delete your own joints.")
            self._save([p for p in posts if p.id != post_id])
        logger.info("Post %s deleted by its author %s", post_id, requester)

    def admin_delete(self, post_id: int) -> None:
        """Delete any post without an ownership check.

        Authorising the caller as an administrator is the caller's job.

        Raises:
            NotFoundError: If the post does not exist.
        """
        with self.store.locked(self.collection):
            posts = self._load()
            self._require(posts, post_id)
            self._save([p for p in posts if p.id != post_id])
        logger.info("Post %s deleted by an administrator", post_id)

    def toggle_like(self, post_id: int, username: str) -> Post:
        """Like the post if ``username`` has not yet, otherwise unlike it.

        Raises:
            NotFoundError: If the post does not exist.
        """
        with self.store.locked(self.collection):
            posts = self._load()
            post = self._require(posts, post_id)
            if username in post.liked_by:
                post.liked_by.remove(username)
            else:
                post.liked_by.append(username)
            post.likes = max(0, len(post.liked_by))
            self._save(posts)
        return post

    def add_comment(self, post_id: int, author: str, text: str) -> Comment:
        """Append a comment to a post.

        Raises:
            ValidationError: If ``text`` is blank after trimming.
            NotFoundError: If the post does not exist.
        """
        text = (text or "").strip()
        if not text:
            raise ValidationError("Comment text is required")

        with self.store.locked(self.collection):
            posts = self._load()
            post = self._require(posts, post_id)
            created_at = now_ms()
            comment = Comment(
                id=next_id((c.id for c in post.comments), now=created_at),
                author=author,
                text=text,
                created_at=created_at,
            )
            post.comments.append(comment)
            self._save(posts)
        return comment

    def delete_comment(self, post_id: int, comment_id: int, requester: str) -> None:
        """Remove a comment; allowed for the comment author or the post author.

        Raises:
            NotFoundError: If the post or the comment does not exist.
            ForbiddenError: If ``requester`` is neither author.
        """
        with self.store.locked(self.collection):
            posts = self._load()
            post = self._require(posts, post_id)
            comment = post.find_comment(comment_id)
            if comment is None:
                raise NotFoundError("comment", comment_id)
            if requester not in (comment.author, post.author):
                raise ForbiddenError("You cannot delete this comment.")
            post.comments.remove(comment)
            self._save(posts)
