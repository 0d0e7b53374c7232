"""Post-related endpoints: upload, like, delete and comments."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, File, Form, UploadFile, status

from jointsgalore.core.errors import ValidationError
from jointsgalore.core.settings import settings
from jointsgalore.models.post import Post
from jointsgalore.schemas.post import CommentCreate, CommentResult, LikeResult
from jointsgalore.services.uploads import discard_upload, store_upload

from ..dependencies import CurrentUserDep, PostRepoDep

router = APIRouter(prefix="/posts", tags=["posts"])


@router.post("", response_model=Post, status_code=status.HTTP_201_CREATED)
def create_post(
    me: CurrentUserDep,
    posts: PostRepoDep,
    photo: Annotated[UploadFile, File(description="Image to share")],
    title: Annotated[str, Form()] = "",
    caption: Annotated[str, Form()] = "",
) -> Post:
    """Upload a new joint."""
    filename = store_upload(settings.upload_dir, photo.filename, photo.file.read())
    try:
        return posts.create(
            author=me.username,
            title=title,
            caption=caption,
            image_filename=filename,
        )
    except Exception:
        discard_upload(settings.upload_dir, filename)
        raise


@router.get("/{post_id}", response_model=Post)
def get_post(post_id: int, posts: PostRepoDep) -> Post:
    """Return a single joint."""
    return posts.get(post_id)


@router.post("/{post_id}/like", response_model=LikeResult)
def toggle_like(post_id: int, me: CurrentUserDep, posts: PostRepoDep) -> LikeResult:
    """Like the joint, or unlike it if already liked."""
    post = posts.toggle_like(post_id, me.username)
    return LikeResult(post_id=post.id, likes=post.likes, liked=me.username in post.liked_by)


@router.post("/{post_id}/delete", status_code=status.HTTP_204_NO_CONTENT)
def delete_post(post_id: int, me: CurrentUserDep, posts: PostRepoDep) -> None:
    """Delete one of your own joints."""
    posts.delete(post_id, me.username)


@router.post("/{post_id}/comments", response_model=CommentResult)
def add_comment(
    post_id: int,
    payload: CommentCreate,
    me: CurrentUserDep,
    posts: PostRepoDep,
) -> CommentResult:
    """Comment on a joint; blank comments are dropped without error."""
    try:
        comment = posts.add_comment(post_id, me.username, payload.comment)
    except ValidationError:
        return CommentResult(comment=None)
    return CommentResult(comment=comment)


@router.post("/{post_id}/comments/{comment_id}/delete", status_code=status.HTTP_204_NO_CONTENT)
def delete_comment(post_id: int, comment_id: int, me: CurrentUserDep, posts: PostRepoDep) -> None:
    """Delete a comment you wrote, or any comment on your own joint."""
    posts.delete_comment(post_id, comment_id, me.username)
