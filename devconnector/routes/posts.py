import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from devconnector.core.deps import get_current_user, get_current_user_id
from devconnector.core.errors import RequestError, server_error
from devconnector.db.session import get_db
from devconnector.models.post import Comment, Like, Post
from devconnector.models.user import User
from devconnector.schemas.post_schema import (
    CommentCreate,
    PostCreate,
    ResponseComment,
    ResponseLike,
    ResponsePost,
)

logger = logging.getLogger(__name__)

# Every post route requires a valid token
router = APIRouter(dependencies=[Depends(get_current_user_id)])


def _get_post_or_404(db: Session, post_id: int) -> Post:
    post = db.query(Post).filter(Post.id == post_id).first()
    if not post:
        raise HTTPException(status_code=404, detail="Post not found")
    return post

# Create a new post

@router.post("", response_model=ResponsePost)
async def create_post(post: PostCreate, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    new_post = Post(text=post.text, name=user.name, avatar=user.avatar, user_id=user.id)
    try:
        db.add(new_post)
        db.commit()
        db.refresh(new_post)
    except SQLAlchemyError as e:
        raise server_error(db, e, "create post") from e
    return new_post

# Get all posts, newest first

@router.get("", response_model=List[ResponsePost])
async def get_all_posts(db: Session = Depends(get_db)):
    return db.query(Post).order_by(Post.date.desc(), Post.id.desc()).all()

# Get a post by id

@router.get("/{post_id}", response_model=ResponsePost)
async def get_post(post_id: int = Path(...), db: Session = Depends(get_db)):
    return _get_post_or_404(db, post_id)

# Delete

@router.delete("/{post_id}")
async def delete_post(
    post_id: int = Path(...),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    post = _get_post_or_404(db, post_id)
    if post.user_id != user.id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not authorized")
    try:
        db.delete(post)
        db.commit()
    except SQLAlchemyError as e:
        raise server_error(db, e, "delete post") from e
    return {"message": "Post removed"}

# Like

@router.patch("/like/{post_id}", response_model=List[ResponseLike])
async def like_post(
    post_id: int = Path(...),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    post = _get_post_or_404(db, post_id)
    if post.liked_by(user.id):
        raise RequestError("Post already liked")
    try:
        post.likes.insert(0, Like(user_id=user.id))
        db.commit()
    except IntegrityError:
        # a concurrent like from the same user got there first
        db.rollback()
        raise RequestError("Post already liked")
    except SQLAlchemyError as e:
        raise server_error(db, e, "like post") from e
    db.refresh(post)
    return post.likes

# Unlike

@router.patch("/unlike/{post_id}", response_model=List[ResponseLike])
async def unlike_post(
    post_id: int = Path(...),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    post = _get_post_or_404(db, post_id)
    like = next((like for like in post.likes if like.user_id == user.id), None)
    if like is None:
        raise RequestError("Post has not yet been liked")
    try:
        post.likes.remove(like)
        db.commit()
    except SQLAlchemyError as e:
        raise server_error(db, e, "unlike post") from e
    db.refresh(post)
    return post.likes

# Comments


@router.post("/comment/{post_id}", response_model=List[ResponseComment])
async def add_comment(
    comment: CommentCreate,
    post_id: int = Path(...),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    post = _get_post_or_404(db, post_id)
    try:
        post.comments.insert(0, Comment(
            text=comment.text, name=user.name, avatar=user.avatar, user_id=user.id))
        db.commit()
    except SQLAlchemyError as e:
        raise server_error(db, e, "add comment") from e
    db.refresh(post)
    return post.comments


@router.delete("/comment/{post_id}/{comment_id}", response_model=List[ResponseComment])
async def delete_comment(
    post_id: int = Path(...),
    comment_id: int = Path(...),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    post = _get_post_or_404(db, post_id)
    comment = next((c for c in post.comments if c.id == comment_id), None)
    if comment is None:
        raise HTTPException(status_code=404, detail="No comment found")
    if comment.user_id != user.id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User is not authorized")
    try:
        post.comments.remove(comment)
        db.commit()
    except SQLAlchemyError as e:
        raise server_error(db, e, "delete comment") from e
    db.refresh(post)
    return post.comments
