from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from governance_service.console.cache import ViewCache
from governance_service.database import get_db
from governance_service.routers.dependencies import get_view_cache
from governance_service.schemas.common import OperationAcknowledgment
from governance_service.schemas.user_post import PostEngagementRequest, UserPostCreate, UserPostRead
from governance_service.services import user_post_service


router = APIRouter(tags=["posts"])


@router.post("/users/{user_id}/posts", response_model=UserPostRead, status_code=status.HTTP_201_CREATED)
def create_post(
    user_id: str,
    payload: UserPostCreate,
    db: Session = Depends(get_db),
    cache: ViewCache = Depends(get_view_cache),
) -> UserPostRead:
    post = user_post_service.create_post(db, user_id, payload)
    cache.posts_changed(user_id)
    return UserPostRead.model_validate(post)


@router.get("/users/{user_id}/posts", response_model=list[UserPostRead])
def list_user_posts(user_id: str, db: Session = Depends(get_db)) -> list[UserPostRead]:
    return [UserPostRead.model_validate(p) for p in user_post_service.list_user_posts(db, user_id)]


@router.get("/posts", response_model=list[UserPostRead])
def list_posts(db: Session = Depends(get_db)) -> list[UserPostRead]:
    return [UserPostRead.model_validate(p) for p in user_post_service.list_posts(db)]


@router.get("/posts/{post_id}", response_model=UserPostRead)
def read_post(post_id: str, db: Session = Depends(get_db)) -> UserPostRead:
    return UserPostRead.model_validate(user_post_service.get_post(db, post_id))


@router.delete("/posts/{post_id}", response_model=OperationAcknowledgment)
def soft_delete_post(
    post_id: str,
    db: Session = Depends(get_db),
    cache: ViewCache = Depends(get_view_cache),
) -> OperationAcknowledgment:
    post = user_post_service.soft_delete_post(db, post_id)
    cache.posts_changed(post.user_id)
    return OperationAcknowledgment(
        message="Post has been successfully soft deleted. The post is now marked as deleted and will not appear in listings.",
        operation_type="SOFT_DELETE",
        resource_id=post_id,
    )


@router.post("/posts/{post_id}/engagement", response_model=UserPostRead)
def record_engagement(
    post_id: str,
    payload: PostEngagementRequest,
    db: Session = Depends(get_db),
    cache: ViewCache = Depends(get_view_cache),
) -> UserPostRead:
    post = user_post_service.record_engagement(db, post_id, payload.action)
    cache.posts_changed(post.user_id)
    return UserPostRead.model_validate(post)
