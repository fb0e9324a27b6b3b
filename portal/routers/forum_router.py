# /portal/routers/forum_router.py

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from ..core.deps import get_current_identity
from ..models import forum_model
from ..models.identity_model import Identity
from ..services import forum_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


@router.get("/posts", response_model=List[forum_model.ForumPostSummary], summary="List Visible Threads")
def list_posts(
    class_filter: Optional[str] = Query(default=None, alias="classFilter"),
    identity: Identity = Depends(get_current_identity),
    db: DatabaseService = Depends(get_db_service),
):
    return forum_service.list_posts(identity, db, class_filter)


@router.post("/posts", response_model=forum_model.ForumPost, status_code=status.HTTP_201_CREATED, summary="Open a Thread")
def create_post(
    payload: forum_model.ForumPostCreate,
    identity: Identity = Depends(get_current_identity),
    db: DatabaseService = Depends(get_db_service),
):
    return forum_service.create_post(payload, identity, db)


@router.get("/posts/{post_id}", response_model=forum_model.ForumPost, summary="Read a Thread (Counts a View)")
def get_post(
    post_id: str,
    identity: Identity = Depends(get_current_identity),
    db: DatabaseService = Depends(get_db_service),
):
    post = forum_service.get_post(post_id, identity, db)
    if post is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Forum post with ID {post_id} not found")
    return post


@router.post("/posts/{post_id}/replies", response_model=forum_model.ForumReply, status_code=status.HTTP_201_CREATED, summary="Reply to a Thread")
def add_reply(
    post_id: str,
    payload: forum_model.ForumReplyCreate,
    identity: Identity = Depends(get_current_identity),
    db: DatabaseService = Depends(get_db_service),
):
    return forum_service.add_reply(post_id, payload, identity, db)


@router.delete("/posts/{post_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Thread")
def delete_post(
    post_id: str,
    identity: Identity = Depends(get_current_identity),
    db: DatabaseService = Depends(get_db_service),
):
    if not forum_service.delete_post(post_id, identity, db):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Forum post with ID {post_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
