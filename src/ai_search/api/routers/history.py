"""Search history endpoints."""

from typing import Literal

from fastapi import APIRouter, Depends, Query
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ai_search.api.serializers import pagination, search_summary_out
from ai_search.auth.deps import get_current_user
from ai_search.db.database import get_db
from ai_search.db.models import Search, User
from ai_search.types.api import ClearHistoryResponse, HistoryResponse
from ai_search.utils.logging import setup_logger

logger = setup_logger(__name__)

router = APIRouter(prefix="/api/history", tags=["history"])

HistorySort = Literal["createdAt", "updatedAt", "query", "focus"]

SORT_COLUMNS = {
    "createdAt": Search.created_at,
    "updatedAt": Search.updated_at,
    "query": Search.query,
    "focus": Search.focus,
}


def _page_of_searches(db: Session, *criteria, order_by, page: int, limit: int) -> HistoryResponse:
    total = db.scalar(select(func.count()).select_from(Search).where(*criteria)) or 0
    searches = db.scalars(
        select(Search)
        .where(*criteria)
        .order_by(order_by.desc(), Search.id)
        .offset((page - 1) * limit)
        .limit(limit)
    ).all()
    return HistoryResponse(
        searches=[search_summary_out(s) for s in searches],
        pagination=pagination(page, limit, total),
    )


@router.get("", response_model=HistoryResponse)
def get_history(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    sort: HistorySort = Query(default="createdAt"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> HistoryResponse:
    """The caller's searches, newest first by default."""
    return _page_of_searches(
        db, Search.user_id == user.id, order_by=SORT_COLUMNS[sort], page=page, limit=limit
    )


@router.get("/bookmarked", response_model=HistoryResponse)
def get_bookmarked(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> HistoryResponse:
    return _page_of_searches(
        db,
        Search.user_id == user.id,
        Search.is_bookmarked.is_(True),
        order_by=Search.created_at,
        page=page,
        limit=limit,
    )


@router.delete("", response_model=ClearHistoryResponse)
def clear_history(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> ClearHistoryResponse:
    """Delete every search the caller owns and detach them from collections."""
    searches = db.scalars(select(Search).where(Search.user_id == user.id)).all()
    for collection in user.collections:
        collection.clear_searches()
    for search in searches:
        db.delete(search)
    db.commit()

    logger.info("History cleared", extra={"user_id": user.id, "deleted": len(searches)})
    return ClearHistoryResponse(
        deleted_count=len(searches),
        message="Search history cleared successfully",
    )
