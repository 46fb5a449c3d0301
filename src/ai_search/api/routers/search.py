"""Search endpoints: run a search, read, bookmark and delete stored searches."""

import time

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ai_search.api.serializers import search_detail_out, search_out
from ai_search.auth.deps import get_current_user
from ai_search.db.database import get_db
from ai_search.db.models import Search, User
from ai_search.graph.runner import run_search
from ai_search.types.api import (
    BookmarkResponse,
    MessageResponse,
    SearchCreateResponse,
    SearchDetailOut,
    SearchRequest,
)
from ai_search.utils.logging import setup_logger

logger = setup_logger(__name__)

router = APIRouter(prefix="/api/search", tags=["search"])


def get_owned_search(db: Session, search_id: str, user: User, action: str = "access") -> Search:
    """Load a search, raising 404 if missing and 403 if the caller does not own it."""
    search = db.get(Search, search_id)
    if search is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Search not found")
    if search.user_id != user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Not authorized to {action} this search",
        )
    return search


@router.post("", response_model=SearchCreateResponse, status_code=status.HTTP_201_CREATED)
def create_search(
    request: SearchRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> SearchCreateResponse:
    """Answer a query and store it.

    Upstream failures (search provider or summarizer) degrade the answer but
    never the status code.
    """
    start_time = time.perf_counter()

    try:
        outcome = run_search(request.query, request.focus, request.conversation_id)
        processing_time_ms = round((time.perf_counter() - start_time) * 1000)

        search = Search(
            user_id=user.id,
            query=request.query,
            answer=outcome.answer,
            sources=outcome.sources,
            focus=request.focus,
            conversation_id=request.conversation_id,
            processing_time_ms=processing_time_ms,
            tokens_used_estimate=outcome.metadata.tokens_used_estimate,
        )
        db.add(search)
        db.commit()
        db.refresh(search)
    except Exception as e:
        db.rollback()
        logger.exception(f"Error processing search request: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error while processing search",
        ) from e

    logger.info(
        "Search stored",
        extra={
            "search_id": search.id,
            "mode": outcome.mode,
            "source_count": search.source_count,
            "processing_time_ms": processing_time_ms,
        },
    )

    message = (
        "Search completed successfully"
        if outcome.mode == "ai"
        else "Search completed with web results (AI summary unavailable)"
    )
    return SearchCreateResponse(search=search_out(search), message=message)


@router.get("/{search_id}", response_model=SearchDetailOut)
def get_search(
    search_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> SearchDetailOut:
    return search_detail_out(get_owned_search(db, search_id, user))


@router.put("/{search_id}/bookmark", response_model=BookmarkResponse)
def toggle_bookmark(
    search_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> BookmarkResponse:
    search = get_owned_search(db, search_id, user, action="modify")
    is_bookmarked = search.toggle_bookmark()
    db.commit()
    return BookmarkResponse(
        is_bookmarked=is_bookmarked,
        message="Search bookmarked" if is_bookmarked else "Bookmark removed",
    )


@router.delete("/{search_id}", response_model=MessageResponse)
def delete_search(
    search_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> MessageResponse:
    search = get_owned_search(db, search_id, user, action="delete")
    for collection in list(search.collections):
        collection.remove_search(search.id)
    db.delete(search)
    db.commit()
    return MessageResponse(message="Search deleted successfully")
