"""Collection endpoints: user-owned groups of searches."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ai_search.api.routers.search import get_owned_search
from ai_search.api.serializers import collection_detail_out, collection_out, pagination
from ai_search.auth.deps import get_current_user
from ai_search.db.database import get_db
from ai_search.db.models import Collection, User
from ai_search.types.api import (
    AddSearchRequest,
    CollectionCreate,
    CollectionDetailResponse,
    CollectionListResponse,
    CollectionResponse,
    CollectionUpdate,
    MessageResponse,
)
from ai_search.utils.logging import setup_logger

logger = setup_logger(__name__)

router = APIRouter(prefix="/api/collections", tags=["collections"])

DUPLICATE_NAME_DETAIL = "Collection with this name already exists"


def get_owned_collection(
    db: Session, collection_id: str, user: User, action: str = "access"
) -> Collection:
    """Load a collection, raising 404 if missing and 403 if the caller does not own it."""
    collection = db.get(Collection, collection_id)
    if collection is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Collection not found")
    if collection.user_id != user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Not authorized to {action} this collection",
        )
    return collection


def _ensure_unique_name(db: Session, user: User, name: str, exclude_id: str | None = None) -> None:
    stmt = select(Collection.id).where(Collection.user_id == user.id, Collection.name == name)
    if exclude_id is not None:
        stmt = stmt.where(Collection.id != exclude_id)
    if db.scalar(stmt) is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=DUPLICATE_NAME_DETAIL,
        )


def _commit_named(db: Session) -> None:
    """Commit a created or renamed collection; a concurrent duplicate name is a 409."""
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=DUPLICATE_NAME_DETAIL)


@router.get("", response_model=CollectionListResponse)
def list_collections(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> CollectionListResponse:
    """The caller's collections, most recently updated first."""
    total = db.scalar(
        select(func.count()).select_from(Collection).where(Collection.user_id == user.id)
    )
    collections = db.scalars(
        select(Collection)
        .where(Collection.user_id == user.id)
        .order_by(Collection.updated_at.desc(), Collection.id)
        .offset((page - 1) * limit)
        .limit(limit)
    ).all()
    return CollectionListResponse(
        collections=[collection_out(c) for c in collections],
        pagination=pagination(page, limit, total or 0),
    )


@router.post("", response_model=CollectionResponse, status_code=status.HTTP_201_CREATED)
def create_collection(
    request: CollectionCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> CollectionResponse:
    _ensure_unique_name(db, user, request.name)

    collection = Collection(
        user_id=user.id,
        name=request.name,
        description=request.description,
        tags=request.tags,
        is_public=request.is_public,
        color=request.color,
        total_searches=0,
    )
    db.add(collection)
    _commit_named(db)
    db.refresh(collection)

    logger.info("Collection created", extra={"collection_id": collection.id, "user_id": user.id})
    return CollectionResponse(
        collection=collection_out(collection),
        message="Collection created successfully",
    )


@router.get("/{collection_id}", response_model=CollectionDetailResponse)
def get_collection(
    collection_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> CollectionDetailResponse:
    collection = get_owned_collection(db, collection_id, user)
    return CollectionDetailResponse(collection=collection_detail_out(collection))


@router.put("/{collection_id}", response_model=CollectionResponse)
def update_collection(
    collection_id: str,
    request: CollectionUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> CollectionResponse:
    collection = get_owned_collection(db, collection_id, user, action="modify")

    # Only description may be cleared with an explicit null
    updates = {
        field: value
        for field, value in request.model_dump(exclude_unset=True).items()
        if value is not None or field == "description"
    }
    if "name" in updates and updates["name"] != collection.name:
        _ensure_unique_name(db, user, updates["name"], exclude_id=collection.id)

    for field, value in updates.items():
        setattr(collection, field, value)
    _commit_named(db)
    db.refresh(collection)

    return CollectionResponse(
        collection=collection_out(collection),
        message="Collection updated successfully",
    )


@router.post("/{collection_id}/searches", response_model=CollectionResponse)
def add_search_to_collection(
    collection_id: str,
    request: AddSearchRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> CollectionResponse:
    """Add one of the caller's searches. Adding a search already present is a no-op."""
    collection = get_owned_collection(db, collection_id, user, action="modify")
    search = get_owned_search(db, request.search_id, user, action="add")

    added = collection.add_search(search)
    db.commit()
    db.refresh(collection)

    return CollectionResponse(
        collection=collection_out(collection),
        message=(
            "Search added to collection successfully"
            if added
            else "Search is already in this collection"
        ),
    )


@router.delete("/{collection_id}/searches/{search_id}", response_model=CollectionResponse)
def remove_search_from_collection(
    collection_id: str,
    search_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> CollectionResponse:
    collection = get_owned_collection(db, collection_id, user, action="modify")
    collection.remove_search(search_id)
    db.commit()
    db.refresh(collection)

    return CollectionResponse(
        collection=collection_out(collection),
        message="Search removed from collection successfully",
    )


@router.delete("/{collection_id}", response_model=MessageResponse)
def delete_collection(
    collection_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> MessageResponse:
    collection = get_owned_collection(db, collection_id, user, action="delete")
    db.delete(collection)
    db.commit()
    return MessageResponse(message="Collection deleted successfully")
