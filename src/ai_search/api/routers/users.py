"""User profile endpoints."""

from fastapi import APIRouter, Depends

from ai_search.api.serializers import user_out
from ai_search.auth.deps import get_current_user
from ai_search.db.models import User
from ai_search.types.auth import UserResponse

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
def get_profile(user: User = Depends(get_current_user)) -> UserResponse:
    return UserResponse(user=user_out(user))
