"""
Authentication endpoints.

Login itself happens at the external identity provider; this API only
reports who the asserted caller is.
"""

from fastapi import APIRouter, Depends

from core.dependencies import get_current_user
from db import User
from api.schemas import UserRead

router = APIRouter()


@router.get("/user", response_model=UserRead)
async def get_user(current_user: User = Depends(get_current_user)):
    """
    Get the current user.

    The record is created on first sight and its display name and avatar
    are refreshed on every call.
    """
    return current_user
