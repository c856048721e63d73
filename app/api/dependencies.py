# ============================================================================
# FILE: app/api/dependencies.py
# Caller identity dependencies
# ============================================================================
from fastapi import Header, HTTPException, status
from typing import Optional


async def get_current_user_id(
        x_user_id: Optional[str] = Header(None, alias="X-User-Id")
) -> str:
    """
    Identity of the calling customer, set by the upstream identity provider.

    Usage:
        @router.get("/my")
        async def my_appointments(user_id: str = Depends(get_current_user_id)):
            ...

    Raises:
        HTTPException 401: If the header is missing or blank
    """
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized"
        )
    return x_user_id.strip()