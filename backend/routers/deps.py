from fastapi import Header, HTTPException

from backend.database import USER_ID_MAX_LENGTH


def get_user_id(x_user_id: str | None = Header(default=None)) -> str:
    """Identity asserted by the upstream gateway; sessions are not handled here."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    user_id = x_user_id.strip()
    if len(user_id) > USER_ID_MAX_LENGTH:
        raise HTTPException(status_code=400, detail=f"X-User-Id exceeds {USER_ID_MAX_LENGTH} characters")
    return user_id
