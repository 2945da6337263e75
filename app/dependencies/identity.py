from typing import Optional

from fastapi import Header, HTTPException, status


def get_current_user_id(x_user_id: Optional[str] = Header(default=None)) -> int:
    """Caller identity resolved upstream (gateway / auth service) and passed
    through as ``X-User-Id``."""
    if x_user_id is None or not x_user_id.strip().isdigit():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing or invalid X-User-Id header",
        )
    return int(x_user_id)
