from app.core.db.schemas.auth import User
from .users import (
    DEMO_USER_ID,
    DEMO_USERNAME,
    ensure_demo_user,
    get_current_user_id,
)

__all__ = [
    "User",
    "DEMO_USER_ID",
    "DEMO_USERNAME",
    "ensure_demo_user",
    "get_current_user_id",
]
