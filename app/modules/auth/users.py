"""Current-user resolution.

There is no login: the application runs as a single demo user created once at
start-up. ``ensure_demo_user`` returns its id, which the app keeps on
``app.state`` for ``get_current_user_id``.
"""

from fastapi import Request

from app.core.db.base import Database
from app.core.db_services import UserService
from app.core.logging import get_logger

DEMO_USER_ID = 1
DEMO_USERNAME = "demo_user"

logger = get_logger(__name__)


async def ensure_demo_user(db: Database) -> int:
    async with db.session_maker() as session:
        user = await UserService(session).get_or_create(
            user_id=DEMO_USER_ID, username=DEMO_USERNAME
        )
    logger.info(f"Using demo user {user.username} (id={user.id})")
    return user.id


async def get_current_user_id(request: Request) -> int:
    return request.app.state.current_user_id
