from studyaid.core.db.schemas.auth import User
from .users import (
    UserManager,
    get_user_db,
    get_user_manager,
    auth_backend,
    fastapi_users,
    current_active_user,
)

__all__ = [
    "User",
    "UserManager",
    "get_user_db",
    "get_user_manager",
    "auth_backend",
    "fastapi_users",
    "current_active_user",
]
