from fastapi import APIRouter

from todo_api.api.todo import router as todo_router
from todo_api.api.user import router as user_router


health_router = APIRouter()


@health_router.get("/health")
def health() -> dict:
    """PUBLIC: Liveness probe."""
    return {"status": "ok"}


__all__ = ["health_router", "todo_router", "user_router"]
