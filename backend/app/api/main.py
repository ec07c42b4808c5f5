from fastapi import APIRouter

from app.api.routes import (
    forum,
    login,
    post,
    thread,
    users,
)

api_router = APIRouter()
api_router.include_router(login.router)
api_router.include_router(users.router)
api_router.include_router(forum.router)
api_router.include_router(thread.router)
api_router.include_router(post.router)
