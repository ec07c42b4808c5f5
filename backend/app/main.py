import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.routing import APIRoute
from redis.exceptions import RedisError

from app.api.main import api_router
from app.core.config import settings
from app.core.logging import setup_logging
from app.core.redis import redis_conn

setup_logging()
logger = logging.getLogger(__name__)


def custom_generate_unique_id(route: APIRoute) -> str:
    return f"{route.tags[0]}-{route.name}"


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        await redis_conn.connect()
    except (RedisError, OSError) as e:
        # the forum still works without the cache
        logger.warning(f"Redis unavailable, caching disabled: {e}")
    yield
    await redis_conn.close()


app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    generate_unique_id_function=custom_generate_unique_id,
    lifespan=lifespan,
)

app.include_router(api_router, prefix=settings.API_V1_STR)
