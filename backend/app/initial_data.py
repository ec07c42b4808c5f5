import asyncio
import logging
import uuid

from redis.exceptions import RedisError
from sqlmodel import Session

from app.core.db import engine, init_db
from app.core.logging import setup_logging
from app.core.redis import redis_conn

setup_logging()
logger = logging.getLogger(__name__)


# Initialize and test SQL
def init_sql() -> None:
    with Session(engine) as session:
        init_db(session)
        logger.info("SQL connection test successful")


# Initialize and test Redis
async def init_redis() -> None:
    logger.info("Testing Redis connection...")
    test_key = f"initial_data_test_{uuid.uuid4()}"
    test_value = "redis_ok"
    try:
        await redis_conn.connect()

        if not await redis_conn.set(test_key, test_value, ttl=60):
            logger.error("Failed to set test key in Redis")
            return
        retrieved_value = await redis_conn.get(test_key)
        if retrieved_value != test_value:
            logger.error(f"Redis GET test failed. Expected '{test_value}', got '{retrieved_value}'")
            return
        await redis_conn.remove(test_key)
        logger.info("Redis connection tested successfully")
    except (RedisError, OSError) as e:
        logger.error(f"Redis connection test failed: {e}")
    finally:
        await redis_conn.close()


async def main() -> None:
    logger.info("Starting initialization for SQL and Redis")

    logger.info("Initializing SQL database...")
    init_sql()
    logger.info("SQL database initialized successfully")

    await init_redis()


if __name__ == "__main__":
    asyncio.run(main())
