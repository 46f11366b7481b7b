"""Liveness and dependency health for the booking API"""
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from carwash.config.database import get_db
from carwash.config.redis import get_redis
from carwash.config.settings import get_settings

health_router = APIRouter()
settings = get_settings()


def check_database(db: Session) -> str:
    try:
        db.execute(text("SELECT 1"))
        return "healthy"
    except Exception as e:
        return f"unhealthy: {e}"


async def check_redis() -> str:
    """Redis backs the Celery broker and the distributed slot lock"""
    try:
        client = await get_redis()
        try:
            await client.ping()
        finally:
            await client.aclose()
        return "healthy"
    except Exception as e:
        return f"unhealthy: {e}"


@health_router.get("/")
async def health_check():
    return {"status": "healthy", "service": "carwash-api"}


@health_router.get("/detailed")
async def detailed_health_check(db: Session = Depends(get_db)):
    checks = {
        "database": check_database(db),
        "redis": await check_redis(),
    }
    overall = "healthy" if all(value == "healthy" for value in checks.values()) else "degraded"
    return {
        **checks,
        "slotLock": settings.SLOT_LOCK_BACKEND,
        "overall": overall,
    }
