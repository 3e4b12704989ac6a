import logging

from fastapi import APIRouter
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from newsplus.db.session import SessionDep

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/z")
async def healthz(db: SessionDep):
    try:
        await db.execute(select(1))
        return {"ok": True}
    except (SQLAlchemyError, OSError) as e:
        logger.warning("DB health check failed: %s", e)
        return {"ok": False, "error": str(e)}
