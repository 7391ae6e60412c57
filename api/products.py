"""
Product routes.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends
from fastapi.responses import PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import db_session
from database.models import Product

logger = logging.getLogger(__name__)

router = APIRouter(tags=["products"])


@router.post("/createProduct", response_class=PlainTextResponse)
async def create_product(
    data: Dict[str, Any] = Body(...),
    session: AsyncSession = Depends(db_session),
) -> PlainTextResponse:
    """Store an arbitrary product document."""
    try:
        session.add(Product(data=data))
        await session.commit()
    except SQLAlchemyError as exc:
        logger.error("Error adding data: %s", exc)
        await session.rollback()
        return PlainTextResponse(f"Error adding data: {exc}", status_code=500)

    return PlainTextResponse("New Product Created")
