"""Operator login.

There are no passwords: an operator identifies by name and phone number.
An unknown phone registers a new user; a known phone returns the existing
one (the stored name is kept).
"""

import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models.user import User
from app.schemas.user import LoginRequest, UserOut

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=UserOut)
async def login(body: LoginRequest, response: Response, db: AsyncSession = Depends(get_db)):
    user = (
        await db.execute(select(User).where(User.phone == body.phone))
    ).scalar_one_or_none()

    if user is None:
        user = User(name=body.name.strip(), phone=body.phone)
        db.add(user)
        await db.flush()
        response.status_code = status.HTTP_201_CREATED
        logger.info("Registered operator %s", user.id)

    return user
