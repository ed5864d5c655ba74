"""
CRUD Utilisateurs / User CRUD routes.
Unicite username/email garantie par la base / Username and email uniqueness is enforced by storage.
"""

import logging
import uuid

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vehicle_log.database import get_db
from vehicle_log.errors import NotFound, integrity_guard
from vehicle_log.models.user import User
from vehicle_log.schemas.common import CreatedResponse
from vehicle_log.schemas.user import UserCreate, UserRead, UserUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_user_or_404(db: AsyncSession, user_id: uuid.UUID) -> User:
    result = await db.execute(select(User).where(User.id == user_id))
    target = result.scalar_one_or_none()
    if not target:
        raise NotFound("user not found")
    return target


@router.get("", response_model=list[UserRead])
async def list_users(db: AsyncSession = Depends(get_db)):
    """Lister tous les utilisateurs / List all users."""
    result = await db.execute(select(User).order_by(User.username))
    return result.scalars().all()


@router.get("/{user_id}", response_model=UserRead)
async def get_user(
    user_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Obtenir un utilisateur / Get a user."""
    return await _get_user_or_404(db, user_id)


@router.post("", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    data: UserCreate,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    """Créer un utilisateur / Create a user."""
    new_user = User(**data.model_dump())
    db.add(new_user)
    with integrity_guard():
        await db.flush()
    logger.info("Created user %s (%s)", new_user.id, new_user.username)
    response.headers["Location"] = f"/users/{new_user.id}"
    return CreatedResponse(id=new_user.id)


@router.put("/{user_id}", response_model=UserRead)
async def update_user(
    user_id: uuid.UUID,
    data: UserUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Modifier un utilisateur / Update a user."""
    target = await _get_user_or_404(db, user_id)

    target.first_name = data.first_name
    target.last_name = data.last_name
    target.username = data.username
    target.email = data.email

    with integrity_guard():
        await db.flush()
    await db.refresh(target)
    return target


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Supprimer un utilisateur / Delete a user.

    Refuse tant qu'il possede des vehicules / Refused while the user owns vehicles.
    """
    target = await _get_user_or_404(db, user_id)
    await db.delete(target)
    with integrity_guard():
        await db.flush()
    logger.info("Deleted user %s", user_id)
