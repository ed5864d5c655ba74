"""Routes Releves d'entretien / Log record API routes."""

import uuid

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from vehicle_log.database import get_db
from vehicle_log.schemas.common import CreatedResponse
from vehicle_log.schemas.log_record import LogRecordCreate, LogRecordRead, LogRecordUpdate
from vehicle_log.services import log_record_service

router = APIRouter()


@router.get("", response_model=list[LogRecordRead])
async def list_log_records(
    vehicle_id: uuid.UUID | None = None,
    db: AsyncSession = Depends(get_db),
):
    """Lister les releves / List log records."""
    return await log_record_service.list_log_records(db, vehicle_id=vehicle_id)


@router.get("/{log_record_id}", response_model=LogRecordRead)
async def get_log_record(
    log_record_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Voir un releve / Get log record detail."""
    return await log_record_service.read_log_record(db, log_record_id)


@router.post("", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_log_record(
    data: LogRecordCreate,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    """Creer un releve / Create log record."""
    record_id = await log_record_service.create_log_record(db, data)
    response.headers["Location"] = f"/log_records/{record_id}"
    return CreatedResponse(id=record_id)


@router.put("/{log_record_id}", response_model=LogRecordRead)
async def update_log_record(
    log_record_id: uuid.UUID,
    data: LogRecordUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Modifier un releve (meme type uniquement) / Update log record (same kind only)."""
    return await log_record_service.update_log_record(db, log_record_id, data)


@router.delete("/{log_record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_log_record(
    log_record_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Supprimer un releve / Delete log record."""
    await log_record_service.delete_log_record(db, log_record_id)
