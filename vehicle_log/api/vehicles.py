"""Routes Vehicules / Vehicle API routes."""

import logging
import uuid

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vehicle_log.database import get_db
from vehicle_log.errors import NotFound, integrity_guard
from vehicle_log.models.vehicle import Vehicle
from vehicle_log.schemas.common import CreatedResponse
from vehicle_log.schemas.vehicle import VehicleCreate, VehicleRead, VehicleUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_vehicle_or_404(db: AsyncSession, vehicle_id: uuid.UUID) -> Vehicle:
    vehicle = await db.get(Vehicle, vehicle_id)
    if not vehicle:
        raise NotFound("vehicle not found")
    return vehicle


@router.get("", response_model=list[VehicleRead])
async def list_vehicles(
    owner_id: uuid.UUID | None = None,
    db: AsyncSession = Depends(get_db),
):
    """Lister les vehicules / List vehicles."""
    query = select(Vehicle).order_by(Vehicle.make, Vehicle.model, Vehicle.year)
    if owner_id is not None:
        query = query.where(Vehicle.owner_id == owner_id)
    result = await db.execute(query)
    return result.scalars().all()


@router.get("/{vehicle_id}", response_model=VehicleRead)
async def get_vehicle(
    vehicle_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Voir un vehicule / Get vehicle detail."""
    return await _get_vehicle_or_404(db, vehicle_id)


@router.post("", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_vehicle(
    data: VehicleCreate,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    """Creer un vehicule / Create vehicle."""
    dump = data.model_dump()
    # Stocker la valeur de l'enum / Store the enum value
    dump["odometer_unit"] = data.odometer_unit.value
    vehicle = Vehicle(**dump)
    db.add(vehicle)
    with integrity_guard():
        await db.flush()
    logger.info("Created vehicle %s for owner %s", vehicle.id, vehicle.owner_id)
    response.headers["Location"] = f"/vehicles/{vehicle.id}"
    return CreatedResponse(id=vehicle.id)


@router.put("/{vehicle_id}", response_model=VehicleRead)
async def update_vehicle(
    vehicle_id: uuid.UUID,
    data: VehicleUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Modifier un vehicule / Update vehicle."""
    vehicle = await _get_vehicle_or_404(db, vehicle_id)

    updates = data.model_dump()
    updates["odometer_unit"] = data.odometer_unit.value
    for key, value in updates.items():
        setattr(vehicle, key, value)

    with integrity_guard():
        await db.flush()
    await db.refresh(vehicle)
    return vehicle


@router.delete("/{vehicle_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_vehicle(
    vehicle_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Supprimer un vehicule / Delete vehicle.

    Refuse tant que des releves existent / Refused while log records reference it.
    """
    vehicle = await _get_vehicle_or_404(db, vehicle_id)
    await db.delete(vehicle)
    with integrity_guard():
        await db.flush()
    logger.info("Deleted vehicle %s", vehicle_id)
