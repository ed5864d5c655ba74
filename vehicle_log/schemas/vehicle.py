"""Schémas Véhicule / Vehicle schemas."""

import uuid

from pydantic import BaseModel, ConfigDict, Field

from vehicle_log.models.vehicle import OdometerUnit

# Bornes de saisie uniquement, non appliquees en base / Input bounds only, not enforced in storage
YEAR_MIN = 1950
YEAR_MAX = 2030


class VehicleBase(BaseModel):
    make: str = Field(min_length=1, max_length=100)
    model: str = Field(min_length=1, max_length=100)
    year: int = Field(ge=YEAR_MIN, le=YEAR_MAX)
    odometer_unit: OdometerUnit = OdometerUnit.METRIC


class VehicleCreate(VehicleBase):
    owner_id: uuid.UUID


# Le proprietaire ne change pas / The owner never changes on update
class VehicleUpdate(VehicleBase):
    pass


class VehicleRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: uuid.UUID
    owner_id: uuid.UUID
    make: str
    model: str
    year: int
    odometer_unit: OdometerUnit
