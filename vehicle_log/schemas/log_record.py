"""
Schémas releve d'entretien / Log record schemas.

Le type de releve est une union discriminee par `log_type`. En JSON ses champs
sont a plat a cote des champs communs :
The record kind is a union discriminated by `log_type`; over the wire its
fields sit flat next to the common ones:

    {"vehicle_id": "...", "odometer": 12000, "log_type": "fuel_up", "fuel_amount": 45.2}
"""

import uuid
from datetime import datetime
from typing import Annotated, Any, Literal, Union

from pydantic import (
    BaseModel,
    Field,
    SerializerFunctionWrapHandler,
    field_validator,
    model_serializer,
    model_validator,
)

from vehicle_log.errors import ConversionError
from vehicle_log.models.log_record import (
    BrakeComponent,
    BrakeLocation,
    FluidType,
    TireRotationType,
    TireType,
)
from vehicle_log.utils.conversions import to_odometer


# --- Types de releve / Record kinds ---
class FuelUp(BaseModel):
    log_type: Literal["fuel_up"] = "fuel_up"
    fuel_amount: float  # litres


class TireRotation(BaseModel):
    log_type: Literal["tire_rotation"] = "tire_rotation"
    tire_rotation_type: TireRotationType


class TireChange(BaseModel):
    """Changement de pneus, permutation facultative / Tire change, rotation is optional."""
    log_type: Literal["tire_change"] = "tire_change"
    tire_rotation_type: TireRotationType | None = None
    tire_type: TireType
    new_tires: bool


class OilChange(BaseModel):
    log_type: Literal["oil_change"] = "oil_change"


class Repair(BaseModel):
    log_type: Literal["repair"] = "repair"


class WiperBladeReplacement(BaseModel):
    log_type: Literal["wiper_blade_replacement"] = "wiper_blade_replacement"


class BatteryReplacement(BaseModel):
    log_type: Literal["battery_replacement"] = "battery_replacement"


class BrakeReplacement(BaseModel):
    log_type: Literal["brake_replacement"] = "brake_replacement"
    brake_location: BrakeLocation
    brake_part: BrakeComponent


class Fluids(BaseModel):
    log_type: Literal["fluids"] = "fluids"
    fluid_type: FluidType


LogRecordKind = Annotated[
    Union[
        FuelUp,
        TireRotation,
        TireChange,
        OilChange,
        Repair,
        WiperBladeReplacement,
        BatteryReplacement,
        BrakeReplacement,
        Fluids,
    ],
    Field(discriminator="log_type"),
]


class _FlatKindModel(BaseModel):
    """Replie/deplie `kind` au niveau du releve / Folds `kind` in and out of the record level."""

    kind: LogRecordKind

    @model_validator(mode="before")
    @classmethod
    def _nest_kind(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "kind" in data:
            return data
        common = {name for name in cls.model_fields if name != "kind"}
        nested: dict[str, Any] = {key: value for key, value in data.items() if key in common}
        nested["kind"] = {key: value for key, value in data.items() if key not in common}
        return nested

    @model_serializer(mode="wrap")
    def _flatten_kind(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        kind = data.pop("kind", None) or {}
        return {**data, **kind}


class LogRecordCreate(_FlatKindModel):
    vehicle_id: uuid.UUID
    date: datetime | None = None  # maintenant si absent / now when omitted
    odometer: int
    notes: str | None = None

    @field_validator("odometer")
    @classmethod
    def _check_odometer(cls, value: int) -> int:
        try:
            return to_odometer(value)
        except ConversionError as exc:
            raise ValueError(exc.reason) from exc


# PUT reprend la forme du POST / PUT takes the POST shape
LogRecordUpdate = LogRecordCreate


class LogRecordRead(_FlatKindModel):
    id: uuid.UUID
    vehicle_id: uuid.UUID
    date: datetime
    odometer: int
    notes: str | None = None
