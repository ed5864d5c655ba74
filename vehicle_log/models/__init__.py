"""
Modèles SQLAlchemy / SQLAlchemy models.
Importer tous les modèles ici pour que Base.metadata les connaisse.
Import all models here so Base.metadata knows every table.
"""

from vehicle_log.models.user import User
from vehicle_log.models.vehicle import OdometerUnit, Vehicle
from vehicle_log.models.log_record import (
    BrakeComponent,
    BrakeLocation,
    FluidType,
    LogRecord,
    LogType,
    TireRotationType,
    TireType,
)

__all__ = [
    "User",
    "Vehicle",
    "OdometerUnit",
    "LogRecord",
    "LogType",
    "TireRotationType",
    "TireType",
    "BrakeLocation",
    "BrakeComponent",
    "FluidType",
]
