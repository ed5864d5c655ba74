"""Modele releve d'entretien / Maintenance log record model.

Une seule table large : `log_type` est le discriminant, les colonnes propres a
chaque type sont nullables. One wide table: `log_type` is the discriminator and
every variant-specific column is nullable.
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vehicle_log.database import Base


class LogType(str, enum.Enum):
    """Type de releve / Log record kind (discriminator values)."""
    FUEL_UP = "fuel_up"
    TIRE_ROTATION = "tire_rotation"
    TIRE_CHANGE = "tire_change"
    OIL_CHANGE = "oil_change"
    REPAIR = "repair"
    WIPER_BLADE_REPLACEMENT = "wiper_blade_replacement"
    BATTERY_REPLACEMENT = "battery_replacement"
    BRAKE_REPLACEMENT = "brake_replacement"
    FLUIDS = "fluids"


class TireRotationType(str, enum.Enum):
    """Permutation des pneus / Tire rotation pattern."""
    FRONT_REAR = "front_rear"
    SIDE = "side"
    DIAGONAL = "diagonal"


class TireType(str, enum.Enum):
    """Type de pneus / Tire type."""
    SUMMER = "summer"
    WINTER = "winter"
    ALL_SEASON = "all_season"


class BrakeLocation(str, enum.Enum):
    """Essieu des freins / Brake location."""
    FRONT = "front"
    REAR = "rear"
    ALL = "all"


class BrakeComponent(str, enum.Enum):
    """Piece de frein remplacee / Replaced brake part."""
    ROTORS = "rotors"
    CALIPERS = "calipers"
    BOTH = "both"


class FluidType(str, enum.Enum):
    """Type de fluide / Fluid type."""
    WIPER = "wiper"
    TRANSMISSION = "transmission"
    BRAKE = "brake"
    COOLANT = "coolant"


class LogRecord(Base):
    """Releve d'entretien / Maintenance log record."""
    __tablename__ = "log_records"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    vehicle_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("vehicles.id"), nullable=False, index=True)
    log_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    odometer: Mapped[int] = mapped_column(Integer, nullable=False)
    log_type: Mapped[str] = mapped_column(String(32), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)

    # --- Colonnes par type / Variant columns ---
    fuel_amount: Mapped[float | None] = mapped_column(Float)  # litres
    tire_rotation_type: Mapped[str | None] = mapped_column(String(20))
    tire_type: Mapped[str | None] = mapped_column(String(20))
    new_tires: Mapped[bool | None] = mapped_column(Boolean)
    brake_location: Mapped[str | None] = mapped_column(String(20))
    brake_part: Mapped[str | None] = mapped_column(String(20))
    fluid_type: Mapped[str | None] = mapped_column(String(20))

    # Relations
    vehicle: Mapped["Vehicle"] = relationship(back_populates="log_records")

    def __repr__(self) -> str:
        return f"<LogRecord {self.log_type} - vehicle {self.vehicle_id}>"
