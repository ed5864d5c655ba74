"""Modele Vehicule / Vehicle model.

L'unite du compteur est informative : aucune conversion n'est appliquee aux releves.
The odometer unit is informational only; log record readings are never converted.
"""

import enum
import uuid

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vehicle_log.database import Base


class OdometerUnit(str, enum.Enum):
    """Unite du compteur / Odometer unit."""
    METRIC = "km"
    IMPERIAL = "mi"


class Vehicle(Base):
    """Vehicule d'un utilisateur / User's vehicle."""
    __tablename__ = "vehicles"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    # Pas de cascade : suppression refusee tant que des vehicules existent /
    # No cascade: deleting an owner is refused while vehicles reference it
    owner_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    make: Mapped[str] = mapped_column(String(100), nullable=False)
    model: Mapped[str] = mapped_column(String(100), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    odometer_unit: Mapped[str] = mapped_column(
        String(2), nullable=False, default=OdometerUnit.METRIC.value
    )

    # Relations
    owner: Mapped["User"] = relationship(back_populates="vehicles")
    log_records: Mapped[list["LogRecord"]] = relationship(back_populates="vehicle", passive_deletes="all")

    def __repr__(self) -> str:
        return f"<Vehicle {self.year} {self.make} {self.model}>"
