"""Modele Utilisateur / User model."""

import uuid

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vehicle_log.database import Base


class User(Base):
    """Proprietaire de vehicules / Vehicle owner."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    username: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(150), unique=True, nullable=False)

    # Relations
    vehicles: Mapped[list["Vehicle"]] = relationship(back_populates="owner", passive_deletes="all")

    def __repr__(self) -> str:
        return f"<User {self.username}>"
