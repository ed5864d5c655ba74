"""Schémas communs / Shared schemas."""

import uuid

from pydantic import BaseModel


class CreatedResponse(BaseModel):
    """Reponse de creation / Creation response, the Location header points at the resource."""
    id: uuid.UUID
