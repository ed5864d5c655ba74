"""
Service des releves d'entretien / Log record service.
CRUD des releves au travers du codec de types.
CRUD over the wide `log_records` table through the kind codec.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from vehicle_log.errors import NotFound, WrongVariantType, integrity_guard
from vehicle_log.models.log_record import LogRecord
from vehicle_log.schemas.log_record import LogRecordCreate, LogRecordRead, LogRecordUpdate
from vehicle_log.services.log_record_codec import (
    VARIANT_COLUMNS,
    decode_log_record,
    encode_kind,
    log_type_of,
)

logger = logging.getLogger(__name__)

log_records = LogRecord.__table__


def _as_utc(value: datetime | None) -> datetime:
    """Date du releve en UTC, maintenant par defaut / Record date in UTC, now by default."""
    if value is None:
        return datetime.now(timezone.utc)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _record_values(body: LogRecordCreate) -> list[tuple[str, Any]]:
    """Colonnes communes puis colonnes du type / Common columns followed by the variant columns."""
    return [
        ("log_date", _as_utc(body.date)),
        ("odometer", body.odometer),
        ("log_type", log_type_of(body.kind).value),
        ("notes", body.notes),
        *encode_kind(body.kind),
    ]


async def create_log_record(db: AsyncSession, body: LogRecordCreate) -> uuid.UUID:
    """Inserer un releve, l'id est attribue ici / Insert a record; the id is assigned here."""
    record_id = uuid.uuid4()
    pairs = [("id", record_id), ("vehicle_id", body.vehicle_id), *_record_values(body)]
    with integrity_guard():
        await db.execute(insert(log_records).values(dict(pairs)))
    logger.info("Created %s log record %s for vehicle %s", body.kind.log_type, record_id, body.vehicle_id)
    return record_id


async def read_log_record(db: AsyncSession, record_id: uuid.UUID) -> LogRecordRead:
    result = await db.execute(select(log_records).where(log_records.c.id == record_id))
    row = result.mappings().one_or_none()
    if row is None:
        raise NotFound("log record not found")
    return decode_log_record(row)


async def list_log_records(db: AsyncSession, vehicle_id: uuid.UUID | None = None) -> list[LogRecordRead]:
    query = select(log_records).order_by(log_records.c.log_date, log_records.c.id)
    if vehicle_id is not None:
        query = query.where(log_records.c.vehicle_id == vehicle_id)
    result = await db.execute(query)
    return [decode_log_record(row) for row in result.mappings()]


async def update_log_record(
    db: AsyncSession, record_id: uuid.UUID, body: LogRecordUpdate
) -> LogRecordRead:
    """Remplacer un releve sans changer son type / Replace a record without changing its kind.

    The kind check lives in the WHERE clause, so a concurrent update that
    changed the kind makes this statement match nothing instead of racing it.
    Variant columns the kind does not emit are reset to NULL; `vehicle_id`
    is kept.
    """
    tag = log_type_of(body.kind).value
    values: dict[str, Any] = dict.fromkeys(VARIANT_COLUMNS)
    values.update(_record_values(body))

    stmt = (
        update(log_records)
        .where(log_records.c.id == record_id, log_records.c.log_type == tag)
        .values(values)
    )
    with integrity_guard():
        result = await db.execute(stmt)

    if result.rowcount == 0:
        existing = await db.execute(select(log_records.c.log_type).where(log_records.c.id == record_id))
        stored_tag = existing.scalar_one_or_none()
        if stored_tag is None:
            raise NotFound("log record not found")
        logger.info("Refused to turn %s log record %s into %s", stored_tag, record_id, tag)
        raise WrongVariantType()

    return await read_log_record(db, record_id)


async def delete_log_record(db: AsyncSession, record_id: uuid.UUID) -> None:
    result = await db.execute(delete(log_records).where(log_records.c.id == record_id))
    if result.rowcount == 0:
        raise NotFound("log record not found")
    logger.info("Deleted log record %s", record_id)
