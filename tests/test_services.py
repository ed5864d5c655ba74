"""Tests du service des releves / Log record service tests."""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from vehicle_log.errors import NotFound, ReferenceConstraintViolation, WrongVariantType
from vehicle_log.models.log_record import BrakeComponent, BrakeLocation, TireRotationType, TireType
from vehicle_log.schemas.log_record import (
    BrakeReplacement,
    FuelUp,
    LogRecordCreate,
    TireChange,
)
from vehicle_log.services import log_record_service


def _body(vehicle_id, kind, **fields) -> LogRecordCreate:
    return LogRecordCreate(vehicle_id=vehicle_id, odometer=fields.pop("odometer", 1000), kind=kind, **fields)


@pytest.mark.asyncio
async def test_create_and_read(db, vehicle):
    date = datetime(2024, 3, 2, 14, 0, tzinfo=timezone.utc)
    body = _body(vehicle["id"], FuelUp(fuel_amount=38.5), odometer=4321, date=date, notes="full tank")

    record_id = await log_record_service.create_log_record(db, body)
    record = await log_record_service.read_log_record(db, record_id)

    assert record.id == record_id
    assert str(record.vehicle_id) == vehicle["id"]
    assert record.date == date
    assert record.odometer == 4321
    assert record.notes == "full tank"
    assert record.kind == FuelUp(fuel_amount=38.5)


@pytest.mark.asyncio
async def test_date_defaults_to_now(db, vehicle):
    before = datetime.now(timezone.utc) - timedelta(seconds=1)
    record_id = await log_record_service.create_log_record(db, _body(vehicle["id"], FuelUp(fuel_amount=10)))
    record = await log_record_service.read_log_record(db, record_id)
    assert record.date >= before


@pytest.mark.asyncio
async def test_list_filters_by_vehicle(db, client, user, vehicle):
    resp = await client.post(
        "/vehicles",
        json={"owner_id": user["id"], "make": "Saab", "model": "900", "year": 1992},
    )
    other_vehicle_id = resp.json()["id"]
    await log_record_service.create_log_record(db, _body(vehicle["id"], FuelUp(fuel_amount=20)))
    await log_record_service.create_log_record(db, _body(other_vehicle_id, FuelUp(fuel_amount=30)))

    everything = await log_record_service.list_log_records(db)
    only_first = await log_record_service.list_log_records(db, vehicle_id=uuid.UUID(vehicle["id"]))

    assert len(everything) == 2
    assert [record.kind.fuel_amount for record in only_first] == [20]


@pytest.mark.asyncio
async def test_update_replaces_fields_and_clears_rotation(db, vehicle):
    original = TireChange(tire_rotation_type=TireRotationType.SIDE, tire_type=TireType.SUMMER, new_tires=True)
    record_id = await log_record_service.create_log_record(db, _body(vehicle["id"], original, notes="spring"))

    replacement = TireChange(tire_type=TireType.WINTER, new_tires=False)
    updated = await log_record_service.update_log_record(
        db, record_id, _body(vehicle["id"], replacement, odometer=2000)
    )

    assert updated.kind == replacement
    assert updated.kind.tire_rotation_type is None
    assert updated.odometer == 2000
    assert updated.notes is None


@pytest.mark.asyncio
async def test_update_keeps_vehicle(db, client, user, vehicle):
    resp = await client.post(
        "/vehicles",
        json={"owner_id": user["id"], "make": "Saab", "model": "900", "year": 1992},
    )
    record_id = await log_record_service.create_log_record(db, _body(vehicle["id"], FuelUp(fuel_amount=20)))

    updated = await log_record_service.update_log_record(
        db, record_id, _body(resp.json()["id"], FuelUp(fuel_amount=25))
    )

    assert str(updated.vehicle_id) == vehicle["id"]
    assert updated.kind == FuelUp(fuel_amount=25)


@pytest.mark.asyncio
async def test_update_refuses_kind_change(db, vehicle):
    record_id = await log_record_service.create_log_record(db, _body(vehicle["id"], FuelUp(fuel_amount=42)))
    brakes = BrakeReplacement(brake_location=BrakeLocation.ALL, brake_part=BrakeComponent.CALIPERS)

    with pytest.raises(WrongVariantType):
        await log_record_service.update_log_record(db, record_id, _body(vehicle["id"], brakes))

    record = await log_record_service.read_log_record(db, record_id)
    assert record.kind == FuelUp(fuel_amount=42)


@pytest.mark.asyncio
async def test_update_unknown_record(db, vehicle):
    with pytest.raises(NotFound):
        await log_record_service.update_log_record(db, uuid.uuid4(), _body(vehicle["id"], FuelUp(fuel_amount=1)))


@pytest.mark.asyncio
async def test_delete(db, vehicle):
    record_id = await log_record_service.create_log_record(db, _body(vehicle["id"], FuelUp(fuel_amount=5)))
    await log_record_service.delete_log_record(db, record_id)

    with pytest.raises(NotFound):
        await log_record_service.read_log_record(db, record_id)
    with pytest.raises(NotFound):
        await log_record_service.delete_log_record(db, record_id)


@pytest.mark.asyncio
async def test_create_for_unknown_vehicle(db):
    with pytest.raises(ReferenceConstraintViolation):
        await log_record_service.create_log_record(db, _body(uuid.uuid4(), FuelUp(fuel_amount=5)))
