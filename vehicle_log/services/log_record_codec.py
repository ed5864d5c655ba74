"""
Codec des types de releve / Log record kind codec.

Convertit l'union `LogRecordKind` en colonnes de la table large `log_records`
et inversement. Maps the `LogRecordKind` union to and from the nullable
variant columns of the wide `log_records` table.

Each variant has one decoder and one encoder registered under its `LogType`.
An encoder returns (column, value) pairs: statements are built from that single
list, so column names and bound values cannot drift apart.
"""

from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from typing import Any, NamedTuple

from vehicle_log.errors import DecodeError
from vehicle_log.models.log_record import (
    BrakeComponent,
    BrakeLocation,
    FluidType,
    LogType,
    TireRotationType,
    TireType,
)
from vehicle_log.schemas.log_record import (
    BatteryReplacement,
    BrakeReplacement,
    Fluids,
    FuelUp,
    LogRecordKind,
    LogRecordRead,
    OilChange,
    Repair,
    TireChange,
    TireRotation,
    WiperBladeReplacement,
)
from vehicle_log.utils.conversions import to_odometer

Row = Mapping[str, Any]
ColumnValues = list[tuple[str, Any]]

DISCRIMINATOR_COLUMN = "log_type"

# Ordre canonique des colonnes par type / Canonical order of the variant columns
VARIANT_COLUMNS = (
    "fuel_amount",
    "tire_rotation_type",
    "tire_type",
    "new_tires",
    "brake_location",
    "brake_part",
    "fluid_type",
)


# --- Lecture des colonnes / Column readers ---
def _required(row: Row, column: str, parse: Callable[[Any], Any]) -> Any:
    value = row.get(column)
    if value is None:
        raise DecodeError(column)
    try:
        return parse(value)
    except (TypeError, ValueError) as exc:
        raise DecodeError(column, value) from exc


def _optional(row: Row, column: str, parse: Callable[[Any], Any]) -> Any:
    if row.get(column) is None:
        return None
    return _required(row, column, parse)


def _as_float(value: Any) -> float:
    if isinstance(value, bool):
        raise TypeError("boolean is not a fuel amount")
    return float(value)


def _as_bool(value: Any) -> bool:
    # SQLite peut renvoyer 0/1 / SQLite may hand back 0/1
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    raise ValueError(f"not a boolean: {value!r}")


# --- Codecs par type / Per-variant codecs ---
def _decode_fuel_up(row: Row) -> FuelUp:
    return FuelUp(fuel_amount=_required(row, "fuel_amount", _as_float))


def _encode_fuel_up(kind: FuelUp) -> ColumnValues:
    return [("fuel_amount", kind.fuel_amount)]


def _decode_tire_rotation(row: Row) -> TireRotation:
    return TireRotation(
        tire_rotation_type=_required(row, "tire_rotation_type", TireRotationType),
    )


def _encode_tire_rotation(kind: TireRotation) -> ColumnValues:
    return [("tire_rotation_type", kind.tire_rotation_type.value)]


def _decode_tire_change(row: Row) -> TireChange:
    return TireChange(
        tire_rotation_type=_optional(row, "tire_rotation_type", TireRotationType),
        tire_type=_required(row, "tire_type", TireType),
        new_tires=_required(row, "new_tires", _as_bool),
    )


def _encode_tire_change(kind: TireChange) -> ColumnValues:
    pairs: ColumnValues = [
        ("tire_type", kind.tire_type.value),
        ("new_tires", kind.new_tires),
    ]
    if kind.tire_rotation_type is not None:
        pairs.append(("tire_rotation_type", kind.tire_rotation_type.value))
    return pairs


def _decode_brake_replacement(row: Row) -> BrakeReplacement:
    return BrakeReplacement(
        brake_location=_required(row, "brake_location", BrakeLocation),
        brake_part=_required(row, "brake_part", BrakeComponent),
    )


def _encode_brake_replacement(kind: BrakeReplacement) -> ColumnValues:
    return [
        ("brake_location", kind.brake_location.value),
        ("brake_part", kind.brake_part.value),
    ]


def _decode_fluids(row: Row) -> Fluids:
    return Fluids(fluid_type=_required(row, "fluid_type", FluidType))


def _encode_fluids(kind: Fluids) -> ColumnValues:
    return [("fluid_type", kind.fluid_type.value)]


def _payload_free(model: Callable[[], LogRecordKind]) -> Callable[[Row], LogRecordKind]:
    """Decodeur d'un type sans colonnes / Decoder for a kind without variant columns.

    Any non-null variant column means the row disagrees with its tag.
    """
    def decode(row: Row) -> LogRecordKind:
        for column in VARIANT_COLUMNS:
            if row.get(column) is not None:
                raise DecodeError(column, row[column])
        return model()

    return decode


def _no_columns(kind: LogRecordKind) -> ColumnValues:
    return []


class _VariantCodec(NamedTuple):
    decode: Callable[[Row], LogRecordKind]
    encode: Callable[[LogRecordKind], ColumnValues]


_CODECS: dict[LogType, _VariantCodec] = {
    LogType.FUEL_UP: _VariantCodec(_decode_fuel_up, _encode_fuel_up),
    LogType.TIRE_ROTATION: _VariantCodec(_decode_tire_rotation, _encode_tire_rotation),
    LogType.TIRE_CHANGE: _VariantCodec(_decode_tire_change, _encode_tire_change),
    LogType.OIL_CHANGE: _VariantCodec(_payload_free(OilChange), _no_columns),
    LogType.REPAIR: _VariantCodec(_payload_free(Repair), _no_columns),
    LogType.WIPER_BLADE_REPLACEMENT: _VariantCodec(_payload_free(WiperBladeReplacement), _no_columns),
    LogType.BATTERY_REPLACEMENT: _VariantCodec(_payload_free(BatteryReplacement), _no_columns),
    LogType.BRAKE_REPLACEMENT: _VariantCodec(_decode_brake_replacement, _encode_brake_replacement),
    LogType.FLUIDS: _VariantCodec(_decode_fluids, _encode_fluids),
}

_missing = set(LogType) - set(_CODECS)
if _missing:
    raise RuntimeError(f"log types without a codec: {sorted(t.value for t in _missing)}")


def log_type_of(kind: LogRecordKind) -> LogType:
    """Discriminant canonique d'un type / Canonical tag of a record kind."""
    return LogType(kind.log_type)


def decode_kind(row: Row) -> LogRecordKind:
    """Reconstruire le type depuis une ligne / Rebuild the record kind from a row.

    Raises DecodeError when the tag is unknown or a column the tag requires is
    null or unparsable.
    """
    tag = row.get(DISCRIMINATOR_COLUMN)
    try:
        log_type = LogType(tag)
    except ValueError as exc:
        raise DecodeError(DISCRIMINATOR_COLUMN, tag) from exc
    return _CODECS[log_type].decode(row)


def encode_kind(kind: LogRecordKind) -> ColumnValues:
    """Colonnes propres au type et leurs valeurs / Variant columns with their bound values."""
    return _CODECS[log_type_of(kind)].encode(kind)


def decode_log_record(row: Row) -> LogRecordRead:
    """Decoder un releve complet / Decode a whole log record row."""
    log_date: datetime = row["log_date"]
    # SQLite ne conserve pas le fuseau : lu comme UTC / SQLite drops the offset: read as UTC
    if log_date.tzinfo is None:
        log_date = log_date.replace(tzinfo=timezone.utc)
    return LogRecordRead(
        id=row["id"],
        vehicle_id=row["vehicle_id"],
        date=log_date,
        odometer=to_odometer(row["odometer"]),
        notes=row.get("notes"),
        kind=decode_kind(row),
    )
