"""Conversions numeriques bornees / Bounded numeric conversions."""

from vehicle_log.errors import ConversionError

ODOMETER_MIN = 0
ODOMETER_MAX = 65535  # unsigned 16-bit


def to_odometer(value: int) -> int:
    """Restreindre un releve compteur a 16 bits / Narrow an odometer reading to 16 bits unsigned."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConversionError(f"odometer reading must be an integer, got {type(value).__name__}")
    if not ODOMETER_MIN <= value <= ODOMETER_MAX:
        raise ConversionError(
            f"odometer reading {value} out of range {ODOMETER_MIN}..{ODOMETER_MAX}"
        )
    return value
