"""
Data slot parameter bitmask codec.

A data slot's `parameters` field packs boolean flags into an integer, given
either as a number or as a hex string. Only the flags listed in
ENABLED_DATA_SLOT_PARAMETERS are reported; every other bit is ignored.
"""

from typing import Any, Dict, Mapping, Optional

from corecatalog.constants import (
    DATA_SLOT_PARAMETER_BITS,
    ENABLED_DATA_SLOT_PARAMETERS,
)

PARAMETER_BITMAP: Dict[str, int] = {
    name: DATA_SLOT_PARAMETER_BITS[name] for name in ENABLED_DATA_SLOT_PARAMETERS
}


def parse_bitmask(value: Any) -> int:
    """
    Normalize a bitmask to an integer.

    Strings are read as base 16 (an optional `0x` prefix is accepted). None
    means no flags are set.

    Raises:
        ValueError: If the value is neither an integer nor a hex string.
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        raise ValueError(f"Invalid parameters bitmask: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return int(value.strip(), 16)
    raise ValueError(f"Invalid parameters bitmask: {value!r}")


def decode_parameters(
    value: Any, bitmap: Optional[Mapping[str, int]] = None
) -> Dict[str, bool]:
    """
    Decode a bitmask into the names of the flags that are set.

    Parameters:
        value: Integer or hex string bitmask.
        bitmap (Optional[Mapping[str, int]]): Flag name to bit value table, in
            output order. Defaults to PARAMETER_BITMAP.

    Returns:
        Dict[str, bool]: `{name: True}` for every set flag. Clear flags are omitted.
    """
    if bitmap is None:
        bitmap = PARAMETER_BITMAP
    mask = parse_bitmask(value)
    return {name: True for name, bit in bitmap.items() if mask & bit}


def encode_parameters(
    flags: Mapping[str, bool], bitmap: Optional[Mapping[str, int]] = None
) -> int:
    """
    Encode flag names back into a bitmask.

    Raises:
        ValueError: If a flag name is not in the table.
    """
    if bitmap is None:
        bitmap = PARAMETER_BITMAP
    mask = 0
    for name, enabled in flags.items():
        if name not in bitmap:
            raise ValueError(f"Unknown data slot parameter: {name}")
        if enabled:
            mask |= bitmap[name]
    return mask
