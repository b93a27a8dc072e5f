"""Decoding helpers shared by both projections.

Metadata queries return rows whose column names are qualified with the
source table (``Functions[Name]``) and whose documentation and parameter
columns hold JSON text. Everything here turns such a row into plain
Python values; the projections decide what to keep.
"""

import json
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Union

from exceptions import MalformedRowEncoding

QUALIFIED_COLUMN = re.compile(r"^[^\[]*\[(?P<field>.+)\]$")

ANY_TYPE = "any"


@dataclass
class ParameterMapping:
    """Parameters encoded as an object: name -> declared type, in declared order."""

    types_by_name: Dict[str, Any] = field(default_factory=dict)


@dataclass
class LegacyParameterList:
    """Parameters encoded as a plain list of names, no types."""

    names: List[str] = field(default_factory=list)


ParameterSpec = Union[ParameterMapping, LegacyParameterList]


def unqualify(column: str) -> str:
    """`Functions[Name]` -> `Name`; names without brackets are returned as-is."""
    match = QUALIFIED_COLUMN.match(column)
    return match.group("field") if match else column


def unqualify_row(row: Mapping[str, Any]) -> Dict[str, Any]:
    return {unqualify(column): value for column, value in row.items()}


def is_blank(value: Any) -> bool:
    return value is None or value == ""


def decode_embedded_json(row: Mapping[str, Any], column: str, symbol: str | None = None) -> Any:
    """
    Decodes the JSON text stored in `column` of an un-qualified row.

    A missing, null or empty column decodes to None. Malformed JSON is not
    recovered from.

    Raises:
        MalformedRowEncoding: If the column holds text that is not valid JSON.
    """
    raw = row.get(column)
    if raw is None or (isinstance(raw, str) and raw.strip() == ""):
        return None
    if not isinstance(raw, (str, bytes, bytearray)):
        raise MalformedRowEncoding(column, symbol, f"expected JSON text, got {type(raw).__name__}")
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise MalformedRowEncoding(column, symbol, str(e)) from e


def decode_documentation(row: Mapping[str, Any], symbol: str | None = None) -> Dict[str, Any]:
    """Decoded `Documentation` column; an absent record becomes an empty dict."""
    documentation = decode_embedded_json(row, "Documentation", symbol)
    if documentation is None:
        return {}
    if not isinstance(documentation, dict):
        raise MalformedRowEncoding(
            "Documentation", symbol, f"expected a JSON object, got {type(documentation).__name__}"
        )
    return documentation


def to_parameter_spec(decoded: Any, symbol: str | None = None) -> ParameterSpec:
    """
    Resolves a decoded `Parameters` value into one of the two known shapes.

    Args:
        decoded (Any): The value returned by `decode_embedded_json`.
        symbol (str | None): Function name, used in error messages.

    Returns:
        ParameterSpec: `ParameterMapping` for an object, `LegacyParameterList` for an array.
    """
    if decoded is None:
        return ParameterMapping()
    if isinstance(decoded, dict):
        return ParameterMapping(types_by_name=dict(decoded))
    if isinstance(decoded, list):
        return LegacyParameterList(names=[str(name) for name in decoded])
    raise MalformedRowEncoding(
        "Parameters", symbol, f"expected a JSON object or array, got {type(decoded).__name__}"
    )


def to_required_count(value: Any, symbol: str | None = None) -> int:
    """Integer conversion of `RequiredParameterCount`; null or blank counts as 0."""
    if value is None or (isinstance(value, str) and value.strip() == ""):
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        value = value.strip()
        if value.lstrip("+-").isdigit():
            return int(value)
    # Floats, decimals and "2.0"-style text are accepted when integral.
    try:
        number = float(value)
    except (TypeError, ValueError):
        number = None
    if number is None or not number.is_integer():
        raise MalformedRowEncoding("RequiredParameterCount", symbol, f"not an integer: {value!r}")
    return int(number)
