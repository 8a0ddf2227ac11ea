"""Field types shared by the catalogue schemas.

Rows coming back from the store are loosely shaped: optional text columns may
hold empty strings and numeric facet columns may hold Decimals, numeric text
or junk. These annotated types normalize such values once, at validation time.
"""

import math
from decimal import Decimal, InvalidOperation
from typing import Annotated, Any

from pydantic import BeforeValidator


def blank_to_none(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def to_number_or_text(value: Any) -> Any:
    """Numbers become floats, blanks become None, anything else stays as text."""
    value = blank_to_none(value)
    if value is None:
        return None
    if isinstance(value, bool):
        return str(value)
    try:
        number = float(Decimal(str(value)))
    except (InvalidOperation, ValueError):
        return str(value)
    return number if math.isfinite(number) else str(value)


OptionalText = Annotated[str | None, BeforeValidator(blank_to_none)]
NumericFacetValue = Annotated[float | str | None, BeforeValidator(to_number_or_text)]
