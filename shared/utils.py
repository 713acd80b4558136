#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Utility Functions - decoding of raw catalog values

Drivers disagree on how catalog flags and numbers come back (bool, int,
Decimal, '0'/'1', 'Y'/'N'), so every loader decodes through these helpers.
Each raises ValueError on a value it cannot interpret.
"""

from decimal import Decimal
from typing import Any, Optional

TRUE_STRINGS = {'1', 'y', 'yes', 't', 'true'}
FALSE_STRINGS = {'0', 'n', 'no', 'f', 'false'}


def decode_bool(value: Any) -> bool:
    """Catalog flag → bool"""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, Decimal)):
        return value != 0
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in TRUE_STRINGS:
            return True
        if lowered in FALSE_STRINGS:
            return False
    raise ValueError(f"cannot decode {value!r} as a boolean flag")


def decode_int(value: Any) -> int:
    """Catalog number → int (no silent truncation)"""
    if isinstance(value, bool):
        raise ValueError(f"cannot decode {value!r} as an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, Decimal) and value == value.to_integral_value():
        return int(value)
    if isinstance(value, str) and value.strip().lstrip('-').isdigit():
        return int(value.strip())
    raise ValueError(f"cannot decode {value!r} as an integer")


def decode_name(value: Any) -> str:
    """Required, non-empty identifier or type name"""
    if not isinstance(value, str) or not value:
        raise ValueError(f"cannot decode {value!r} as a name")
    return value


def decode_optional_text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    raise ValueError(f"cannot decode {value!r} as text")
