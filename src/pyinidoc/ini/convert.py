# -*- encoding: utf-8 -*-
# @File   : convert.py
# @Time   : 2026/10/17 10:21:35
# @Author : pyinidoc contributors

"""Value conversion between the stored scalars and caller-requested types.

Only a closed set of targets is accepted, see `SUPPORTED_TYPES`.
Python has a single `int` and a single `str`,
so every integer width and the character kind collapse into those.
"""

import re
from datetime import datetime
from decimal import ROUND_HALF_EVEN, Decimal
from types import NoneType
from typing import Any, Callable, TypeAlias, TypeVar

from .consts import NULL_LITERAL
from .errors import ConversionFailed, InvalidArgument

# what an entry may hold. `None` is the "null" of a missing value.
IniValue: TypeAlias = bool | int | float | Decimal | str | None

T = TypeVar('T')

SUPPORTED_TYPES: tuple[type, ...] = (
    object, NoneType, bool, int, float, Decimal, datetime, str)

_TRUE, _FALSE = 'true', 'false'
# no exponent, no NaN/Infinity: those would eat ordinary strings.
_DECIMAL = re.compile(r'[+-]?(?:\d+(?:\.\d*)?|\.\d+)')


def format_value(value: IniValue) -> str:
    """Display form used by both `str(entry)` and the text codecs."""
    if value is None:
        return NULL_LITERAL
    if isinstance(value, bool):
        return _TRUE if value else _FALSE
    if isinstance(value, Decimal) and value.is_finite():
        # fixed-point only, `infer_value` does not read exponents back.
        return format(value, 'f')
    return str(value)


def parse_bool(text: str) -> bool | None:
    match text.strip().lower():
        case 'true':
            return True
        case 'false':
            return False
        case _:
            return None


def parse_decimal(text: str) -> Decimal | None:
    text = text.strip()
    if not _DECIMAL.fullmatch(text):
        return None
    return Decimal(text)


def infer_value(text: str) -> bool | Decimal | str:
    """Guess the type of a raw INI value: bool, then decimal, else str."""
    if (b := parse_bool(text)) is not None:
        return b
    if (d := parse_decimal(text)) is not None:
        return d
    return text


def _to_bool(value: Any) -> bool:
    if isinstance(value, (bool, int, float, Decimal)):
        return bool(value)
    if isinstance(value, str):
        if (ret := parse_bool(value)) is None:
            raise ValueError(f'"{value}" is not a boolean')
        return ret
    raise TypeError(f'cannot convert {type(value).__name__} to bool')


def _to_int(value: Any) -> int:
    if isinstance(value, (bool, int)):
        return int(value)
    if isinstance(value, (float, Decimal)):
        # banker's rounding, like the decimal module's default context.
        return int(Decimal(value).to_integral_value(ROUND_HALF_EVEN))
    if isinstance(value, str):
        return int(value.strip())
    raise TypeError(f'cannot convert {type(value).__name__} to int')


def _to_float(value: Any) -> float:
    if isinstance(value, (bool, int, float, Decimal)):
        return float(value)
    if isinstance(value, str):
        if (d := parse_decimal(value)) is None:
            raise ValueError(f'"{value}" is not a number')
        return float(d)
    raise TypeError(f'cannot convert {type(value).__name__} to float')


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, (bool, int)):
        return Decimal(int(value))
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        ret = Decimal(repr(value))
        if not ret.is_finite():
            raise ValueError(f'{value} has no decimal form')
        return ret
    if isinstance(value, str):
        if (d := parse_decimal(value)) is None:
            raise ValueError(f'"{value}" is not a decimal')
        return d
    raise TypeError(f'cannot convert {type(value).__name__} to Decimal')


def _to_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        return datetime.fromisoformat(value.strip())
    raise TypeError(f'cannot convert {type(value).__name__} to datetime')


def _to_none(value: Any) -> None:
    if value is not None:
        raise TypeError(f'cannot convert {value!r} to None')
    return None


_CONVERTERS: dict[type, Callable[[Any], Any]] = {
    object: lambda v: v,
    NoneType: _to_none,
    bool: _to_bool,
    int: _to_int,
    float: _to_float,
    Decimal: _to_decimal,
    datetime: _to_datetime,
    str: format_value,
}


def change_type(value: Any, astype: type[T]) -> T:
    """Convert `value` into `astype`.

    Raises:
        InvalidArgument: `astype` is outside `SUPPORTED_TYPES`,
            checked before anything is converted.
        ConversionFailed: the value is `None` for a non-nullable target,
            or the conversion itself failed.
    """
    if astype not in SUPPORTED_TYPES:
        raise InvalidArgument(
            f'unsupported conversion target: {getattr(astype, "__name__", astype)!r}')
    if value is None and astype not in (object, NoneType):
        raise ConversionFailed(f'null cannot be converted to {astype.__name__}')
    try:
        return _CONVERTERS[astype](value)
    except (ValueError, TypeError, ArithmeticError) as e:
        raise ConversionFailed(
            f'cannot convert {value!r} to {astype.__name__}: {e}') from e
