# Path: report_mailer/process/caster.py
"""
Field Caster

Converts raw backend cells into Values according to the kind the
user declared for the field. Casting is strict: a cell that does not
fit its declared kind raises TypeMismatchError, and the executor
aborts the whole query.

Rules (NULL always casts to Value.null()):
    String      anything, via its string representation
    Integer     whole numbers, or strings holding one
    Decimal     exact numerics or numeric strings, scale preserved
    Float       any numeric or numeric string
    Date        date/datetime or ISO-8601 string
    Time        time/datetime or ISO-8601 time string
    DateTime    datetime/date or ISO-8601 string
    Boolean     bool, integers 0/1, '0'/'1'/'true'/'false'
    Identifier  UUID, 16-byte blob or UUID string
"""

import uuid
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict

from dateutil.parser import isoparse, isoparser

from ..exceptions import TypeMismatchError
from .models import FieldSpec
from .values import FieldKind, Value


_BOOLEAN_STRINGS = {
    '1': True, 'true': True, 't': True,
    '0': False, 'false': False, 'f': False,
}
_TIME_PARSER = isoparser()


def _mismatch(kind: FieldKind, raw: Any) -> TypeMismatchError:
    return TypeMismatchError(
        f"cannot cast {type(raw).__name__} to {kind.value}",
        raw_value=raw,
    )


def _as_text(raw: Any) -> Any:
    """Decode blobs so string parsing rules apply to them."""
    if isinstance(raw, (bytes, bytearray, memoryview)):
        return bytes(raw).decode('utf-8')
    return raw


def _cast_string(raw: Any) -> Value:
    try:
        return Value.text(str(_as_text(raw)))
    except UnicodeDecodeError:
        raise _mismatch(FieldKind.STRING, raw) from None


def _cast_integer(raw: Any) -> Value:
    if isinstance(raw, bool):
        raise _mismatch(FieldKind.INTEGER, raw)
    if isinstance(raw, int):
        return Value.integer(raw)
    if isinstance(raw, float) and raw.is_integer():
        return Value.integer(int(raw))

    number = raw
    if isinstance(raw, str):
        # '7.0' is a whole number, '7.5' is not
        try:
            number = Decimal(raw.strip())
        except InvalidOperation:
            raise _mismatch(FieldKind.INTEGER, raw) from None
    if isinstance(number, Decimal) and number.is_finite() and number == number.to_integral_value():
        return Value.integer(int(number))
    raise _mismatch(FieldKind.INTEGER, raw)


def _cast_decimal(raw: Any) -> Value:
    if isinstance(raw, bool):
        raise _mismatch(FieldKind.DECIMAL, raw)
    try:
        if isinstance(raw, Decimal):
            value = raw
        elif isinstance(raw, int):
            value = Decimal(raw)
        elif isinstance(raw, float):
            # repr() is the shortest exact round-trip form of the float
            value = Decimal(repr(raw))
        elif isinstance(raw, str):
            value = Decimal(raw.strip())
        else:
            raise _mismatch(FieldKind.DECIMAL, raw)
    except InvalidOperation:
        raise _mismatch(FieldKind.DECIMAL, raw) from None

    if not value.is_finite():
        raise _mismatch(FieldKind.DECIMAL, raw)
    return Value.decimal(value)


def _cast_float(raw: Any) -> Value:
    if isinstance(raw, bool):
        raise _mismatch(FieldKind.FLOAT, raw)
    if isinstance(raw, (int, float, Decimal)):
        return Value.floating(float(raw))
    if isinstance(raw, str):
        try:
            return Value.floating(float(raw.strip()))
        except ValueError:
            pass
    raise _mismatch(FieldKind.FLOAT, raw)


def _cast_date(raw: Any) -> Value:
    if isinstance(raw, datetime):
        return Value.date(raw.date())
    if isinstance(raw, date):
        return Value.date(raw)
    if isinstance(raw, str):
        try:
            return Value.date(isoparse(raw.strip()).date())
        except (ValueError, OverflowError):
            pass
    raise _mismatch(FieldKind.DATE, raw)


def _cast_time(raw: Any) -> Value:
    if isinstance(raw, datetime):
        return Value.time(raw.time())
    if isinstance(raw, time):
        return Value.time(raw)
    if isinstance(raw, str):
        try:
            return Value.time(_TIME_PARSER.parse_isotime(raw.strip()))
        except ValueError:
            pass
    raise _mismatch(FieldKind.TIME, raw)


def _cast_datetime(raw: Any) -> Value:
    if isinstance(raw, datetime):
        return Value.datetime(raw)
    if isinstance(raw, date):
        return Value.datetime(datetime.combine(raw, time()))
    if isinstance(raw, str):
        try:
            return Value.datetime(isoparse(raw.strip()))
        except (ValueError, OverflowError):
            pass
    raise _mismatch(FieldKind.DATETIME, raw)


def _cast_boolean(raw: Any) -> Value:
    if isinstance(raw, bool):
        return Value.boolean(raw)
    if isinstance(raw, int) and raw in (0, 1):
        return Value.boolean(bool(raw))
    if isinstance(raw, str):
        flag = _BOOLEAN_STRINGS.get(raw.strip().lower())
        if flag is not None:
            return Value.boolean(flag)
    raise _mismatch(FieldKind.BOOLEAN, raw)


def _cast_identifier(raw: Any) -> Value:
    if isinstance(raw, uuid.UUID):
        return Value.identifier(raw)
    try:
        if isinstance(raw, (bytes, bytearray, memoryview)) and len(raw) == 16:
            return Value.identifier(uuid.UUID(bytes=bytes(raw)))
        if isinstance(raw, str):
            return Value.identifier(uuid.UUID(raw.strip()))
    except ValueError:
        pass
    raise _mismatch(FieldKind.IDENTIFIER, raw)


_CASTERS: Dict[FieldKind, Callable[[Any], Value]] = {
    FieldKind.STRING: _cast_string,
    FieldKind.INTEGER: _cast_integer,
    FieldKind.DECIMAL: _cast_decimal,
    FieldKind.FLOAT: _cast_float,
    FieldKind.DATE: _cast_date,
    FieldKind.TIME: _cast_time,
    FieldKind.DATETIME: _cast_datetime,
    FieldKind.BOOLEAN: _cast_boolean,
    FieldKind.IDENTIFIER: _cast_identifier,
}


def cast(raw: Any, kind: FieldKind) -> Value:
    """
    Cast a raw backend value to a Value of the declared kind.

    Args:
        raw: Backend-native cell value (None for SQL NULL)
        kind: Declared FieldKind

    Returns:
        Value tagged for the declared kind, or Value.null()

    Raises:
        TypeMismatchError: If the raw value does not fit the kind
    """
    if raw is None:
        return Value.null()
    return _CASTERS[FieldKind(kind)](raw)


def cast_field(raw: Any, spec: FieldSpec, row_index: int) -> Value:
    """
    Cast one cell of a result row.

    Same as cast(), but a failure names the field and row.
    """
    try:
        return cast(raw, spec.kind)
    except TypeMismatchError as e:
        raise e.with_location(spec.name, row_index) from None


__all__ = ['cast', 'cast_field']
