"""Structural validation of field tables.

Each check is fail-fast: the first offending field raises. Record classes run
them in a fixed order: required fields, enumerated codes, lengths, data types.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

from nach.codec import is_valid_routing_number
from nach.errors import (
    FieldTooLong,
    InvalidAddendaTypeCode,
    InvalidFieldType,
    InvalidRoutingNumber,
    InvalidSECCode,
    InvalidServiceClassCode,
    InvalidTransactionCode,
    MissingField,
)
from nach.fields import Field, ordered

ADDENDA_TYPE_CODES = frozenset({"02", "05", "98", "99"})
SERVICE_CLASS_CODES = frozenset({"200", "220", "225"})
SEC_CODES = frozenset(
    {"ARC", "BOC", "CCD", "CIE", "CTX", "IAT", "POP", "PPD", "RCK", "TEL", "WEB"}
)
CREDIT_CODES = frozenset({"22", "23", "24", "32", "33", "34", "42", "43", "44", "52", "53", "54"})
DEBIT_CODES = frozenset({"27", "28", "29", "37", "38", "39", "47", "48", "49", "55"})
TRANSACTION_CODES = CREDIT_CODES | DEBIT_CODES

NUMERIC_RE = re.compile(r"^[0-9]+$")
ALPHANUMERIC_RE = re.compile(r"^[\x20-\x7e]*$")


def validate_required_fields(table: Mapping[str, Field]) -> None:
    for name, field in ordered(table):
        if field.required and field.is_empty():
            raise MissingField(name)


def validate_addenda_type_code(code: object) -> None:
    if str(code) not in ADDENDA_TYPE_CODES:
        raise InvalidAddendaTypeCode(code)


def validate_transaction_code(code: object) -> None:
    if str(code) not in TRANSACTION_CODES:
        raise InvalidTransactionCode(code)


def validate_service_class_code(code: object) -> None:
    if str(code) not in SERVICE_CLASS_CODES:
        raise InvalidServiceClassCode(code)


def validate_sec_code(code: object) -> None:
    if str(code) not in SEC_CODES:
        raise InvalidSECCode(code)


def validate_routing_number(routing: object) -> None:
    text = str(routing)
    if len(text) != 9:
        raise InvalidRoutingNumber(routing, "must be exactly 9 digits")
    if not is_valid_routing_number(text):
        raise InvalidRoutingNumber(routing, "check digit mismatch")


def validate_lengths(table: Mapping[str, Field]) -> None:
    for name, field in ordered(table):
        if field.value is None:
            continue
        if len(str(field.value)) > field.width:
            raise FieldTooLong(name, field.value, field.width)


def validate_data_types(table: Mapping[str, Field]) -> None:
    for name, field in ordered(table):
        if field.blank or field.is_empty():
            continue
        text = str(field.value)
        if field.type == "numeric":
            if not NUMERIC_RE.match(text):
                raise InvalidFieldType(name, field.value, "numeric")
        elif not ALPHANUMERIC_RE.match(text):
            raise InvalidFieldType(name, field.value, "alphanumeric")


def validate_table(table: Mapping[str, Field]) -> None:
    """Required fields, then lengths, then data types."""
    validate_required_fields(table)
    validate_lengths(table)
    validate_data_types(table)
