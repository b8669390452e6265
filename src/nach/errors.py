"""Exceptions raised by record construction, validation and parsing."""

from __future__ import annotations


class NachError(Exception):
    """Base class for every error raised by the nach package."""


class ValidationError(NachError):
    """A record failed structural validation."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class MissingField(ValidationError):
    def __init__(self, field: str) -> None:
        super().__init__(f"Missing required field: {field}", field)


class FieldTooLong(ValidationError):
    def __init__(self, field: str, value: object, width: int) -> None:
        super().__init__(f"{field} value {value!r} exceeds width {width}", field)
        self.width = width


class InvalidFieldType(ValidationError):
    def __init__(self, field: str, value: object, expected: str) -> None:
        super().__init__(f"{field} value {value!r} is not {expected}", field)
        self.expected = expected


class InvalidAddendaTypeCode(ValidationError):
    def __init__(self, code: object) -> None:
        super().__init__(f"Invalid addenda type code: {code!r}", "addenda_type_code")


class InvalidTransactionCode(ValidationError):
    def __init__(self, code: object) -> None:
        super().__init__(f"Invalid transaction code: {code!r}", "transaction_code")


class InvalidServiceClassCode(ValidationError):
    def __init__(self, code: object) -> None:
        super().__init__(f"Invalid service class code: {code!r}", "service_class_code")


class InvalidSECCode(ValidationError):
    def __init__(self, code: object) -> None:
        super().__init__(
            f"Invalid standard entry class code: {code!r}", "standard_entry_class_code"
        )


class InvalidRoutingNumber(ValidationError):
    def __init__(self, routing: object, reason: str) -> None:
        super().__init__(f"Invalid routing number {routing!r}: {reason}", "receiving_dfi")


class UnknownField(ValidationError):
    def __init__(self, field: str) -> None:
        super().__init__(f"Unknown field: {field}", field)


class ParseError(NachError):
    """The input text could not be assembled into a File."""
