import pytest

from nach.addenda import EntryAddenda
from nach.batch import Batch
from nach.entry import Entry
from nach.errors import (
    FieldTooLong,
    InvalidAddendaTypeCode,
    InvalidFieldType,
    InvalidRoutingNumber,
    InvalidSECCode,
    InvalidServiceClassCode,
    InvalidTransactionCode,
    MissingField,
    ValidationError,
)

ENTRY = {
    "transaction_code": "22",
    "receiving_dfi": "081000210",
    "dfi_account": "12345678",
    "amount": 1500,
    "individual_name": "ALEX SMITH",
}
BATCH = {
    "service_class_code": "200",
    "company_name": "YOUR COMPANY",
    "company_identification": "1234567890",
    "standard_entry_class_code": "PPD",
    "company_entry_description": "PAYROLL",
    "effective_entry_date": "261020",
    "originating_dfi": "08100003",
}


def test_missing_required_field_is_named():
    options = {k: v for k, v in ENTRY.items() if k != "individual_name"}
    with pytest.raises(MissingField) as exc:
        Entry(options)
    assert exc.value.field == "individual_name"


def test_required_check_runs_before_code_check():
    with pytest.raises(MissingField):
        EntryAddenda(fields={"addenda_type_code": ""})


def test_invalid_addenda_type_code():
    with pytest.raises(InvalidAddendaTypeCode):
        EntryAddenda(addenda_type_code="03")


def test_field_too_long():
    with pytest.raises(FieldTooLong):
        Batch({**BATCH, "company_identification": "12345678901"})
    with pytest.raises(FieldTooLong):
        EntryAddenda(addenda_sequence_number=12345)


def test_numeric_field_rejects_non_digits():
    with pytest.raises(InvalidFieldType):
        Entry({**ENTRY, "amount": "12a"})
    with pytest.raises(InvalidFieldType):
        Entry({**ENTRY, "amount": -5})


def test_enumerated_codes():
    with pytest.raises(InvalidTransactionCode):
        Entry({**ENTRY, "transaction_code": "12"})
    with pytest.raises(InvalidServiceClassCode):
        Batch({**BATCH, "service_class_code": "123"})
    with pytest.raises(InvalidSECCode):
        Batch({**BATCH, "standard_entry_class_code": "XYZ"})


def test_routing_number_checksum():
    with pytest.raises(InvalidRoutingNumber):
        Entry({**ENTRY, "receiving_dfi": "081000033"})
    with pytest.raises(InvalidRoutingNumber):
        Entry({**ENTRY, "receiving_dfi": "0810002", "check_digit": "2"})


def test_auto_validate_can_be_disabled():
    entry = Entry(auto_validate=False)
    assert entry.get("individual_name") == ""
    with pytest.raises(ValidationError):
        entry.validate()


def test_length_check_runs_before_type_check():
    with pytest.raises(FieldTooLong):
        Entry({**ENTRY, "amount": "12345678901a"})


def test_code_check_runs_before_length_check():
    with pytest.raises(InvalidAddendaTypeCode):
        EntryAddenda(addenda_type_code="03", addenda_sequence_number=12345)
