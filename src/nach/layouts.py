"""Default field tables for the six physical record kinds.

Positions are 1-based starting columns; every table covers exactly
``RECORD_LENGTH`` columns. Each factory returns a fresh table.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from nach.fields import Field, FieldTable

RECORD_LENGTH = 94
BLOCKING_FACTOR = 10

FILE_HEADER = "1"
BATCH_HEADER = "5"
ENTRY = "6"
ADDENDA = "7"
BATCH_CONTROL = "8"
FILE_CONTROL = "9"


def file_header() -> FieldTable:
    now = datetime.now()
    return {
        "record_type_code": Field("Record Type Code", 1, 1, "numeric", True, FILE_HEADER),
        "priority_code": Field("Priority Code", 2, 2, "numeric", True, "01"),
        "immediate_destination": Field(
            "Immediate Destination", 4, 10, "numeric", True, fill_char=" "
        ),
        "immediate_origin": Field("Immediate Origin", 14, 10, "numeric", True, fill_char=" "),
        "file_creation_date": Field(
            "File Creation Date", 24, 6, "numeric", True, now.strftime("%y%m%d")
        ),
        "file_creation_time": Field(
            "File Creation Time", 30, 4, "numeric", False, now.strftime("%H%M")
        ),
        "file_id_modifier": Field("File ID Modifier", 34, 1, "alphanumeric", True, "A"),
        "record_size": Field("Record Size", 35, 3, "numeric", True, "094"),
        "blocking_factor": Field("Blocking Factor", 38, 2, "numeric", True, str(BLOCKING_FACTOR)),
        "format_code": Field("Format Code", 40, 1, "numeric", True, "1"),
        "immediate_destination_name": Field("Immediate Destination Name", 41, 23),
        "immediate_origin_name": Field("Immediate Origin Name", 64, 23),
        "reference_code": Field("Reference Code", 87, 8),
    }


def file_control() -> FieldTable:
    return {
        "record_type_code": Field("Record Type Code", 1, 1, "numeric", True, FILE_CONTROL),
        "batch_count": Field("Batch Count", 2, 6, "numeric", True, 0),
        "block_count": Field("Block Count", 8, 6, "numeric", True, 0),
        # entry/addenda count; see DESIGN.md for what is actually counted
        "addenda_count": Field("Entry/Addenda Count", 14, 8, "numeric", True, 0),
        "entry_hash": Field("Entry Hash", 22, 10, "numeric", True, 0),
        "total_debit": Field("Total Debit Entry Dollar Amount", 32, 12, "numeric", True, 0),
        "total_credit": Field("Total Credit Entry Dollar Amount", 44, 12, "numeric", True, 0),
        "reserved": Field("Reserved", 56, 39, blank=True),
    }


def batch_header() -> FieldTable:
    return {
        "record_type_code": Field("Record Type Code", 1, 1, "numeric", True, BATCH_HEADER),
        "service_class_code": Field("Service Class Code", 2, 3, "numeric", True),
        "company_name": Field("Company Name", 5, 16, "alphanumeric", True),
        "company_discretionary_data": Field("Company Discretionary Data", 21, 20),
        "company_identification": Field("Company Identification", 41, 10, "alphanumeric", True),
        "standard_entry_class_code": Field(
            "Standard Entry Class Code", 51, 3, "alphanumeric", True
        ),
        "company_entry_description": Field(
            "Company Entry Description", 54, 10, "alphanumeric", True
        ),
        "company_descriptive_date": Field("Company Descriptive Date", 64, 6),
        "effective_entry_date": Field("Effective Entry Date", 70, 6, "numeric", True),
        "settlement_date": Field("Settlement Date", 76, 3, blank=True),
        "originator_status_code": Field("Originator Status Code", 79, 1, "numeric", True, "1"),
        "originating_dfi": Field("Originating DFI Identification", 80, 8, "numeric", True),
        "batch_number": Field("Batch Number", 88, 7, "numeric", True, 0),
    }


def batch_control() -> FieldTable:
    return {
        "record_type_code": Field("Record Type Code", 1, 1, "numeric", True, BATCH_CONTROL),
        "service_class_code": Field("Service Class Code", 2, 3, "numeric", True),
        "addenda_count": Field("Entry/Addenda Count", 5, 6, "numeric", True, 0),
        "entry_hash": Field("Entry Hash", 11, 10, "numeric", True, 0),
        "total_debit": Field("Total Debit Entry Dollar Amount", 21, 12, "numeric", True, 0),
        "total_credit": Field("Total Credit Entry Dollar Amount", 33, 12, "numeric", True, 0),
        "company_identification": Field("Company Identification", 45, 10, "alphanumeric", True),
        "message_authentication_code": Field("Message Authentication Code", 55, 19),
        "reserved": Field("Reserved", 74, 6, blank=True),
        "originating_dfi": Field("Originating DFI Identification", 80, 8, "numeric", True),
        "batch_number": Field("Batch Number", 88, 7, "numeric", True, 0),
    }


def entry_fields() -> FieldTable:
    return {
        "record_type_code": Field("Record Type Code", 1, 1, "numeric", True, ENTRY),
        "transaction_code": Field("Transaction Code", 2, 2, "numeric", True),
        "receiving_dfi": Field("Receiving DFI Identification", 4, 8, "numeric", True),
        "check_digit": Field("Check Digit", 12, 1, "numeric", True),
        "dfi_account": Field("DFI Account Number", 13, 17, "alphanumeric", True),
        "amount": Field("Amount", 30, 10, "numeric", True),
        "id_number": Field("Individual Identification Number", 40, 15),
        "individual_name": Field("Individual Name", 55, 22, "alphanumeric", True),
        "discretionary_data": Field("Discretionary Data", 77, 2),
        "addenda_id": Field("Addenda Record Indicator", 79, 1, "numeric", True, "0"),
        "trace_number": Field("Trace Number", 80, 15, "numeric"),
    }


def addenda_fields() -> FieldTable:
    return {
        "record_type_code": Field("Record Type Code", 1, 1, "numeric", True, ADDENDA),
        "addenda_type_code": Field("Addenda Type Code", 2, 2, "numeric", True, "05"),
        "payment_related_information": Field("Payment Related Information", 4, 80),
        "addenda_sequence_number": Field("Addenda Sequence Number", 84, 4, "numeric", True, 1),
        "entry_detail_sequence_number": Field("Entry Detail Sequence Number", 88, 7, "numeric"),
    }


LAYOUTS: dict[str, Callable[[], FieldTable]] = {
    FILE_HEADER: file_header,
    BATCH_HEADER: batch_header,
    ENTRY: entry_fields,
    ADDENDA: addenda_fields,
    BATCH_CONTROL: batch_control,
    FILE_CONTROL: file_control,
}
