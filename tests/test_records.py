import pytest

from nach.addenda import EntryAddenda
from nach.batch import Batch
from nach.entry import Entry
from nach.errors import UnknownField


def test_addenda_sequence_number_keeps_rightmost_digits():
    addenda = EntryAddenda(entry_detail_sequence_number="123456789012")
    assert addenda.get("entry_detail_sequence_number") == "6789012"
    addenda.set("entry_detail_sequence_number", "ABCDEFGHIJ")
    assert addenda.get("entry_detail_sequence_number") == "DEFGHIJ"


def test_payment_information_keeps_leftmost_characters():
    addenda = EntryAddenda(payment_related_information="A" * 80 + "BBBBB")
    assert addenda.get("payment_related_information") == "A" * 80
    addenda.set("payment_related_information", "C" * 81)
    assert addenda.get("payment_related_information") == "C" * 80


def test_return_code():
    assert EntryAddenda(addenda_type_code="99", return_code="R14").get_return_code() == "R14"
    addenda = EntryAddenda(return_code="R0199", payment_related_information="NSF")
    assert addenda.get("payment_related_information") == "R01NSF"
    assert EntryAddenda().get_return_code() is False


def test_unknown_field_access():
    addenda = EntryAddenda()
    with pytest.raises(UnknownField):
        addenda.get("amount")
    with pytest.raises(UnknownField):
        addenda.set("amount", 1)


def test_entry_splits_or_computes_check_digit():
    full = Entry(
        transaction_code="22",
        receiving_dfi="081000210",
        dfi_account="1",
        amount="0000001500",
        individual_name="A",
    )
    assert (full.get("receiving_dfi"), full.get("check_digit")) == ("08100021", "0")
    assert full.get("amount") == 1500

    prefix = Entry(
        transaction_code="22",
        receiving_dfi="02100002",
        dfi_account="1",
        amount=1,
        individual_name="A",
    )
    assert prefix.get("check_digit") == "1"


def test_entry_free_text_truncates_left():
    entry = Entry(
        transaction_code="22",
        receiving_dfi="081000210",
        dfi_account="1234567890123456789",
        amount=1,
        individual_name="A VERY LONG INDIVIDUAL NAME INDEED",
    )
    assert entry.get("dfi_account") == "12345678901234567"
    assert entry.get("individual_name") == "A VERY LONG INDIVIDUAL"


def test_add_addenda_stamps_sequence_numbers():
    entry = Entry(
        transaction_code="22",
        receiving_dfi="081000210",
        dfi_account="1",
        amount=1,
        individual_name="A",
        trace_number="081000030000042",
    )
    first, second = EntryAddenda(), EntryAddenda()
    entry.add_addenda(first)
    entry.add_addenda(second)
    assert entry.get("addenda_id") == "1"
    assert [a.get("addenda_sequence_number") for a in entry.get_addendas()] == [1, 2]
    assert second.get("entry_detail_sequence_number") == "0000042"
    assert entry.get_record_count() == 3
    lines = entry.generate_string().split("\n")
    assert len(lines) == 3
    assert [line[0] for line in lines] == ["6", "7", "7"]


def test_ensure_trace_number_only_fills_missing():
    entry = Entry(
        transaction_code="22",
        receiving_dfi="081000210",
        dfi_account="1",
        amount=1,
        individual_name="A",
    )
    addenda = EntryAddenda()
    entry.add_addenda(addenda)
    assert entry.ensure_trace_number("12345678", 3) == "123456780000003"
    assert addenda.get("entry_detail_sequence_number") == "0000003"
    assert entry.ensure_trace_number("99999999", 9) == "123456780000003"


def _batch() -> Batch:
    return Batch(
        service_class_code="200",
        company_name="YOUR COMPANY",
        company_identification="1234567890",
        standard_entry_class_code="PPD",
        company_entry_description="PAYROLL",
        effective_entry_date="261020",
        originating_dfi="081000032",
    )


def test_batch_mirrors_header_values_on_control():
    batch = _batch()
    assert batch.get("originating_dfi") == "08100003"
    assert batch.control["originating_dfi"].value == "08100003"
    assert batch.control["service_class_code"].value == "200"
    batch.set("batch_number", 7)
    assert batch.header["batch_number"].value == 7
    assert batch.control["batch_number"].value == 7


def test_batch_totals_and_string():
    batch = _batch()
    for code, amount in (("22", 1000), ("32", 500), ("27", 250)):
        entry = Entry(
            transaction_code=code,
            receiving_dfi="081000210",
            dfi_account="1",
            amount=amount,
            individual_name="A",
            trace_number="123456780000001",
        )
        batch.add_entry(entry)
    batch.get_entries()[0].add_addenda(EntryAddenda())

    lines = batch.generate_string().split("\n")
    assert [line[0] for line in lines] == ["5", "6", "7", "6", "6", "8"]
    assert all(len(line) == 94 for line in lines)
    assert batch.get("total_credit") == 1500
    assert batch.get("total_debit") == 250
    assert batch.get("addenda_count") == 4
    assert batch.get("entry_hash") == str(3 * 8100021)
    assert lines[-1][4:10] == "000004"


def test_add_addenda_keeps_sequence_until_trace_is_known():
    entry = Entry(
        transaction_code="22",
        receiving_dfi="081000210",
        dfi_account="1",
        amount=1,
        individual_name="A",
    )
    addenda = EntryAddenda(entry_detail_sequence_number="0000042")
    entry.add_addenda(addenda)
    assert addenda.get("entry_detail_sequence_number") == "0000042"

    batch = _batch()
    batch.add_entry(entry)
    assert batch.generate_string().split("\n")[2].endswith("0001" + "0000042")
