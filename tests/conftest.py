import pytest

from nach.addenda import EntryAddenda
from nach.batch import Batch
from nach.entry import Entry
from nach.file import File


def build_file(with_addenda: bool = False) -> File:
    nach_file = File(
        immediate_destination="081000032",
        immediate_origin="123456789",
        immediate_destination_name="SOME BANK",
        immediate_origin_name="YOUR COMPANY",
        reference_code="REF1",
        file_creation_date="261019",
        file_creation_time="1230",
    )
    batch = Batch(
        service_class_code="200",
        company_name="YOUR COMPANY",
        company_identification="1234567890",
        standard_entry_class_code="PPD",
        company_entry_description="PAYROLL",
        effective_entry_date="261020",
        originating_dfi="08100003",
    )
    credit = Entry(
        transaction_code="22",
        receiving_dfi="081000210",
        dfi_account="12345678",
        amount=1500,
        individual_name="ALEX SMITH",
    )
    debit = Entry(
        transaction_code="27",
        receiving_dfi="021000021",
        dfi_account="99887766",
        amount=250,
        individual_name="SAM LEE",
    )
    if with_addenda:
        debit.add_addenda(
            EntryAddenda(
                addenda_type_code="99",
                payment_related_information="R14 Representative payee deceased",
            )
        )
    batch.add_entry(credit)
    batch.add_entry(debit)
    nach_file.add_batch(batch)
    return nach_file


@pytest.fixture
def sample_file() -> File:
    return build_file()


@pytest.fixture
def sample_file_with_addenda() -> File:
    return build_file(with_addenda=True)
