import pytest

from nach.errors import UnknownField
from nach.fields import Field, apply_overrides, ordered, table_width
from nach.layouts import LAYOUTS, RECORD_LENGTH, entry_fields


@pytest.mark.parametrize("record_type", sorted(LAYOUTS))
def test_layouts_cover_the_whole_record(record_type):
    table = LAYOUTS[record_type]()
    assert table_width(table) == RECORD_LENGTH
    column = 1
    for _name, field in ordered(table):
        assert field.position == column
        column += field.width
    assert column == RECORD_LENGTH + 1
    assert table["record_type_code"].value == record_type


def test_field_defaults_follow_type():
    numeric = Field("Amount", 1, 10, "numeric")
    text = Field("Name", 11, 22)
    assert (numeric.fill_char, numeric.justification) == ("0", "right")
    assert (text.fill_char, text.justification) == (" ", "left")


def test_apply_overrides_is_a_deep_merge():
    defaults = entry_fields()
    merged = apply_overrides(
        defaults, {"amount": 1000, "individual_name": {"value": "JANE DOE", "required": False}}
    )
    assert merged["amount"].value == 1000
    assert merged["individual_name"].value == "JANE DOE"
    assert merged["individual_name"].required is False
    assert merged["individual_name"].width == defaults["individual_name"].width
    assert merged["trace_number"] == defaults["trace_number"]
    # defaults stay untouched
    assert defaults["amount"].value == ""
    assert defaults["individual_name"].required is True


def test_apply_overrides_rejects_unknown_fields():
    with pytest.raises(UnknownField):
        apply_overrides(entry_fields(), {"not_a_field": 1})
    with pytest.raises(UnknownField):
        apply_overrides(entry_fields(), {"amount": {"colour": "red"}})
