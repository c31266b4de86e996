"""검토 동작 / 저장 전 검증 테스트"""
from datetime import date

import pytest

from src.services.lab_import.reference import BiomarkerCategory, BiomarkerUnit, find_definition
from src.services.lab_import.report_parser import parse_line, parse_report
from src.services.lab_import.review import (
    SelectionError,
    build_biomarker_records,
    change_unit,
    edit_value,
    replace_item,
    select_definition,
    toggle_include,
    validate_selection,
)


@pytest.fixture
def crp_item():
    return parse_line("CRP 1.20 mg/L (0.00-3.00)")


@pytest.fixture
def unmatched_item():
    return parse_line("Leukocyta 6.1 Giga/L")


class TestReviewActions:
    """검토 동작은 원본을 바꾸지 않고 새 후보를 반환"""

    def test_toggle_include(self, crp_item):
        off = toggle_include(crp_item)
        assert off.include is False
        assert crp_item.include is True
        assert toggle_include(off).include is True

    def test_toggle_include_explicit(self, crp_item):
        assert toggle_include(crp_item, include=True).include is True
        assert toggle_include(crp_item, include=False).include is False

    def test_select_definition_keeps_detected_unit(self, unmatched_item):
        chosen = find_definition("hemoglobin")
        updated = select_definition(unmatched_item, chosen)
        assert updated.definition is chosen
        assert updated.unit == BiomarkerUnit.GIGA_L
        assert updated.matched_definition is None

    def test_select_definition_fills_missing_unit(self):
        item = parse_line("Kálium 4,2")
        item = change_unit(item, None)
        updated = select_definition(item, find_definition("sodium"))
        assert updated.unit == BiomarkerUnit.MMOL_L

    def test_edit_value_strips(self, crp_item):
        assert edit_value(crp_item, " 1,5 ").value_text == "1,5"

    def test_change_unit(self, crp_item):
        assert change_unit(crp_item, BiomarkerUnit.MG_DL).unit == BiomarkerUnit.MG_DL

    def test_replace_item(self, sample_report_text):
        items = parse_report(sample_report_text).items
        updated = replace_item(items, 4, toggle_include(items[4]))
        assert updated[4].include is True
        assert items[4].include is False
        assert updated[:4] == items[:4]


class TestValidateSelection:
    """validate_selection() 테스트"""

    def test_only_included_items_considered(self, sample_report_text):
        validation = validate_selection(parse_report(sample_report_text).items)
        assert validation.accepted_count == 4
        assert validation.rejected_count == 0
        assert validation.is_saveable
        assert validation.summary() == {"selected": 4, "accepted": 4, "rejected": 0}

    def test_missing_definition(self, unmatched_item):
        validation = validate_selection([toggle_include(unmatched_item, True)])
        assert validation.rejected[0][1] == ["missing_definition"]
        assert not validation.is_saveable

    def test_invalid_value(self, crp_item):
        validation = validate_selection([edit_value(crp_item, "n/a")])
        assert validation.rejected[0][1] == ["invalid_value"]

    def test_empty_selection_not_saveable(self, crp_item):
        validation = validate_selection([toggle_include(crp_item, False)])
        assert validation.accepted_count == 0
        assert not validation.is_saveable


class TestBuildBiomarkerRecords:
    """build_biomarker_records() 테스트"""

    def test_records(self, sample_report_text):
        parsed = parse_report(sample_report_text)
        records = build_biomarker_records(parsed.items, parsed.report_date)

        assert [r.template_key for r in records] == ["fasting_glucose", "potassium", "hscrp", "hba1c"]
        crp = records[2]
        assert crp.value == pytest.approx(1.2)
        assert crp.unit == BiomarkerUnit.MG_L
        assert crp.date == date(2024, 3, 15)
        assert crp.category == BiomarkerCategory.INFLAMMATION
        assert (crp.min_reference, crp.max_reference) == (0, 3.0)

    def test_user_selected_definition_saved(self, unmatched_item):
        item = toggle_include(select_definition(unmatched_item, find_definition("hemoglobin")), True)
        [record] = build_biomarker_records([item], date(2024, 1, 2))
        assert record.template_key == "hemoglobin"
        assert record.name == "Hemoglobin"
        assert record.unit == BiomarkerUnit.GIGA_L

    def test_defaults_to_today(self, crp_item):
        [record] = build_biomarker_records([crp_item])
        assert record.date == date.today()

    def test_empty_selection_raises(self, crp_item):
        with pytest.raises(SelectionError, match="선택되지 않았습니다"):
            build_biomarker_records([toggle_include(crp_item, False)])
        with pytest.raises(SelectionError):
            build_biomarker_records([])

    def test_any_invalid_item_blocks_save(self, crp_item, unmatched_item):
        items = [crp_item, toggle_include(unmatched_item, True)]
        with pytest.raises(SelectionError) as exc_info:
            build_biomarker_records(items)
        assert exc_info.value.validation.rejected_count == 1
        assert exc_info.value.validation.accepted_count == 1

    def test_to_dict(self, crp_item):
        [record] = build_biomarker_records([crp_item], date(2024, 3, 15))
        data = record.to_dict()
        assert data["unit"] == "mg/L"
        assert data["date"] == "2024-03-15"
        assert data["category"] == "Inflammation"
