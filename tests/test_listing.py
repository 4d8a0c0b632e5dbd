import pytest

from ccms_core_lib.core import filter_records, paginate, search
from ccms_core_lib.models import Case, CaseType

from conftest import case_json


def make_cases():
    return [
        Case.model_validate(case_json(1, title="Phishing SMS campaign", type="phishing")),
        Case.model_validate(case_json(2, title="Ransomware at clinic", type="ransomware")),
        Case.model_validate(case_json(3, title="Fake job offer", type="job_fraud")),
        Case.model_validate(case_json(4, title="UPI refund scam", type="financial_fraud")),
        Case.model_validate(case_json(5, title="Instagram stalking", type="cyber_stalking")),
        Case.model_validate(case_json(6, title="Phishing email to bank staff", type="phishing")),
        Case.model_validate(case_json(7, title="Matrimonial site fraud", type="matrimonial_fraud")),
    ]


def test_empty_query_returns_everything_in_order():
    cases = make_cases()
    assert filter_records(cases, "") == cases


def test_query_matches_each_field_case_insensitively():
    cases = make_cases()

    by_title = filter_records(cases, "PHISHING")
    assert [c.id for c in by_title] == [1, 6]

    by_number = filter_records(cases, "cc-2024-003")
    assert [c.id for c in by_number] == [3]

    by_type = filter_records(cases, "ransom")
    assert [c.id for c in by_type] == [2]


def test_filter_is_stable_and_does_not_modify_input():
    cases = make_cases()
    original = list(cases)
    matched = filter_records(cases, "fraud")
    assert [c.id for c in matched] == [3, 4, 7]
    assert cases == original


def test_filtered_result_is_subset_of_input():
    cases = make_cases()
    for query in ["a", "fraud", "xyz", "CC-2024", "stalk"]:
        matched = filter_records(cases, query)
        assert all(case in cases for case in matched)
        assert len(matched) <= len(cases)


def test_query_longer_than_any_field_matches_nothing():
    assert filter_records(make_cases(), "x" * 500) == []


def test_dict_records_with_explicit_fields():
    records = [
        {"title": "Lost phone", "type": "other"},
        {"title": None, "type": "phishing"},
        {"type": "hacking"},
    ]
    assert filter_records(records, "phone", fields=("title",)) == [records[0]]
    assert filter_records(records, "hack", fields=("title", "type")) == [records[2]]


def test_enum_fields_match_on_value():
    cases = make_cases()
    matched = filter_records(cases, CaseType.JOB_FRAUD.value)
    assert [c.id for c in matched] == [3]


def test_pages_concatenate_to_filtered_set():
    cases = make_cases()
    filtered = filter_records(cases, "")
    for page_size in (1, 2, 3, 5, 7, 10):
        first = paginate(filtered, 1, page_size)
        collected = []
        for page in range(1, first.total_pages + 1):
            collected.extend(paginate(filtered, page, page_size).items)
        assert collected == filtered


def test_page_count_is_ceiling():
    cases = make_cases()
    assert paginate(cases, 1, 5).total_pages == 2
    assert paginate(cases, 1, 7).total_pages == 1
    assert paginate([], 1, 5).total_pages == 0


def test_page_beyond_last_is_empty():
    page = paginate(make_cases(), 3, 5)
    assert page.items == []
    assert page.total_items == 7
    assert not page.has_next
    assert page.first_index == 0
    assert page.last_index == 0


def test_page_below_one_is_clamped():
    page = paginate(make_cases(), 0, 5)
    assert page.page == 1
    assert [c.id for c in page.items] == [1, 2, 3, 4, 5]


def test_page_size_must_be_positive():
    with pytest.raises(ValueError):
        paginate(make_cases(), 1, 0)


def test_page_summary():
    page = paginate(make_cases(), 2, 5)
    assert page.summary() == "Showing 6 to 7 of 7 results"
    assert page.has_previous
    assert not page.has_next


def test_search_combines_filter_and_pagination():
    page = search(make_cases(), "phishing", 1, 1)
    assert page.total_items == 2
    assert page.total_pages == 2
    assert [c.id for c in page.items] == [1]
    assert page.has_next


def test_empty_input():
    page = search([], "anything", 1, 5)
    assert page.items == []
    assert page.total_items == 0
