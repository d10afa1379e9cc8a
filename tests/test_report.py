import pytest

from domain.report import SECTION_ORDER, Report, validate_topic


@pytest.mark.parametrize("topic", ["abc", "Quantum Computing", "x" * 100])
def test_validate_topic_accepts_lengths_within_bounds(topic: str) -> None:
    assert validate_topic(topic) is None


def test_validate_topic_rejects_short_topic() -> None:
    assert validate_topic("ab") == "Topic must be at least 3 characters long."
    assert validate_topic("") == "Topic must be at least 3 characters long."
    assert validate_topic(None) == "Topic must be at least 3 characters long."


def test_validate_topic_rejects_long_topic() -> None:
    assert validate_topic("x" * 101) == "Topic must be at most 100 characters long."


def test_report_accepts_wire_and_field_names(sample_report: Report) -> None:
    assert sample_report.current_trends.startswith("Hardware vendors")
    same = Report(**{name: sample_report.section(name) for name in SECTION_ORDER})
    assert same == sample_report


def test_with_section_replaces_only_that_field(sample_report: Report) -> None:
    updated = sample_report.with_section("benefits", "Edited benefits.")
    assert updated.benefits == "Edited benefits."
    for name in SECTION_ORDER:
        if name != "benefits":
            assert updated.section(name) == sample_report.section(name)
    assert sample_report.benefits != "Edited benefits."


def test_unknown_section_raises(sample_report: Report) -> None:
    with pytest.raises(KeyError):
        sample_report.section("summary")
    with pytest.raises(KeyError):
        sample_report.with_section("summary", "text")


def test_non_empty_sections_skips_blank_fields(sample_report: Report) -> None:
    report = sample_report.with_section("history", "").with_section("challenges", "")
    names = [name for name, _ in report.non_empty_sections()]
    assert names == ["introduction", "benefits", "current_trends", "future_scope"]
