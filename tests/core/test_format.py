from __future__ import annotations

from datetime import datetime

import pytest
from hypothesis import given
from hypothesis import strategies as st

from scriptutils.core.callsite import CallSite
from scriptutils.core.config import DEFAULT_PREFIX_FORMAT
from scriptutils.core.format import Severity, format_lines, format_prefix

SITE = CallSite(filename="/opt/jobs/build.py", lineno=42, function="main")
NOW = datetime(2026, 10, 16, 9, 5, 7, 123456)


def test_type_and_line_fields() -> None:
    assert format_prefix(Severity.ERROR, SITE, "%type %line ") == "ERROR 42 "


def test_default_template() -> None:
    prefix = format_prefix(Severity.INFO, SITE, DEFAULT_PREFIX_FORMAT, now=NOW)
    assert prefix == "2026-10-16 09:05:07.123456 INFO build.py 42 "


def test_longer_field_names_are_not_split() -> None:
    prefix = format_prefix(Severity.DEBUG, SITE, "%datetime|%filebase|%file|%func", now=NOW)
    assert prefix == "2026-10-16 09:05:07.123456|build.py|/opt/jobs/build.py|main"


def test_every_occurrence_is_substituted() -> None:
    assert format_prefix(Severity.WARNING, SITE, "%line-%line %type") == "42-42 WARNING"


def test_unknown_fields_are_left_verbatim() -> None:
    assert format_prefix(Severity.INFO, SITE, "%host %type %%") == "%host INFO %%"


def test_time_is_computed_per_call() -> None:
    first = format_prefix(Severity.INFO, SITE, "%date", now=datetime(2026, 1, 1))
    second = format_prefix(Severity.INFO, SITE, "%date", now=datetime(2026, 1, 2))
    assert (first, second) == ("2026-01-01", "2026-01-02")


def test_continuation_lines_are_indented_to_prefix_width() -> None:
    assert format_lines("INFO 7 ", ["first", "second", "third"]) == [
        "INFO 7 first",
        "       second",
        "       third",
    ]


def test_embedded_newlines_become_continuation_lines() -> None:
    assert format_lines(">> ", ["a\nb"]) == [">> a", "   b"]


@pytest.mark.parametrize("severity", list(Severity))
def test_type_field_matches_severity_name(severity: Severity) -> None:
    assert format_prefix(severity, SITE, "%type") == severity.name


@given(st.text(alphabet=st.characters(exclude_characters="%"), max_size=40))
def test_templates_without_fields_are_unchanged(template: str) -> None:
    assert format_prefix(Severity.INFO, SITE, template) == template


@given(st.text(alphabet="abc XY", max_size=12), st.lists(st.text(alphabet="xyz ", max_size=8), min_size=1, max_size=4))
def test_all_lines_share_one_width_offset(prefix: str, lines: list[str]) -> None:
    out = format_lines(prefix, lines)
    assert len(out) == len(lines)
    assert all(row[len(prefix):] == line for row, line in zip(out, lines))
