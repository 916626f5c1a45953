from __future__ import annotations

import re

import pytest

from nomina import generate

"""Fixed-width layout contract for the generated nomina file."""

HEADER_RE = re.compile(r"^00\d{10}\d{3}\d{8}\d{5}\d{12}2500N {218}$")
ACCOUNT_RE = re.compile(r"^10[0-9K]{10}.{40} {94}.{40}[A-Z]{2}\d{16}\d{3}\d{3}\d{12}.{40}S$")
DOCUMENT_RE = re.compile(r"^20[A-Z]{2}\d{12}[0-9K]{10}.{40}.{40}\d{12} {145}$")


@pytest.mark.parametrize("grouped", [False, True])
def test_every_line_matches_its_record_layout(header, scenario_rows, grouped):
    result = generate(header, scenario_rows, grouped=grouped)
    lines = result.content.split("\r\n")
    assert HEADER_RE.match(lines[0])
    for line in lines[1:]:
        pattern = ACCOUNT_RE if line.startswith("10") else DOCUMENT_RE
        assert pattern.match(line), line
    assert all(line.isascii() for line in lines)


@pytest.mark.parametrize("grouped", [False, True])
def test_header_declares_line_count_and_total(header, scenario_rows, grouped):
    result = generate(header, scenario_rows, grouped=grouped)
    first = result.lines[0]
    assert int(first[23:28]) == len(result.lines) == result.line_count
    assert int(first[28:40]) == result.total_amount


def test_each_account_line_is_followed_by_its_documents(header, scenario_rows):
    result = generate(header, scenario_rows, grouped=True)
    types = "".join(line[:2] for line in result.lines[1:])
    assert re.fullmatch(r"(10(20)+)+", types)
