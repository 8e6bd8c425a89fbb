import csv
import io
import re

import pytest

from wage_engine.core.errors import InvalidInput
from wage_engine.domains.wages.documents import (
    PDF_HEADER,
    build_pdf,
    content_stream,
    pdf_escape,
    render_csv,
    render_pdf,
    render_slip,
)
from wage_engine.domains.wages.slip import WageSlipView
from wage_engine.domains.wages.templates import build_template_registry

FIRST_ISSUE = "2026-03-02T09:30:00.000Z"
SECOND_ISSUE = "2026-03-02T09:31:15.250Z"


def make_view(**overrides) -> WageSlipView:
    values = dict(
        slip_id="3f1c2a8e-0000-4000-8000-000000000001",
        organization_id="org-1",
        organization_name="Main Office",
        worker_id="w-1",
        worker_name="Hanako Sato",
        month="2026-02",
        closing_date="2026-02-28",
        total_hours=120.5,
        hourly_rate=1200,
        gross_amount=144600,
        deductions=0,
        net_amount=144600,
        status="approved",
        status_label="finalized",
        remarks="approved by administrator",
        approver_id="staff-admin",
        issued_at=FIRST_ISSUE,
    )
    values.update(overrides)
    return WageSlipView(**values)


@pytest.fixture
def template():
    return build_template_registry()["fukuoka"]


def parse_csv(content: bytes) -> list[list[str]]:
    return list(csv.reader(io.StringIO(content.decode("utf-8-sig"))))


def parse_xref(data: bytes) -> tuple[int, list[int]]:
    xref_offset = int(re.search(rb"startxref\n(\d+)\n%%EOF$", data).group(1))
    table = data[xref_offset:].split(b"trailer")[0].decode("ascii").splitlines()
    assert table[0] == "xref"
    first, count = (int(part) for part in table[1].split())
    assert first == 0
    entries = table[2 : 2 + count]
    assert entries[0] == "0000000000 65535 f "
    offsets = []
    for entry in entries[1:]:
        assert re.fullmatch(r"\d{10} 00000 n ", entry)
        offsets.append(int(entry[:10]))
    return xref_offset, offsets


def test_csv_has_bom_header_and_one_data_row(template):
    document = render_csv(make_view(), template)

    assert document.content.startswith("\ufeff".encode("utf-8"))
    rows = parse_csv(document.content)
    assert len(rows) == 2
    assert len(rows[0]) == len(rows[1]) == len(template.csv_headers)
    assert rows[0] == list(template.csv_headers)
    assert rows[1][0] == "3f1c2a8e-0000-4000-8000-000000000001"
    assert rows[1][1] == "Fukuoka"
    assert rows[1][7] == "120.5"
    assert rows[1][9] == "144600"


def test_csv_wraps_every_cell_in_quotes(template):
    document = render_csv(make_view(), template)
    lines = document.content.decode("utf-8-sig").splitlines()

    for line in lines:
        cells = line.split('","')
        assert line.startswith('"') and line.endswith('"')
        assert len(cells) == len(template.csv_headers)


def test_csv_cells_round_trip_quotes_and_commas(template):
    name = 'Ann "The Hammer" Lee, Jr.'
    document = render_csv(make_view(worker_name=name, remarks='say "hi"'), template)

    assert b'"Ann ""The Hammer"" Lee, Jr."' in document.content
    row = parse_csv(document.content)[1]
    assert row[4] == name
    assert row[13] == 'say "hi"'


def test_filenames_use_slip_id_and_compact_month(template):
    view = make_view()

    assert render_csv(view, template).filename == "wage-slip-3f1c2a8e-0000-4000-8000-000000000001-202602.csv"
    assert render_pdf(view, template).filename == "wage-slip-3f1c2a8e-0000-4000-8000-000000000001-202602.pdf"
    assert render_pdf(view, template).media_type == "application/pdf"


def test_pdf_escape_handles_reserved_characters():
    assert pdf_escape(r"a(b)c\d") == r"a\(b\)c\\d"
    assert pdf_escape("\\(") == "\\\\\\("


def test_content_stream_positions_lines_top_down():
    stream = content_stream(["first", "second (draft)"]).decode("utf-8")

    assert stream.splitlines() == [
        "BT /F1 11 Tf 50 780 Td (first) Tj ET",
        "BT /F1 11 Tf 50 762 Td (second \\(draft\\)) Tj ET",
    ]


def test_pdf_starts_with_magic_header_and_ends_with_eof(template):
    data = render_pdf(make_view(), template).content

    assert data.startswith(PDF_HEADER)
    assert data.endswith(b"%%EOF")
    assert b"trailer << /Size 6 /Root 1 0 R >>" in data


@pytest.mark.parametrize("worker_name", ["Hanako Sato", "佐藤 花子", "Back\\slash (x)"])
def test_pdf_xref_offsets_match_object_positions(template, worker_name):
    data = render_pdf(make_view(worker_name=worker_name), template).content

    xref_offset, offsets = parse_xref(data)

    assert len(offsets) == 5
    scanned = [match.start() for match in re.finditer(rb"(?m)^(\d+) 0 obj ", data)]
    assert scanned == offsets
    for number, offset in enumerate(offsets, start=1):
        assert data[offset:].startswith(f"{number} 0 obj ".encode("ascii"))
    assert offsets[0] == len(PDF_HEADER)
    assert data.rindex(b"\nxref\n") + 1 == xref_offset


def test_pdf_objects_appear_in_fixed_order(template):
    data = render_pdf(make_view(), template).content
    _, offsets = parse_xref(data)

    bodies = [data[offset : offsets[index + 1] if index + 1 < len(offsets) else None] for index, offset in enumerate(offsets)]
    assert b"/Type /Catalog /Pages 2 0 R" in bodies[0]
    assert b"/Type /Pages /Kids [3 0 R] /Count 1" in bodies[1]
    assert b"/Contents 5 0 R" in bodies[2] and b"/F1 4 0 R" in bodies[2]
    assert b"/BaseFont /Helvetica" in bodies[3]
    assert b"stream\n" in bodies[4]


def test_pdf_stream_length_matches_stream_bytes(template):
    data = render_pdf(make_view(worker_name="佐藤 花子"), template).content

    match = re.search(rb"/Length (\d+) >> stream\n", data)
    start = match.end()
    end = data.index(b"\nendstream", start)
    assert int(match.group(1)) == end - start


def test_pdf_contains_template_lines(template):
    data = render_pdf(make_view(), template).content

    assert b"(WAGE SLIP STATEMENT) Tj" in data
    assert b"(Gross Amount   : JPY 144,600) Tj" in data
    assert b"(Organization: Main Office \\(org-1\\)) Tj" in data


def test_build_pdf_with_no_lines_is_still_well_formed():
    data = build_pdf([])

    _, offsets = parse_xref(data)
    assert b"/Length 0 >> stream\n\nendstream" in data
    assert len(offsets) == 5


@pytest.mark.parametrize("fmt", ["json", "csv", "pdf"])
def test_rerender_differs_only_by_issue_timestamp(template, fmt):
    first = render_slip(make_view(issued_at=FIRST_ISSUE), template, fmt).content
    second = render_slip(make_view(issued_at=SECOND_ISSUE), template, fmt).content

    assert first != second
    assert first.replace(FIRST_ISSUE.encode(), SECOND_ISSUE.encode()) == second


def test_unsupported_format_is_invalid_input(template):
    with pytest.raises(InvalidInput):
        render_slip(make_view(), template, "xlsx")

