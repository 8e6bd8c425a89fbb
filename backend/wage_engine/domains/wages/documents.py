from __future__ import annotations

import csv
import io
import json
from dataclasses import dataclass
from typing import Iterable, List

from wage_engine.core.errors import InvalidInput

from .slip import WageSlipView
from .templates import MunicipalityTemplate

CSV_MEDIA_TYPE = "text/csv; charset=utf-8"
PDF_MEDIA_TYPE = "application/pdf"
JSON_MEDIA_TYPE = "application/json"
BOM = "\ufeff"

PDF_HEADER = b"%PDF-1.4\n"
PAGE_WIDTH = 595
PAGE_HEIGHT = 842
LEFT_MARGIN = 50
TOP_LINE_Y = 780
LINE_HEIGHT = 18
FONT_SIZE = 11


@dataclass(frozen=True)
class RenderedDocument:
    filename: str
    media_type: str
    content: bytes


def slip_filename(view: WageSlipView, extension: str) -> str:
    return f"wage-slip-{view.slip_id}-{view.compact_month}.{extension}"


def build_csv(rows: Iterable[List[str]]) -> bytes:
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for row in rows:
        writer.writerow(row)
    return (BOM + buffer.getvalue()).encode("utf-8")


def render_csv(view: WageSlipView, template: MunicipalityTemplate) -> RenderedDocument:
    content = build_csv([list(template.csv_headers), template.csv_row(view)])
    return RenderedDocument(slip_filename(view, "csv"), CSV_MEDIA_TYPE, content)


def pdf_escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def content_stream(lines: Iterable[str]) -> bytes:
    instructions = [
        f"BT /F1 {FONT_SIZE} Tf {LEFT_MARGIN} {TOP_LINE_Y - index * LINE_HEIGHT} Td ({pdf_escape(line)}) Tj ET"
        for index, line in enumerate(lines)
    ]
    return "\n".join(instructions).encode("utf-8")


class PdfWriter:
    """Append-only PDF byte buffer.

    The offset of every object is captured immediately before it is written,
    and the cross-reference table is produced from those captured offsets.
    """

    def __init__(self) -> None:
        self._buffer = bytearray()
        self._offsets: List[int] = []
        self._buffer.extend(PDF_HEADER)

    @property
    def offsets(self) -> List[int]:
        return list(self._offsets)

    def add_object(self, body: bytes) -> int:
        number = len(self._offsets) + 1
        self._offsets.append(len(self._buffer))
        self._buffer.extend(f"{number} 0 obj ".encode("ascii"))
        self._buffer.extend(body)
        self._buffer.extend(b" endobj\n")
        return number

    def add_stream(self, data: bytes) -> int:
        body = f"<< /Length {len(data)} >> stream\n".encode("ascii") + data + b"\nendstream"
        return self.add_object(body)

    def finish(self, root: int = 1) -> bytes:
        xref_offset = len(self._buffer)
        size = len(self._offsets) + 1
        xref = [f"xref\n0 {size}\n", "0000000000 65535 f \n"]
        xref.extend(f"{offset:010d} 00000 n \n" for offset in self._offsets)
        self._buffer.extend("".join(xref).encode("ascii"))
        self._buffer.extend(
            f"trailer << /Size {size} /Root {root} 0 R >>\nstartxref\n{xref_offset}\n%%EOF".encode("ascii")
        )
        return bytes(self._buffer)


def build_pdf(lines: Iterable[str]) -> bytes:
    stream = content_stream(lines)
    writer = PdfWriter()
    writer.add_object(b"<< /Type /Catalog /Pages 2 0 R >>")
    writer.add_object(b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>")
    writer.add_object(
        f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 {PAGE_WIDTH} {PAGE_HEIGHT}] "
        "/Contents 5 0 R /Resources << /Font << /F1 4 0 R >> >> >>".encode("ascii")
    )
    writer.add_object(b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>")
    writer.add_stream(stream)
    return writer.finish(root=1)


def render_pdf(view: WageSlipView, template: MunicipalityTemplate) -> RenderedDocument:
    return RenderedDocument(slip_filename(view, "pdf"), PDF_MEDIA_TYPE, build_pdf(template.pdf_lines(view)))


def render_json(view: WageSlipView) -> RenderedDocument:
    content = json.dumps(view.to_dict(), ensure_ascii=False, indent=2).encode("utf-8")
    return RenderedDocument(slip_filename(view, "json"), JSON_MEDIA_TYPE, content)


def render_slip(view: WageSlipView, template: MunicipalityTemplate, fmt: str) -> RenderedDocument:
    fmt = fmt.lower()
    if fmt == "csv":
        return render_csv(view, template)
    if fmt == "pdf":
        return render_pdf(view, template)
    if fmt == "json":
        return render_json(view)
    raise InvalidInput("Unsupported slip format. Use json, csv or pdf")
