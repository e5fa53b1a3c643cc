"""CSV and Word-compatible exports.

CSV is written with a BOM so Excel opens Thai text correctly. The ``.doc``
export is an HTML table with the Office namespaces, which Word opens as a
document.
"""

from __future__ import annotations

import csv
import io
from html import escape
from typing import Any, Iterable, Mapping, Sequence

from flask import send_file

_DOC_TEMPLATE = """<html xmlns:o='urn:schemas-microsoft-com:office:office' \
xmlns:w='urn:schemas-microsoft-com:office:word' xmlns='http://www.w3.org/TR/REC-html40'>
<head><meta charset='utf-8'><title>{title}</title>
<style>body {{ font-family: 'TH Sarabun New', sans-serif; font-size: 16pt; }}
table {{ border-collapse: collapse; width: 100%; }} td, th {{ border: 1px solid #000; padding: 4px; }}</style>
</head><body><h2>{title}</h2><table><thead><tr>{head}</tr></thead><tbody>{body}</tbody></table>{footer}</body></html>"""


def _cell(value: Any) -> str:
    return "" if value is None else str(value)


def build_csv(columns: Sequence[tuple[str, str]], rows: Iterable[Mapping[str, Any]]) -> bytes:
    """``columns`` are ``(key, header)`` pairs; missing keys become empty cells."""
    out = io.StringIO()
    writer = csv.DictWriter(
        out,
        fieldnames=[key for key, _ in columns],
        extrasaction="ignore",
        quoting=csv.QUOTE_ALL,
        lineterminator="\r\n",
    )
    writer.writerow({key: header for key, header in columns})
    for row in rows:
        writer.writerow({key: _cell(row.get(key)) for key, _ in columns})
    return out.getvalue().encode("utf-8-sig")


def build_doc(
    title: str,
    columns: Sequence[tuple[str, str]],
    rows: Iterable[Mapping[str, Any]],
    *,
    footer: str = "",
) -> bytes:
    head = "".join(f"<th>{escape(header)}</th>" for _, header in columns)
    body = "".join(
        "<tr>" + "".join(f"<td>{escape(_cell(row.get(key)))}</td>" for key, _ in columns) + "</tr>" for row in rows
    )
    html = _DOC_TEMPLATE.format(
        title=escape(title),
        head=head,
        body=body,
        footer=f"<p>{escape(footer)}</p>" if footer else "",
    )
    return ("\ufeff" + html).encode("utf-8")


def csv_response(filename: str, columns, rows):
    return send_file(
        io.BytesIO(build_csv(columns, rows)),
        mimetype="text/csv",
        as_attachment=True,
        download_name=filename,
    )


def doc_response(filename: str, title: str, columns, rows, *, footer: str = ""):
    return send_file(
        io.BytesIO(build_doc(title, columns, rows, footer=footer)),
        mimetype="application/msword",
        as_attachment=True,
        download_name=filename,
    )
