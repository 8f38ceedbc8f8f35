"""
Adapter: CSV export rendering.

Implements the TabularExporter port with the csv module.
Output is UTF-8 with a BOM so spreadsheet tools detect the encoding.
"""

import csv
import io
from typing import Iterable, Sequence

from invoice_api.domain.invoicing.ports import TabularExporter


class CsvExporter(TabularExporter):
    """Renders rows as RFC 4180 CSV."""

    media_type = "text/csv"
    extension = "csv"

    def render(self, columns: Sequence[str], rows: Iterable[Sequence[object]]) -> bytes:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\r\n")
        writer.writerow(columns)
        for row in rows:
            writer.writerow(["" if value is None else value for value in row])
        return buffer.getvalue().encode("utf-8-sig")
