from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Sequence

from storefront_admin.app.ui.formatters import text_or_na

DELIMITER = ","


@dataclass(frozen=True)
class ExportColumn:
    header: str
    extract: Callable[[dict[str, Any]], Any]

    def value_for(self, row: dict[str, Any]) -> str:
        return text_or_na(self.extract(row))


def encode_rows(rows: Sequence[dict[str, Any]], columns: Sequence[ExportColumn]) -> str:
    """Header line plus one line per row, in the order given.

    Fields are joined as-is: values that contain the delimiter are not quoted.
    """
    lines = [DELIMITER.join(column.header for column in columns)]
    for row in rows:
        lines.append(DELIMITER.join(column.value_for(row) for column in columns))
    return "\n".join(lines)


def export_current_view(
    *,
    module: str,
    rows: Sequence[dict[str, Any]],
    columns: Sequence[ExportColumn],
    output_dir: str = "out/exports",
) -> Path:
    destination = Path(output_dir)
    destination.mkdir(parents=True, exist_ok=True)
    path = destination / f"{module}_export.csv"
    path.write_text(encode_rows(rows, columns), encoding="utf-8")
    return path
