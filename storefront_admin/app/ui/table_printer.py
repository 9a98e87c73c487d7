from __future__ import annotations


def print_table(title: str, rows: list[dict[str, str]], headers: list[str], empty_message: str = "(no results)") -> None:
    print(f"\n{title}")
    if not rows:
        print(empty_message)
        return

    widths = []
    for header in headers:
        max_cell = max(len(row.get(header, "")) for row in rows)
        widths.append(max(len(header), max_cell))

    header_line = " | ".join(header.ljust(widths[idx]) for idx, header in enumerate(headers))
    separator = "-+-".join("-" * width for width in widths)
    print(header_line)
    print(separator)

    for row in rows:
        line = " | ".join(row.get(header, "").ljust(widths[idx]) for idx, header in enumerate(headers))
        print(line)
