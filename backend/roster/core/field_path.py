"""Field paths — render nested locations as `courses[0].courseName`."""

from collections.abc import Iterable


def format_field_path(loc: Iterable[str | int]) -> str:
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        elif path:
            path += f".{part}"
        else:
            path = str(part)
    return path
