from typing import Iterator

from .collision import DuplicateGroup, DuplicateKind, DuplicateReport
from ..index.path import display_path

_HEADERS = {
    DuplicateKind.CONTENT: "Probable duplicate content for",
    DuplicateKind.NAME: "Possible filename duplicates for",
}


def render_group(group: DuplicateGroup) -> Iterator[str]:
    yield f"{_HEADERS[group.kind]} {display_path(group.representative.path)}"
    for member in group.members:
        yield f"\t {display_path(member.path)}"


def render_text(report: DuplicateReport) -> Iterator[str]:
    """Yield the console lines for report: a header per group, then one indented line per member.

    An empty report yields nothing.
    """
    for group in report.groups():
        yield from render_group(group)
