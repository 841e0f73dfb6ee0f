"""Parser and writer for .ydk deck files.

A .ydk file lists one card passcode per line under section headers::

    #created by ...
    #main
    89631139
    89631139
    #extra
    44508094
    !side
    14558127

Lines starting with ``#`` that are not section headers are comments.
Cards listed before the first header are ignored.
"""

from backend.models.deck_models import DeckSections

SECTION_HEADERS = (
    ("#main", "main"),
    ("#extra", "extra"),
    ("!side", "side"),
)


def parse_ydk(content: str) -> DeckSections:
    """Parse .ydk file contents into deck sections."""
    sections: dict[str, list[str]] = {"main": [], "extra": [], "side": []}
    current = None
    for line in content.splitlines():
        header = next((name for prefix, name in SECTION_HEADERS if line.startswith(prefix)), None)
        if header is not None:
            current = header
        elif line.startswith("#") or not line.strip() or current is None:
            continue
        else:
            sections[current].append(line.strip())
    return DeckSections(**sections)


def to_ydk(sections: DeckSections, created_by: str = "Deck Assistant") -> str:
    """Write deck sections in .ydk format."""
    lines = [f"#created by {created_by}", "#main", *sections.main, "#extra", *sections.extra]
    lines += ["!side", *sections.side]
    return "\n".join(lines) + "\n"
