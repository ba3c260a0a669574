from __future__ import annotations

from dataclasses import dataclass
import re

# Only ATX headings delimit sections; the level is not used to build a tree.
_HEADING_RE = re.compile(
    r"^(?P<heading>#{1,6}[ \t]+(?P<label>\S[^\r\n]*?))[ \t\r]*$",
    re.MULTILINE,
)


@dataclass(frozen=True)
class Section:
    heading: str
    heading_text: str
    content: str


@dataclass(frozen=True)
class _HeadingMatch:
    heading: str
    heading_text: str
    start: int
    end: int


def _heading_matches(text: str) -> tuple[_HeadingMatch, ...]:
    return tuple(
        _HeadingMatch(
            heading=match.group("heading"),
            heading_text=match.group("label").strip(),
            start=match.start(),
            end=match.end(),
        )
        for match in _HEADING_RE.finditer(text)
    )


def parse_sections(text: str) -> list[Section]:
    """Split markdown text into sections keyed by heading, in document order.

    A section's content runs from the end of its heading line to the start of
    the next heading of any level, or to the end of the text. Text before the
    first heading belongs to no section. Repeated headings are kept as
    separate sections.
    """
    matches = _heading_matches(text)
    sections: list[Section] = []
    for index, current in enumerate(matches):
        content_end = matches[index + 1].start if index + 1 < len(matches) else len(text)
        sections.append(
            Section(
                heading=current.heading,
                heading_text=current.heading_text,
                content=text[current.end:content_end],
            )
        )
    return sections


def find_section(sections: list[Section], heading: str) -> Section | None:
    """First section whose full heading line equals ``heading`` ignoring case."""
    wanted = heading.lower()
    for section in sections:
        if section.heading.lower() == wanted:
            return section
    return None


def heading_text_set(sections: list[Section]) -> frozenset[str]:
    return frozenset(section.heading_text.lower() for section in sections)
