from __future__ import annotations

from dataclasses import dataclass
import re

# Leading block-quote markers are tolerated so quoted template text still counts.
_CHECKBOX_RE = re.compile(
    r"^[ \t]*(?:>[ \t]*)*-[ \t]+\[(?P<mark>[ xX])\][ \t]+(?P<label>[^\r\n]*\S)[ \t\r]*$",
    re.MULTILINE,
)


@dataclass(frozen=True)
class Checkbox:
    text: str
    checked: bool


def extract_checkboxes(content: str) -> list[Checkbox]:
    """Checkbox items of a section body, in document order."""
    return [
        Checkbox(text=match.group("label").strip(), checked=match.group("mark") != " ")
        for match in _CHECKBOX_RE.finditer(content)
    ]


def find_checkbox(checkboxes: list[Checkbox], text: str) -> Checkbox | None:
    wanted = text.lower()
    for checkbox in checkboxes:
        if checkbox.text.lower() == wanted:
            return checkbox
    return None
