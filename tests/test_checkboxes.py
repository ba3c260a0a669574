from __future__ import annotations

from prcheck.checkboxes import Checkbox, extract_checkboxes, find_checkbox


def test_checked_state_follows_the_token() -> None:
    content = "- [ ] A\n- [x] B\n- [X] C\n"
    assert extract_checkboxes(content) == [
        Checkbox(text="A", checked=False),
        Checkbox(text="B", checked=True),
        Checkbox(text="C", checked=True),
    ]


def test_lines_without_brackets_are_ignored() -> None:
    assert extract_checkboxes("- A\n* [x] star bullet\nprose [x] inline\n") == []


def test_block_quote_markers_are_tolerated() -> None:
    content = "> - [x] quoted\n> > - [ ] nested quote\n>- [x] tight\n"
    assert extract_checkboxes(content) == [
        Checkbox(text="quoted", checked=True),
        Checkbox(text="nested quote", checked=False),
        Checkbox(text="tight", checked=True),
    ]


def test_labels_are_trimmed_and_do_not_cross_lines() -> None:
    content = "- [x]   padded label   \n- [ ]\nnext line\n"
    assert extract_checkboxes(content) == [Checkbox(text="padded label", checked=True)]


def test_duplicate_labels_keep_document_order() -> None:
    boxes = extract_checkboxes("- [ ] Same\n- [x] Same\n")
    assert [box.checked for box in boxes] == [False, True]
    assert find_checkbox(boxes, "same") is boxes[0]
    assert find_checkbox(boxes, "other") is None
