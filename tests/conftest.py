from __future__ import annotations

import sys
from pathlib import Path
import textwrap

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT / "src") not in sys.path:
    sys.path.insert(0, str(ROOT / "src"))


import pytest


TEMPLATE_TEXT = textwrap.dedent(
    """\
    <!-- Describe your change -->

    ## Summary

    ## Type of change

    - [ ] Bug fix
    - [ ] New feature
    - [ ] Chore

    ## Checklist

    - [ ] Tests pass
    - [ ] Docs updated

    ## Screenshots
    """
)


@pytest.fixture
def template_text() -> str:
    return TEMPLATE_TEXT


@pytest.fixture
def filled_body() -> str:
    return textwrap.dedent(
        """\
        ## Summary

        Adds retry handling to the uploader.

        ## Type of change

        - [ ] Bug fix
        - [x] New feature
        - [ ] Chore

        ## Checklist

        - [x] Tests pass
        - [x] Docs updated

        ## Screenshots

        n/a
        """
    )


@pytest.fixture
def write_text():
    def _write(path: Path, content: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
