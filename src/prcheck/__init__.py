"""prcheck package root."""

from prcheck.checkboxes import Checkbox, extract_checkboxes
from prcheck.markdown_sections import Section, parse_sections
from prcheck.template_checks import validate_template
from prcheck.template_compare import validate_template_sections

__all__ = [
    "__version__",
    "Checkbox",
    "Section",
    "extract_checkboxes",
    "parse_sections",
    "validate_template",
    "validate_template_sections",
]

__version__ = "0.1.0"
