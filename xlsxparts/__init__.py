"""Readers and writers for styles, theme, shared strings, workbook and content-types parts of XLSX files."""

__version__ = "0.1.0"

__all__ = [
    "content_types",
    "shared_strings",
    "style",
    "style_elements",
    "stylesheet",
    "templates",
    "theme",
    "workbook",
]