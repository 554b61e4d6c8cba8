"""The content types part of a spreadsheet package."""

from __future__ import annotations

from dataclasses import dataclass, field

XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>\n'
CONTENT_TYPES_NAMESPACE = "http://schemas.openxmlformats.org/package/2006/content-types"

_RELS = "application/vnd.openxmlformats-package.relationships+xml"

_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&#34;",
    "'": "&#39;",
    "\t": "&#x9;",
    "\n": "&#xA;",
    "\r": "&#xD;",
}


def _escape(text: str) -> str:
    return "".join(_ESCAPES.get(ch, ch) for ch in text)


@dataclass
class Override:
    part_name: str = ""
    content_type: str = ""


@dataclass
class Default:
    extension: str = ""
    content_type: str = ""


@dataclass
class ContentTypes:
    overrides: list[Override] = field(default_factory=list)
    defaults: list[Default] = field(default_factory=list)

    def to_xml(self) -> str:
        """Render the Types element, without the XML declaration."""
        parts = [f'<Types xmlns="{CONTENT_TYPES_NAMESPACE}">']
        for item in self.overrides:
            parts.append(
                f'<Override PartName="{_escape(item.part_name)}" '
                f'ContentType="{_escape(item.content_type)}"></Override>'
            )
        for item in self.defaults:
            parts.append(
                f'<Default Extension="{_escape(item.extension)}" '
                f'ContentType="{_escape(item.content_type)}"></Default>'
            )
        parts.append("</Types>")
        return "".join(parts)


def make_default_content_types() -> ContentTypes:
    """Return the content types every workbook package declares."""
    return ContentTypes(
        overrides=[
            Override("/_rels/.rels", _RELS),
            Override("/docProps/app.xml", "application/vnd.openxmlformats-officedocument.extended-properties+xml"),
            Override("/docProps/core.xml", "application/vnd.openxmlformats-package.core-properties+xml"),
            Override("/xl/_rels/workbook.xml.rels", _RELS),
            Override(
                "/xl/sharedStrings.xml",
                "application/vnd.openxmlformats-officedocument.spreadsheetml.sharedStrings+xml",
            ),
            Override("/xl/styles.xml", "application/vnd.openxmlformats-officedocument.spreadsheetml.styles+xml"),
            Override(
                "/xl/workbook.xml",
                "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet.main+xml",
            ),
            Override("/xl/theme/theme1.xml", "application/vnd.openxmlformats-officedocument.theme+xml"),
        ],
        defaults=[
            Default("rels", _RELS),
            Default("xml", "application/xml"),
        ],
    )