"""The workbook part of a spreadsheet package and its relationships."""

from __future__ import annotations

import math
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Mapping, Optional, TypeVar, Union

MAIN_NAMESPACE = "http://schemas.openxmlformats.org/spreadsheetml/2006/main"
RELATIONSHIPS_NAMESPACE = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
PACKAGE_RELATIONSHIPS_NAMESPACE = "http://schemas.openxmlformats.org/package/2006/relationships"

_REL_ID = f"{{{RELATIONSHIPS_NAMESPACE}}}id"

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

_INT_RE = re.compile(r"[+-]?\d+")
_TRUE = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE = {"0", "f", "F", "FALSE", "false", "False"}

T = TypeVar("T")


class SheetState(str, Enum):
    """Visibility of a sheet within the workbook."""

    VISIBLE = "visible"
    HIDDEN = "hidden"
    VERY_HIDDEN = "veryHidden"


def _is_xml_char(ch: str) -> bool:
    code = ord(ch)
    return (
        code in (0x9, 0xA, 0xD)
        or 0x20 <= code <= 0xD7FF
        or 0xE000 <= code <= 0xFFFD
        or 0x10000 <= code <= 0x10FFFF
    )


def _escape(text: str) -> str:
    return "".join(_ESCAPES.get(ch, ch) if _is_xml_char(ch) else "\ufffd" for ch in text)


def _format_float(value: float) -> str:
    """Shortest text for ``value``, in exponent form for large or tiny numbers."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"
    sign, digits, exponent = Decimal(repr(float(value))).as_tuple()
    digits_text = "".join(str(d) for d in digits).rstrip("0")
    exponent += len(digits) - len(digits_text)
    point = len(digits_text) + exponent
    exp = point - 1
    prefix = "-" if sign else ""
    if exp < -4 or exp >= 6:
        mantissa = digits_text[0]
        if len(digits_text) > 1:
            mantissa += "." + digits_text[1:]
        exp_sign = "-" if exp < 0 else "+"
        return f"{prefix}{mantissa}e{exp_sign}{abs(exp):02d}"
    if point <= 0:
        return f"{prefix}0.{'0' * -point}{digits_text}"
    if point >= len(digits_text):
        return prefix + digits_text + "0" * (point - len(digits_text))
    return f"{prefix}{digits_text[:point]}.{digits_text[point:]}"


def _render_value(value: Union[str, int, float, bool]) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _format_float(value)
    return _escape(value)


def _attrs(*pairs: tuple[str, Union[str, int, float, bool], bool]) -> str:
    """Render (name, value, omit_empty) triples as attribute text."""
    out = []
    for name, value, omit_empty in pairs:
        if omit_empty and not value:
            continue
        out.append(f' {name}="{_render_value(value)}"')
    return "".join(out)


def _element(tag: str, attrs: str = "", body: str = "") -> str:
    return f"<{tag}{attrs}>{body}</{tag}>"


@dataclass
class FileVersion:
    app_name: str = ""
    last_edited: str = ""
    lowest_edited: str = ""
    rup_build: str = ""

    def _to_xml(self) -> str:
        return _element(
            "fileVersion",
            _attrs(
                ("appName", self.app_name, True),
                ("lastEdited", self.last_edited, True),
                ("lowestEdited", self.lowest_edited, True),
                ("rupBuild", self.rup_build, True),
            ),
        )


@dataclass
class WorkbookPr:
    default_theme_version: str = ""
    backup_file: bool = False
    show_objects: str = ""
    date1904: bool = False

    def _to_xml(self) -> str:
        return _element(
            "workbookPr",
            _attrs(
                ("defaultThemeVersion", self.default_theme_version, True),
                ("backupFile", self.backup_file, True),
                ("showObjects", self.show_objects, True),
                ("date1904", self.date1904, False),
            ),
        )


@dataclass
class WorkbookView:
    active_tab: int = 0
    first_sheet: int = 0
    show_horizontal_scroll: bool = False
    show_vertical_scroll: bool = False
    show_sheet_tabs: bool = False
    tab_ratio: int = 0
    window_height: int = 0
    window_width: int = 0
    x_window: str = ""
    y_window: str = ""

    def _to_xml(self) -> str:
        return _element(
            "workbookView",
            _attrs(
                ("activeTab", self.active_tab, True),
                ("firstSheet", self.first_sheet, True),
                ("showHorizontalScroll", self.show_horizontal_scroll, True),
                ("showVerticalScroll", self.show_vertical_scroll, True),
                ("showSheetTabs", self.show_sheet_tabs, True),
                ("tabRatio", self.tab_ratio, True),
                ("windowHeight", self.window_height, True),
                ("windowWidth", self.window_width, True),
                ("xWindow", self.x_window, True),
                ("yWindow", self.y_window, True),
            ),
        )


@dataclass
class SheetEntry:
    """A sheet as listed in the workbook: name, ids and visibility."""

    name: str = ""
    sheet_id: str = ""
    id: str = ""
    state: str = ""

    def _to_xml(self) -> str:
        attrs = _attrs(("name", self.name, True), ("sheetId", self.sheet_id, True))
        if self.id:
            attrs += (
                f' xmlns:relationships="{RELATIONSHIPS_NAMESPACE}"'
                f' relationships:id="{_escape(self.id)}"'
            )
        attrs += _attrs(("state", self.state, True))
        return _element("sheet", attrs)


@dataclass
class DefinedName:
    data: str = ""
    name: str = ""
    comment: str = ""
    custom_menu: str = ""
    description: str = ""
    help: str = ""
    shortcut_key: str = ""
    status_bar: str = ""
    local_sheet_id: int = 0
    function_group_id: int = 0
    function: bool = False
    hidden: bool = False
    vb_procedure: bool = False
    publish_to_server: bool = False
    workbook_parameter: bool = False
    xlm: bool = False

    def _to_xml(self) -> str:
        return _element(
            "definedName",
            _attrs(
                ("name", self.name, False),
                ("comment", self.comment, True),
                ("customMenu", self.custom_menu, True),
                ("description", self.description, True),
                ("help", self.help, True),
                ("shortcutKey", self.shortcut_key, True),
                ("statusBar", self.status_bar, True),
                ("localSheetId", self.local_sheet_id, True),
                ("functionGroupId", self.function_group_id, True),
                ("function", self.function, True),
                ("hidden", self.hidden, True),
                ("vbProcedure", self.vb_procedure, True),
                ("publishToServer", self.publish_to_server, True),
                ("workbookParameter", self.workbook_parameter, True),
                ("xml", self.xlm, True),
            ),
            _escape(self.data),
        )


@dataclass
class CalcPr:
    calc_id: str = ""
    iterate_count: int = 0
    ref_mode: str = ""
    iterate: bool = False
    iterate_delta: float = 0.0

    def _to_xml(self) -> str:
        return _element(
            "calcPr",
            _attrs(
                ("calcId", self.calc_id, True),
                ("iterateCount", self.iterate_count, True),
                ("refMode", self.ref_mode, True),
                ("iterate", self.iterate, True),
                ("iterateDelta", self.iterate_delta, True),
            ),
        )


@dataclass
class Workbook:
    """The workbook document: version, properties, views, sheets and names."""

    file_version: FileVersion = field(default_factory=FileVersion)
    workbook_pr: WorkbookPr = field(default_factory=WorkbookPr)
    book_views: list[WorkbookView] = field(default_factory=list)
    sheets: list[SheetEntry] = field(default_factory=list)
    defined_names: list[DefinedName] = field(default_factory=list)
    calc_pr: CalcPr = field(default_factory=CalcPr)

    def to_xml(self) -> str:
        """Render the workbook element, without the XML declaration."""
        return (
            f'<workbook xmlns="{MAIN_NAMESPACE}">'
            + self.file_version._to_xml()
            + self.workbook_pr._to_xml()
            + "<workbookProtection></workbookProtection>"
            + _element("bookViews", body="".join(v._to_xml() for v in self.book_views))
            + _element("sheets", body="".join(s._to_xml() for s in self.sheets))
            + _element("definedNames", body="".join(d._to_xml() for d in self.defined_names))
            + self.calc_pr._to_xml()
            + "</workbook>"
        )


@dataclass
class WorkbookRelation:
    """A relationship from the workbook to one of its parts."""

    id: str = ""
    target: str = ""
    type: str = ""


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _children(element: ET.Element, name: str) -> list[ET.Element]:
    return [child for child in element if _local(child.tag) == name]


def _last(element: ET.Element, name: str) -> Optional[ET.Element]:
    found = _children(element, name)
    return found[-1] if found else None


def _str(element: ET.Element, name: str) -> str:
    return element.get(name, "")


def _int(element: ET.Element, name: str) -> int:
    text = element.get(name, "").strip()
    if not text:
        return 0
    if not _INT_RE.fullmatch(text):
        raise ValueError(f"invalid integer for {name}: {text!r}")
    return int(text)


def _bool(element: ET.Element, name: str) -> bool:
    text = element.get(name, "").strip()
    if not text:
        return False
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"invalid boolean for {name}: {text!r}")


def _float(element: ET.Element, name: str) -> float:
    text = element.get(name, "").strip()
    if not text:
        return 0.0
    try:
        return float(text)
    except ValueError as exc:
        raise ValueError(f"invalid number for {name}: {text!r}") from exc


def _own_text(element: ET.Element) -> str:
    parts = [element.text or ""]
    parts.extend(child.tail or "" for child in element)
    return "".join(parts)


def _parse_root(data: Union[str, bytes], namespace: str, name: str) -> ET.Element:
    if isinstance(data, str):
        data = data.encode("utf-8")
    try:
        root = ET.fromstring(data.lstrip())
    except ET.ParseError as exc:
        raise ValueError(f"invalid {name} XML: {exc}") from exc
    if root.tag != f"{{{namespace}}}{name}":
        raise ValueError(f"expected element <{name}> in {namespace} but have {root.tag!r}")
    return root


def parse_workbook(data: Union[str, bytes]) -> Workbook:
    """Read a workbook document."""
    root = _parse_root(data, MAIN_NAMESPACE, "workbook")
    workbook = Workbook()

    element = _last(root, "fileVersion")
    if element is not None:
        workbook.file_version = FileVersion(
            app_name=_str(element, "appName"),
            last_edited=_str(element, "lastEdited"),
            lowest_edited=_str(element, "lowestEdited"),
            rup_build=_str(element, "rupBuild"),
        )

    element = _last(root, "workbookPr")
    if element is not None:
        workbook.workbook_pr = WorkbookPr(
            default_theme_version=_str(element, "defaultThemeVersion"),
            backup_file=_bool(element, "backupFile"),
            show_objects=_str(element, "showObjects"),
            date1904=_bool(element, "date1904"),
        )

    for views in _children(root, "bookViews"):
        workbook.book_views.extend(
            WorkbookView(
                active_tab=_int(view, "activeTab"),
                first_sheet=_int(view, "firstSheet"),
                show_horizontal_scroll=_bool(view, "showHorizontalScroll"),
                show_vertical_scroll=_bool(view, "showVerticalScroll"),
                show_sheet_tabs=_bool(view, "showSheetTabs"),
                tab_ratio=_int(view, "tabRatio"),
                window_height=_int(view, "windowHeight"),
                window_width=_int(view, "windowWidth"),
                x_window=_str(view, "xWindow"),
                y_window=_str(view, "yWindow"),
            )
            for view in _children(views, "workbookView")
        )

    for sheets in _children(root, "sheets"):
        workbook.sheets.extend(
            SheetEntry(
                name=_str(sheet, "name"),
                sheet_id=_str(sheet, "sheetId"),
                id=sheet.get(_REL_ID, ""),
                state=_str(sheet, "state"),
            )
            for sheet in _children(sheets, "sheet")
        )

    for names in _children(root, "definedNames"):
        workbook.defined_names.extend(
            DefinedName(
                data=_own_text(item),
                name=_str(item, "name"),
                comment=_str(item, "comment"),
                custom_menu=_str(item, "customMenu"),
                description=_str(item, "description"),
                help=_str(item, "help"),
                shortcut_key=_str(item, "shortcutKey"),
                status_bar=_str(item, "statusBar"),
                local_sheet_id=_int(item, "localSheetId"),
                function_group_id=_int(item, "functionGroupId"),
                function=_bool(item, "function"),
                hidden=_bool(item, "hidden"),
                vb_procedure=_bool(item, "vbProcedure"),
                publish_to_server=_bool(item, "publishToServer"),
                workbook_parameter=_bool(item, "workbookParameter"),
                xlm=_bool(item, "xml"),
            )
            for item in _children(names, "definedName")
        )

    element = _last(root, "calcPr")
    if element is not None:
        workbook.calc_pr = CalcPr(
            calc_id=_str(element, "calcId"),
            iterate_count=_int(element, "iterateCount"),
            ref_mode=_str(element, "refMode"),
            iterate=_bool(element, "iterate"),
            iterate_delta=_float(element, "iterateDelta"),
        )
    return workbook


def parse_workbook_rels(data: Union[str, bytes]) -> list[WorkbookRelation]:
    """Read the relationships of the workbook, in document order."""
    root = _parse_root(data, PACKAGE_RELATIONSHIPS_NAMESPACE, "Relationships")
    return [
        WorkbookRelation(id=_str(rel, "Id"), target=_str(rel, "Target"), type=_str(rel, "Type"))
        for rel in _children(root, "Relationship")
    ]


def worksheet_file_for_sheet(
    sheet: SheetEntry, worksheets: Mapping[str, T], sheet_xml_map: Mapping[str, str]
) -> Optional[T]:
    """Find the worksheet entry for ``sheet``, or None when there is none."""
    name = sheet_xml_map.get(sheet.id)
    if name is None:
        name = f"sheet{sheet.sheet_id}" if sheet.sheet_id else f"sheet{sheet.id}"
    return worksheets.get(name)