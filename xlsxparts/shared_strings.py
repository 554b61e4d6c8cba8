"""The shared strings part: plain and rich text items, parsed and rendered."""

from __future__ import annotations

import math
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional, Union

from .style_elements import XmlColor, XmlVal

MAIN_NAMESPACE = "http://schemas.openxmlformats.org/spreadsheetml/2006/main"

_ATTR_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&#34;",
    "'": "&#39;",
    "\t": "&#x9;",
    "\n": "&#xA;",
    "\r": "&#xD;",
}

# Character data keeps newlines as they are.
_TEXT_ESCAPES = {key: value for key, value in _ATTR_ESCAPES.items() if key != "\n"}


def _is_xml_char(ch: str) -> bool:
    code = ord(ch)
    return (
        code in (0x9, 0xA, 0xD)
        or 0x20 <= code <= 0xD7FF
        or 0xE000 <= code <= 0xFFFD
        or 0x10000 <= code <= 0x10FFFF
    )


def _escape(text: str, table: dict[str, str]) -> str:
    return "".join(table.get(ch, ch) if _is_xml_char(ch) else "\ufffd" for ch in text)


def _escape_attr(text: str) -> str:
    return _escape(text, _ATTR_ESCAPES)


def _escape_text(text: str) -> str:
    return _escape(text, _TEXT_ESCAPES)


def _format_float(value: float) -> str:
    """Shortest text for ``value``, switching to exponent form for large or tiny numbers."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"
    sign, digits, exponent = Decimal(repr(float(value))).as_tuple()
    digits_text = "".join(str(d) for d in digits).rstrip("0")
    # Trailing zeros removed from the digits shift the exponent.
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


def need_preserve(text: str) -> bool:
    """Tell whether text needs ``xml:space="preserve"`` to keep its whitespace."""
    if not text:
        return False
    for ch in (text[0], text[-1]):
        code = ord(ch)
        if code <= 32 and code not in (9, 13):
            return True
    return "\n" in text


def _text_element(text: str) -> str:
    attr = ' xml:space="preserve"' if need_preserve(text) else ""
    return f"<t{attr}>{_escape_text(text)}</t>"


def _val_element(tag: str, value: str) -> str:
    attr = f' val="{_escape_attr(value)}"' if value else ""
    return f"<{tag}{attr}></{tag}>"


def _color_element(color: XmlColor) -> str:
    attrs = []
    if color.rgb:
        attrs.append(f'rgb="{_escape_attr(color.rgb)}"')
    if color.theme is not None:
        attrs.append(f'theme="{color.theme}"')
    if color.tint:
        attrs.append(f'tint="{_format_float(color.tint)}"')
    if color.indexed is not None:
        attrs.append(f'indexed="{color.indexed}"')
    inner = (" " + " ".join(attrs)) if attrs else ""
    return f"<color{inner}></color>"


@dataclass
class RunProperties:
    """Formatting of one run of rich text."""

    rfont: Optional[XmlVal] = None
    charset: Optional[int] = None
    family: Optional[int] = None
    b: bool = False
    i: bool = False
    strike: bool = False
    outline: bool = False
    shadow: bool = False
    condense: bool = False
    extend: bool = False
    color: Optional[XmlColor] = None
    sz: Optional[float] = None
    u: Optional[XmlVal] = None
    vert_align: Optional[XmlVal] = None
    scheme: Optional[XmlVal] = None

    def to_xml(self) -> str:
        parts = ["<rPr>"]
        if self.rfont is not None:
            parts.append(_val_element("rFont", self.rfont.val))
        if self.charset is not None:
            parts.append(f'<charset val="{self.charset}"></charset>')
        if self.family is not None:
            parts.append(f'<family val="{self.family}"></family>')
        for tag, flag in (
            ("b", self.b),
            ("i", self.i),
            ("strike", self.strike),
            ("outline", self.outline),
            ("shadow", self.shadow),
            ("condense", self.condense),
            ("extend", self.extend),
        ):
            if flag:
                parts.append(f"<{tag}></{tag}>")
        if self.color is not None:
            parts.append(_color_element(self.color))
        if self.sz is not None:
            parts.append(f'<sz val="{_format_float(self.sz)}"></sz>')
        for tag, value in (("u", self.u), ("vertAlign", self.vert_align), ("scheme", self.scheme)):
            if value is not None:
                parts.append(_val_element(tag, value.val))
        parts.append("</rPr>")
        return "".join(parts)


@dataclass
class RichRun:
    """A run of text with optional formatting."""

    text: str = ""
    properties: Optional[RunProperties] = None

    def to_xml(self) -> str:
        props = self.properties.to_xml() if self.properties is not None else ""
        return f"<r>{props}{_text_element(self.text)}</r>"


@dataclass
class StringItem:
    """A shared string: plain text, rich runs, or both."""

    text: Optional[str] = None
    runs: list[RichRun] = field(default_factory=list)

    def to_xml(self, tag: str = "si") -> str:
        plain = _text_element(self.text) if self.text is not None else ""
        runs = "".join(run.to_xml() for run in self.runs)
        return f"<{tag}>{plain}{runs}</{tag}>"


@dataclass
class SharedStrings:
    """The string table of a workbook."""

    count: int = 0
    unique_count: int = 0
    items: list[StringItem] = field(default_factory=list)


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _children(element: ET.Element, name: str) -> list[ET.Element]:
    return [child for child in element if _local(child.tag) == name]


def _first(element: ET.Element, name: str) -> Optional[ET.Element]:
    found = _children(element, name)
    return found[-1] if found else None


def _int(text: Optional[str], what: str) -> int:
    if text is None or text == "":
        return 0
    try:
        return int(text.strip())
    except ValueError as exc:
        raise ValueError(f"invalid integer for {what}: {text!r}") from exc


def _float(text: Optional[str], what: str) -> float:
    if text is None or text == "":
        return 0.0
    try:
        return float(text.strip())
    except ValueError as exc:
        raise ValueError(f"invalid number for {what}: {text!r}") from exc


def _bool_prop(element: Optional[ET.Element]) -> bool:
    if element is None:
        return False
    value = element.get("val")
    if value is None:
        return True
    if value in ("true", "1"):
        return True
    if value in ("false", "0"):
        return False
    raise ValueError(f'"{value}" is not a valid boolean value')


def _optional_val(element: Optional[ET.Element]) -> Optional[XmlVal]:
    return None if element is None else XmlVal(element.get("val", ""))


def _parse_color(element: ET.Element) -> XmlColor:
    theme = element.get("theme")
    indexed = element.get("indexed")
    return XmlColor(
        rgb=element.get("rgb", ""),
        theme=None if theme is None else _int(theme, "theme"),
        tint=_float(element.get("tint"), "tint"),
        indexed=None if indexed is None else _int(indexed, "indexed"),
    )


def _parse_run_properties(element: ET.Element) -> RunProperties:
    charset = _first(element, "charset")
    family = _first(element, "family")
    color = _first(element, "color")
    sz = _first(element, "sz")
    return RunProperties(
        rfont=_optional_val(_first(element, "rFont")),
        charset=None if charset is None else _int(charset.get("val"), "charset"),
        family=None if family is None else _int(family.get("val"), "family"),
        b=_bool_prop(_first(element, "b")),
        i=_bool_prop(_first(element, "i")),
        strike=_bool_prop(_first(element, "strike")),
        outline=_bool_prop(_first(element, "outline")),
        shadow=_bool_prop(_first(element, "shadow")),
        condense=_bool_prop(_first(element, "condense")),
        extend=_bool_prop(_first(element, "extend")),
        color=None if color is None else _parse_color(color),
        sz=None if sz is None else _float(sz.get("val"), "sz"),
        u=_optional_val(_first(element, "u")),
        vert_align=_optional_val(_first(element, "vertAlign")),
        scheme=_optional_val(_first(element, "scheme")),
    )


def _element_text(element: Optional[ET.Element]) -> str:
    if element is None:
        return ""
    return "".join(element.itertext())


def _parse_item(element: ET.Element) -> StringItem:
    t = _first(element, "t")
    runs = []
    for run in _children(element, "r"):
        props = _first(run, "rPr")
        runs.append(
            RichRun(
                text=_element_text(_first(run, "t")),
                properties=None if props is None else _parse_run_properties(props),
            )
        )
    return StringItem(text=None if t is None else _element_text(t), runs=runs)


def parse_shared_strings(data: Union[str, bytes]) -> SharedStrings:
    """Read a shared strings document."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    try:
        root = ET.fromstring(data.lstrip())
    except ET.ParseError as exc:
        raise ValueError(f"invalid shared strings XML: {exc}") from exc
    if root.tag != f"{{{MAIN_NAMESPACE}}}sst":
        raise ValueError(f"expected element <sst> but have {root.tag!r}")
    return SharedStrings(
        count=_int(root.get("count"), "count"),
        unique_count=_int(root.get("uniqueCount"), "uniqueCount"),
        items=[_parse_item(child) for child in _children(root, "si")],
    )