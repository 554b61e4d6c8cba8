"""Elements of the styles part of a spreadsheet package and their XML form."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

BUILTIN_NUM_FMTS_COUNT = 163

BUILTIN_NUM_FMTS: dict[int, str] = {
    0: "general",
    1: "0",
    2: "0.00",
    3: "#,##0",
    4: "#,##0.00",
    9: "0%",
    10: "0.00%",
    11: "0.00e+00",
    12: "# ?/?",
    13: "# ??/??",
    14: "mm-dd-yy",
    15: "d-mmm-yy",
    16: "d-mmm",
    17: "mmm-yy",
    18: "h:mm am/pm",
    19: "h:mm:ss am/pm",
    20: "h:mm",
    21: "h:mm:ss",
    22: "m/d/yy h:mm",
    37: "#,##0 ;(#,##0)",
    38: "#,##0 ;[red](#,##0)",
    39: "#,##0.00;(#,##0.00)",
    40: "#,##0.00;[red](#,##0.00)",
    41: '_(* #,##0_);_(* \\(#,##0\\);_(* "-"_);_(@_)',
    42: '_("$"* #,##0_);_("$* \\(#,##0\\);_("$"* "-"_);_(@_)',
    43: '_(* #,##0.00_);_(* \\(#,##0.00\\);_(* "-"??_);_(@_)',
    44: '_("$"* #,##0.00_);_("$"* \\(#,##0.00\\);_("$"* "-"??_);_(@_)',
    45: "mm:ss",
    46: "[h]:mm:ss",
    47: "mmss.0",
    48: "##0.0e+0",
    49: "@",
}

INDEXED_COLORS: tuple[str, ...] = (
    "FF000000", "FFFFFFFF", "FFFF0000", "FF00FF00", "FF0000FF", "FFFFFF00",
    "FFFF00FF", "FF00FFFF", "FF000000", "FFFFFFFF", "FFFF0000", "FF00FF00",
    "FF0000FF", "FFFFFF00", "FFFF00FF", "FF00FFFF", "FF800000", "FF008000",
    "FF000080", "FF808000", "FF800080", "FF008080", "FFC0C0C0", "FF808080",
    "FF9999FF", "FF993366", "FFFFFFCC", "FFCCFFFF", "FF660066", "FFFF8080",
    "FF0066CC", "FFCCCCFF", "FF000080", "FFFF00FF", "FFFFFF00", "FF00FFFF",
    "FF800080", "FF800000", "FF008080", "FF0000FF", "FF00CCFF", "FFCCFFFF",
    "FFCCFFCC", "FFFFFF99", "FF99CCFF", "FFFF99CC", "FFCC99FF", "FFFFCC99",
    "FF3366FF", "FF33CCCC", "FF99CC00", "FFFFCC00", "FFFF9900", "FFFF6600",
    "FF666699", "FF969696", "FF003366", "FF339966", "FF003300", "FF333300",
    "FF993300", "FF993366", "FF333399", "FF333333",
)

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
class XmlVal:
    """A bare element carrying a single ``val`` attribute."""

    val: str = ""


@dataclass
class XmlColor:
    """A colour given as RGB, a theme index with tint, or an indexed colour."""

    rgb: str = ""
    theme: Optional[int] = None
    tint: float = 0.0
    indexed: Optional[int] = None

    def equals(self, other: XmlColor) -> bool:
        return self.rgb == other.rgb


@dataclass
class XmlFont:
    sz: XmlVal = field(default_factory=XmlVal)
    name: XmlVal = field(default_factory=XmlVal)
    family: XmlVal = field(default_factory=XmlVal)
    charset: XmlVal = field(default_factory=XmlVal)
    color: XmlColor = field(default_factory=XmlColor)
    b: Optional[XmlVal] = None
    i: Optional[XmlVal] = None
    u: Optional[XmlVal] = None
    scheme: Optional[XmlVal] = None
    strike: Optional[XmlVal] = None

    def equals(self, other: XmlFont) -> bool:
        for mine, theirs in ((self.b, other.b), (self.i, other.i), (self.u, other.u)):
            if (mine is None) != (theirs is None):
                return False
        return (
            self.sz.val == other.sz.val
            and self.name.val == other.name.val
            and self.family.val == other.family.val
            and self.charset.val == other.charset.val
            and self.color.equals(other.color)
        )

    def to_xml(self) -> str:
        parts = ["<font>"]
        for tag, value in (
            ("sz", self.sz),
            ("name", self.name),
            ("family", self.family),
            ("charset", self.charset),
        ):
            if value.val:
                parts.append(f'<{tag} val="{_escape(value.val)}"/>')
        if self.color.rgb:
            parts.append(f'<color rgb="{_escape(self.color.rgb)}"/>')
        if self.color.theme is not None:
            parts.append(f'<color theme="{self.color.theme}" />')
        if self.scheme is not None and self.scheme.val:
            parts.append(f'<scheme val="{_escape(self.scheme.val)}"/>')
        for tag, value in (("b", self.b), ("i", self.i), ("u", self.u), ("strike", self.strike)):
            if value is not None:
                parts.append(f"<{tag}/>")
        parts.append("</font>")
        return "".join(parts)


@dataclass
class XmlPatternFill:
    pattern_type: str = ""
    fg_color: XmlColor = field(default_factory=XmlColor)
    bg_color: XmlColor = field(default_factory=XmlColor)

    def equals(self, other: XmlPatternFill) -> bool:
        return (
            self.pattern_type == other.pattern_type
            and self.fg_color.equals(other.fg_color)
            and self.bg_color.equals(other.bg_color)
        )

    def to_xml(self) -> str:
        children = ""
        if self.fg_color.rgb:
            children += f'<fgColor rgb="{_escape(self.fg_color.rgb)}"/>'
        if self.bg_color.rgb:
            children += f'<bgColor rgb="{_escape(self.bg_color.rgb)}"/>'
        head = f'<patternFill patternType="{_escape(self.pattern_type)}"'
        if not children:
            return head + "/>"
        return head + ">" + children + "</patternFill>"


@dataclass
class XmlFill:
    pattern_fill: XmlPatternFill = field(default_factory=XmlPatternFill)

    def equals(self, other: XmlFill) -> bool:
        return self.pattern_fill.equals(other.pattern_fill)

    def to_xml(self) -> str:
        """Return the fill element, or an empty string when it has no pattern."""
        if not self.pattern_fill.pattern_type:
            return ""
        return "<fill>" + self.pattern_fill.to_xml() + "</fill>"


@dataclass
class XmlLine:
    style: str = ""
    color: XmlColor = field(default_factory=XmlColor)

    def equals(self, other: XmlLine) -> bool:
        return self.style == other.style and self.color.equals(other.color)

    def _to_xml(self, name: str) -> str:
        if not self.style:
            return f"<{name}/>"
        text = f'<{name} style="{_escape(self.style)}">'
        if self.color.rgb:
            text += f'<color rgb="{_escape(self.color.rgb)}"/>'
        return text + f"</{name}>"


@dataclass
class XmlBorder:
    left: XmlLine = field(default_factory=XmlLine)
    right: XmlLine = field(default_factory=XmlLine)
    top: XmlLine = field(default_factory=XmlLine)
    bottom: XmlLine = field(default_factory=XmlLine)

    def equals(self, other: XmlBorder) -> bool:
        return (
            self.left.equals(other.left)
            and self.right.equals(other.right)
            and self.top.equals(other.top)
            and self.bottom.equals(other.bottom)
        )

    def to_xml(self) -> str:
        # Empty sides are always written: Excel needs the full set.
        return (
            "<border>"
            + self.left._to_xml("left")
            + self.right._to_xml("right")
            + self.top._to_xml("top")
            + self.bottom._to_xml("bottom")
            + "</border>"
        )


@dataclass
class XmlAlignment:
    horizontal: str = ""
    indent: int = 0
    shrink_to_fit: bool = False
    text_rotation: int = 0
    vertical: str = ""
    wrap_text: bool = False

    def equals(self, other: XmlAlignment) -> bool:
        return self == other

    def to_xml(self) -> str:
        horizontal = self.horizontal or "general"
        vertical = self.vertical or "bottom"
        return (
            f'<alignment horizontal="{_escape(horizontal)}" indent="{self.indent}" '
            f'shrinkToFit="{int(bool(self.shrink_to_fit))}" textRotation="{self.text_rotation}" '
            f'vertical="{_escape(vertical)}" wrapText="{int(bool(self.wrap_text))}"/>'
        )


@dataclass
class XmlXf:
    apply_alignment: bool = False
    apply_border: bool = False
    apply_font: bool = False
    apply_fill: bool = False
    apply_number_format: bool = False
    apply_protection: bool = False
    border_id: int = 0
    fill_id: int = 0
    font_id: int = 0
    num_fmt_id: int = 0
    xf_id: Optional[int] = None
    alignment: XmlAlignment = field(default_factory=XmlAlignment)

    def equals(self, other: XmlXf) -> bool:
        return (
            self.apply_alignment == other.apply_alignment
            and self.apply_border == other.apply_border
            and self.apply_font == other.apply_font
            and self.apply_fill == other.apply_fill
            and self.apply_protection == other.apply_protection
            and self.border_id == other.border_id
            and self.fill_id == other.fill_id
            and self.font_id == other.font_id
            and self.num_fmt_id == other.num_fmt_id
            and self.xf_id == other.xf_id
            and self.alignment.equals(other.alignment)
        )

    def to_xml(self, border_map: dict[int, int], fill_map: dict[int, int], font_map: dict[int, int]) -> str:
        """Render the xf, translating ids through the emitted-index maps."""
        flags = " ".join(
            f'{name}="{int(bool(value))}"'
            for name, value in (
                ("applyAlignment", self.apply_alignment),
                ("applyBorder", self.apply_border),
                ("applyFont", self.apply_font),
                ("applyFill", self.apply_fill),
                ("applyNumberFormat", self.apply_number_format),
                ("applyProtection", self.apply_protection),
            )
        )
        text = (
            f"<xf {flags} "
            f'borderId="{border_map.get(self.border_id, 0)}" '
            f'fillId="{fill_map.get(self.fill_id, 0)}" '
            f'fontId="{font_map.get(self.font_id, 0)}" '
            f'numFmtId="{self.num_fmt_id}"'
        )
        if self.xf_id is not None:
            text += f' xfId="{self.xf_id}"'
        return text + ">" + self.alignment.to_xml() + "</xf>"


@dataclass
class XmlNumFmt:
    num_fmt_id: int = 0
    format_code: str = ""

    def to_xml(self) -> str:
        return f'<numFmt numFmtId="{self.num_fmt_id}" formatCode="{_escape(self.format_code)}"/>'


@dataclass
class XmlNumFmts:
    count: int = 0
    num_fmt: list[XmlNumFmt] = field(default_factory=list)

    def to_xml(self) -> str:
        if self.count <= 0:
            return ""
        body = "".join(item.to_xml() for item in self.num_fmt)
        return f'<numFmts count="{self.count}">{body}</numFmts>'


def _render_indexed(items) -> tuple[str, dict[int, int]]:
    """Render each item, skipping empty output, and map source to emitted index."""
    index_map: dict[int, int] = {}
    body = []
    for position, item in enumerate(items):
        text = item.to_xml()
        if text:
            index_map[position] = len(body)
            body.append(text)
    return "".join(body), index_map


@dataclass
class XmlFonts:
    count: int = 0
    font: list[XmlFont] = field(default_factory=list)

    def add(self, font: XmlFont) -> None:
        self.font.append(font)
        self.count += 1

    def to_xml(self) -> tuple[str, dict[int, int]]:
        """Return the fonts element and the map from font index to emitted index."""
        body, index_map = _render_indexed(self.font)
        if not index_map:
            return "", index_map
        return f'<fonts count="{self.count}">{body}</fonts>', index_map


@dataclass
class XmlFills:
    count: int = 0
    fill: list[XmlFill] = field(default_factory=list)

    def add(self, fill: XmlFill) -> None:
        self.fill.append(fill)
        self.count += 1

    def to_xml(self) -> tuple[str, dict[int, int]]:
        """Return the fills element and the map from fill index to emitted index."""
        body, index_map = _render_indexed(self.fill)
        if not index_map:
            return "", index_map
        return f'<fills count="{len(index_map)}">{body}</fills>', index_map


@dataclass
class XmlBorders:
    count: int = 0
    border: list[XmlBorder] = field(default_factory=list)

    def add(self, border: XmlBorder) -> None:
        self.border.append(border)
        self.count += 1

    def to_xml(self) -> tuple[str, dict[int, int]]:
        """Return the borders element and the map from border index to emitted index."""
        body, index_map = _render_indexed(self.border)
        if not index_map:
            return "", index_map
        return f'<borders count="{len(index_map)}">{body}</borders>', index_map


@dataclass
class XmlCellStyle:
    name: str = ""
    xf_id: int = 0
    builtin_id: Optional[int] = None
    custom_builtin: Optional[bool] = None
    hidden: Optional[bool] = None
    i_level: Optional[bool] = None

    def to_xml(self) -> str:
        attrs = []
        if self.builtin_id is not None:
            attrs.append(f'builtInId="{self.builtin_id}"')
        for name, value in (
            ("customBuiltIn", self.custom_builtin),
            ("hidden", self.hidden),
            ("iLevel", self.i_level),
        ):
            if value is not None:
                attrs.append(f'{name}="{"true" if value else "false"}"')
        attrs.append(f'name="{_escape(self.name)}"')
        attrs.append(f'xfId="{self.xf_id}"')
        return f"<cellStyle {' '.join(attrs)}></cellStyle>"


@dataclass
class XmlCellStyles:
    count: int = 0
    cell_style: list[XmlCellStyle] = field(default_factory=list)

    def to_xml(self, max_xf_id: int) -> str:
        """Render the styles whose xf id does not exceed ``max_xf_id``."""
        kept = [style for style in self.cell_style if style.xf_id <= max_xf_id]
        if not kept:
            return ""
        body = "".join(style.to_xml() for style in kept)
        return f'<cellStyles count="{len(kept)}">{body}</cellStyles>'


@dataclass
class XmlXfList:
    """A counted list of xf records, used for both cellXfs and cellStyleXfs."""

    count: int = 0
    xf: list[XmlXf] = field(default_factory=list)

    def add(self, xf: XmlXf) -> None:
        self.xf.append(xf)
        self.count += 1

    def to_xml(self, tag: str, border_map: dict[int, int], fill_map: dict[int, int], font_map: dict[int, int]) -> str:
        if self.count <= 0:
            return ""
        body = "".join(item.to_xml(border_map, fill_map, font_map) for item in self.xf)
        return f'<{tag} count="{self.count}">{body}</{tag}>'


@dataclass
class XmlRgbColor:
    rgb: str = ""


@dataclass
class XmlColors:
    indexed_colors: Optional[list[XmlRgbColor]] = None
    mru_colors: list[XmlColor] = field(default_factory=list)

    def indexed_color(self, index: int) -> str:
        """Look up a one-based indexed colour, falling back to the standard palette."""
        if self.indexed_colors is not None:
            if index < 1:
                raise IndexError(f"indexed colour out of range: {index}")
            return self.indexed_colors[index - 1].rgb
        if index < 1 or index > len(INDEXED_COLORS):
            return ""
        return INDEXED_COLORS[index - 1]