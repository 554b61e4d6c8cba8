"""The styles part of a spreadsheet package: registry, lookup and XML output."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .style import Style
from .style_elements import (
    BUILTIN_NUM_FMTS,
    BUILTIN_NUM_FMTS_COUNT,
    XmlBorder,
    XmlBorders,
    XmlCellStyles,
    XmlColor,
    XmlColors,
    XmlFill,
    XmlFills,
    XmlFont,
    XmlFonts,
    XmlLine,
    XmlNumFmt,
    XmlNumFmts,
    XmlPatternFill,
    XmlVal,
    XmlXf,
    XmlXfList,
)
from .theme import Theme

XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>\n'
STYLES_NAMESPACE = "http://schemas.openxmlformats.org/spreadsheetml/2006/main"

DEFAULT_THEME = 1

_BUILTIN_NUM_FMTS_BY_CODE: dict[str, int] = {code: num_id for num_id, code in BUILTIN_NUM_FMTS.items()}


def get_builtin_number_format(num_fmt_id: int) -> str:
    """Return the format code of a built-in number format, or an empty string."""
    return BUILTIN_NUM_FMTS.get(num_fmt_id, "")


def _is_general(format_code: str) -> bool:
    return format_code == "" or format_code.lower() == "general"


def _parse_float(text: str) -> float:
    try:
        return float(text)
    except ValueError:
        return 0.0


def _parse_int(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        return 0


def _is_set(value: Optional[XmlVal]) -> bool:
    return value is not None and value.val != "0"


@dataclass
class StyleSheet:
    """Fonts, fills, borders, cell formats and number formats of a workbook."""

    theme: Optional[Theme] = None
    fonts: XmlFonts = field(default_factory=XmlFonts)
    fills: XmlFills = field(default_factory=XmlFills)
    borders: XmlBorders = field(default_factory=XmlBorders)
    colors: Optional[XmlColors] = None
    cell_styles: Optional[XmlCellStyles] = None
    cell_style_xfs: Optional[XmlXfList] = None
    cell_xfs: XmlXfList = field(default_factory=XmlXfList)
    num_fmts: Optional[XmlNumFmts] = None
    _style_cache: dict[int, Style] = field(default_factory=dict, init=False, repr=False, compare=False)
    _num_fmt_table: dict[int, XmlNumFmt] = field(default_factory=dict, init=False, repr=False, compare=False)

    def reset(self) -> None:
        """Replace the contents with the minimal set a workbook must declare."""
        self.fonts = XmlFonts()
        self.fills = XmlFills()
        self.borders = XmlBorders()
        self.add_font(
            XmlFont(
                sz=XmlVal("11"),
                family=XmlVal("2"),
                color=XmlColor(theme=DEFAULT_THEME),
                name=XmlVal("Arial"),
                scheme=XmlVal("minor"),
            )
        )
        self.add_fill(XmlFill(XmlPatternFill(pattern_type="none")))
        self.add_fill(XmlFill(XmlPatternFill(pattern_type="gray125")))
        self.add_border(XmlBorder(XmlLine(), XmlLine(), XmlLine(), XmlLine()))
        self.cell_style_xfs = XmlXfList(count=1, xf=[XmlXf()])
        self.cell_xfs = XmlXfList(count=1, xf=[XmlXf()])
        self.num_fmts = XmlNumFmts()
        self._num_fmt_table = {}

    def populate_style_from_xf(self, style: Style, xf: XmlXf) -> None:
        """Fill ``style`` from the border, fill, font and alignment ``xf`` refers to."""
        style.apply_border = xf.apply_border
        style.apply_fill = xf.apply_fill
        style.apply_font = xf.apply_font
        style.apply_alignment = xf.apply_alignment

        if 0 <= xf.border_id < self.borders.count:
            x_border = self.borders.border[xf.border_id]
            border = style.border
            border.left = x_border.left.style
            border.left_color = x_border.left.color.rgb
            border.right = x_border.right.style
            border.right_color = x_border.right.color.rgb
            border.top = x_border.top.style
            border.top_color = x_border.top.color.rgb
            border.bottom = x_border.bottom.style
            border.bottom_color = x_border.bottom.color.rgb

        if 0 <= xf.fill_id < self.fills.count:
            pattern = self.fills.fill[xf.fill_id].pattern_fill
            style.fill.pattern_type = pattern.pattern_type
            style.fill.fg_color = self.argb_value(pattern.fg_color)
            style.fill.bg_color = self.argb_value(pattern.bg_color)

        if 0 <= xf.font_id < self.fonts.count:
            x_font = self.fonts.font[xf.font_id]
            font = style.font
            font.size = _parse_float(x_font.sz.val)
            font.name = x_font.name.val
            font.family = _parse_int(x_font.family.val)
            font.charset = _parse_int(x_font.charset.val)
            font.color = self.argb_value(x_font.color)
            if _is_set(x_font.b):
                font.bold = True
            if _is_set(x_font.i):
                font.italic = True
            if _is_set(x_font.u):
                font.underline = True
            if _is_set(x_font.strike):
                font.strike = True

        alignment = xf.alignment
        if alignment.horizontal:
            style.alignment.horizontal = alignment.horizontal
        if alignment.vertical:
            style.alignment.vertical = alignment.vertical
        style.alignment.shrink_to_fit = alignment.shrink_to_fit
        style.alignment.wrap_text = alignment.wrap_text
        style.alignment.text_rotation = alignment.text_rotation
        if alignment.indent != 0:
            style.alignment.indent = alignment.indent

    def get_style(self, style_index: int) -> Style:
        """Return the style of cell format ``style_index``; valid indexes are cached."""
        cached = self._style_cache.get(style_index)
        if cached is not None:
            return cached

        style = Style()
        if 0 <= style_index < self.cell_xfs.count:
            xf = self.cell_xfs.xf[style_index]
            self.populate_style_from_xf(style, xf)
            named = self.cell_style_xfs
            if xf.xf_id is not None and named is not None and 0 <= xf.xf_id < len(named.xf):
                style.named_style_index = xf.xf_id
                named_xf = named.xf[xf.xf_id]
                style.apply_border = style.apply_border or named_xf.apply_border
                style.apply_fill = style.apply_fill or named_xf.apply_fill
                style.apply_font = style.apply_font or named_xf.apply_font
                style.apply_alignment = style.apply_alignment or named_xf.apply_alignment
            if xf.alignment.vertical:
                style.alignment.vertical = xf.alignment.vertical
            style.alignment.wrap_text = xf.alignment.wrap_text
            style.alignment.text_rotation = xf.alignment.text_rotation
            self._style_cache[style_index] = style
        return style

    def argb_value(self, color: XmlColor) -> str:
        """Resolve a colour to ARGB text through the theme or the indexed palette."""
        if color.theme is not None and self.theme is not None:
            return self.theme.theme_color(color.theme, color.tint)
        if color.indexed is not None and self.colors is not None:
            return self.colors.indexed_color(color.indexed)
        return color.rgb

    def add_font(self, font: XmlFont) -> int:
        """Register a font unless an equal one exists; return its index."""
        if not font.name.val:
            return 0
        for index, existing in enumerate(self.fonts.font):
            if existing.equals(font):
                return index
        index = self.fonts.count
        self.fonts.add(font)
        return index

    def add_fill(self, fill: XmlFill) -> int:
        """Register a fill unless an equal one exists; return its index."""
        for index, existing in enumerate(self.fills.fill):
            if existing.equals(fill):
                return index
        index = self.fills.count
        self.fills.add(fill)
        return index

    def add_border(self, border: XmlBorder) -> int:
        """Register a border unless an equal one exists; return its index."""
        for index, existing in enumerate(self.borders.border):
            if existing.equals(border):
                return index
        index = self.borders.count
        self.borders.add(border)
        return index

    def add_cell_style_xf(self, xf: XmlXf) -> int:
        """Register a named-style xf unless an equal one exists; return its index."""
        if self.cell_style_xfs is None:
            self.cell_style_xfs = XmlXfList()
        for index, existing in enumerate(self.cell_style_xfs.xf):
            if existing.equals(xf):
                return index
        index = self.cell_style_xfs.count
        self.cell_style_xfs.add(xf)
        return index

    def add_cell_xf(self, xf: XmlXf) -> int:
        """Register a cell xf unless an equal one exists; return its index."""
        for index, existing in enumerate(self.cell_xfs.xf):
            if existing.equals(xf):
                return index
        index = self.cell_xfs.count
        self.cell_xfs.add(xf)
        return index

    def new_num_fmt(self, format_code: str) -> XmlNumFmt:
        """Return the number format for ``format_code``, registering a custom one if needed."""
        if _is_general(format_code):
            return XmlNumFmt(0, "general")
        builtin_id = _BUILTIN_NUM_FMTS_BY_CODE.get(format_code)
        if builtin_id is not None:
            return XmlNumFmt(builtin_id, format_code)
        if self.num_fmts is not None:
            for existing in self.num_fmts.num_fmt:
                if existing.format_code == format_code:
                    return existing
        num_fmt_id = BUILTIN_NUM_FMTS_COUNT + 1
        while num_fmt_id in self._num_fmt_table:
            num_fmt_id += 1
        self.add_num_fmt(XmlNumFmt(num_fmt_id, format_code))
        return XmlNumFmt(num_fmt_id, format_code)

    def add_num_fmt(self, num_fmt: XmlNumFmt) -> None:
        """Register a custom number format; built-in ids and known ids are ignored."""
        if num_fmt.num_fmt_id <= BUILTIN_NUM_FMTS_COUNT:
            return
        if num_fmt.num_fmt_id in self._num_fmt_table:
            return
        if self.num_fmts is None:
            self.num_fmts = XmlNumFmts()
        self.num_fmts.num_fmt.append(num_fmt)
        self._num_fmt_table[num_fmt.num_fmt_id] = num_fmt
        self.num_fmts.count += 1

    def to_xml(self) -> str:
        """Render the whole styles document, XML declaration included."""
        parts = [XML_HEADER, f'<styleSheet xmlns="{STYLES_NAMESPACE}">']
        if self.num_fmts is not None:
            parts.append(self.num_fmts.to_xml())
        fonts_xml, font_map = self.fonts.to_xml()
        fills_xml, fill_map = self.fills.to_xml()
        borders_xml, border_map = self.borders.to_xml()
        parts.extend((fonts_xml, fills_xml, borders_xml))
        if self.cell_style_xfs is not None:
            parts.append(self.cell_style_xfs.to_xml("cellStyleXfs", border_map, fill_map, font_map))
        parts.append(self.cell_xfs.to_xml("cellXfs", border_map, fill_map, font_map))
        if self.cell_styles is not None and self.cell_style_xfs is not None:
            parts.append(self.cell_styles.to_xml(self.cell_style_xfs.count - 1))
        parts.append("</styleSheet>")
        return "".join(parts)