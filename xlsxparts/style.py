"""User-facing cell style description and its conversion to style elements."""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from .style_elements import (
    XmlBorder,
    XmlColor,
    XmlFill,
    XmlFont,
    XmlLine,
    XmlPatternFill,
    XmlVal,
    XmlXf,
)

HELVETICA = "Helvetica"
BASKERVILLE = "Baskerville Old Face"
TIMES_NEW_ROMAN = "Times New Roman"
BODONI = "Bodoni MT"
GILL_SANS = "Gill Sans MT"
COURIER = "Courier"

RGB_LIGHT_GREEN = "FFC6EFCE"
RGB_DARK_GREEN = "FF006100"
RGB_LIGHT_RED = "FFFFC7CE"
RGB_DARK_RED = "FF9C0006"
RGB_WHITE = "FFFFFFFF"
RGB_BLACK = "00000000"

SOLID_CELL_FILL = "solid"


def _format_float(value: float) -> str:
    """Shortest decimal text for ``value``, without exponent or trailing zeros."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    text = format(Decimal(repr(float(value))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


@dataclass
class Border:
    left: str = ""
    right: str = ""
    top: str = ""
    bottom: str = ""
    left_color: str = ""
    right_color: str = ""
    top_color: str = ""
    bottom_color: str = ""


@dataclass
class Fill:
    pattern_type: str = ""
    fg_color: str = ""
    bg_color: str = ""


@dataclass
class Font:
    size: float = 0.0
    name: str = ""
    family: int = 0
    charset: int = 0
    color: str = ""
    bold: bool = False
    italic: bool = False
    underline: bool = False
    strike: bool = False


@dataclass
class Alignment:
    horizontal: str = ""
    indent: int = 0
    shrink_to_fit: bool = False
    text_rotation: int = 0
    vertical: str = ""
    wrap_text: bool = False


# Template for default_font(); replaced by set_default_font().
_defaults: dict[str, Font] = {"font": Font(12.0, "Verdana")}


@dataclass
class Style:
    """Border, fill, font and alignment of a cell, with their apply flags."""

    border: Border = field(default_factory=Border)
    fill: Fill = field(default_factory=Fill)
    font: Font = field(default_factory=Font)
    apply_border: bool = False
    apply_fill: bool = False
    apply_font: bool = False
    apply_alignment: bool = False
    alignment: Alignment = field(default_factory=Alignment)
    named_style_index: Optional[int] = None

    def make_xlsx_style_elements(self) -> tuple[XmlFont, XmlFill, XmlBorder, XmlXf]:
        """Return the font, fill, border and cell xf elements for this style."""
        font = self.font
        x_font = XmlFont(
            sz=XmlVal(_format_float(font.size)),
            name=XmlVal(font.name),
            family=XmlVal(str(font.family)),
            charset=XmlVal(str(font.charset)),
            color=XmlColor(rgb=font.color),
            b=XmlVal() if font.bold else None,
            i=XmlVal() if font.italic else None,
            u=XmlVal() if font.underline else None,
            strike=XmlVal() if font.strike else None,
        )
        x_fill = XmlFill(
            XmlPatternFill(
                pattern_type=self.fill.pattern_type,
                fg_color=XmlColor(rgb=self.fill.fg_color),
                bg_color=XmlColor(rgb=self.fill.bg_color),
            )
        )
        border = self.border
        x_border = XmlBorder(
            left=XmlLine(border.left, XmlColor(rgb=border.left_color)),
            right=XmlLine(border.right, XmlColor(rgb=border.right_color)),
            top=XmlLine(border.top, XmlColor(rgb=border.top_color)),
            bottom=XmlLine(border.bottom, XmlColor(rgb=border.bottom_color)),
        )
        x_xf = make_cell_xf()
        x_xf.apply_border = self.apply_border
        x_xf.apply_fill = self.apply_fill
        x_xf.apply_font = self.apply_font
        x_xf.apply_alignment = self.apply_alignment
        if self.named_style_index is not None:
            x_xf.xf_id = self.named_style_index
        return x_font, x_fill, x_border, x_xf


def make_cell_xf() -> XmlXf:
    """Return a blank cell xf with the general number format."""
    return XmlXf(num_fmt_id=0)


def set_default_font(size: float, name: str) -> None:
    """Change the font used by :func:`default_font` and :func:`new_style`."""
    _defaults.update(font=Font(size=size, name=name))


def default_font() -> Font:
    return dataclasses.replace(_defaults["font"])


def default_fill() -> Fill:
    return Fill("none", "", "")


def default_border() -> Border:
    return Border("none", "none", "none", "none")


def default_alignment() -> Alignment:
    return Alignment(horizontal="general", vertical="bottom")


def new_style() -> Style:
    """Return a style initialised with the default font, fill, border and alignment."""
    return Style(
        border=default_border(),
        fill=default_fill(),
        font=default_font(),
        alignment=default_alignment(),
    )