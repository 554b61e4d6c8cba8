"""Theme colour scheme: parsing and theme colour resolution with tint."""

from __future__ import annotations

import colorsys
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Iterable, Optional, Union

_THEME_ORDER = (
    "lt1", "dk1", "lt2", "dk2",
    "accent1", "accent2", "accent3", "accent4", "accent5", "accent6",
    "hlink", "folHlink",
)


@dataclass
class SysClr:
    val: str = ""
    last_clr: str = ""


@dataclass
class SrgbClr:
    val: str = ""


@dataclass
class ClrSchemeEntry:
    """One child of the colour scheme, such as ``dk1`` or ``accent3``."""

    name: str
    sys_clr: Optional[SysClr] = None
    srgb_clr: Optional[SrgbClr] = None


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _child(element: ET.Element, name: str) -> Optional[ET.Element]:
    return next((child for child in element if _local(child.tag) == name), None)


def parse_color_scheme(data: Union[str, bytes]) -> list[ClrSchemeEntry]:
    """Read the colour scheme entries of a theme document, in document order."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    try:
        root = ET.fromstring(data.lstrip())
    except ET.ParseError as exc:
        raise ValueError(f"invalid theme XML: {exc}") from exc
    elements = _child(root, "themeElements")
    if elements is None:
        return []
    scheme = _child(elements, "clrScheme")
    if scheme is None:
        return []
    entries = []
    for child in scheme:
        sys_el = _child(child, "sysClr")
        srgb_el = _child(child, "srgbClr")
        entries.append(
            ClrSchemeEntry(
                name=_local(child.tag),
                sys_clr=None if sys_el is None else SysClr(sys_el.get("val", ""), sys_el.get("lastClr", "")),
                srgb_clr=None if srgb_el is None else SrgbClr(srgb_el.get("val", "")),
            )
        )
    return entries


def _hex_byte(text: str) -> int:
    try:
        return min(max(int(text, 16), 0), 255)
    except ValueError:
        return 0


def _to_byte(component: float) -> int:
    return min(max(round(component * 255), 0), 255)


@dataclass(frozen=True)
class Theme:
    """The twelve theme colours, in the order cells refer to them."""

    colors: tuple[str, ...]

    @classmethod
    def from_entries(cls, entries: Iterable[ClrSchemeEntry]) -> Theme:
        color_map: dict[str, str] = {}
        for entry in entries:
            if entry.sys_clr is not None:
                color_map[entry.name] = entry.sys_clr.last_clr
            elif entry.srgb_clr is not None:
                color_map[entry.name] = entry.srgb_clr.val
            else:
                raise ValueError(f"colour scheme entry {entry.name!r} has no colour")
        return cls(tuple(color_map.get(name, "") for name in _THEME_ORDER))

    @classmethod
    def from_xml(cls, data: Union[str, bytes]) -> Theme:
        return cls.from_entries(parse_color_scheme(data))

    def theme_color(self, index: int, tint: float) -> str:
        """Return the ARGB text of theme colour ``index`` lightened or darkened by ``tint``."""
        if index < 0:
            raise IndexError(f"theme colour index out of range: {index}")
        base = self.colors[index]
        if tint == 0:
            return "FF" + base
        r, g, b = (_hex_byte(base[pos:pos + 2]) for pos in (0, 2, 4))
        hue, light, sat = colorsys.rgb_to_hls(r / 255, g / 255, b / 255)
        if tint < 0:
            light *= 1 + tint
        else:
            light = light * (1 - tint) + tint
        out = colorsys.hls_to_rgb(hue, light, sat)
        return "FF" + "".join(f"{_to_byte(c):02X}" for c in out)