import pytest

from xlsxparts.theme import ClrSchemeEntry, SrgbClr, SysClr, Theme, parse_color_scheme

NS = "http://schemas.openxmlformats.org/drawingml/2006/main"

SCHEME = [
    ("dk1", "sys", ("windowText", "000000")),
    ("lt1", "sys", ("window", "FFFFFF")),
    ("dk2", "rgb", "1F497D"),
    ("lt2", "rgb", "EEECE1"),
    ("accent1", "rgb", "4F81BD"),
    ("accent2", "rgb", "C0504D"),
    ("accent3", "rgb", "9BBB59"),
    ("accent4", "rgb", "8064A2"),
    ("accent5", "rgb", "4BACC6"),
    ("accent6", "rgb", "F79646"),
    ("hlink", "rgb", "0000FF"),
    ("folHlink", "rgb", "800080"),
]


def _entry_xml(name, kind, value):
    if kind == "sys":
        inner = f'<a:sysClr val="{value[0]}" lastClr="{value[1]}"/>'
    else:
        inner = f'<a:srgbClr val="{value}"/>'
    return f"<a:{name}>{inner}</a:{name}>"


def _theme_xml(entries):
    body = "".join(_entry_xml(*entry) for entry in entries)
    return (
        f'<a:theme xmlns:a="{NS}" name="Sample">'
        f'<a:themeElements><a:clrScheme name="Sample">{body}</a:clrScheme></a:themeElements>'
        "</a:theme>"
    )


THEME_XML = _theme_xml(SCHEME)


def test_parse_color_scheme():
    entries = parse_color_scheme(THEME_XML)
    assert len(entries) == 12

    dk1 = entries[0]
    assert dk1.name == "dk1"
    assert dk1.srgb_clr is None
    assert dk1.sys_clr == SysClr("windowText", "000000")

    dk2 = entries[2]
    assert dk2.name == "dk2"
    assert dk2.sys_clr is None
    assert dk2.srgb_clr == SrgbClr("1F497D")


def test_theme_colors():
    theme = Theme.from_xml(THEME_XML)
    assert theme.theme_color(0, 0) == "FFFFFFFF"
    assert theme.theme_color(2, 0) == "FFEEECE1"
    assert theme.colors[1] == "000000"
    assert theme.colors[11] == "800080"


def test_theme_color_full_tints():
    theme = Theme.from_xml(THEME_XML)
    assert theme.theme_color(0, -1.0) == "FF000000"
    assert theme.theme_color(1, 1.0) == "FFFFFFFF"


def test_theme_color_negative_index():
    theme = Theme.from_xml(THEME_XML)
    with pytest.raises(IndexError):
        theme.theme_color(-1, 0)


def test_from_entries_missing_names_are_empty():
    theme = Theme.from_entries([ClrSchemeEntry("dk1", srgb_clr=SrgbClr("123456"))])
    assert len(theme.colors) == 12
    assert theme.colors[1] == "123456"
    assert theme.colors[0] == ""


def test_from_entries_without_colour():
    with pytest.raises(ValueError):
        Theme.from_entries([ClrSchemeEntry("dk1")])


def test_parse_without_theme_elements():
    assert parse_color_scheme(b"<theme/>") == []


def test_parse_invalid_xml():
    with pytest.raises(ValueError):
        parse_color_scheme("<theme>")