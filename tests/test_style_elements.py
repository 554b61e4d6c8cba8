import pytest

from xlsxparts.style_elements import (
    XmlAlignment,
    XmlBorder,
    XmlBorders,
    XmlCellStyle,
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
    XmlRgbColor,
    XmlVal,
    XmlXf,
    XmlXfList,
)


def test_indexed_color_uninitialised():
    assert XmlColors().indexed_color(1) == "FF000000"


def test_indexed_color_initialised():
    colors = XmlColors(indexed_colors=[XmlRgbColor(rgb="00FF00FF")])
    assert colors.indexed_color(1) == "00FF00FF"


def test_indexed_color_out_of_palette():
    assert XmlColors().indexed_color(0) == ""
    assert XmlColors().indexed_color(65) == ""
    assert XmlColors().indexed_color(64) == "FF333333"


def test_indexed_color_custom_out_of_range():
    colors = XmlColors(indexed_colors=[XmlRgbColor(rgb="00FF00FF")])
    with pytest.raises(IndexError):
        colors.indexed_color(2)


def test_fonts_to_xml():
    font = XmlFont(
        sz=XmlVal("10"),
        name=XmlVal("Andale Mono"),
        b=XmlVal(),
        i=XmlVal(),
        u=XmlVal(),
        strike=XmlVal(),
    )
    fonts = XmlFonts(count=1, font=[font])
    text, index_map = fonts.to_xml()
    assert text == (
        '<fonts count="1"><font><sz val="10"/><name val="Andale Mono"/>'
        "<b/><i/><u/><strike/></font></fonts>"
    )
    assert index_map == {0: 0}


def test_empty_fonts_to_xml():
    assert XmlFonts().to_xml() == ("", {})


def test_font_theme_color():
    font = XmlFont(name=XmlVal("Arial"), color=XmlColor(theme=1), scheme=XmlVal("minor"))
    assert font.to_xml() == '<font><name val="Arial"/><color theme="1" /><scheme val="minor"/></font>'


def test_fills_to_xml():
    fill = XmlFill(
        XmlPatternFill(
            pattern_type="solid",
            fg_color=XmlColor(rgb="#FFFFFF"),
            bg_color=XmlColor(rgb="#000000"),
        )
    )
    text, index_map = XmlFills(count=1, fill=[fill]).to_xml()
    assert text == (
        '<fills count="1"><fill><patternFill patternType="solid">'
        '<fgColor rgb="#FFFFFF"/><bgColor rgb="#000000"/></patternFill></fill></fills>'
    )
    assert index_map == {0: 0}


def test_fills_skip_empty_patterns():
    fills = XmlFills()
    fills.add(XmlFill())
    fills.add(XmlFill(XmlPatternFill(pattern_type="none")))
    text, index_map = fills.to_xml()
    assert fills.count == 2
    assert text == '<fills count="1"><fill><patternFill patternType="none"/></fill></fills>'
    assert index_map == {1: 0}


def test_borders_to_xml():
    border = XmlBorder(left=XmlLine(style="solid"))
    text, index_map = XmlBorders(count=1, border=[border]).to_xml()
    assert text == (
        '<borders count="1"><border><left style="solid"></left>'
        "<right/><top/><bottom/></border></borders>"
    )
    assert index_map == {0: 0}


def test_border_line_with_color():
    border = XmlBorder(top=XmlLine(style="thin", color=XmlColor(rgb="FF000000")))
    assert border.to_xml() == (
        '<border><left/><right/><top style="thin"><color rgb="FF000000"/></top><bottom/></border>'
    )


def _sample_xf(apply_number_format):
    return XmlXf(
        apply_alignment=True,
        apply_border=True,
        apply_font=True,
        apply_fill=True,
        apply_number_format=apply_number_format,
        apply_protection=True,
        alignment=XmlAlignment(
            horizontal="left", indent=1, shrink_to_fit=True, vertical="middle"
        ),
    )


def test_cell_style_xfs_to_xml():
    xfs = XmlXfList(count=1, xf=[_sample_xf(False)])
    assert xfs.to_xml("cellStyleXfs", {}, {}, {}) == (
        '<cellStyleXfs count="1"><xf applyAlignment="1" applyBorder="1" applyFont="1" '
        'applyFill="1" applyNumberFormat="0" applyProtection="1" borderId="0" fillId="0" '
        'fontId="0" numFmtId="0"><alignment horizontal="left" indent="1" shrinkToFit="1" '
        'textRotation="0" vertical="middle" wrapText="0"/></xf></cellStyleXfs>'
    )


def test_cell_xfs_to_xml():
    xfs = XmlXfList(count=1, xf=[_sample_xf(True)])
    assert xfs.to_xml("cellXfs", {0: 0}, {0: 0}, {0: 0}) == (
        '<cellXfs count="1"><xf applyAlignment="1" applyBorder="1" applyFont="1" '
        'applyFill="1" applyNumberFormat="1" applyProtection="1" borderId="0" fillId="0" '
        'fontId="0" numFmtId="0"><alignment horizontal="left" indent="1" shrinkToFit="1" '
        'textRotation="0" vertical="middle" wrapText="0"/></xf></cellXfs>'
    )


def test_xf_maps_ids_and_writes_xf_id():
    xf = XmlXf(border_id=3, fill_id=2, font_id=1, num_fmt_id=164, xf_id=0)
    text = xf.to_xml({3: 1}, {2: 0}, {1: 5})
    assert 'borderId="1" fillId="0" fontId="5" numFmtId="164" xfId="0">' in text


def test_empty_xf_list():
    assert XmlXfList().to_xml("cellXfs", {}, {}, {}) == ""


def test_alignment_defaults_do_not_mutate():
    alignment = XmlAlignment()
    assert alignment.to_xml() == (
        '<alignment horizontal="general" indent="0" shrinkToFit="0" '
        'textRotation="0" vertical="bottom" wrapText="0"/>'
    )
    assert alignment.horizontal == ""


def test_cell_styles_to_xml():
    styles = XmlCellStyles(
        count=2,
        cell_style=[
            XmlCellStyle(name="Bob", builtin_id=31, xf_id=0),
            XmlCellStyle(name="Unknown", xf_id=1),
        ],
    )
    assert styles.to_xml(0) == (
        '<cellStyles count="1"><cellStyle builtInId="31" name="Bob" xfId="0"></cellStyle></cellStyles>'
    )
    assert styles.to_xml(-1) == ""


def test_num_fmts_to_xml():
    fmts = XmlNumFmts(count=1, num_fmt=[XmlNumFmt(164, "GENERAL")])
    assert fmts.to_xml() == '<numFmts count="1"><numFmt numFmtId="164" formatCode="GENERAL"/></numFmts>'
    assert XmlNumFmts().to_xml() == ""


def test_num_fmt_escapes_format_code():
    assert XmlNumFmt(165, '"$"#,##0').to_xml() == (
        '<numFmt numFmtId="165" formatCode="&#34;$&#34;#,##0"/>'
    )


def _font():
    return XmlFont(
        sz=XmlVal("11"),
        color=XmlColor(rgb="FFFF0000"),
        name=XmlVal("Calibri"),
        family=XmlVal("2"),
        b=XmlVal(),
        i=XmlVal(),
        u=XmlVal(),
    )


@pytest.mark.parametrize(
    "change",
    [
        lambda f: setattr(f.sz, "val", "12"),
        lambda f: setattr(f.color, "rgb", "12345678"),
        lambda f: setattr(f.name, "val", "Arial"),
        lambda f: setattr(f.family, "val", "1"),
        lambda f: setattr(f, "b", None),
        lambda f: setattr(f, "i", None),
        lambda f: setattr(f, "u", None),
    ],
)
def test_font_equals(change):
    font_a, font_b = _font(), _font()
    assert font_a.equals(font_b) is True
    change(font_b)
    assert font_a.equals(font_b) is False


def test_fill_equals():
    def make():
        return XmlFill(
            XmlPatternFill(
                pattern_type="solid",
                fg_color=XmlColor(rgb="FFFF0000"),
                bg_color=XmlColor(rgb="0000FFFF"),
            )
        )

    fill_a, fill_b = make(), make()
    assert fill_a.equals(fill_b) is True
    fill_b.pattern_fill.pattern_type = "gray125"
    assert fill_a.equals(fill_b) is False
    fill_b.pattern_fill.pattern_type = "solid"
    fill_b.pattern_fill.fg_color.rgb = "00FF00FF"
    assert fill_a.equals(fill_b) is False
    fill_b.pattern_fill.fg_color.rgb = "FFFF0000"
    fill_b.pattern_fill.bg_color.rgb = "12456789"
    assert fill_a.equals(fill_b) is False
    fill_b.pattern_fill.bg_color.rgb = "0000FFFF"
    assert fill_a.equals(fill_b) is True


@pytest.mark.parametrize("side", ["left", "right", "top", "bottom"])
def test_border_equals(side):
    def make():
        return XmlBorder(*(XmlLine(style="none") for _ in range(4)))

    border_a, border_b = make(), make()
    assert border_a.equals(border_b) is True
    getattr(border_b, side).style = "thin"
    assert border_a.equals(border_b) is False
    getattr(border_b, side).style = "none"
    assert border_a.equals(border_b) is True


def _xf():
    return XmlXf(
        apply_alignment=True,
        apply_border=True,
        apply_font=True,
        apply_fill=True,
        apply_protection=True,
    )


@pytest.mark.parametrize(
    "name, value",
    [
        ("apply_alignment", False),
        ("apply_border", False),
        ("apply_font", False),
        ("apply_fill", False),
        ("apply_protection", False),
        ("border_id", 1),
        ("fill_id", 1),
        ("font_id", 1),
        ("num_fmt_id", 1),
    ],
)
def test_xf_equals_fields(name, value):
    xf_a, xf_b = _xf(), _xf()
    assert xf_a.equals(xf_b) is True
    setattr(xf_b, name, value)
    assert xf_a.equals(xf_b) is False


def test_xf_equals_xf_id():
    xf_a, xf_b = _xf(), _xf()
    xf_a.xf_id = 1
    assert xf_a.equals(xf_b) is False
    xf_b.xf_id = 1
    assert xf_a.equals(xf_b) is True
    xf_b.xf_id = 2
    assert xf_a.equals(xf_b) is False


def test_color_equals_compares_rgb_only():
    assert XmlColor(rgb="FF000000", theme=1).equals(XmlColor(rgb="FF000000")) is True
    assert XmlColor(rgb="FF000000").equals(XmlColor(rgb="FFFFFFFF")) is False


def test_collection_add_counts():
    fonts, borders, xfs = XmlFonts(), XmlBorders(), XmlXfList()
    fonts.add(XmlFont())
    borders.add(XmlBorder())
    borders.add(XmlBorder())
    xfs.add(XmlXf(xf_id=20))
    assert (fonts.count, borders.count, xfs.count) == (1, 2, 1)
    assert xfs.xf[0].xf_id == 20