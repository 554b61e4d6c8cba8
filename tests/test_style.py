import pytest

from xlsxparts.style import (
    Alignment,
    Border,
    Fill,
    Font,
    Style,
    default_alignment,
    default_border,
    default_fill,
    default_font,
    make_cell_xf,
    new_style,
    set_default_font,
)


@pytest.fixture
def restore_default_font():
    original = default_font()
    yield
    set_default_font(original.size, original.name)


def test_new_style_defaults():
    style = new_style()
    assert style.font == default_font()
    assert style.fill == default_fill()
    assert style.border == default_border()
    assert style.alignment == default_alignment()


def test_default_values():
    assert default_font() == Font(12.0, "Verdana")
    assert default_fill() == Fill("none", "", "")
    assert default_border() == Border("none", "none", "none", "none")
    assert default_alignment() == Alignment(horizontal="general", vertical="bottom")


def test_make_xlsx_style_elements():
    style = new_style()
    font = Font(12, "Verdana")
    font.bold = True
    font.italic = True
    font.underline = True
    font.strike = True
    style.font = font
    style.fill = Fill("solid", "00FF0000", "FF000000")
    style.border = Border("thin", "thin", "thin", "thin")
    style.apply_border = True
    style.apply_fill = True
    style.apply_font = True

    x_font, x_fill, x_border, x_xf = style.make_xlsx_style_elements()
    assert x_font.sz.val == "12"
    assert x_font.name.val == "Verdana"
    assert x_font.b is not None and x_font.b.val == ""
    assert x_font.i is not None and x_font.i.val == ""
    assert x_font.u is not None and x_font.u.val == ""
    assert x_font.strike is not None and x_font.strike.val == ""
    assert x_fill.pattern_fill.pattern_type == "solid"
    assert x_fill.pattern_fill.fg_color.rgb == "00FF0000"
    assert x_fill.pattern_fill.bg_color.rgb == "FF000000"
    assert x_border.left.style == "thin"
    assert x_border.right.style == "thin"
    assert x_border.top.style == "thin"
    assert x_border.bottom.style == "thin"
    assert x_xf.apply_border is True
    assert x_xf.apply_fill is True
    assert x_xf.apply_font is True
    assert x_xf.apply_alignment is False


def test_plain_font_has_no_flags():
    x_font, _, _, _ = new_style().make_xlsx_style_elements()
    assert (x_font.b, x_font.i, x_font.u, x_font.strike) == (None, None, None, None)
    assert x_font.family.val == "0"
    assert x_font.charset.val == "0"


@pytest.mark.parametrize("size, text", [(12.5, "12.5"), (10.0, "10"), (0.0, "0"), (1e20, "100000000000000000000")])
def test_font_size_text(size, text):
    style = Style(font=Font(size, "Arial"))
    x_font, _, _, _ = style.make_xlsx_style_elements()
    assert x_font.sz.val == text


def test_named_style_index_is_carried():
    style = Style(named_style_index=3)
    _, _, _, x_xf = style.make_xlsx_style_elements()
    assert x_xf.xf_id == 3
    _, _, _, plain = Style().make_xlsx_style_elements()
    assert plain.xf_id is None


def test_border_colors_carried():
    style = Style(border=Border("thin", "thick", "none", "dashed", "FF111111", "FF222222", "", "FF444444"))
    _, _, x_border, _ = style.make_xlsx_style_elements()
    assert x_border.left.color.rgb == "FF111111"
    assert x_border.right.style == "thick"
    assert x_border.right.color.rgb == "FF222222"
    assert x_border.bottom.color.rgb == "FF444444"


def test_make_cell_xf():
    xf = make_cell_xf()
    assert xf.num_fmt_id == 0
    assert xf.xf_id is None


def test_new_font():
    font = Font(12.2, "Verdana")
    assert font.name == "Verdana"
    assert font.size == 12.2
    assert font.bold is False


def test_set_default_font(restore_default_font):
    set_default_font(9.0, "Courier")
    assert default_font() == Font(9.0, "Courier")
    assert new_style().font.name == "Courier"