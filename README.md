# xlsxparts

`xlsxparts` provides the pieces for reading and writing several of the XML
parts inside an XLSX package: the style sheet, the theme colour scheme,
shared strings, the workbook part and the content-types part. It also holds
fixed documents for the parts that are not built from content.

It uses only the Python standard library and supports Python 3.10 and later.

## Installing

```
pip install xlsxparts
```

## Modules

### `xlsxparts.style`

High-level style values: `Style`, `Font`, `Fill`, `Border` and `Alignment`,
all dataclasses.

- `new_style()` returns a `Style` with the default font, fill (`"none"`),
  border (`"none"` on every side) and alignment (`"general"` / `"bottom"`).
- `default_font()`, `default_fill()`, `default_border()` and
  `default_alignment()` return those defaults on their own.
- `set_default_font(size, name)` changes the font that `default_font()` and
  `new_style()` hand out. The starting default is Verdana, size 12.
- `Style.make_xlsx_style_elements()` returns a tuple
  `(XmlFont, XmlFill, XmlBorder, XmlXf)` describing the style as stored in
  `styles.xml`.
- `make_cell_xf()` returns a blank `XmlXf` with number format 0.

The module also defines a few constants for font names (`HELVETICA`,
`COURIER`, …), ARGB colours (`RGB_LIGHT_GREEN`, `RGB_BLACK`, …) and
`SOLID_CELL_FILL`.

### `xlsxparts.style_elements`

The low-level style records: `XmlVal`, `XmlColor`, `XmlFont`,
`XmlPatternFill`, `XmlFill`, `XmlLine`, `XmlBorder`, `XmlAlignment`, `XmlXf`,
`XmlNumFmt`, `XmlNumFmts`, `XmlFonts`, `XmlFills`, `XmlBorders`,
`XmlCellStyle`, `XmlCellStyles`, `XmlXfList`, `XmlRgbColor` and `XmlColors`.

Most of them have an `equals(other)` method, used to find duplicates, and a
`to_xml()` method. The collections `XmlFonts`, `XmlFills` and `XmlBorders`
return a pair from `to_xml()`: the XML text and a map from each item's
position to its position in the output, which `XmlXf.to_xml(border_map,
fill_map, font_map)` and `XmlXfList.to_xml(tag, ...)` use to write ids.
`XmlColors.indexed_color(index)` looks up a one-based indexed colour, using
the standard 64-colour palette when no custom palette is set.

`BUILTIN_NUM_FMTS` holds Excel's built-in number formats by id.

### `xlsxparts.stylesheet`

`StyleSheet` gathers fonts, fills, borders, cell formats and number formats.

- `reset()` fills it with the minimal set a workbook declares (Arial 11,
  the `none` and `gray125` fills, an empty border, one blank xf).
- `add_font`, `add_fill`, `add_border`, `add_cell_style_xf` and
  `add_cell_xf` register an element unless an equal one is already there,
  and return its index.
- `new_num_fmt(format_code)` returns id 0 for `"general"`, the built-in id
  for a built-in code, or registers a custom format starting at id 164.
  `add_num_fmt(num_fmt)` registers a custom format directly; ids of 163 and
  below are ignored.
- `get_style(style_index)` turns a stored cell format back into a `Style`,
  resolving colours through the theme or the indexed palette
  (`argb_value(color)`); results for valid indexes are cached.
  `populate_style_from_xf(style, xf)` does the same for a single xf.
- `to_xml()` writes the whole `styles.xml` document, XML declaration
  included.

`get_builtin_number_format(num_fmt_id)` returns the code of a built-in number
format, or an empty string.

### `xlsxparts.theme`

- `parse_color_scheme(data)` reads the colour scheme entries
  (`ClrSchemeEntry`, with `SysClr` or `SrgbClr`) from a theme document.
- `Theme.from_xml(data)` and `Theme.from_entries(entries)` build a `Theme`
  holding the twelve theme colours in the order cells refer to them.
- `Theme.theme_color(index, tint)` returns the ARGB text of a theme colour,
  lightened (positive tint) or darkened (negative tint).

### `xlsxparts.shared_strings`

- `parse_shared_strings(data)` reads `sharedStrings.xml` into a
  `SharedStrings` value with `count`, `unique_count` and a list of
  `StringItem`s. Each item has plain `text`, rich-text `runs`
  (`RichRun` with optional `RunProperties`), or both.
- `StringItem.to_xml(tag="si")`, `RichRun.to_xml()` and
  `RunProperties.to_xml()` write items back out, adding
  `xml:space="preserve"` where `need_preserve(text)` says the whitespace
  would otherwise be lost.

Invalid XML, a wrong root element or malformed values raise `ValueError`.

### `xlsxparts.workbook`

- `parse_workbook(data)` reads `workbook.xml` into a `Workbook` with its
  `FileVersion`, `WorkbookPr`, `WorkbookView`s, `SheetEntry`s,
  `DefinedName`s and `CalcPr`; `Workbook.to_xml()` writes it back, without
  the XML declaration.
- `parse_workbook_rels(data)` reads the workbook relationships into
  `WorkbookRelation`s.
- `worksheet_file_for_sheet(sheet, worksheets, sheet_xml_map)` finds the
  worksheet entry for a sheet in a mapping, falling back to
  `sheet<sheetId>` and then `sheet<id>`; it returns `None` when there is
  none.
- `SheetState` lists the sheet visibility values.

### `xlsxparts.content_types`

`make_default_content_types()` returns the `ContentTypes` every workbook
package declares; `ContentTypes.to_xml()` writes the `Types` element
(without the XML declaration) from its `Override` and `Default` entries.

### `xlsxparts.templates`

Fixed documents as strings: `TEMPLATE_RELS_DOT_RELS`,
`TEMPLATE_DOCPROPS_APP`, `TEMPLATE_DOCPROPS_CORE` and
`TEMPLATE_XL_THEME_THEME`.

## Example

```python
from xlsxparts.style import new_style
from xlsxparts.stylesheet import StyleSheet

styles = StyleSheet()
styles.reset()

style = new_style()
style.font.bold = True
font, fill, border, xf = style.make_xlsx_style_elements()
xf.font_id = styles.add_font(font)
xf.fill_id = styles.add_fill(fill)
xf.border_id = styles.add_border(border)
xf.num_fmt_id = styles.new_num_fmt("hh:mm:ss").num_fmt_id
index = styles.add_cell_xf(xf)

print(index)
print(styles.to_xml())
```

## What it does not do

`xlsxparts` works on individual parts only. It does not open or save `.xlsx`
files (the ZIP package), and it has no model of worksheets, rows or cells.
It writes `styles.xml` but does not read it back, reads the shared strings
part but has no writer for the whole string table, and writes the
content-types part but does not read it. There is no command-line tool.

## Running the tests

```
pip install -e ".[test]"
pytest
```