from xlsxparts.content_types import (
    XML_HEADER,
    ContentTypes,
    Default,
    Override,
    make_default_content_types,
)


def test_marshal_content_types():
    types = ContentTypes(
        overrides=[Override("/_rels/.rels", "application/vnd.openxmlformats-package.relationships+xml")]
    )
    expected = (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types">'
        '<Override PartName="/_rels/.rels" '
        'ContentType="application/vnd.openxmlformats-package.relationships+xml"></Override></Types>'
    )
    assert XML_HEADER + types.to_xml() == expected


def test_marshal_empty():
    assert ContentTypes().to_xml() == (
        '<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types"></Types>'
    )


def test_marshal_defaults_after_overrides_and_escaped():
    types = ContentTypes(
        overrides=[Override("/a&b.xml", "text/x")],
        defaults=[Default("xml", "application/xml")],
    )
    xml = types.to_xml()
    assert '<Override PartName="/a&amp;b.xml" ContentType="text/x"></Override>' in xml
    assert xml.index("<Override") < xml.index("<Default")
    assert '<Default Extension="xml" ContentType="application/xml"></Default>' in xml


def test_make_default_content_types():
    types = make_default_content_types()
    assert len(types.overrides) == 8
    expected_overrides = [
        ("/_rels/.rels", "application/vnd.openxmlformats-package.relationships+xml"),
        ("/docProps/app.xml", "application/vnd.openxmlformats-officedocument.extended-properties+xml"),
        ("/docProps/core.xml", "application/vnd.openxmlformats-package.core-properties+xml"),
        ("/xl/_rels/workbook.xml.rels", "application/vnd.openxmlformats-package.relationships+xml"),
        ("/xl/sharedStrings.xml", "application/vnd.openxmlformats-officedocument.spreadsheetml.sharedStrings+xml"),
        ("/xl/styles.xml", "application/vnd.openxmlformats-officedocument.spreadsheetml.styles+xml"),
        ("/xl/workbook.xml", "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet.main+xml"),
        ("/xl/theme/theme1.xml", "application/vnd.openxmlformats-officedocument.theme+xml"),
    ]
    assert [(o.part_name, o.content_type) for o in types.overrides] == expected_overrides

    assert types.defaults[0].extension == "rels"
    assert types.defaults[0].content_type == "application/vnd.openxmlformats-package.relationships+xml"
    assert types.defaults[1].extension == "xml"
    assert types.defaults[1].content_type == "application/xml"


def test_default_content_types_are_independent():
    first = make_default_content_types()
    first.overrides.clear()
    assert len(make_default_content_types().overrides) == 8