"""Fixed documents written into every workbook package."""

from xml.sax.saxutils import escape

_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
_STANDALONE_DECLARATION = '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'

_NS_PACKAGE_RELS = "http://schemas.openxmlformats.org/package/2006/relationships"
_NS_OFFICE_RELS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
_NS_EXTENDED = "http://schemas.openxmlformats.org/officeDocument/2006/extended-properties"
_NS_VTYPES = "http://schemas.openxmlformats.org/officeDocument/2006/docPropsVTypes"
_NS_CORE = "http://schemas.openxmlformats.org/package/2006/metadata/core-properties"
_NS_DRAWING = "http://schemas.openxmlformats.org/drawingml/2006/main"


def _el(tag, /, *children, **attrs):
    """Build a node as (tag, attributes, children)."""
    return (tag, attrs, children)


def _a(name, /, *children, **attrs):
    """Build a node in the drawing namespace."""
    return _el(f"a:{name}", *children, **attrs)


def _render(node, depth=0):
    tag, attrs, children = node
    pad = "  " * depth
    head = tag + "".join(
        f' {key}="{escape(str(value), {chr(34): "&quot;"})}"'
        for key, value in attrs.items()
    )
    if not children:
        return f"{pad}<{head}/>"
    if len(children) == 1 and isinstance(children[0], str):
        return f"{pad}<{head}>{escape(children[0])}</{tag}>"
    inner = "\n".join(_render(child, depth + 1) for child in children)
    return f"{pad}<{head}>\n{inner}\n{pad}</{tag}>"


def _document(declaration, root):
    return f"{declaration}\n{_render(root)}"


# --- package relationships -------------------------------------------------

_PACKAGE_PARTS = [
    (f"{_NS_OFFICE_RELS}/officeDocument", "xl/workbook.xml"),
    (f"{_NS_PACKAGE_RELS}/metadata/core-properties", "docProps/core.xml"),
    (f"{_NS_OFFICE_RELS}/extended-properties", "docProps/app.xml"),
]

TEMPLATE_RELS_DOT_RELS = _document(
    _DECLARATION,
    _el(
        "Relationships",
        *(
            _el("Relationship", Id=f"rId{number}", Type=rel_type, Target=target)
            for number, (rel_type, target) in enumerate(_PACKAGE_PARTS, start=1)
        ),
        xmlns=_NS_PACKAGE_RELS,
    ),
)

# --- document properties ---------------------------------------------------

TEMPLATE_DOCPROPS_APP = _document(
    _STANDALONE_DECLARATION,
    _el(
        "Properties",
        _el("TotalTime", "0"),
        _el("Application", "xlsxparts"),
        **{"xmlns": _NS_EXTENDED, "xmlns:vt": _NS_VTYPES},
    ),
)

_CORE_NAMESPACES = {
    "cp": _NS_CORE,
    "dc": "http://purl.org/dc/elements/1.1/",
    "dcmitype": "http://purl.org/dc/dcmitype/",
    "dcterms": "http://purl.org/dc/terms/",
    "xsi": "http://www.w3.org/2001/XMLSchema-instance",
}

TEMPLATE_DOCPROPS_CORE = (
    _STANDALONE_DECLARATION
    + "\n<cp:coreProperties"
    + "".join(f' xmlns:{prefix}="{uri}"' for prefix, uri in _CORE_NAMESPACES.items())
    + "></cp:coreProperties>"
)

# --- theme -----------------------------------------------------------------

_SYSTEM_COLOURS = [("dk1", "windowText", "000000"), ("lt1", "window", "FFFFFF")]
_RGB_COLOURS = [
    ("dk2", "1F497D"),
    ("lt2", "EEECE1"),
    ("accent1", "4F81BD"),
    ("accent2", "C0504D"),
    ("accent3", "9BBB59"),
    ("accent4", "8064A2"),
    ("accent5", "4BACC6"),
    ("accent6", "F79646"),
    ("hlink", "0000FF"),
    ("folHlink", "800080"),
]

_WESTERN = object()
_KHMER = object()
_SCRIPT_FACES = [
    ("Jpan", "ＭＳ Ｐゴシック"),
    ("Hang", "맑은 고딕"),
    ("Hans", "宋体"),
    ("Hant", "新細明體"),
    ("Arab", _WESTERN),
    ("Hebr", _WESTERN),
    ("Thai", "Tahoma"),
    ("Ethi", "Nyala"),
    ("Beng", "Vrinda"),
    ("Gujr", "Shruti"),
    ("Khmr", _KHMER),
    ("Knda", "Tunga"),
    ("Guru", "Raavi"),
    ("Cans", "Euphemia"),
    ("Cher", "Plantagenet Cherokee"),
    ("Yiii", "Microsoft Yi Baiti"),
    ("Tibt", "Microsoft Himalaya"),
    ("Thaa", "MV Boli"),
    ("Deva", "Mangal"),
    ("Telu", "Gautami"),
    ("Taml", "Latha"),
    ("Syrc", "Estrangelo Edessa"),
    ("Orya", "Kalinga"),
    ("Mlym", "Kartika"),
    ("Laoo", "DokChampa"),
    ("Sinh", "Iskoola Pota"),
    ("Mong", "Mongolian Baiti"),
    ("Viet", _WESTERN),
    ("Uigh", "Microsoft Uighur"),
    ("Geor", "Sylfaen"),
]


def _font_collection(tag, latin, western, khmer):
    def face(value):
        if value is _WESTERN:
            return western
        if value is _KHMER:
            return khmer
        return value

    return _a(
        tag,
        _a("latin", typeface=latin),
        _a("ea", typeface=""),
        _a("cs", typeface=""),
        *(_a("font", script=script, typeface=face(value)) for script, value in _SCRIPT_FACES),
    )


def _scheme(val, **modifiers):
    return _a("schemeClr", *(_a(name, val=v) for name, v in modifiers.items()), val=val)


def _placeholder(**modifiers):
    return _scheme("phClr", **modifiers)


def _gradient(stops, closing):
    return _a(
        "gradFill",
        _a("gsLst", *(_a("gs", colour, pos=pos) for pos, colour in stops)),
        closing,
        rotWithShape="1",
    )


def _line(width, colour):
    return _a(
        "ln",
        _a("solidFill", colour),
        _a("prstDash", val="solid"),
        w=width,
        cap="flat",
        cmpd="sng",
        algn="ctr",
    )


def _shadow_effect(distance, alpha, *extras):
    shadow = _a(
        "outerShdw",
        _a("srgbClr", _a("alpha", val=alpha), val="000000"),
        blurRad="40000",
        dist=distance,
        dir="5400000",
        rotWithShape="0",
    )
    return _a("effectStyle", _a("effectLst", shadow), *extras)


def _circle(left, top, right, bottom):
    return _a("path", _a("fillToRect", l=left, t=top, r=right, b=bottom), path="circle")


def _object_default(tag, line, fill, effect, font_colour):
    return _a(
        tag,
        _a("spPr"),
        _a("bodyPr"),
        _a("lstStyle"),
        _a(
            "style",
            _a("lnRef", _scheme("accent1"), idx=line),
            _a("fillRef", _scheme("accent1"), idx=fill),
            _a("effectRef", _scheme("accent1"), idx=effect),
            _a("fontRef", _scheme(font_colour), idx="minor"),
        ),
    )


def _rotation(rev):
    return _a("rot", lat="0", lon="0", rev=rev)


_COLOUR_SCHEME = _a(
    "clrScheme",
    *(
        _a(name, _a("sysClr", val=val, lastClr=last))
        for name, val, last in _SYSTEM_COLOURS
    ),
    *(_a(name, _a("srgbClr", val=val)) for name, val in _RGB_COLOURS),
    name="Office",
)

_FONT_SCHEME = _a(
    "fontScheme",
    _font_collection("majorFont", "Cambria", "Times New Roman", "MoolBoran"),
    _font_collection("minorFont", "Arial", "Arial", "DaunPenh"),
    name="Office",
)

_FORMAT_SCHEME = _a(
    "fmtScheme",
    _a(
        "fillStyleLst",
        _a("solidFill", _placeholder()),
        _gradient(
            [
                ("0", _placeholder(tint="50000", satMod="300000")),
                ("35000", _placeholder(tint="37000", satMod="300000")),
                ("100000", _placeholder(tint="15000", satMod="350000")),
            ],
            _a("lin", ang="16200000", scaled="1"),
        ),
        _gradient(
            [
                ("0", _placeholder(tint="100000", shade="100000", satMod="130000")),
                ("100000", _placeholder(tint="50000", shade="100000", satMod="350000")),
            ],
            _a("lin", ang="16200000", scaled="0"),
        ),
    ),
    _a(
        "lnStyleLst",
        _line("9525", _placeholder(shade="95000", satMod="105000")),
        _line("25400", _placeholder()),
        _line("38100", _placeholder()),
    ),
    _a(
        "effectStyleLst",
        _shadow_effect("20000", "38000"),
        _shadow_effect("23000", "35000"),
        _shadow_effect(
            "23000",
            "35000",
            _a(
                "scene3d",
                _a("camera", _rotation("0"), prst="orthographicFront"),
                _a("lightRig", _rotation("1200000"), rig="threePt", dir="t"),
            ),
            _a("sp3d", _a("bevelT", w="63500", h="25400")),
        ),
    ),
    _a(
        "bgFillStyleLst",
        _a("solidFill", _placeholder()),
        _gradient(
            [
                ("0", _placeholder(tint="40000", satMod="350000")),
                ("40000", _placeholder(tint="45000", shade="99000", satMod="350000")),
                ("100000", _placeholder(shade="20000", satMod="255000")),
            ],
            _circle("50000", "-80000", "50000", "180000"),
        ),
        _gradient(
            [
                ("0", _placeholder(tint="80000", satMod="300000")),
                ("100000", _placeholder(shade="30000", satMod="200000")),
            ],
            _circle("50000", "50000", "50000", "50000"),
        ),
    ),
    name="Office",
)

TEMPLATE_XL_THEME_THEME = _document(
    _STANDALONE_DECLARATION,
    _a(
        "theme",
        _a("themeElements", _COLOUR_SCHEME, _FONT_SCHEME, _FORMAT_SCHEME),
        _a(
            "objectDefaults",
            _object_default("spDef", "1", "3", "2", "lt1"),
            _object_default("lnDef", "2", "0", "1", "tx1"),
        ),
        _a("extraClrSchemeLst"),
        **{"xmlns:a": _NS_DRAWING, "name": "Office-Design"},
    ),
)