"""Tests for the DKF recursive-descent parser and its validation rules."""

import pytest

from devkitty.dkf.parser import parse_document
from devkitty.errors import (
    END_OF_INPUT,
    CountMismatchError,
    DKFParseError,
    DuplicatePropertyError,
    ErrorKind,
    IncompleteIconError,
    InvalidValueError,
    MalformedPathError,
    MissingFieldError,
    StructuralError,
    UnknownPropertyError,
)

HOME = ("0 0 24 24", ['"M3 10 L12 3 L21 10"', '"M5 10 V21 H19 V10"'])


def _make_document(icons: dict | None = None, **meta_overrides) -> str:
    """Build DKF text. A meta override of None drops that key."""
    if icons is None:
        icons = {"home": HOME}
    meta = {
        "format": "devkitty",
        "version": "1.0.0",
        "type": "icon",
        "mode": "package",
        "iconCount": str(len(icons)),
    }
    meta.update(meta_overrides)

    lines = ["@meta {"]
    lines += [f"  {k}: {v}" for k, v in meta.items() if v is not None]
    lines += ["}", "", "@icons {"]
    for name, (view_box, paths) in icons.items():
        lines.append(f"  icon {name} {{")
        lines.append(f"    viewBox: {view_box}")
        lines.append("    paths {")
        lines += [f"      {p}" for p in paths]
        lines.append("    }")
        lines.append("  }")
    lines.append("}")
    return "\n".join(lines)


def _icon_document(body: str) -> str:
    return (
        "@meta { format devkitty version 1 type icon mode single iconCount 1 }\n"
        f"@icons {{ icon broken {{ {body} }} }}"
    )


# --- Valid documents ---


def test_parse_valid_document():
    doc = parse_document(_make_document())
    assert doc.meta.format == "devkitty"
    assert doc.meta.version == "1.0.0"
    assert doc.meta.mode == "package"
    assert doc.meta.icon_count == 1
    assert doc.names == ["home"]

    icon = doc.icons["home"]
    assert icon.view_box == "0 0 24 24"
    assert icon.paths == ("M3 10 L12 3 L21 10", "M5 10 V21 H19 V10")


def test_parse_icon_count_matches():
    icons = {f"icon{i}": ("0 0 16 16", [f'"M{i} 0 L16 16"']) for i in range(3)}
    doc = parse_document(_make_document(icons))
    assert len(doc.icons) == 3
    assert doc.icon_blocks == 3


def test_parse_zero_icons():
    doc = parse_document(_make_document({}))
    assert doc.icons == {}
    assert doc.meta.icon_count == 0


def test_meta_keys_without_colon():
    text = (
        "@meta { format devkitty version 2 type icon mode single iconCount 1 }"
        '@icons { icon dot { viewBox: 0 0 2 2 paths { "M1 1h0" } } }'
    )
    doc = parse_document(text)
    assert doc.meta.version == "2"
    assert doc.icons["dot"].paths == ("M1 1h0",)


def test_extra_meta_keys_preserved():
    doc = parse_document(_make_document(author="kitty"))
    assert doc.meta.extra == {"author": "kitty"}
    assert doc.meta.to_dict()["author"] == "kitty"


def test_multi_token_path_rejoined():
    icons = {"line": ("0 0 30 30", ['"M 10 10 L 20 20"'])}
    doc = parse_document(_make_document(icons))
    assert doc.icons["line"].paths == ("M 10 10 L 20 20",)


def test_path_collapses_internal_whitespace():
    icons = {"line": ("0 0 30 30", ['"M 10    10\n   L 20 20"'])}
    doc = parse_document(_make_document(icons))
    assert doc.icons["line"].paths == ("M 10 10 L 20 20",)


def test_single_token_path():
    icons = {"dot": ("0 0 4 4", ['"M2,2h0"'])}
    doc = parse_document(_make_document(icons))
    assert doc.icons["dot"].paths == ("M2,2h0",)


def test_lone_quote_opens_path():
    text = _icon_document('viewBox: 0 0 1 1 paths { " M 0 0 " }')
    doc = parse_document(text)
    assert doc.icons["broken"].paths == (" M 0 0 ",)


def test_empty_quoted_path():
    text = _icon_document('viewBox: 0 0 1 1 paths { "" "M1 1" }')
    doc = parse_document(text)
    assert doc.icons["broken"].paths == ("", "M1 1")


def test_multiple_paths_blocks_append_in_order():
    text = _icon_document(
        'viewBox: 0 0 8 8 paths { "M0 0" } paths { "M1 1" "M2 2" }'
    )
    doc = parse_document(text)
    assert doc.icons["broken"].paths == ("M0 0", "M1 1", "M2 2")


def test_viewbox_accepts_signed_and_decimal():
    icons = {"offset": ("-1.5 +2 24.25 1e2", ['"M0 0"'])}
    doc = parse_document(_make_document(icons))
    icon = doc.icons["offset"]
    assert icon.view_box == "-1.5 +2 24.25 1e2"
    assert icon.view_box_values == (-1.5, 2.0, 24.25, 100.0)


def test_redefined_icon_counts_both_blocks():
    text = (
        "@meta { format devkitty version 1 type icon mode package iconCount 2 }"
        '@icons { icon a { viewBox: 0 0 1 1 paths { "M0 0" } }'
        ' icon a { viewBox: 0 0 2 2 paths { "M1 1" } } }'
    )
    doc = parse_document(text)
    assert doc.icon_blocks == 2
    assert doc.icons["a"].view_box == "0 0 2 2"


def test_trailing_content_ignored():
    doc = parse_document(_make_document() + "\n@unused { whatever }")
    assert doc.names == ["home"]


# --- Metadata validation ---


@pytest.mark.parametrize(
    "field,value",
    [("mode", "diagonal"), ("format", "notdevkitty"), ("type", "logo")],
)
def test_invalid_meta_values(field, value):
    with pytest.raises(InvalidValueError) as exc_info:
        parse_document(_make_document(**{field: value}))
    assert exc_info.value.field == field
    assert exc_info.value.value == value
    assert exc_info.value.kind == ErrorKind.INVALID_VALUE


@pytest.mark.parametrize("field", ["format", "version", "type", "mode", "iconCount"])
def test_missing_meta_field(field):
    with pytest.raises(MissingFieldError) as exc_info:
        parse_document(_make_document(**{field: None}))
    assert exc_info.value.field == field
    assert field in str(exc_info.value)


def test_non_integer_icon_count():
    with pytest.raises(InvalidValueError) as exc_info:
        parse_document(_make_document(iconCount="two"))
    assert exc_info.value.field == "iconCount"


def test_negative_icon_count_rejected():
    with pytest.raises(InvalidValueError):
        parse_document(_make_document(iconCount="-1"))


# --- Count mismatch ---


@pytest.mark.parametrize("actual", [1, 3])
def test_count_mismatch(actual):
    icons = {f"i{n}": ("0 0 1 1", ['"M0 0"']) for n in range(actual)}
    with pytest.raises(CountMismatchError) as exc_info:
        parse_document(_make_document(icons, iconCount="2"))
    assert exc_info.value.declared == 2
    assert exc_info.value.found == actual
    assert "meta=2" in str(exc_info.value)


# --- Icon body validation ---


def test_unknown_property():
    text = _icon_document('viewBox: 0 0 1 1 fillColor: red paths { "M0 0" }')
    with pytest.raises(UnknownPropertyError) as exc_info:
        parse_document(text)
    assert exc_info.value.key == "fillColor:"
    assert exc_info.value.icon == "broken"


def test_unquoted_path():
    text = _icon_document("viewBox: 0 0 1 1 paths { M10 10 }")
    with pytest.raises(MalformedPathError) as exc_info:
        parse_document(text)
    assert exc_info.value.token == "M10"
    assert exc_info.value.kind == ErrorKind.MALFORMED_PATH


def test_missing_viewbox():
    text = _icon_document('paths { "M0 0" }')
    with pytest.raises(IncompleteIconError) as exc_info:
        parse_document(text)
    assert exc_info.value.icon == "broken"
    assert exc_info.value.missing == "viewBox"


def test_empty_paths():
    text = _icon_document("viewBox: 0 0 1 1 paths { }")
    with pytest.raises(IncompleteIconError) as exc_info:
        parse_document(text)
    assert exc_info.value.missing == "paths"
    assert "has no paths" in str(exc_info.value)


def test_duplicate_viewbox():
    text = _icon_document('viewBox: 0 0 1 1 viewBox: 0 0 2 2 paths { "M0 0" }')
    with pytest.raises(DuplicatePropertyError) as exc_info:
        parse_document(text)
    assert exc_info.value.key == "viewBox:"


def test_non_numeric_viewbox():
    text = _icon_document('viewBox: 0 0 wide 1 paths { "M0 0" }')
    with pytest.raises(InvalidValueError) as exc_info:
        parse_document(text)
    assert exc_info.value.field == "viewBox"
    assert exc_info.value.icon == "broken"


def test_short_viewbox():
    text = _icon_document("viewBox: 0 0 1")
    with pytest.raises(StructuralError) as exc_info:
        parse_document(text)
    assert exc_info.value.actual == "}"


# --- Structure ---


def test_missing_meta_section():
    with pytest.raises(StructuralError) as exc_info:
        parse_document("@icons { }")
    assert exc_info.value.expected == "@meta"
    assert exc_info.value.actual == "@icons"


def test_missing_icons_section():
    text = "@meta { format devkitty version 1 type icon mode single iconCount 0 }"
    with pytest.raises(StructuralError) as exc_info:
        parse_document(text)
    assert exc_info.value.expected == "@icons"
    assert exc_info.value.actual == END_OF_INPUT


def test_truncated_meta_block():
    with pytest.raises(StructuralError) as exc_info:
        parse_document("@meta { format devkitty")
    assert exc_info.value.actual == END_OF_INPUT


def test_meta_key_without_value():
    with pytest.raises(StructuralError) as exc_info:
        parse_document("@meta { format } @icons { }")
    assert exc_info.value.expected == "value for format"


def test_icon_keyword_required():
    text = (
        "@meta { format devkitty version 1 type icon mode single iconCount 1 }"
        '@icons { glyph a { viewBox: 0 0 1 1 paths { "M0 0" } } }'
    )
    with pytest.raises(StructuralError) as exc_info:
        parse_document(text)
    assert exc_info.value.expected == "icon"
    assert exc_info.value.actual == "glyph"


def test_unterminated_quote():
    text = _icon_document('viewBox: 0 0 1 1 paths { "M0 0 }')
    with pytest.raises(StructuralError) as exc_info:
        parse_document(text)
    assert exc_info.value.expected == "closing quote"


def test_empty_document():
    with pytest.raises(DKFParseError):
        parse_document("")
