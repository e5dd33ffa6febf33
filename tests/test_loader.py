"""Tests for accessory.loader."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from accessory.codegen.core.model import (
    ERROR_TYPE,
    ArrayType,
    ChanDir,
    ChanType,
    Import,
    InterfaceType,
    MapType,
    NamedType,
    PointerType,
    SignatureType,
    SliceType,
    StructType,
    Tag,
    basic,
)
from accessory.loader import LoaderError, load_package, load_package_document, parse_type
from tests._fixtures.declarations import write_document


def named(name: str, path: str | None = None, **extra) -> dict:
    obj = {"kind": "named", "name": name, **extra}
    if path is not None:
        obj["package"] = {"path": path, "name": path.rsplit("/", 1)[-1]}
    return obj


BASIC_STRING = {"kind": "basic", "name": "string"}

DOCUMENT = {
    "name": "test",
    "path": "example.com/test",
    "imports": [
        {"path": "sync"},
        {"path": "time"},
        {"path": "sync"},
        {"name": "sub", "path": "example.com/sub2", "named": True},
    ],
    "structs": [
        {
            "name": "Tester",
            "fields": [
                {"name": "lock", "type": named("Mutex", "sync", underlying={"kind": "struct"})},
                {
                    "name": "field1",
                    "type": BASIC_STRING,
                    "tag": 'json:"f1" accessor:"getter:GetField1,setter"',
                },
                {"name": "field2", "type": {"kind": "pointer", "elem": named("Time", "time")}},
            ],
        }
    ],
}


def test_load_package_from_file(tmp_path: Path) -> None:
    path = write_document(tmp_path / "decls.json", DOCUMENT)
    package = load_package(path)

    assert package.name == "test"
    assert package.path == "example.com/test"
    assert package.dir == str(tmp_path.resolve())
    assert package.imports == (
        Import("sync", "sync"),
        Import("time", "time"),
        Import("sub", "example.com/sub2", is_named=True),
    )

    (tester,) = package.find_structs("Tester")
    assert [f.name for f in tester.fields] == ["lock", "field1", "field2"]
    assert tester.fields[0].tag is None
    assert tester.fields[1].tag == Tag(getter="GetField1", setter="", no_default=False)
    assert tester.fields[1].type == basic("string")

    field2_type = tester.fields[2].type
    assert isinstance(field2_type, PointerType)
    assert field2_type.elem.name == "Time"
    assert field2_type.elem.package.path == "time"


def test_explicit_dir_is_used(tmp_path: Path) -> None:
    path = write_document(tmp_path / "decls.json", {**DOCUMENT, "dir": "/src/test"})
    assert load_package(path).dir == os.path.abspath("/src/test")


def test_packages_wrapper_with_one_package() -> None:
    package = load_package_document({"packages": [DOCUMENT]}, base_dir="/tmp")
    assert package.name == "test"


@pytest.mark.parametrize("packages", [[], [DOCUMENT, DOCUMENT]])
def test_packages_wrapper_must_hold_exactly_one(packages: list) -> None:
    with pytest.raises(LoaderError, match=f"error: {len(packages)} packages found"):
        load_package_document({"packages": packages})


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_package(tmp_path / "missing.json")


def test_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(LoaderError, match="Invalid JSON"):
        load_package(path)


def test_package_requires_a_name() -> None:
    with pytest.raises(LoaderError, match="'name'"):
        load_package_document({"structs": []})


def test_path_defaults_to_name() -> None:
    assert load_package_document({"name": "solo"}).path == "solo"


def test_import_name_defaults_from_path() -> None:
    package = load_package_document(
        {"name": "p", "imports": [{"path": "gopkg.in/yaml.v3"}, {"path": "x.com/a", "name": "_", "named": True}]}
    )
    assert package.imports[0] == Import("yaml", "gopkg.in/yaml.v3")
    assert package.imports[1].is_blank


def test_parse_compound_types() -> None:
    t = parse_type(
        {
            "kind": "map",
            "key": BASIC_STRING,
            "value": {"kind": "slice", "elem": {"kind": "array", "len": 4, "elem": {"kind": "basic", "name": "byte"}}},
        }
    )
    assert t == MapType(basic("string"), SliceType(ArrayType(4, basic("byte"))))

    chan = parse_type({"kind": "chan", "dir": "recv", "elem": BASIC_STRING})
    assert chan == ChanType(basic("string"), ChanDir.RECV)
    assert parse_type({"kind": "chan", "elem": BASIC_STRING}).dir == ChanDir.SEND_RECV


def test_parse_signature_and_interface() -> None:
    sig = parse_type(
        {
            "kind": "signature",
            "params": [{"type": {"kind": "slice", "elem": BASIC_STRING}, "name": "args"}],
            "results": [{"type": named("error")}],
            "variadic": True,
        }
    )
    assert isinstance(sig, SignatureType)
    assert sig.variadic
    assert sig.params[0].name == "args"
    assert sig.results[0].type is ERROR_TYPE

    iface = parse_type(
        {
            "kind": "interface",
            "methods": [{"name": "String", "signature": {"results": [{"type": BASIC_STRING}]}}],
        }
    )
    assert isinstance(iface, InterfaceType)
    assert iface.methods[0].name == "String"


def test_parse_anonymous_struct() -> None:
    t = parse_type(
        {
            "kind": "struct",
            "fields": [
                {"name": "a", "type": BASIC_STRING, "tag": 'json:"a"'},
                {"name": "Time", "type": named("Time", "time"), "embedded": True},
            ],
        }
    )
    assert isinstance(t, StructType)
    assert t.fields[0].tag == 'json:"a"'
    assert t.fields[1].embedded


def test_error_type_is_shared_but_user_error_is_not() -> None:
    assert parse_type(named("error")) is ERROR_TYPE

    user = parse_type(named("error", "example.com/other", underlying={"kind": "struct"}))
    assert isinstance(user, NamedType)
    assert user is not ERROR_TYPE


def test_named_type_arguments() -> None:
    t = parse_type(named("Pair", "example.com/sub", type_args=[BASIC_STRING, BASIC_STRING]))
    assert t.type_args == (basic("string"), basic("string"))
    assert t.underlying is None


@pytest.mark.parametrize(
    ("data", "message"),
    [
        ({"kind": "mystery"}, "Unknown type kind"),
        ({"kind": "basic", "name": "int128"}, "Unknown basic type"),
        ({"kind": "array", "elem": BASIC_STRING}, "integer 'len'"),
        ({"kind": "chan", "dir": "sideways", "elem": BASIC_STRING}, "channel direction"),
        ("string", "Expected an object"),
    ],
)
def test_malformed_types(data: object, message: str) -> None:
    with pytest.raises(LoaderError, match=message):
        parse_type(data)


def test_pointer_to_named_type_keeps_underlying() -> None:
    t = parse_type({"kind": "pointer", "elem": named("Mutex", "sync", underlying={"kind": "struct"})})
    assert isinstance(t, PointerType)
    assert t.elem.underlying == StructType()


def test_import_name_without_named_flag_is_an_alias() -> None:
    package = load_package_document(
        {"name": "p", "imports": [{"name": "sub", "path": "example.com/sub2"}]}
    )
    assert package.imports == (Import("sub", "example.com/sub2", is_named=True),)


def test_import_name_explicitly_not_named_stays_plain() -> None:
    package = load_package_document(
        {"name": "p", "imports": [{"name": "sub2", "path": "example.com/sub2", "named": False}]}
    )
    assert package.imports == (Import("sub2", "example.com/sub2"),)


def test_named_import_requires_a_name() -> None:
    with pytest.raises(LoaderError, match="has no 'name'"):
        load_package_document({"name": "p", "imports": [{"path": "example.com/sub2", "named": True}]})
