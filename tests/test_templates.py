"""Tests for accessory.codegen.core.templates."""

from __future__ import annotations

from pathlib import Path

import pytest

from accessory.codegen.core.templates import TemplateError, create_template_engine


def test_comment_filter_prefixes_each_line() -> None:
    engine = create_template_engine()
    assert engine.render_string("{{ text | comment }}", {"text": "one\n\ntwo"}) == "// one\n\n// two"


def test_undefined_variables_are_errors() -> None:
    engine = create_template_engine()
    with pytest.raises(TemplateError):
        engine.render_string("{{ missing }}", {})
    with pytest.raises(TemplateError):
        engine.render_template("absent.j2", {})


def test_in_memory_template_shadows_file(tmp_path: Path) -> None:
    (tmp_path / "hello.j2").write_text("file {{ who }}", encoding="utf-8")
    engine = create_template_engine(tmp_path)
    assert engine.render_template("hello.j2", {"who": "x"}) == "file x"

    engine.add_template("hello.j2", "memory {{ who }}")
    assert engine.render_template("hello.j2", {"who": "x"}) == "memory x"
    assert engine.template_exists("hello.j2")
    assert not engine.template_exists("other.j2")


def test_values_are_not_html_escaped() -> None:
    engine = create_template_engine()
    assert engine.render_string("{{ v }}", {"v": '<-chan "x"'}) == '<-chan "x"'


def test_only_the_comment_filter_is_registered() -> None:
    engine = create_template_engine()
    with pytest.raises(TemplateError):
        engine.render_string("{{ name | snake_case }}", {"name": "Tester"})
