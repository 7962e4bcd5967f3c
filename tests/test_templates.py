"""Tests for the template engine."""

from __future__ import annotations

from pathlib import Path

import pytest

from tl_codegen.codegen.core.templates import TemplateError, create_template_engine


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    (tmp_path / "greet.j2").write_text("Hello {{ name }}\n", encoding="utf-8")
    (tmp_path / "block.j2").write_text("mod m {\n{{ body | indent }}\n}\n", encoding="utf-8")
    (tmp_path / "nested.j2").write_text("{{ body | indent(2) }}", encoding="utf-8")
    return tmp_path


class TestTemplateEngine:
    def test_render_keeps_trailing_newline(self, template_dir: Path) -> None:
        engine = create_template_engine(template_dir)
        assert engine.render_template("greet.j2", {"name": "Shape"}) == "Hello Shape\n"

    def test_missing_variable_fails(self, template_dir: Path) -> None:
        engine = create_template_engine(template_dir)
        with pytest.raises(TemplateError, match="greet.j2"):
            engine.render_template("greet.j2", {})

    def test_missing_template(self, template_dir: Path) -> None:
        engine = create_template_engine(template_dir)
        assert not engine.template_exists("absent.j2")
        with pytest.raises(TemplateError):
            engine.render_template("absent.j2", {})

    def test_indent_skips_blank_lines(self, template_dir: Path) -> None:
        engine = create_template_engine(template_dir)
        code = engine.render_template("block.j2", {"body": "a\n\nb"})
        assert code == "mod m {\n\ta\n\n\tb\n}\n"

    def test_indent_level(self, template_dir: Path) -> None:
        engine = create_template_engine(template_dir)
        assert engine.render_template("nested.j2", {"body": "a"}) == "\t\ta"

    def test_rust_templates_are_packaged(self, generator) -> None:
        for name in ("file.rs.j2", "struct.rs.j2", "enum.rs.j2"):
            assert generator.template_exists(name)
