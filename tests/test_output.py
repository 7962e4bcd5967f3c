"""Tests for change-detecting output."""

from __future__ import annotations

from pathlib import Path

import pytest

from tl_codegen.codegen import generate_file
from tl_codegen.codegen.core.generator import GeneratorError
from tl_codegen.codegen.core.output import (
    OutputError,
    apply_line_ending,
    is_up_to_date,
    read_previous_content,
    write_if_changed,
)
from tl_codegen.codegen.core.schema import Arg, Constructor, CustomType, Schema, Type, TypeKind


class TestWriteIfChanged:
    def test_second_write_is_skipped(self, tmp_path: Path) -> None:
        target = tmp_path / "out.rs"
        assert write_if_changed(target, "pub struct A;\n")
        mtime = target.stat().st_mtime_ns

        assert not write_if_changed(target, "pub struct A;\n")
        assert target.stat().st_mtime_ns == mtime
        assert target.read_text(encoding="utf-8") == "pub struct A;\n"

    def test_changed_content_is_written(self, tmp_path: Path) -> None:
        target = tmp_path / "out.rs"
        target.write_text("old\n", encoding="utf-8")
        assert write_if_changed(target, "new\n")
        assert target.read_text(encoding="utf-8") == "new\n"

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        target = tmp_path / "src" / "generated" / "out.rs"
        assert write_if_changed(target, "x\n")
        assert target.exists()

    def test_unreadable_baseline_is_overwritten(self, tmp_path: Path) -> None:
        target = tmp_path / "out.rs"
        target.write_bytes(b"\xff\xfe\xfa")
        assert read_previous_content(target) == ""
        assert write_if_changed(target, "x\n")
        assert target.read_text(encoding="utf-8") == "x\n"

    def test_unwritable_destination(self, tmp_path: Path) -> None:
        with pytest.raises(OutputError, match="Failed to write"):
            write_if_changed(tmp_path, "x\n")

    def test_output_error_is_generator_error(self) -> None:
        assert issubclass(OutputError, GeneratorError)


class TestLineEndings:
    def test_crlf_on_disk(self, tmp_path: Path) -> None:
        target = tmp_path / "out.rs"
        assert write_if_changed(target, "a\nb\n", "\r\n")
        assert target.read_bytes() == b"a\r\nb\r\n"
        assert not write_if_changed(target, "a\nb\n", "\r\n")
        assert is_up_to_date(target, "a\nb\n", "\r\n")

    def test_switching_line_ending_rewrites(self, tmp_path: Path) -> None:
        target = tmp_path / "out.rs"
        write_if_changed(target, "a\n", "\r\n")
        assert write_if_changed(target, "a\n")
        assert target.read_bytes() == b"a\n"

    def test_apply_line_ending_does_not_double_convert(self) -> None:
        assert apply_line_ending("a\r\nb\n", "\r\n") == "a\r\nb\r\n"


class TestGenerateFile:
    def test_unchanged_schema_leaves_file_alone(self, tmp_path: Path, shape_schema: Schema) -> None:
        target = tmp_path / "messages.rs"
        result, written = generate_file(shape_schema, target)
        assert result.success
        assert written
        assert target.read_text(encoding="utf-8") == result.code

        _, written_again = generate_file(shape_schema, target)
        assert not written_again

    def test_failed_generation_writes_nothing(self, tmp_path: Path) -> None:
        schema = Schema()
        broken = schema.add_custom_type(CustomType("Broken"))
        broken.add_constructor(Constructor("broken", [Arg("items", Type(TypeKind.VECTOR))]))
        target = tmp_path / "messages.rs"

        with pytest.raises(GeneratorError):
            generate_file(schema, target)
        assert not target.exists()

    def test_config_line_ending(self, tmp_path: Path, shape_schema: Schema) -> None:
        target = tmp_path / "messages.rs"
        generate_file(shape_schema, target, config={"line_ending": "\r\n"})
        data = target.read_bytes()
        assert b"\r\n" in data
        assert b"\n" not in data.replace(b"\r\n", b"")
