"""Tests for treesink.validators."""

from treesink.validators import (
    format_validation_error,
    validate_folder,
    validate_roots,
)


class TestFormatValidationError:
    def test_joins_field_and_reason(self):
        assert (
            format_validation_error("Source folder", "not specified")
            == "Source folder not specified"
        )


class TestValidateFolder:
    def test_existing_directory(self, tmp_path):
        assert validate_folder(tmp_path, "Source folder") == (True, "")

    def test_none(self):
        assert validate_folder(None, "Target folder") == (
            False,
            "Target folder not specified",
        )

    def test_missing(self, tmp_path):
        missing = tmp_path / "missing"
        ok, message = validate_folder(missing, "Source folder")
        assert not ok
        assert message == f"Source folder not found: {str(missing)!r}"

    def test_file_is_not_a_folder(self, tmp_path):
        path = tmp_path / "f.txt"
        path.write_text("x")
        ok, message = validate_folder(path, "Source folder")
        assert not ok
        assert "not found" in message


class TestValidateRoots:
    """Source and target must be disjoint trees."""

    def test_disjoint(self, source, target):
        assert validate_roots(source, target) == (True, "")

    def test_same(self, source):
        ok, message = validate_roots(source, source)
        assert not ok
        assert "same as the source" in message

    def test_same_via_dotdot(self, source):
        ok, _ = validate_roots(source, source / ".." / source.name)
        assert not ok

    def test_target_inside_source(self, source):
        inner = source / "inner"
        inner.mkdir()
        ok, message = validate_roots(source, inner)
        assert not ok
        assert message == "Target folder cannot be inside the source folder"

    def test_source_inside_target(self, target):
        inner = target / "inner"
        inner.mkdir()
        ok, message = validate_roots(inner, target)
        assert not ok
        assert message == "Source folder cannot be inside the target folder"

    def test_sibling_with_common_prefix(self, tmp_path):
        a = tmp_path / "data"
        b = tmp_path / "data-backup"
        a.mkdir()
        b.mkdir()
        assert validate_roots(a, b) == (True, "")
