"""Tests for the manifest patcher engine."""

from __future__ import annotations

import pytest

from vulnfixer.engines.manifest_patcher.patcher import apply_pin, find_manifest
from vulnfixer.engines.manifest_patcher.requirements import (
    find_entry,
    normalize_name,
    parse_manifest,
    pin_requirement,
)
from vulnfixer.exceptions import ManifestNotFound

# ── requirements line model ──────────────────────────────────────────────


class TestParseManifest:
    def test_pinned_and_spaced(self):
        entries = parse_manifest("flask ==2.0\ndjango==3.2\n")
        assert [(e.name, e.constraint) for e in entries] == [
            ("flask", "==2.0"),
            ("django", "==3.2"),
        ]

    def test_skips_comments_blank_and_options(self):
        content = "# pinned deps\n\n-r base.txt\n--hash=sha256:abc\n-e .\nrequests>=2\n"
        entries = parse_manifest(content)
        assert [e.name for e in entries] == ["requests"]
        assert entries[0].line_no == 5

    def test_inline_comment_dropped_from_constraint(self):
        entries = parse_manifest("urllib3==1.26.5  # security\n")
        assert entries[0].constraint == "==1.26.5"

    def test_bare_name(self):
        entries = parse_manifest("pytest\n")
        assert entries[0].constraint is None

    def test_raw_line_kept(self):
        entries = parse_manifest("  Jinja2 >= 3.0\n")
        assert entries[0].raw_line == "  Jinja2 >= 3.0"
        assert entries[0].name == "Jinja2"


class TestNormalizeName:
    def test_case_and_separators(self):
        assert normalize_name("Flask_SQLAlchemy") == normalize_name("flask-sqlalchemy")
        assert normalize_name("zope.interface") == "zope-interface"


class TestPinRequirement:
    def test_append(self):
        assert pin_requirement("django==3.2\n", "flask", "2.3.1") == "django==3.2\n\nflask==2.3.1"

    def test_replace_legacy_spaced_first_line(self):
        content = "flask ==1.0\ndjango==3.2\n"
        assert pin_requirement(content, "flask", "2.3.1") == "flask==2.3.1\ndjango==3.2\n"

    def test_replace_anywhere_in_file(self):
        content = "django==3.2\nflask>=1.0\nrequests\n"
        assert pin_requirement(content, "flask", "2.3.1") == "django==3.2\nflask==2.3.1\nrequests\n"

    def test_only_first_match_rewritten(self):
        content = "flask==1.0\nflask==1.1\n"
        assert pin_requirement(content, "flask", "2.3.1") == "flask==2.3.1\nflask==1.1\n"

    def test_name_substring_not_matched(self):
        content = "flask-login==0.6\n"
        assert pin_requirement(content, "flask", "2.3.1") == "flask-login==0.6\n\nflask==2.3.1"

    def test_normalized_name_matches(self):
        content = "PyYAML==5.3\n"
        assert pin_requirement(content, "pyyaml", "5.4") == "pyyaml==5.4\n"

    def test_idempotent(self):
        once = pin_requirement("django==3.2\n", "flask", "2.3.1")
        twice = pin_requirement(once, "flask", "2.3.1")
        assert twice == once
        assert twice.count("flask==2.3.1") == 1

    def test_find_entry_missing(self):
        assert find_entry("django==3.2\n", "flask") is None


# ── file-system operations ───────────────────────────────────────────────


class TestFindManifest:
    def test_root_file(self, tmp_path):
        (tmp_path / "requirements.txt").write_text("flask==2.0\n")
        assert find_manifest(tmp_path) == tmp_path / "requirements.txt"

    def test_suffix_match(self, tmp_path):
        (tmp_path / "dev-requirements.txt").write_text("pytest\n")
        assert find_manifest(tmp_path).name == "dev-requirements.txt"

    def test_nested(self, tmp_path):
        sub = tmp_path / "app" / "api"
        sub.mkdir(parents=True)
        (sub / "requirements.txt").write_text("flask\n")
        assert find_manifest(tmp_path) == sub / "requirements.txt"

    def test_root_files_before_subdirectories(self, tmp_path):
        (tmp_path / "a").mkdir()
        (tmp_path / "a" / "requirements.txt").write_text("")
        (tmp_path / "requirements.txt").write_text("")
        assert find_manifest(tmp_path) == tmp_path / "requirements.txt"

    def test_sorted_order(self, tmp_path):
        (tmp_path / "b-requirements.txt").write_text("")
        (tmp_path / "a-requirements.txt").write_text("")
        assert find_manifest(tmp_path).name == "a-requirements.txt"

    def test_git_dir_skipped(self, tmp_path):
        (tmp_path / ".git").mkdir()
        (tmp_path / ".git" / "requirements.txt").write_text("")
        with pytest.raises(ManifestNotFound):
            find_manifest(tmp_path)

    def test_missing(self, tmp_path):
        (tmp_path / "setup.py").write_text("")
        with pytest.raises(ManifestNotFound):
            find_manifest(tmp_path)


class TestApplyPin:
    def test_append_path(self, tmp_path):
        manifest = tmp_path / "requirements.txt"
        manifest.write_text("django==3.2\n")
        assert apply_pin(tmp_path, "flask", "2.3.1") == manifest
        assert manifest.read_text() == "django==3.2\n\nflask==2.3.1"

    def test_applied_twice_single_pin(self, tmp_path):
        manifest = tmp_path / "requirements.txt"
        manifest.write_text("django==3.2\n")
        apply_pin(tmp_path, "flask", "2.3.1")
        apply_pin(tmp_path, "flask", "2.3.1")
        lines = [line for line in manifest.read_text().split("\n") if line.startswith("flask")]
        assert lines == ["flask==2.3.1"]

    def test_rewrites_existing_pin(self, tmp_path):
        manifest = tmp_path / "requirements.txt"
        manifest.write_text("flask ==1.0\nrequests==2.31.0\n")
        apply_pin(tmp_path, "flask", "2.3.1")
        assert manifest.read_text() == "flask==2.3.1\nrequests==2.31.0\n"

    def test_missing_manifest_is_noop(self, tmp_path):
        (tmp_path / "main.tf").write_text('resource "x" "y" {}\n')
        before = {p: p.read_bytes() for p in tmp_path.rglob("*") if p.is_file()}
        assert apply_pin(tmp_path, "flask", "2.3.1") is None
        after = {p: p.read_bytes() for p in tmp_path.rglob("*") if p.is_file()}
        assert before == after

    def test_undecodable_bytes_preserved(self, tmp_path):
        manifest = tmp_path / "requirements.txt"
        manifest.write_bytes(b"caf\xe9==1.0\n")
        assert apply_pin(tmp_path, "flask", "2.3.1") == manifest
        assert manifest.read_bytes() == b"caf\xe9==1.0\n\nflask==2.3.1"
