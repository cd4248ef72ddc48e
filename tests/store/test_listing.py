"""Tests for directory enumeration and script counting."""

import os

import pytest

from sievedir.store.listing import (
    DirectoryEntry,
    count_scripts,
    iter_entries,
    script_basename,
)


class TestIterEntries:
    """Tests for iter_entries."""

    def test_missing_directory_yields_nothing(self, tmp_path):
        """An unopenable directory behaves as empty."""
        assert list(iter_entries(tmp_path / "does-not-exist")) == []

    def test_empty_directory(self, sieve_dir):
        assert list(iter_entries(sieve_dir)) == []

    @pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="requires mkfifo")
    def test_skips_irregular_entries(self, sieve_dir):
        """Only the regular file and the (dangling) symlink are yielded."""
        (sieve_dir / "regular.script").write_text("keep;\r\n")
        os.symlink("nowhere.bc", sieve_dir / "dangling")
        os.mkfifo(sieve_dir / "fifo")
        (sieve_dir / "subdir").mkdir()

        entries = {entry.name: entry for entry in iter_entries(sieve_dir)}

        assert set(entries) == {"regular.script", "dangling"}
        assert entries["regular.script"].is_file
        assert entries["regular.script"].target == ""
        assert entries["dangling"].is_symlink
        assert entries["dangling"].target == "nowhere.bc"

    def test_never_yields_dot_entries(self, sieve_dir):
        (sieve_dir / "a.script").write_text("x")
        names = [entry.name for entry in iter_entries(sieve_dir)]
        assert "." not in names
        assert ".." not in names

    def test_symlink_stat_is_not_followed(self, sieve_dir):
        """Symlinks are reported as links even when the target is a file."""
        (sieve_dir / "a.bc").write_bytes(b"bc")
        os.symlink("a.bc", sieve_dir / "defaultbc")

        entries = {entry.name: entry for entry in iter_entries(sieve_dir)}

        assert entries["defaultbc"].is_symlink
        assert not entries["defaultbc"].is_file
        assert entries["defaultbc"].target == "a.bc"

    def test_early_stop(self, sieve_dir):
        """Breaking out of the loop stops the traversal."""
        for i in range(5):
            (sieve_dir / f"s{i}.script").write_text("x")

        seen = []
        for entry in iter_entries(sieve_dir):
            seen.append(entry.name)
            break

        assert len(seen) == 1

    def test_returns_directory_entries(self, sieve_dir):
        (sieve_dir / "a.script").write_text("abc")
        (entry,) = list(iter_entries(sieve_dir))
        assert isinstance(entry, DirectoryEntry)
        assert entry.stat.st_size == 3


class TestScriptBasename:
    """Tests for script_basename."""

    def test_strips_suffix(self):
        assert script_basename("vacation.script") == "vacation"

    def test_bare_suffix_is_not_a_script(self):
        assert script_basename(".script") is None

    def test_other_files(self):
        assert script_basename("vacation.bc") is None
        assert script_basename("vacation.script.NEW") is None


class TestCountScripts:
    """Tests for count_scripts."""

    def _populate(self, sieve_dir):
        (sieve_dir / "a.script").write_text("x")
        (sieve_dir / "b.script").write_text("x")
        (sieve_dir / "c.script").write_text("x")
        (sieve_dir / "a.bc").write_bytes(b"x")
        (sieve_dir / "c.script.NEW").write_text("x")
        (sieve_dir / ".script").write_text("x")
        (sieve_dir / "dir.script").mkdir()
        os.symlink("a.script", sieve_dir / "link.script")

    def test_counts_regular_scripts_only(self, sieve_dir):
        """Bytecode, temp files, directories and symlinks are not counted."""
        self._populate(sieve_dir)
        assert count_scripts(sieve_dir) == 3

    def test_excludes_named_script(self, sieve_dir):
        """The script being replaced is left out of the count."""
        self._populate(sieve_dir)
        assert count_scripts(sieve_dir, "b") == 2

    def test_exclude_unknown_name(self, sieve_dir):
        self._populate(sieve_dir)
        assert count_scripts(sieve_dir, "zzz") == 3

    def test_empty_exclude_counts_all(self, sieve_dir):
        self._populate(sieve_dir)
        assert count_scripts(sieve_dir, "") == 3

    def test_exclude_must_match_exactly(self, sieve_dir):
        """A prefix of a name does not exclude it."""
        (sieve_dir / "abc.script").write_text("x")
        assert count_scripts(sieve_dir, "ab") == 1

    def test_missing_directory(self, tmp_path):
        assert count_scripts(tmp_path / "missing") == 0
