"""Tests for the migration runner helpers."""

from unittest.mock import MagicMock, patch

import run_migrations
from run_migrations import (
    MigrationFile,
    checksum_of,
    discover_migrations,
    find_by_prefix,
    select_pending,
)


def write(directory, name, content):
    path = directory / name
    path.write_text(content)
    return path


class TestDiscover:
    def test_sorted_by_name(self, tmp_path):
        write(tmp_path, "002_b.sql", "SELECT 2;")
        write(tmp_path, "001_a.sql", "SELECT 1;")
        write(tmp_path, "notes.txt", "ignored")

        migrations = discover_migrations(tmp_path)

        assert [m.name for m in migrations] == ["001_a.sql", "002_b.sql"]
        assert migrations[0].checksum == checksum_of("SELECT 1;")

    def test_missing_directory(self, tmp_path):
        assert discover_migrations(tmp_path / "nope") == []

    def test_ships_initial_schema(self):
        names = [m.name for m in discover_migrations()]
        assert "001_initial_schema.sql" in names


class TestSelectPending:
    def test_pending_and_changed(self, tmp_path):
        first = MigrationFile("001_a.sql", tmp_path / "001_a.sql", "aaa")
        second = MigrationFile("002_b.sql", tmp_path / "002_b.sql", "bbb")
        third = MigrationFile("003_c.sql", tmp_path / "003_c.sql", "ccc")
        applied = {
            "001_a.sql": {"checksum": "aaa", "applied_at": None},
            "002_b.sql": {"checksum": "old", "applied_at": None},
        }

        pending, changed = select_pending([first, second, third], applied)

        assert pending == [third]
        assert changed == [second]


class TestFindByPrefix:
    def test_unique_match(self, tmp_path):
        migrations = [
            MigrationFile("001_a.sql", tmp_path, "x"),
            MigrationFile("002_b.sql", tmp_path, "y"),
        ]
        assert find_by_prefix(migrations, "002").name == "002_b.sql"
        assert find_by_prefix(migrations, "00") is None
        assert find_by_prefix(migrations, "9") is None


class TestMain:
    def test_dry_run_applies_nothing(self, tmp_path):
        write(tmp_path, "001_a.sql", "SELECT 1;")
        conn = MagicMock()

        with patch.object(run_migrations, "discover_migrations", lambda: discover_migrations(tmp_path)), \
                patch.object(run_migrations, "connect", return_value=conn), \
                patch.object(run_migrations, "fetch_applied", return_value={}), \
                patch.object(run_migrations, "apply_migration") as apply:
            assert run_migrations.main(["--dry-run"]) == 0

        apply.assert_not_called()
        conn.close.assert_called_once()

    def test_applies_pending(self, tmp_path):
        write(tmp_path, "001_a.sql", "SELECT 1;")
        write(tmp_path, "002_b.sql", "SELECT 2;")
        applied = {"001_a.sql": {"checksum": checksum_of("SELECT 1;"), "applied_at": None}}
        conn = MagicMock()

        with patch.object(run_migrations, "discover_migrations", lambda: discover_migrations(tmp_path)), \
                patch.object(run_migrations, "connect", return_value=conn), \
                patch.object(run_migrations, "fetch_applied", return_value=applied), \
                patch.object(run_migrations, "apply_migration") as apply:
            assert run_migrations.main([]) == 0

        [call] = apply.call_args_list
        assert call.args[1].name == "002_b.sql"

    def test_force_unknown_prefix(self, tmp_path):
        conn = MagicMock()
        with patch.object(run_migrations, "discover_migrations", lambda: []), \
                patch.object(run_migrations, "connect", return_value=conn), \
                patch.object(run_migrations, "fetch_applied", return_value={}):
            assert run_migrations.main(["--force", "001", "--yes"]) == 1
