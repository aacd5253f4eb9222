import os
from pathlib import Path
from unittest.mock import patch

import pytest
from freezegun import freeze_time

from aliasgui.backups import MAX_BACKUPS, BackupManager
from aliasgui.exceptions import BackupNotFoundError, ConfigIOError, PathRejectedError


@pytest.fixture
def manager(config_file) -> BackupManager:
    return BackupManager(config_file)


class TestCreateBackup:

    @freeze_time("2025-10-24 21:01:01.123456")
    def test_create_backup_name(self, manager, config_file):
        backup_path = manager.create_backup()

        assert backup_path == config_file.parent / ".bashrc.backup-2025-10-24T21-01-01"
        assert backup_path.read_text() == config_file.read_text()

    @freeze_time("2025-10-24 21:01:01")
    def test_same_second_does_not_overwrite(self, manager, config_file):
        first = manager.create_backup()
        second = manager.create_backup()

        assert first != second
        assert second.name == ".bashrc.backup-2025-10-24T21-01-01-1"
        assert first.exists() and second.exists()

    def test_missing_config_returns_none(self, tmp_path):
        assert BackupManager(tmp_path / ".bashrc").create_backup() is None

    def test_copy_failure_raises(self, manager):
        with patch("aliasgui.backups.shutil.copyfile", side_effect=OSError("disk full")):
            with pytest.raises(ConfigIOError, match="disk full"):
                manager.create_backup()

    def test_retention_keeps_ten_most_recent(self, manager, config_file):
        created = []
        for _ in range(15):
            created.append(manager.create_backup())

        remaining = [Path(b.path) for b in manager.list_backups()]

        assert len(remaining) == MAX_BACKUPS
        assert set(remaining) == {p.absolute() for p in created[-MAX_BACKUPS:]}

    def test_retention_uses_modification_time(self, manager, config_file):
        old = config_file.parent / ".bashrc.backup-2099-01-01T00-00-00"
        old.write_text("looks new, is old")
        os.utime(old, (1_000_000, 1_000_000))

        for _ in range(MAX_BACKUPS):
            manager.create_backup()

        assert not old.exists()

    def test_eviction_is_logged(self, manager, caplog):
        with caplog.at_level("INFO", logger="aliasgui.backups"):
            for _ in range(MAX_BACKUPS + 1):
                manager.create_backup()

        assert any("Removed old backup" in message for message in caplog.messages)

    def test_other_files_are_left_alone(self, manager, config_file):
        unrelated = config_file.parent / ".zshrc.backup-2025-01-01T00-00-00"
        unrelated.write_text("zsh")

        for _ in range(MAX_BACKUPS + 2):
            manager.create_backup()

        assert unrelated.exists()


class TestListBackups:

    def test_newest_first_with_metadata(self, manager, config_file):
        first = manager.create_backup()
        os.utime(first, (1_000_000, 1_000_000))
        second = manager.create_backup()

        backups = manager.list_backups()

        assert [b.name for b in backups] == [second.name, first.name]
        assert backups[0].size == len(config_file.read_bytes())
        assert backups[0].path.is_absolute()
        assert backups[0].to_dict()["path"] == str(backups[0].path)

    def test_empty_when_no_backups(self, manager):
        assert manager.list_backups() == []


class TestRestoreBackup:

    def test_restore_snapshots_current_config_first(self, manager, config_file):
        backup = manager.create_backup()
        config_file.write_text("changed\n")

        snapshot = manager.restore_backup(str(backup))

        assert config_file.read_text() == backup.read_text()
        assert snapshot.read_text() == "changed\n"

    def test_restore_oldest_backup_survives_its_own_eviction(self, manager, config_file):
        config_file.write_text("oldest\n")
        oldest = manager.create_backup()
        os.utime(oldest, (1_000_000, 1_000_000))
        config_file.write_text("newer\n")
        for _ in range(MAX_BACKUPS - 1):
            manager.create_backup()

        manager.restore_backup(oldest)

        assert config_file.read_text() == "oldest\n"

    def test_restore_missing_backup(self, manager, config_file):
        with pytest.raises(BackupNotFoundError):
            manager.restore_backup(str(config_file.parent / ".bashrc.backup-nope"))

    @pytest.mark.parametrize("name", ["other.backup-2025", ".bashrc", ".bashrc.backup", "..backup-x"])
    def test_restore_rejects_wrong_prefix_even_if_file_exists(self, manager, config_file, name):
        target = config_file.parent / name
        if not target.exists():
            target.write_text("x")

        with pytest.raises(PathRejectedError):
            manager.restore_backup(str(target))

    def test_restore_rejects_other_directory(self, manager, config_file, tmp_path):
        elsewhere = tmp_path / "elsewhere"
        elsewhere.mkdir()
        foreign = elsewhere / ".bashrc.backup-2025-10-24T21-01-01"
        foreign.write_text("evil")

        with pytest.raises(PathRejectedError):
            manager.restore_backup(str(foreign))
        assert config_file.read_text() != "evil"

    def test_restore_rejects_traversal(self, manager, config_file):
        sneaky = f"{config_file.parent}/sub/../../.bashrc.backup-2025"

        with pytest.raises(PathRejectedError):
            manager.restore_backup(sneaky)

    def test_normalized_same_directory_is_accepted(self, manager, config_file):
        backup = manager.create_backup()
        (config_file.parent / "sub").mkdir()
        roundabout = f"{config_file.parent}/sub/../{backup.name}"

        manager.restore_backup(roundabout)


class TestDeleteBackup:

    def test_delete(self, manager):
        backup = manager.create_backup()

        manager.delete_backup(str(backup))

        assert not backup.exists()

    def test_delete_missing(self, manager, config_file):
        with pytest.raises(BackupNotFoundError):
            manager.delete_backup(config_file.parent / ".bashrc.backup-gone")

    def test_delete_rejects_config_itself(self, manager, config_file):
        with pytest.raises(PathRejectedError):
            manager.delete_backup(str(config_file))
        assert config_file.exists()
