"""Timestamped backups of the shell config file"""

import logging
import os
import re
import shutil
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple

from aliasgui.exceptions import BackupNotFoundError, ConfigIOError, PathRejectedError
from aliasgui.models import BackupRecord

logger = logging.getLogger(__name__)

MAX_BACKUPS = 10
BACKUP_MARKER = ".backup-"

_SEQUENCE_PATTERN = re.compile(r"-(\d+)$")


class BackupManager:
    """Create, list, restore and delete backups next to the config file"""

    def __init__(self, config_path: Path):
        self.config_path = Path(config_path)
        self.backup_dir = self.config_path.parent
        self.prefix = f"{self.config_path.name}{BACKUP_MARKER}"

    def _timestamp(self) -> str:
        # 2025-10-24T21:01:01.123456 -> 2025-10-24T21-01-01
        return re.sub(r"[:.]", "-", datetime.now().isoformat())[:19]

    def _next_backup_path(self) -> Path:
        base_name = f"{self.prefix}{self._timestamp()}"
        taken = [
            entry.name[len(base_name):]
            for entry in self.backup_dir.iterdir()
            if entry.name.startswith(base_name)
        ]
        if not taken:
            return self.backup_dir / base_name

        # Always count upwards so a same-second backup sorts after its siblings
        sequences = [0]
        for suffix in taken:
            match = _SEQUENCE_PATTERN.fullmatch(suffix)
            if match:
                sequences.append(int(match.group(1)))
        return self.backup_dir / f"{base_name}-{max(sequences) + 1}"

    def _sort_key(self, path: Path) -> Tuple[int, str, int]:
        stamp = path.name[len(self.prefix):]
        sequence = 0
        # Timestamps end in seconds (two digits), a collision suffix does not
        match = _SEQUENCE_PATTERN.search(stamp[19:])
        if match:
            sequence = int(match.group(1))
        return path.stat().st_mtime_ns, stamp[:19], sequence

    def _backup_files(self) -> List[Path]:
        """Backup files for this config, newest first"""
        if not self.backup_dir.is_dir():
            return []
        files = [
            entry for entry in self.backup_dir.iterdir()
            if entry.name.startswith(self.prefix) and entry.is_file()
        ]
        return sorted(files, key=self._sort_key, reverse=True)

    def create_backup(self) -> Optional[Path]:
        """Copy the config to a timestamped sibling, return its path"""
        if not self.config_path.exists():
            return None

        backup_path = self._next_backup_path()
        try:
            # copyfile, not copy2: the backup must carry its own mtime
            shutil.copyfile(self.config_path, backup_path)
        except OSError as e:
            raise ConfigIOError(f"Failed to create backup of {self.config_path}: {e}") from e

        logger.info("Created backup %s", backup_path)
        self.cleanup_old_backups(keep=MAX_BACKUPS)
        return backup_path

    def cleanup_old_backups(self, keep: int = MAX_BACKUPS) -> None:
        """Remove old backups, keeping only the most recent ones"""
        try:
            backups = self._backup_files()
        except OSError as e:
            logger.error("Could not list backups in %s: %s", self.backup_dir, e)
            return

        for backup in backups[keep:]:
            try:
                backup.unlink()
                logger.info("Removed old backup %s", backup.name)
            except OSError as e:
                logger.error("Failed to remove old backup %s: %s", backup.name, e)

    def list_backups(self) -> List[BackupRecord]:
        """List backups of the config file, newest first"""
        records = []
        try:
            for backup in self._backup_files():
                stat = backup.stat()
                records.append(
                    BackupRecord(
                        name=backup.name,
                        path=backup.absolute(),
                        time=datetime.fromtimestamp(stat.st_mtime),
                        size=stat.st_size,
                    )
                )
        except OSError as e:
            raise ConfigIOError(f"Failed to list backups in {self.backup_dir}: {e}") from e
        return records

    def validate_backup_path(self, backup_path) -> Path:
        """Reject anything that is not a backup of this config, in its directory"""
        raw = str(backup_path)
        name = os.path.basename(raw)
        directory = os.path.normpath(os.path.abspath(os.path.dirname(raw) or "."))
        expected = os.path.normpath(os.path.abspath(str(self.backup_dir)))

        if not name.startswith(self.prefix) or directory != expected:
            logger.warning("Rejected backup path %s", raw)
            raise PathRejectedError(f"Invalid backup file path: {raw}")

        path = Path(directory) / name
        if not path.is_file():
            raise BackupNotFoundError(f"Backup file does not exist: {raw}")
        return path

    def restore_backup(self, backup_path) -> Optional[Path]:
        """Overwrite the config with a backup, snapshotting the current one first.

        Returns the path of the pre-restore snapshot (None when there was no
        config to snapshot).
        """
        path = self.validate_backup_path(backup_path)
        try:
            # Read first: the pre-restore snapshot may evict this very backup
            data = path.read_bytes()
        except OSError as e:
            raise ConfigIOError(f"Failed to read backup {path}: {e}") from e

        snapshot = self.create_backup()

        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            self.config_path.write_bytes(data)
        except OSError as e:
            raise ConfigIOError(f"Failed to restore {self.config_path}: {e}") from e

        logger.info("Restored %s from %s", self.config_path, path.name)
        return snapshot

    def delete_backup(self, backup_path) -> None:
        """Delete one backup of the config"""
        path = self.validate_backup_path(backup_path)
        try:
            path.unlink()
        except OSError as e:
            raise ConfigIOError(f"Failed to delete backup {path}: {e}") from e
        logger.info("Deleted backup %s", path.name)
