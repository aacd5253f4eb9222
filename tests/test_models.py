from datetime import datetime
from pathlib import Path

from aliasgui.models import AliasRecord, BackupRecord


def test_equality_ignores_id_and_line_number():
    assert AliasRecord(name="gs", command="git status", line_number=3) == AliasRecord(
        name="gs", command="git status", line_number=9
    )


def test_ids_are_generated():
    assert AliasRecord(name="a", command="b").id != AliasRecord(name="a", command="b").id


def test_to_dict_uses_wire_names():
    record = AliasRecord(name="gco", command="git checkout ...", has_params=True, line_number=2)

    assert record.to_dict() == {
        "id": record.id,
        "name": "gco",
        "command": "git checkout ...",
        "hasParams": True,
        "lineNumber": 2,
    }


def test_from_dict_round_trip():
    record = AliasRecord(name="gco", command="git checkout ...", has_params=True, line_number=2)

    restored = AliasRecord.from_dict(record.to_dict())

    assert restored == record
    assert restored.id == record.id
    assert restored.line_number == 2


def test_from_dict_defaults():
    record = AliasRecord.from_dict({"name": "gs", "command": "git status", "id": 17})

    assert record.has_params is False
    assert record.id == "17"


def test_str():
    assert str(AliasRecord(name="gs", command="git status")) == "gs='git status'"


def test_backup_record_to_dict():
    record = BackupRecord(
        name=".bashrc.backup-2025-10-24T21-01-01",
        path=Path("/home/user/.bashrc.backup-2025-10-24T21-01-01"),
        time=datetime(2025, 10, 24, 21, 1, 1),
        size=42,
    )

    assert record.to_dict() == {
        "name": ".bashrc.backup-2025-10-24T21-01-01",
        "path": "/home/user/.bashrc.backup-2025-10-24T21-01-01",
        "time": "2025-10-24T21:01:01",
        "size": 42,
    }
