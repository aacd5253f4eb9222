"""Data models for aliases and backups"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional

# Dialect-neutral stand-in for "$@" / "$args" while a command is in the model
PLACEHOLDER = "..."


def new_record_id() -> str:
    return uuid.uuid4().hex


@dataclass
class AliasRecord:
    """Represents one alias or function found in a shell config"""
    name: str
    command: str
    has_params: bool = False
    line_number: Optional[int] = field(default=None, compare=False)
    id: str = field(default_factory=new_record_id, compare=False)

    def to_dict(self) -> dict:
        """Convert record to its wire representation"""
        return {
            "id": self.id,
            "name": self.name,
            "command": self.command,
            "hasParams": self.has_params,
            "lineNumber": self.line_number,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AliasRecord":
        """Create record from its wire representation"""
        record = cls(
            name=data["name"],
            command=data["command"],
            has_params=bool(data.get("hasParams", data.get("has_params", False))),
            line_number=data.get("lineNumber", data.get("line_number")),
        )
        if data.get("id") is not None:
            record.id = str(data["id"])
        return record

    def __str__(self) -> str:
        if self.has_params:
            return f"{self.name}() {{ {self.command} }}"
        return f"{self.name}='{self.command}'"


@dataclass
class BackupRecord:
    """A snapshot of the config file living next to it"""
    name: str
    path: Path
    time: datetime
    size: int

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "path": str(self.path),
            "time": self.time.isoformat(),
            "size": self.size,
        }
