"""Request/response boundary over the config engine.

Every operation returns a Response instead of raising, so any transport
(the CLI here, an HTTP listener elsewhere) can hand the status and body
straight back to its caller.
"""

import functools
import json
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from aliasgui import execution_policy
from aliasgui.backups import BackupManager
from aliasgui.dialects import Dialect
from aliasgui.exceptions import (
    AliasGuiError,
    ConfigIOError,
    PayloadTooLargeError,
    ValidationError,
)
from aliasgui.generator import generate_config
from aliasgui.models import AliasRecord
from aliasgui.parser import parse_aliases
from aliasgui.validation import validate_aliases
from aliasgui.writer import ManagedBlockWriter, read_config

logger = logging.getLogger(__name__)

MAX_BODY_SIZE = 100 * 1024


@dataclass
class Response:
    status: int
    body: Any

    @property
    def ok(self) -> bool:
        return self.status < 400

    @property
    def error(self) -> Optional[str]:
        if isinstance(self.body, dict):
            return self.body.get("error")
        return None


def _error(status: int, message: str) -> Response:
    return Response(status, {"error": message})


def guarded(func: Callable[..., Response]) -> Callable[..., Response]:
    """Turn engine errors into error responses"""

    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> Response:
        try:
            return func(*args, **kwargs)
        except AliasGuiError as e:
            return _error(e.status, str(e))
        except OSError as e:
            logger.error("I/O failure in %s: %s", func.__name__, e)
            return _error(500, str(e))

    return wrapper


class AliasService:
    """Operations the editor front ends call"""

    def __init__(
        self,
        config_path: Path,
        dialect: Dialect,
        max_body_size: int = MAX_BODY_SIZE,
        platform: Optional[str] = None,
        env: Optional[Mapping[str, str]] = None,
    ):
        self.config_path = Path(config_path)
        self.dialect = dialect
        self.max_body_size = max_body_size
        self.platform = platform if platform is not None else sys.platform
        self.env = env if env is not None else os.environ
        self.writer = ManagedBlockWriter(dialect)
        self.backups = BackupManager(self.config_path)

    def load_records(self) -> List[AliasRecord]:
        """Parse the current config from disk"""
        return parse_aliases(read_config(self.config_path), self.dialect)

    def render(self, records: List[AliasRecord]) -> str:
        """Return the file content a save of records would produce"""
        body = generate_config(records, self.dialect)
        return self.writer.merge(read_config(self.config_path), body)

    @guarded
    def get_aliases(self) -> Response:
        return Response(200, [record.to_dict() for record in self.load_records()])

    @guarded
    def save_aliases(self, payload: Any) -> Response:
        records = validate_aliases(payload)
        self.writer.write(self.config_path, generate_config(records, self.dialect))
        logger.info("Config updated with %d aliases", len(records))
        return Response(200, {"success": True, "count": len(records)})

    @guarded
    def save_aliases_raw(self, raw: Union[str, bytes]) -> Response:
        """Save from an undecoded request body"""
        return self.save_aliases(self._decode(raw))

    @guarded
    def list_backups(self) -> Response:
        return Response(200, [backup.to_dict() for backup in self.backups.list_backups()])

    @guarded
    def create_backup(self) -> Response:
        backup_path = self.backups.create_backup()
        if backup_path is None:
            raise ConfigIOError(f"Backup failed: {self.config_path} does not exist")
        return Response(200, {"success": True, "backupPath": str(backup_path)})

    @guarded
    def restore_backup(self, payload: Any) -> Response:
        if isinstance(payload, (str, bytes)):
            payload = self._decode(payload)
        if not isinstance(payload, dict) or not payload.get("backupPath"):
            raise ValidationError("Invalid backup path")

        snapshot = self.backups.restore_backup(payload["backupPath"])
        body = {"success": True, "message": "Backup restored"}
        if snapshot is not None:
            body["snapshotPath"] = str(snapshot)
        return Response(200, body)

    @guarded
    def delete_backup(self, backup_path: Optional[str]) -> Response:
        if not backup_path:
            raise ValidationError("Missing backup path parameter")
        self.backups.delete_backup(backup_path)
        return Response(200, {"success": True, "message": "Backup deleted"})

    @guarded
    def info(self) -> Response:
        default_shell = "powershell" if self.platform.startswith("win") else "unknown"
        return Response(
            200,
            {
                "configPath": str(self.config_path),
                "platform": self.platform,
                "shell": self.env.get("SHELL") or default_shell,
                "dialect": self.dialect.value,
            },
        )

    @guarded
    def get_execution_policy(self) -> Response:
        return Response(200, execution_policy.get_execution_policy(self.platform))

    @guarded
    def set_execution_policy(self) -> Response:
        return Response(200, execution_policy.set_execution_policy(self.platform))

    def handle(
        self,
        method: str,
        route: str,
        body: Any = None,
        query: Optional[Dict[str, str]] = None,
    ) -> Response:
        """Dispatch a transport request by method and route"""
        route = route.strip("/")
        if route.startswith("api/"):
            route = route[len("api/"):]
        query = query or {}

        routes: Dict[tuple, Callable[[], Response]] = {
            ("GET", "aliases"): self.get_aliases,
            ("POST", "aliases"): lambda: (
                self.save_aliases_raw(body)
                if isinstance(body, (str, bytes))
                else self.save_aliases(body)
            ),
            ("GET", "backups"): self.list_backups,
            ("POST", "backup"): self.create_backup,
            ("POST", "restore"): lambda: self.restore_backup(body),
            ("DELETE", "backup"): lambda: self.delete_backup(query.get("path")),
            ("GET", "info"): self.info,
            ("GET", "execution-policy"): self.get_execution_policy,
            ("POST", "set-execution-policy"): self.set_execution_policy,
        }

        handler = routes.get((method.upper(), route))
        if handler is None:
            return _error(404, "Not Found")
        return handler()

    def _decode(self, raw: Union[str, bytes]) -> Any:
        size = len(raw.encode("utf-8")) if isinstance(raw, str) else len(raw)
        if size > self.max_body_size:
            raise PayloadTooLargeError("Request body too large")
        try:
            return json.loads(raw)
        except ValueError as e:
            raise ValidationError(f"Invalid request data: {e}") from e
