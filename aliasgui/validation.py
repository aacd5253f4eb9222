"""Validation of alias write requests"""

import logging
import re
from typing import Any, List

from aliasgui.exceptions import ValidationError
from aliasgui.models import AliasRecord

logger = logging.getLogger(__name__)


class AliasValidator:
    """Validate alias payloads before they reach the config file"""

    NAME_PATTERN = re.compile(r"[\w-]+")

    # Warned about, never blocked
    DANGEROUS_PATTERNS = {
        "rm -rf on / or ~": re.compile(r";\s*rm\s+-rf\s+[/~]", re.IGNORECASE),
        "sudo": re.compile(r";\s*sudo\s+", re.IGNORECASE),
        "command substitution": re.compile(r"\$\(.*\)"),
        "backtick substitution": re.compile(r"`.*`"),
    }

    @staticmethod
    def find_dangerous_patterns(command: str) -> List[str]:
        """Return descriptions of the risky constructs a command contains"""
        return [
            label
            for label, pattern in AliasValidator.DANGEROUS_PATTERNS.items()
            if pattern.search(command)
        ]

    @staticmethod
    def validate_alias(data: Any) -> AliasRecord:
        """Validate one alias object and build a record from it

        Args:
            data: A mapping with at least "name" and "command"

        Returns:
            The validated AliasRecord

        Raises:
            ValidationError: when name or command is malformed
        """
        if not isinstance(data, dict):
            raise ValidationError("Invalid alias entry: expected an object")

        name = data.get("name")
        if not isinstance(name, str) or not AliasValidator.NAME_PATTERN.fullmatch(name):
            raise ValidationError(f"Invalid alias name: {name}")

        command = data.get("command")
        if not isinstance(command, str) or not command.strip():
            raise ValidationError(f"Invalid command for alias: {name}")

        for label in AliasValidator.find_dangerous_patterns(command):
            logger.warning("Potentially dangerous command in alias '%s': %s", name, label)

        return AliasRecord.from_dict(data)


def validate_aliases(payload: Any) -> List[AliasRecord]:
    """Validate a whole write request; nothing is returned unless all pass"""
    if not isinstance(payload, list):
        raise ValidationError("Invalid payload: expected a list of aliases")
    return [AliasValidator.validate_alias(item) for item in payload]
