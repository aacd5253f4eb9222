"""Shell config dialects: how aliases look in POSIX shells and in PowerShell"""

import re
import sys
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, Tuple

from aliasgui.models import AliasRecord, PLACEHOLDER

NAME = r"(?P<name>\w[\w-]*)"


class ShellSyntax(ABC):
    """Surface forms one dialect uses for aliases and functions.

    Every dialect recognizes three forms per physical line: a simple alias,
    a single-line function and the opening line of a multi-line function.
    """

    ALIAS_PATTERN: re.Pattern
    FUNCTION_PATTERN: re.Pattern
    FUNCTION_START_PATTERN: re.Pattern
    FORWARD_PATTERN: re.Pattern

    def match_alias(self, line: str) -> Optional[Tuple[str, str]]:
        """Return (name, command) for a simple alias line"""
        match = self.ALIAS_PATTERN.match(line)
        if not match:
            return None
        return match.group("name"), self.clean_alias_command(match.group("command"))

    def match_function(self, line: str) -> Optional[Tuple[str, str]]:
        """Return (name, raw body) for a function defined on one line"""
        match = self.FUNCTION_PATTERN.match(line)
        if not match:
            return None
        return match.group("name"), self.clean_body_line(match.group("body"))

    def match_function_start(self, line: str) -> Optional[str]:
        """Return the function name when the line opens a multi-line body"""
        match = self.FUNCTION_START_PATTERN.match(line)
        return match.group("name") if match else None

    def clean_alias_command(self, command: str) -> str:
        """Quoted alias values are kept verbatim"""
        return command

    def clean_body_line(self, line: str) -> str:
        return line.strip()

    def to_neutral(self, body: str) -> str:
        """Swap the dialect's argument forwarding token for the placeholder"""
        return self.FORWARD_PATTERN.sub(PLACEHOLDER, body).strip()

    @abstractmethod
    def render(self, record: AliasRecord) -> str:
        """Render one record as a single config line"""
        ...


class PosixSyntax(ShellSyntax):
    """bash / zsh"""

    ALIAS_PATTERN = re.compile(
        rf"^\s*alias\s+{NAME}=(?P<quote>['\"])(?P<command>.*)(?P=quote)\s*$"
    )
    FUNCTION_PATTERN = re.compile(
        rf"^\s*(?:function\s+)?{NAME}\s*\(\)\s*\{{\s*(?P<body>.*\S)\s*\}}\s*$"
    )
    FUNCTION_START_PATTERN = re.compile(
        rf"^\s*(?:function\s+)?{NAME}\s*\(\)\s*\{{\s*$"
    )
    FORWARD_PATTERN = re.compile(r'"\$@"|\$@')

    FORWARD_TOKEN = '"$@"'

    def clean_body_line(self, line: str) -> str:
        line = line.strip()
        if line.endswith(";"):
            line = line[:-1].rstrip()
        return line

    def render(self, record: AliasRecord) -> str:
        if not record.has_params:
            return f"alias {record.name}='{record.command}'"

        command = self.clean_body_line(record.command)
        if PLACEHOLDER in command:
            body = command.replace(PLACEHOLDER, self.FORWARD_TOKEN)
        else:
            body = f"{command} {self.FORWARD_TOKEN}"
        return f"{record.name}() {{ {body}; }}"


class PowerShellSyntax(ShellSyntax):
    """Windows PowerShell and PowerShell Core profiles"""

    ALIAS_PATTERN = re.compile(
        rf"^\s*(?:Set|New)-Alias\s+(?:-Name\s+)?{NAME}\s+(?:-Value\s+)?"
        r"[\"']?(?P<command>[^\"'\n]+)[\"']?\s*$",
        re.IGNORECASE,
    )
    FUNCTION_PATTERN = re.compile(
        rf"^\s*function\s+{NAME}\s*\{{\s*(?P<body>.*\S)\s*\}}\s*$",
        re.IGNORECASE,
    )
    FUNCTION_START_PATTERN = re.compile(
        rf"^\s*function\s+{NAME}\s*\{{\s*$",
        re.IGNORECASE,
    )
    FORWARD_PATTERN = re.compile(r"[@$]args\b", re.IGNORECASE)

    FORWARD_TOKEN = "@args"

    def clean_alias_command(self, command: str) -> str:
        return command.strip()

    def render(self, record: AliasRecord) -> str:
        # Set-Alias cannot carry a command with arguments, so everything
        # becomes a function that splats its arguments.
        command = re.sub(r"\s*\.\.\.\s*", " ", record.command).strip()
        body = " ".join(part for part in (command, self.FORWARD_TOKEN) if part)
        return f"function {record.name} {{ {body} }}"


class Dialect(Enum):
    """Supported config syntaxes"""

    POSIX = "posix"
    POWERSHELL = "powershell"

    @property
    def syntax(self) -> ShellSyntax:
        return _SYNTAXES[self]

    @classmethod
    def detect(cls, platform: Optional[str] = None) -> "Dialect":
        """Pick the dialect native to a platform (defaults to this host)"""
        platform = platform if platform is not None else sys.platform
        if platform.startswith("win"):
            return cls.POWERSHELL
        return cls.POSIX

    @classmethod
    def from_name(cls, name: str) -> "Dialect":
        """Resolve a user supplied dialect or shell name"""
        key = name.strip().lower()
        if key in _ALIASES:
            return _ALIASES[key]
        raise ValueError(f"Unknown dialect: {name}")


_SYNTAXES = {
    Dialect.POSIX: PosixSyntax(),
    Dialect.POWERSHELL: PowerShellSyntax(),
}

_ALIASES = {
    "posix": Dialect.POSIX,
    "unix": Dialect.POSIX,
    "bash": Dialect.POSIX,
    "zsh": Dialect.POSIX,
    "sh": Dialect.POSIX,
    "powershell": Dialect.POWERSHELL,
    "pwsh": Dialect.POWERSHELL,
    "windows": Dialect.POWERSHELL,
}
