from pathlib import Path
from typing import List

import pytest

from aliasgui.dialects import Dialect
from aliasgui.models import AliasRecord
from aliasgui.service import AliasService


@pytest.fixture
def bashrc_content() -> str:
    return "\n".join(
        [
            "# ~/.bashrc",
            "export PATH=\"$HOME/bin:$PATH\"",
            "PS1='\\u@\\h:\\w\\$ '",
            "",
            "alias gs='git status'",
            "alias ll=\"ls -la\"",
            "# alias old='disabled'",
            "gco() { git checkout $@; }",
            "mkcd() {",
            "    mkdir -p \"$1\";",
            "    cd \"$1\"",
            "}",
            "",
        ]
    )


@pytest.fixture
def profile_content() -> str:
    return "\n".join(
        [
            "# PowerShell profile",
            "Import-Module posh-git",
            "Set-Alias ll Get-ChildItem",
            "New-Alias -Name np -Value notepad.exe",
            "function gs { git status $args }",
            "function deploy {",
            "    npm run build",
            "    npm run deploy @args",
            "}",
            "",
        ]
    )


@pytest.fixture
def records() -> List[AliasRecord]:
    return [
        AliasRecord(name="gs", command="git status"),
        AliasRecord(name="gco", command="git checkout ...", has_params=True),
        AliasRecord(name="dc-up", command="docker compose up -d"),
    ]


@pytest.fixture
def config_file(tmp_path, bashrc_content) -> Path:
    path = tmp_path / ".bashrc"
    path.write_text(bashrc_content)
    return path


@pytest.fixture
def service(config_file) -> AliasService:
    return AliasService(config_file, Dialect.POSIX, platform="linux", env={"SHELL": "/bin/bash"})
