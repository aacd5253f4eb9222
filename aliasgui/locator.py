"""Locate the shell configuration file to manage"""

import os
import sys
from pathlib import Path
from typing import Mapping, Optional

PROFILE_NAME = "Microsoft.PowerShell_profile.ps1"


class ConfigLocator:
    """Compute the platform default config path"""

    def __init__(
        self,
        env: Optional[Mapping[str, str]] = None,
        platform: Optional[str] = None,
        home_dir: Optional[Path] = None,
    ):
        self.env = env if env is not None else os.environ
        self.platform = platform if platform is not None else sys.platform
        self._home_dir = home_dir

    @property
    def home_dir(self) -> Path:
        if self._home_dir is not None:
            return Path(self._home_dir)
        home = self.env.get("HOME") or self.env.get("USERPROFILE")
        return Path(home) if home else Path.home()

    def is_windows(self) -> bool:
        return self.platform.startswith("win")

    def default_config_path(self) -> Path:
        """Return the config file for this platform; it may not exist yet.

        Pure over env, platform and home_dir, except on Windows without
        PROFILE: there the legacy profile is picked only when it exists on
        disk and the Core profile does not.
        """
        if self.is_windows():
            return self._powershell_profile()

        shell = self.env.get("SHELL", "/bin/bash")
        if "zsh" in shell:
            return self.home_dir / ".zshrc"
        return self.home_dir / ".bashrc"

    def _powershell_profile(self) -> Path:
        # $PROFILE is exported by PowerShell itself when we run under it
        profile = self.env.get("PROFILE")
        if profile:
            return Path(profile)

        documents = self.home_dir / "Documents"
        core = documents / "PowerShell" / PROFILE_NAME
        legacy = documents / "WindowsPowerShell" / PROFILE_NAME
        if not core.exists() and legacy.exists():
            return legacy
        return core


def default_config_path() -> Path:
    return ConfigLocator().default_config_path()
