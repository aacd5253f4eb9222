"""PowerShell script execution policy checks (Windows only)"""

import logging
import subprocess
import sys
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

# Policies under which a profile script will not load
BLOCKING_POLICIES = ("Restricted", "AllSigned")


def _is_windows(platform: Optional[str]) -> bool:
    platform = platform if platform is not None else sys.platform
    return platform.startswith("win")


def get_execution_policy(platform: Optional[str] = None) -> Dict[str, Any]:
    """Report the current policy and whether the profile needs it relaxed"""
    if not _is_windows(platform):
        return {"policy": "not-applicable", "needsSetup": False}

    try:
        result = subprocess.run(
            ["powershell", "-Command", "Get-ExecutionPolicy"],
            capture_output=True,
            text=True,
            timeout=10,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.warning("Could not query execution policy: %s", e)
        return {"policy": "unknown", "needsSetup": True, "error": str(e)}

    if result.returncode != 0:
        error = result.stderr.strip() or f"exit code {result.returncode}"
        return {"policy": "unknown", "needsSetup": True, "error": error}

    policy = result.stdout.strip()
    return {"policy": policy, "needsSetup": policy in BLOCKING_POLICIES}


def set_execution_policy(platform: Optional[str] = None) -> Dict[str, Any]:
    """Allow locally written scripts for the current user"""
    if not _is_windows(platform):
        return {"success": False, "error": "Only supported on Windows"}

    try:
        result = subprocess.run(
            [
                "powershell",
                "-Command",
                "Set-ExecutionPolicy RemoteSigned -Scope CurrentUser -Force",
            ],
            capture_output=True,
            text=True,
            timeout=30,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.error("Could not set execution policy: %s", e)
        return {"success": False, "error": str(e)}

    if result.returncode != 0:
        return {"success": False, "error": result.stderr.strip() or f"exit code {result.returncode}"}

    logger.info("Execution policy set to RemoteSigned for current user")
    return {"success": True}
