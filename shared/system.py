"""
    Shared utility functions for the local session and user folders.
"""
import getpass
import logging
import os
import platform
import stat
from datetime import datetime
from pathlib import Path
from typing import Any

from core.models import RunContext

logger = logging.getLogger("hostinventory.system")

# C:\Users holds hidden junctions ("All Users", "Default User") that are not profiles
_SKIP_ATTRIBUTES = (
    stat.FILE_ATTRIBUTE_REPARSE_POINT
    | stat.FILE_ATTRIBUTE_HIDDEN
    | stat.FILE_ATTRIBUTE_SYSTEM
)


def get_operator() -> str:
    """DOMAIN\\user when the session has a domain, otherwise the bare user name."""
    user = getpass.getuser()
    domain = os.environ.get("USERDOMAIN")
    return f"{domain}\\{user}" if domain else user


def get_run_context() -> RunContext:
    """
        Read host name, operator and timestamp once for the whole run.
        Used in main.py and handed to the aggregator explicitly.
    """
    return RunContext(
        computer=platform.node(),
        operator=get_operator(),
        generated_at=datetime.now().astimezone().isoformat(timespec="seconds"),
    )


def default_users_root() -> Path:
    drive = os.environ.get("SystemDrive", "C:")
    return Path(drive + "\\") / "Users"


def _is_profile_folder(st: os.stat_result) -> bool:
    """Real directory, not a symlink or junction, not hidden or system. Expects lstat() output."""
    if not stat.S_ISDIR(st.st_mode):
        return False
    # st_file_attributes only exists on Windows
    return not getattr(st, "st_file_attributes", 0) & _SKIP_ATTRIBUTES


def list_user_folders(users_root: Path) -> list[tuple[Path, float]]:
    """
        Immediate profile folders under users_root with their last-write time.

        Links are not followed. An inaccessible root gives an empty list and
        unreadable entries are skipped.
    """
    try:
        entries = list(users_root.iterdir())
    except OSError as e:
        logger.warning("Cannot list users root %s: %s", users_root, e)
        return []

    folders = []
    for entry in entries:
        try:
            st = entry.lstat()
        except OSError as e:
            logger.debug("Skipping %s: %s", entry, e)
            continue
        if _is_profile_folder(st):
            folders.append((entry, st.st_mtime))
    return folders


def get_user_profiles(folders: list[tuple[Path, float]]) -> list[dict[str, Any]]:
    profiles = []
    for folder, mtime in folders:
        profiles.append({
            "Name": folder.name,
            "LastWriteTime": datetime.fromtimestamp(mtime).astimezone().isoformat(timespec="seconds"),
            "FullName": str(folder),
        })
    return profiles


def get_last_user_folder(folders: list[tuple[Path, float]]) -> str | None:
    """
        Name of the most recently written profile folder.

        This approximates the last interactive user. Profile updates and
        roaming sync also touch these folders, so it is not a logon record.
    """
    if not folders:
        return None
    newest, _ = max(folders, key=lambda item: item[1])
    return newest.name
