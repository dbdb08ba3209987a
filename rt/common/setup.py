import os
import sys
from pathlib import Path
from dataclasses import dataclass

APP_DIR_NAME = "RoundTimer"

# Lil helper to create a directory (and parents) if it's missing.
def ensure_directory(path: Path):
    path.mkdir(parents=True,exist_ok=True)
    return path

# Works out where per-user data lives. ROUNDTIMER_HOME wins outright, then %APPDATA% on Windows, then the XDG data
# directory everywhere else.
def _user_data_dir() -> Path:
    override = os.getenv("ROUNDTIMER_HOME")
    if override:
        return Path(override)
    if sys.platform == "win32":
        appdata = os.getenv("APPDATA")
        if not appdata:
            raise RuntimeError("Missing APPDATA environment variable, cannot determine data directories.")
        return Path(appdata) / APP_DIR_NAME
    xdg = os.getenv("XDG_DATA_HOME")
    base = Path(xdg) if xdg else Path.home() / ".local" / "share"
    return base / APP_DIR_NAME

# Dataclass for accessing paths across program.
@dataclass(frozen=False)
class ProjectPaths:

    data: Path
    logs: Path

    @staticmethod
    def build():
        # Folder for all roundtimer user-specific stuff (settings + logs)
        data = ensure_directory(_user_data_dir())
        logs = ensure_directory(data / "logs")

        return ProjectPaths(
            data = data,
            logs = logs,
        )
PATHS = ProjectPaths.build()
