"""Start the Team Stats app headless (from a checkout or a PyInstaller bundle).

Usage: ``python launch.py [extra streamlit options]``, e.g. ``--server.port 8600``.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import List, Optional, Sequence

APP_SCRIPT = Path("teamstats") / "app.py"


def bundle_root() -> Path:
    """Directory holding ``teamstats/``; PyInstaller unpacks into ``sys._MEIPASS``."""
    return Path(getattr(sys, "_MEIPASS", Path(__file__).resolve().parent))


def default_log_dir() -> Path:
    base = os.getenv("APPDATA") or Path.home()
    return Path(base) / "TeamStats" / "logs"


def build_argv(root: Path, extra: Optional[Sequence[str]] = None) -> List[str]:
    return ["streamlit", "run", str(root / APP_SCRIPT), "--server.headless=true", *(extra or [])]


def main(extra: Optional[Sequence[str]] = None) -> int:
    from streamlit.web.cli import main as st_main

    root = bundle_root()
    # relative paths (.streamlit/secrets.toml) resolve against the bundle
    os.chdir(root)
    os.environ.setdefault("TEAMSTATS_LOG_DIR", str(default_log_dir()))

    sys.argv = build_argv(root, extra)
    return st_main()


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
