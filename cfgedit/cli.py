from __future__ import annotations

import argparse, logging
from typing import List, Optional

from .config import load_settings
from .log import setup_logging

logger = logging.getLogger(__name__)

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="cfgedit", description="Form editor for JSON configuration files")
    ap.add_argument("path", nargs="?", help="JSON file to open at startup")
    return ap

def main(argv: List[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings()
    setup_logging(settings.log_level, settings.log_file)
    logger.debug("Settings: %s", settings)

    # imported late: gui pulls in tkinter
    from .gui import run_gui
    run_gui(args.path, settings)
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
