from __future__ import annotations

import json, logging, os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

from .values import FormatConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "cfgedit.config.json"

DEFAULT_CONFIG: Dict[str, Any] = {
    "indent": 4,
    "appearance_mode": "light",
    "color_theme": "blue",
    "window_width": 800,
    "window_height": 600,
    "log_level": "INFO",
    "log_file": None,
}

@dataclass
class Settings:
    indent: int = 4
    appearance_mode: str = "light"     # light | dark | system
    color_theme: str = "blue"
    window_width: int = 800
    window_height: int = 600
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def format_config(self) -> FormatConfig:
        return FormatConfig(indent=self.indent)

def find_config_file(start_dir: Path) -> Optional[Path]:
    cur = start_dir.resolve()
    root = Path(cur.anchor)
    while True:
        p = cur / CONFIG_FILENAME
        if p.exists():
            return p
        if cur == root:
            return None
        cur = cur.parent

def _load_project_config(start_dir: Path) -> Dict[str, Any]:
    p = find_config_file(start_dir)
    if p is None:
        return {}
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as ex:
        logger.warning("Ignoring unreadable config %s: %s", p, ex)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: top level is not an object", p)
        return {}
    known = {f.name for f in fields(Settings)}
    for k in sorted(set(data) - known):
        logger.warning("Unknown config key %r in %s", k, p)
    return {k: v for k, v in data.items() if k in known}

def load_settings(start_dir: Optional[Path] = None, environ: Optional[Dict[str, str]] = None) -> Settings:
    env = os.environ if environ is None else environ
    cfg = DEFAULT_CONFIG.copy()
    cfg.update(_load_project_config(start_dir or Path.cwd()))
    if env.get("CFGEDIT_LOG_LEVEL"): cfg["log_level"] = env["CFGEDIT_LOG_LEVEL"]
    if env.get("CFGEDIT_LOG_FILE"): cfg["log_file"] = env["CFGEDIT_LOG_FILE"]
    return Settings(**cfg)
