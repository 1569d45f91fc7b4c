"""Packaged data files (tool catalog)."""

from pathlib import Path

DATA_DIR = Path(__file__).parent
TOOLS_FILE = DATA_DIR / "tools.yml"
