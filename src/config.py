"""Environment-driven configuration.

Values come from the process environment, optionally seeded from a ``.env``
file at the project root.
"""

import logging
import os
import tempfile
from pathlib import Path

from dotenv import load_dotenv

env_path = Path(__file__).parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)

HAXE_BINARY = os.environ.get("HAXE_BINARY", "haxe")
HAXELIB_BINARY = os.environ.get("HAXELIB_BINARY", "haxelib")
BUILD_TARGET_DIR = Path(
    os.environ.get("BUILD_TARGET_DIR", str(Path(tempfile.gettempdir()) / "haxe-build-target"))
)
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Apply the service log format to the root logger."""
    logging.basicConfig(level=(level or LOG_LEVEL).upper(), format=LOG_FORMAT)
