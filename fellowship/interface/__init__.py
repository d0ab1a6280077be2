"""Command line interface: argparse entry point, rich rendering, saved settings."""

from .cli import main, build_parser
from .config import Config, DEFAULT_CONFIG, load_config, save_config, set_value

__all__ = [
    "main",
    "build_parser",
    "Config",
    "DEFAULT_CONFIG",
    "load_config",
    "save_config",
    "set_value",
]
