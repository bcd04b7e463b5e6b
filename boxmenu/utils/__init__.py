"""Utility helpers exposed by boxmenu."""

from .paths import MENU_FILE, entry_file_for, expand_home, home_dir

__all__ = [
    "MENU_FILE",
    "entry_file_for",
    "expand_home",
    "home_dir",
]
