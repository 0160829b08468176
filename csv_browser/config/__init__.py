"""
Config package for csv_browser.

Responsible for:
- the GlobalConfig model
- loading global.json (load_global_config)
"""

from .model import GlobalConfig
from .io import load_global_config

__all__ = ["GlobalConfig", "load_global_config"]
