from __future__ import annotations

import threading
from dataclasses import dataclass, field
from pathlib import Path

from csv_browser.config.model import GlobalConfig
from csv_browser.core.session import BrowserSession


@dataclass
class AppContext:
    """
    Everything the callbacks share.

    There is one BrowserSession per server process; the lock serialises
    callbacks that read or replace it.
    """
    config_root: Path
    global_config: GlobalConfig
    session: BrowserSession
    status_message: str = ""
    status_color: str = "info"
    lock: threading.RLock = field(default_factory=threading.RLock)
