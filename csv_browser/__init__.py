"""
Top-level package for the CSV search browser.

This package exposes the core architecture (domain, services, UI adapters).
Most code should import from submodules such as:
    csv_browser.core
    csv_browser.services
    csv_browser.ui
"""

__version__ = "0.1.0"

__all__: list[str] = []
