"""
Dash front end for the CSV browser.

create_dash_app() wires the layout and callbacks around one BrowserSession.
"""

from .dash_app import create_dash_app

__all__ = ["create_dash_app"]
