"""Dash callback registrars."""
