"""
Core domain layer: typed cells, the delimited-text parser, the tabular
store, the view engine, the serializer and the browser session.

Import from the submodules, e.g. ``csv_browser.core.session``.
"""
