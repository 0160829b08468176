import logging
import os
import socket

from csv_browser.logging_config import configure_logging
from csv_browser.ui.dash_app import create_dash_app

configure_logging()
logger = logging.getLogger("csv_browser.app")

app = create_dash_app()
server = app.server


def find_free_port(start_port: int, attempts: int = 100) -> int:
    """First port at or after ``start_port`` that nothing is listening on."""
    for port in range(start_port, start_port + attempts):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            if s.connect_ex(("localhost", port)) != 0:
                return port
    return start_port


if __name__ == "__main__":
    preferred_port = int(os.getenv("PORT", "3000"))
    port = find_free_port(preferred_port)
    host = os.getenv("HOST", "0.0.0.0")
    debug = os.getenv("DEBUG", "0") == "1"

    if port != preferred_port:
        logger.warning("Preferred port taken", extra={"preferred_port": preferred_port, "port": port})
    logger.info("Starting CSV Search Browser", extra={"host": host, "port": port, "debug": debug})

    app.run(host=host, port=port, debug=debug)
