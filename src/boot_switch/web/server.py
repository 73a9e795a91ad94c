"""
Local web page: Flask app factory.

Serves the boot entry list with rename/hide controls and the boot action.
All work is delegated to a ``BootSwitchService`` stored on the app config.
"""

from __future__ import annotations

import errno
import logging
import socket
from pathlib import Path

from flask import Flask

from boot_switch.service import BootSwitchService

logger = logging.getLogger(__name__)

_PACKAGE_DIR = Path(__file__).parent

_ADDR_IN_USE = {errno.EADDRINUSE, getattr(errno, 'WSAEADDRINUSE', errno.EADDRINUSE)}


def create_app(service: BootSwitchService) -> Flask:
    """Create the Flask application around an already-built service."""
    app = Flask(
        __name__,
        template_folder=str(_PACKAGE_DIR / "templates"),
    )
    app.config["BOOT_SERVICE"] = service

    from boot_switch.web.routes import pages_bp

    app.register_blueprint(pages_bp)

    logger.info("Web app created (tool=%s, overrides=%s)", service.manager.name, service.store.path)
    return app


def port_in_use(host: str, port: int) -> bool:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        if not hasattr(socket, "SO_EXCLUSIVEADDRUSE"):
            s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            s.bind((host, port))
        except OSError as e:
            return e.errno in _ADDR_IN_USE
    return False


def run_server(app: Flask, host: str = "0.0.0.0", port: int = 8088) -> int:
    """Run the web page; returns the process exit code.

    A second instance on a busy port exits quietly with 0 so service
    supervisors (Task Scheduler, systemd) do not flag it.
    """
    if port_in_use(host, port):
        logger.error("Port %d is already in use. Not starting a second instance.", port)
        return 0
    logger.warning("Boot switch listening on http://%s:%d", host, port)
    app.run(host=host, port=port, debug=False, use_reloader=False)
    return 0
