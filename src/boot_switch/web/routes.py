"""
Page routes.

GET  /                 → entry list (500 with diagnostics when the tool fails)
GET  /rename?id=&label= → set a custom label, back to /
GET  /hide?id=&hidden=  → hide (1) or unhide (0), back to /
POST /boot/<id>         → schedule the entry and reboot
"""

from __future__ import annotations

import logging

from flask import Blueprint, current_app, redirect, render_template, request, url_for

from boot_switch.errors import ToolExecutionError, ValidationError
from boot_switch.service import BootSwitchService

logger = logging.getLogger(__name__)

pages_bp = Blueprint("pages", __name__)


def _service() -> BootSwitchService:
    return current_app.config["BOOT_SERVICE"]


def _id_param() -> str:
    # `bootnum` is what older bookmarks on Linux hosts use
    return request.args.get("id") or request.args.get("bootnum") or ""


def _back_to_index():  # type: ignore[no-untyped-def]
    return redirect(url_for("pages.index"))


@pages_bp.route("/")
def index():  # type: ignore[no-untyped-def]
    service = _service()
    try:
        view = service.view()
    except ToolExecutionError as e:
        logger.error("%s failed: %s", e.command, e.diagnostic)
        return render_template("error.html", command=e.command, diagnostic=e.diagnostic), 500
    return render_template(
        "index.html",
        view=view,
        tool=service.manager.name,
        list_command=service.manager.list_command,
    )


@pages_bp.route("/rename")
def rename():  # type: ignore[no-untyped-def]
    try:
        _service().rename(_id_param(), request.args.get("label", ""))
    except ValidationError as e:
        logger.info("Ignoring rename: %s", e)
    return _back_to_index()


@pages_bp.route("/hide")
def hide():  # type: ignore[no-untyped-def]
    hidden = request.args.get("hidden") == "1"
    try:
        _service().set_hidden(_id_param(), hidden)
    except ValidationError as e:
        logger.info("Ignoring hide: %s", e)
    return _back_to_index()


@pages_bp.route("/boot/<path:entry_id>", methods=["POST"])
def boot(entry_id: str):  # type: ignore[no-untyped-def]
    service = _service()
    try:
        outcome = service.boot(entry_id)
    except ValidationError as e:
        logger.info("Ignoring boot: %s", e)
        return _back_to_index()
    if outcome.ok:
        return render_template("rebooting.html", outcome=outcome)
    return render_template("boot_failed.html", outcome=outcome, tool=service.manager.name), 500
