from __future__ import annotations

import logging
from typing import Mapping, Optional

from flask import Flask, Response, jsonify, redirect, request

from switchboard.errors import (HardwareWriteFailed, InvalidOutletId,
                                MalformedParameter, MissingParameter)
from switchboard.registry import OutletRegistry

logger = logging.getLogger(__name__)

SUCCESS = "Success!"
INVALID_ID = "Invalid id!"
ERROR = "Error!"


def parse_outlet_id(args: Mapping[str, str], name: str = "id") -> int:
    """
    Shared validation of the outlet id query parameter for /on and /off.

    Only plain ASCII decimal digits are accepted ("3", "007"); signs,
    whitespace and decimals are rejected.
    """
    raw = args.get(name)
    if raw is None:
        raise MissingParameter(name)
    if not (raw.isascii() and raw.isdigit()):
        raise MalformedParameter(raw, name)
    return int(raw)


def _text(body: str, status: int = 200) -> Response:
    return Response(body, status=status, mimetype="text/plain")


def create_app(registry: OutletRegistry, config: Optional[Mapping] = None) -> Flask:
    """
    Build the Flask app around an already constructed registry.

    For WSGI servers, wrap this in a small factory that builds the registry,
    e.g. switchboard.cli.server:build_app.
    """
    app = Flask(__name__)
    if config:
        app.config.update(config)
    # Keep outlet fields in id, pin, active order.
    app.json.sort_keys = False

    # Only GET is served. Flask adds HEAD and OPTIONS to every rule, and HEAD on
    # /on or /off would still switch the relay.
    @app.before_request
    def reject_non_get():
        if request.method != "GET":
            return _text("", 404)
        return None

    def _command(desired: bool) -> Response:
        try:
            outlet_id = parse_outlet_id(request.args)
            registry.set_active(outlet_id, desired)
        except InvalidOutletId as e:
            logger.info("Rejected %s request: %s", request.path, e)
            return _text(INVALID_ID)
        except HardwareWriteFailed as e:
            logger.error("Error setting outlet %s %s: %r", e.outlet_id, "on" if desired else "off", e.cause)
            return _text(ERROR)
        return _text(SUCCESS)

    @app.route("/", methods=["GET"])
    def index():
        return redirect("/status", code=302)

    @app.route("/status", methods=["GET"])
    def status():
        """
        Cached state of every outlet, in registry order.
        """
        return jsonify({"outlets": [o.to_dict() for o in registry.list()]})

    @app.route("/on", methods=["GET"])
    def turn_on():
        return _command(True)

    @app.route("/off", methods=["GET"])
    def turn_off():
        return _command(False)

    # Unknown paths, and POST/PUT/etc. to known ones, get an empty 404 too.
    @app.errorhandler(404)
    @app.errorhandler(405)
    def not_found(_error):
        return _text("", 404)

    return app
