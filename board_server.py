#!/usr/bin/env python3
"""
Project Board Server
--------------------
Serves the rendered board and a JSON API over one in-memory ProjectBoard.
Everything lives in memory: restarting the server empties the board.

Usage:
    python board_server.py
    python board_server.py --port 8080 --config ./board.yaml

API:
    GET  /                          → rendered board (HTML)
    GET  /api/board                 → JSON: { projects, lanes, lane_states, stats }
    GET  /api/projects?status=      → JSON: { projects, count }
    POST /api/projects              → body: { title, description, people }
    POST /api/projects/<id>/move    → body: { lane: "active"|"finished" }
    POST /api/drag                  → body: { event, target }  (one step of a gesture)
    GET  /health
"""

import argparse
import hmac
import logging
from functools import wraps
from typing import Optional

from flask import Flask, current_app, jsonify, request

from pkg.board.app import ProjectBoard
from pkg.board.config import BoardConfig
from pkg.board.dnd import DragError
from pkg.board.schema import ProjectStatus
from pkg.board.views import INVALID_INPUT_MESSAGE

logger = logging.getLogger(__name__)

DRAG_STEPS = ("dragstart", "dragover", "dragleave", "drop", "dragend")


# ── Auth ─────────────────────────────────────────────────────────────────────


def require_api_key(f):
    """Decorator: reject requests without a valid X-API-Key header (when a secret is set)."""
    @wraps(f)
    def decorated(*args, **kwargs):
        secret = current_app.config["API_SECRET"]
        if secret:
            provided = request.headers.get("X-API-Key", "").strip()
            if not hmac.compare_digest(provided, secret):
                code = 401 if not provided else 403
                return jsonify({"error": "Unauthorized"}), code
        return f(*args, **kwargs)
    return decorated


def _board() -> ProjectBoard:
    return current_app.config["BOARD"]


def _payload() -> dict:
    if request.is_json:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}
    return request.form.to_dict()


# ── App factory ──────────────────────────────────────────────────────────────


def create_app(config: Optional[BoardConfig] = None, board: Optional[ProjectBoard] = None) -> Flask:
    config = config or BoardConfig.load()
    app = Flask(__name__)
    app.config["BOARD_CONFIG"] = config
    app.config["BOARD"] = board or ProjectBoard(config)
    app.config["API_SECRET"] = config.api_secret
    if not config.api_secret:
        logger.warning(f"{config.api_secret_env} not set: mutating routes are unauthenticated")

    @app.route("/")
    def index():
        html = _board().render()
        return f"<!DOCTYPE html><html><head><title>Project Board</title></head><body>{html}</body></html>"

    @app.route("/api/board")
    def api_board():
        return jsonify(_board().snapshot())

    @app.route("/api/projects", methods=["GET"])
    def api_projects():
        store = _board().store
        status = request.args.get("status")
        if status:
            try:
                projects = store.list_by_status(ProjectStatus.from_str(status))
            except ValueError as e:
                return jsonify({"error": str(e)}), 400
        else:
            projects = list(store.projects)
        return jsonify({"projects": [p.to_dict() for p in projects], "count": len(projects)})

    @app.route("/api/projects", methods=["POST"])
    @require_api_key
    def api_create_project():
        data = _payload()
        board = _board()
        before = len(board.store)
        accepted = board.submit(
            data.get("title", ""),
            data.get("description", ""),
            data.get("people", ""),
        )
        if not accepted or len(board.store) == before:
            return jsonify({"error": INVALID_INPUT_MESSAGE}), 400
        project = board.store.projects[-1]
        return jsonify({"project": project.to_dict(), "id": project.id}), 201

    @app.route("/api/projects/<project_id>/move", methods=["POST"])
    @require_api_key
    def api_move_project(project_id):
        data = _payload()
        board = _board()
        if board.store.get(project_id) is None:
            return jsonify({"error": "Project not found"}), 404
        try:
            lane = board.lane(str(data.get("lane", "")))
        except ValueError as e:
            return jsonify({"error": str(e)}), 400

        before = board.store.get(project_id).status
        try:
            board.drag(project_id, lane.kind)
        except KeyError:
            return jsonify({"error": "Project is not rendered"}), 409
        project = board.store.get(project_id)
        return jsonify({"project": project.to_dict(), "moved": project.status != before})

    @app.route("/api/drag", methods=["POST"])
    @require_api_key
    def api_drag():
        data = _payload()
        step = str(data.get("event", "")).strip().lower()
        target = str(data.get("target", "")).strip()
        if step not in DRAG_STEPS:
            return jsonify({"error": f"event must be one of {', '.join(DRAG_STEPS)}"}), 400
        if step != "dragend" and not target:
            return jsonify({"error": "target is required"}), 400

        board = _board()
        session = board.session()
        result = {"event": step}
        try:
            if step == "dragstart":
                session.start(target)
            elif step == "dragover":
                result["accepted"] = session.over(target)
            elif step == "dragleave":
                session.leave(target)
            elif step == "drop":
                result["dropped"] = session.drop(target)
            else:
                session.end()
        except DragError as e:
            return jsonify({"error": str(e)}), 409
        except KeyError:
            return jsonify({"error": f"No element with id '{target}'"}), 404

        snapshot = board.snapshot()
        result["lane_states"] = snapshot["lane_states"]
        result["lanes"] = snapshot["lanes"]
        return jsonify(result)

    @app.route("/health")
    def health():
        return jsonify({"status": "ok", "projects": len(_board().store)})

    return app


# ── Main ─────────────────────────────────────────────────────────────────────

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Project Board Server")
    parser.add_argument("--host", default=None,
                        help="Bind address (default from config: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=None)
    parser.add_argument("--config", help="Path to board.yaml (overrides BOARD_CONFIG env var)")
    args = parser.parse_args()

    cfg = BoardConfig.load(args.config)
    if args.host:
        cfg.host = args.host
    if args.port:
        cfg.port = args.port

    logging.basicConfig(
        level=getattr(logging, cfg.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = create_app(cfg)
    logger.info(f"Project board on http://{cfg.host}:{cfg.port}")
    # One board, one pointer: serve requests one at a time
    app.run(host=cfg.host, port=cfg.port, debug=False, threaded=False)
