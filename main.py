"""
main.py — Algorithm Step Engine Flask API
==========================================
JSON API over the engine.

Routes:
  GET  /api/algorithms                    – registry cards (algorithms + structures)
  POST /api/plan                          – plan a run, return every step + metrics
  POST /api/compare                       – two algorithms, same input
  POST /api/step/next                     – advance one step in the last planned run
  POST /api/step/prev                     – rewind one step
  POST /api/step/goto                     – jump to step N
  GET  /api/structures/<kind>             – current state of the session structure
  POST /api/structures/<kind>             – (re)create it from construction input
  POST /api/structures/<kind>/reset       – back to its initial construction
  POST /api/structures/<kind>/<command>   – perform one operation

State management:
  Everything lives in the Flask session cookie, so nothing large goes in
  there.  A planned run is stored as its request (algorithm + input) plus
  the current index; plans are deterministic, so navigation re-plans and
  seeks instead of storing the steps.  Live structures are stored via
  StructureSession.to_dict().

Serving:
  create_app() is the factory; it installs structlog handlers unless
  STEPENGINE_CONFIGURE_LOGGING=false.

      flask --app main run
      gunicorn "main:create_app()"
      python main.py
"""

from typing import Any, Dict, Optional

import structlog
from flask import Flask, jsonify, request, session

from algorithms import get_algorithm, list_algorithms
from algorithms.errors import EngineError, InvalidInputError
from config import Settings, get_settings
from engine import Recorder, Stepper, StructureSession, compare
from engine.telemetry import setup_logging
from structures import STRUCTURES, get_structure

logger = structlog.get_logger()


# ---------------------------------------------------------------------------
# Session State Helpers
# ---------------------------------------------------------------------------
def _body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidInputError("request body must be a JSON object")
    return data


def _structure_defaults(kind: str, settings: Settings) -> Dict[str, Any]:
    """Construction defaults that come from configuration."""
    if kind == "circular_queue":
        return {"capacity": settings.circular_queue_capacity}
    if kind == "token_bucket":
        return {"capacity": settings.bucket_capacity, "interval_ms": settings.refill_interval_ms}
    if kind == "leaky_bucket":
        return {"capacity": settings.bucket_capacity, "interval_ms": settings.leak_interval_ms}
    return {}


def _session_key(kind: str) -> str:
    return f"structure:{kind}"


def get_structure_session(kind: str, settings: Settings) -> StructureSession:
    """Deserialise the structure session for `kind`, or create a default one."""
    if get_structure(kind) is None:
        raise InvalidInputError(f"Unknown structure: {kind}")
    stored = session.get(_session_key(kind))
    if stored is None:
        return StructureSession.create(kind, _structure_defaults(kind, settings))
    return StructureSession.from_dict(stored)


def save_structure_session(ss: StructureSession) -> None:
    session[_session_key(ss.kind)] = ss.to_dict()


def _replay(index: int) -> Dict[str, Any]:
    """Re-plan the stored run and seek to `index`."""
    run = session.get("run")
    if run is None:
        raise InvalidInputError("No run planned yet")

    stepper = Stepper()
    stepper.plan(run["algorithm"], run["input"], enforce_limits=True)
    if not stepper.goto_step(index):
        raise InvalidInputError(f"Invalid step index: {index}")

    run["current_step"] = index
    session["run"] = run
    return {
        "step":         stepper.current_step.to_dict(),
        "current_step": index,
        "total_steps":  run["total_steps"],
    }


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(settings: Optional[Settings] = None) -> Flask:
    settings = settings or get_settings()
    if settings.configure_logging:
        setup_logging(settings)

    app = Flask(__name__)
    app.secret_key = settings.secret_key
    app.config["ENGINE_SETTINGS"] = settings

    # -----------------------------------------------------------------------
    # Errors
    # -----------------------------------------------------------------------
    @app.errorhandler(EngineError)
    def handle_engine_error(exc: EngineError):
        logger.info("request_rejected", path=request.path, error=str(exc), type=type(exc).__name__)
        return jsonify({"error": str(exc), "type": type(exc).__name__}), 400

    # -----------------------------------------------------------------------
    # API: Registry
    # -----------------------------------------------------------------------
    @app.route("/api/algorithms", methods=["GET"])
    def api_algorithms():
        algorithms = [
            {
                "key":         a.key,
                "label":       a.label,
                "tags":        a.tags,
                "max_input":   a.max_input,
                "stable":      a.stable,
                "complexity":  {"time": a.complexity_time, "space": a.complexity_space},
                "description": a.description,
                "pseudocode":  a.pseudocode,
            }
            for a in list_algorithms()
        ]
        structures = [
            {
                "key":        cls.KIND,
                "label":      cls.LABEL,
                "commands":   sorted(cls.COMMANDS),
                "pseudocode": cls.PSEUDOCODE,
                "defaults":   _structure_defaults(cls.KIND, settings),
            }
            for cls in STRUCTURES.values()
        ]
        return jsonify({"algorithms": algorithms, "structures": structures})

    # -----------------------------------------------------------------------
    # API: Plan & Compare
    # -----------------------------------------------------------------------
    @app.route("/api/plan", methods=["POST"])
    def api_plan():
        body      = _body()
        algorithm = body.get("algorithm", "")
        payload   = body.get("input") or {}

        rec = Recorder()
        rec.start(algorithm, payload, enforce_limits=True)
        rec.run_to_completion()

        session["run"] = {
            "algorithm":    algorithm,
            "input":        payload,
            "current_step": 0,
            "total_steps":  len(rec.steps),
        }
        exported = rec.export()
        exported["current_step"] = 0
        exported["total_steps"]  = len(rec.steps)
        exported["speed"]        = settings.default_speed
        return jsonify(exported)

    @app.route("/api/compare", methods=["POST"])
    def api_compare():
        body    = _body()
        payload = body.get("input") or {}
        left, right = body.get("left", ""), body.get("right", "")
        for key in (left, right):
            if get_algorithm(key) is None:
                raise InvalidInputError(f"Unknown algorithm: {key}")

        recorders = []
        for key in (left, right):
            rec = Recorder()
            rec.start(key, payload, enforce_limits=True)
            rec.run_to_completion()
            recorders.append(rec)

        return jsonify(compare(*recorders).to_dict())

    # -----------------------------------------------------------------------
    # API: Step Navigation
    # -----------------------------------------------------------------------
    @app.route("/api/step/next", methods=["POST"])
    def api_step_next():
        run = session.get("run")
        if run is not None and run["current_step"] >= run["total_steps"] - 1:
            return jsonify({"error": "Already at last step", "type": "PlaybackError"}), 400
        return jsonify(_replay((run or {}).get("current_step", -1) + 1))

    @app.route("/api/step/prev", methods=["POST"])
    def api_step_prev():
        run = session.get("run")
        if run is not None and run["current_step"] <= 0:
            return jsonify({"error": "Already at first step", "type": "PlaybackError"}), 400
        return jsonify(_replay((run or {}).get("current_step", 1) - 1))

    @app.route("/api/step/goto", methods=["POST"])
    def api_step_goto():
        raw = _body().get("index", 0)
        if isinstance(raw, bool) or not isinstance(raw, int):
            raise InvalidInputError("index must be an integer")
        return jsonify(_replay(raw))

    # -----------------------------------------------------------------------
    # API: Live Structures
    # -----------------------------------------------------------------------
    @app.route("/api/structures/<kind>", methods=["GET"])
    def api_structure_state(kind: str):
        ss = get_structure_session(kind, settings)
        save_structure_session(ss)
        return jsonify({
            "kind":    ss.kind,
            "state":   ss.structure.snapshot(),
            "history": ss.history,
        })

    @app.route("/api/structures/<kind>", methods=["POST"])
    def api_structure_create(kind: str):
        if get_structure(kind) is None:
            raise InvalidInputError(f"Unknown structure: {kind}")
        payload = {**_structure_defaults(kind, settings), **_body()}
        ss = StructureSession.create(kind, payload)
        save_structure_session(ss)
        logger.info("structure_created", kind=kind)
        return jsonify({"kind": ss.kind, "state": ss.structure.snapshot(), "history": []})

    @app.route("/api/structures/<kind>/reset", methods=["POST"])
    def api_structure_reset(kind: str):
        ss = get_structure_session(kind, settings)
        ss.reset()
        save_structure_session(ss)
        return jsonify({"kind": ss.kind, "state": ss.structure.snapshot(), "history": ss.history})

    @app.route("/api/structures/<kind>/<command>", methods=["POST"])
    def api_structure_command(kind: str, command: str):
        ss   = get_structure_session(kind, settings)
        args = _body().get("args")
        if args is None:
            args = []
        elif not isinstance(args, list):
            args = [args]

        sequence = ss.perform(command, *args)
        save_structure_session(ss)
        steps = [s.to_dict() for s in sequence]
        return jsonify({
            "kind":       ss.kind,
            "steps":      steps,
            "pseudocode": sequence.pseudocode,
            "state":      ss.structure.snapshot(),
            "history":    ss.history,
        })

    return app


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    settings = get_settings()
    app = create_app(settings)
    logger.info("server_starting", host=settings.host, port=settings.port)
    app.run(debug=settings.debug, host=settings.host, port=settings.port)
