from __future__ import annotations

import os
from typing import Any, Dict, List, Optional, Tuple

from flask import Flask, jsonify, request

from game import (
    AttemptState,
    LevelConfig,
    LineAxis,
    LineHit,
    Match,
    MoveOutcome,
    Phase,
    has_legal_move,
)

app = Flask(__name__)


def _line_to_json(hit: Optional[LineHit]) -> Optional[Dict[str, Any]]:
    if hit is None:
        return None
    return {"axis": hit.axis.value, "index": int(hit.index), "value": int(hit.value)}


def _json_to_line(obj: Dict[str, Any]) -> LineHit:
    if not isinstance(obj, dict):
        raise ValueError("line must be an object")
    return LineHit(axis=LineAxis(obj["axis"]), index=int(obj["index"]), value=int(obj["value"]))


def _state_to_json(config: LevelConfig, s: AttemptState) -> Dict[str, Any]:
    return {
        "config": config.to_dict(),
        "grid": list(s.grid),
        "score": int(s.score),
        "combo": int(s.combo),
        "stock": int(s.stock),
        "shuffles": int(s.shuffles),
        "phase": s.phase.value,
        "challengeCompleted": bool(s.challenge_completed),
        "challengeLine": _line_to_json(s.challenge_line),
        "awardedLines": [_line_to_json(h) for h in s.awarded_lines],
    }


def _json_to_state(obj: Dict[str, Any]) -> Tuple[LevelConfig, AttemptState]:
    # counters and cell ranges are checked by Match.from_state
    config = LevelConfig.from_dict(obj.get("config") or {})
    grid = tuple(None if v is None else int(v) for v in obj["grid"])
    line = obj.get("challengeLine")
    state = AttemptState(
        grid=grid,
        score=int(obj["score"]),
        combo=int(obj.get("combo", 0)),
        stock=int(obj["stock"]),
        shuffles=int(obj.get("shuffles", 0)),
        phase=Phase(obj.get("phase", Phase.PLAYING.value)),
        challenge_completed=bool(obj.get("challengeCompleted", False)),
        challenge_line=_json_to_line(line) if line else None,
        awarded_lines=tuple(_json_to_line(h) for h in obj.get("awardedLines", [])),
    )
    return config, state


def _outcome_to_json(o: MoveOutcome) -> Dict[str, Any]:
    return {
        "kind": o.kind,
        "transformed": list(o.transformed),
        "destroyed": list(o.destroyed),
        "newValue": o.new_value,
        "points": o.points,
        "bonusPoints": o.bonus_points,
        "celebrate": o.celebrate,
        "challengeHit": _line_to_json(o.challenge_hit),
        "lineBonuses": [_line_to_json(h) for h in o.line_bonuses],
        "phaseChanged": o.phase_changed,
        "falls": {str(k): v for k, v in o.falls.items()},
    }


def _read_body() -> Dict[str, Any]:
    body = request.get_json(force=True, silent=True) or {}
    if not isinstance(body, dict):
        raise ValueError("request body must be a JSON object")
    return body


def _load_match(body: Dict[str, Any]) -> Match:
    s_in = body.get("state")
    if not isinstance(s_in, dict):
        raise ValueError("state required")
    config, state = _json_to_state(s_in)
    seed = body.get("seed")
    return Match.from_state(config, state, seed=int(seed) if seed is not None else None)


def _bad_request(e: Exception) -> Any:
    app.logger.warning("rejected payload: %s", e)
    return jsonify({"ok": False, "error": f"bad state: {e}"}), 400


@app.post("/api/new")
def api_new() -> Any:
    try:
        body = _read_body()
        seed = body.get("seed", None)
        config = LevelConfig.from_dict(body.get("config") or {})
        match = Match(config, seed=int(seed) if seed is not None else None)
    except (KeyError, TypeError, ValueError) as e:
        return _bad_request(e)
    return jsonify({
        "ok": True,
        "state": _state_to_json(config, match.state),
        "hasLegalMove": has_legal_move(match.state.grid, config.grid_size),
    })


@app.post("/api/legal")
def api_legal() -> Any:
    try:
        body = _read_body()
        match = _load_match(body)
    except (KeyError, TypeError, ValueError) as e:
        return _bad_request(e)
    return jsonify({"ok": True, "hasLegalMove": has_legal_move(match.state.grid, match.n)})


@app.post("/api/move")
def api_move() -> Any:
    try:
        body = _read_body()
        match = _load_match(body)
        cells: List[int] = [int(i) for i in body.get("path", [])]
    except (KeyError, TypeError, ValueError) as e:
        return _bad_request(e)
    if cells:
        match.begin(cells[0])
        for idx in cells[1:]:
            match.extend(idx)
    outcome = match.release()
    return jsonify({
        "ok": True,
        "outcome": _outcome_to_json(outcome),
        "state": _state_to_json(match.config, match.state),
    })


@app.post("/api/shuffle")
def api_shuffle() -> Any:
    try:
        body = _read_body()
        match = _load_match(body)
    except (KeyError, TypeError, ValueError) as e:
        return _bad_request(e)
    shuffled = match.shuffle()
    return jsonify({
        "ok": True,
        "shuffled": shuffled,
        "state": _state_to_json(match.config, match.state),
    })


@app.post("/api/report")
def api_report() -> Any:
    try:
        body = _read_body()
        match = _load_match(body)
    except (KeyError, TypeError, ValueError) as e:
        return _bad_request(e)
    rep = match.report()
    return jsonify({
        "ok": True,
        "report": {
            "phase": rep.phase.value,
            "victory": rep.victory,
            "score": rep.score,
            "challengeCompleted": rep.challenge_completed,
            "challengeLine": _line_to_json(rep.challenge_line),
        },
    })


# Entrypoint for "python app.py"
if __name__ == "__main__":
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
