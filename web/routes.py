"""
AMBER Checkpoint v1.0 — FastAPI Routes
Operator-facing endpoints + authoring API for the MCP bridge.
"""

import logging
from fastapi import FastAPI, WebSocket, WebSocketDisconnect, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt
from typing import Optional, Union

from checkpoint_loop import CheckpointLoop
from director import build_subject_from_seed
from directives import directive_display
from models import (
    seed_from_dict, directive_from_dict, subject_to_dict, directive_to_dict,
    SubjectType, HierarchyTier, OriginWorld, SubjectRole, ExceptionTag, TellType,
    DirectiveCondition, ExceptionType, RequiredCheck,
)
from shift_roster import DIRECTIVES, DEFAULT_SHIFT, load_shift_roster
from web.websocket import ConnectionManager

logger = logging.getLogger("amber.web")


# ─────────────────────────────────────────────────────
# APP SETUP
# ─────────────────────────────────────────────────────

app = FastAPI(title="AMBER Checkpoint", version="1.0")
manager = ConnectionManager()
game = CheckpointLoop()


def init_game(shift_id: str = None):
    """Start the first shift and wire WebSocket callbacks. Called from checkpoint.py."""

    def on_event(event, data):
        import asyncio
        try:
            loop = asyncio.get_running_loop()
            loop.create_task(manager.broadcast(event, data, _booth()))
        except RuntimeError:
            pass

    game._on_event = on_event
    return game.start_shift(shift_id or DEFAULT_SHIFT)


def _booth() -> dict:
    """Which shift and subject an event belongs to."""
    subject = game.current_subject
    return {
        "shift": game.directive.id if game.directive else None,
        "subject": subject.id if subject else None,
    }


def _bad_request(message: str) -> JSONResponse:
    logger.warning(f"Rejected request: {message}")
    return JSONResponse({"success": False, "error": message}, status_code=400)


@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError):
    """Malformed request bodies answer 400 with the same shape as other errors."""
    problems = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'] if part != 'body')}: {err['msg']}"
        for err in exc.errors()
    )
    return _bad_request(f"Invalid request: {problems}")


async def _respond(result: dict) -> JSONResponse:
    """Broadcast fresh state after a successful action, then answer the caller."""
    if result.get("success"):
        await manager.broadcast("state_update", game.get_full_state(), _booth())
    return JSONResponse(result)


# ─────────────────────────────────────────────────────
# WEBSOCKET
# ─────────────────────────────────────────────────────

@app.websocket("/ws")
async def websocket_endpoint(ws: WebSocket):
    await manager.connect(ws)
    logger.info(f"Console connected ({manager.client_count} active)")
    try:
        # Send initial state on connect
        await manager.send(ws, "state_update", game.get_full_state(), _booth())

        # Keep connection alive; client messages are keepalives only
        while True:
            await ws.receive_text()
    except WebSocketDisconnect:
        manager.disconnect(ws)
    except Exception:
        manager.disconnect(ws)


# ─────────────────────────────────────────────────────
# OPERATOR API
# ─────────────────────────────────────────────────────

@app.get("/api/state")
async def get_state():
    """Full booth state for UI rendering. Never includes ground truth."""
    return JSONResponse(game.get_full_state())


@app.get("/api/directives")
async def list_directives():
    """Published directive text for every shift."""
    return JSONResponse({
        "directives": {sid: directive_display(d) for sid, d in DIRECTIVES.items()},
        "default": DEFAULT_SHIFT,
    })


class ShiftRequest(BaseModel):
    shift: str = DEFAULT_SHIFT


@app.post("/api/shift/start")
async def start_shift(req: ShiftRequest):
    return await _respond(game.start_shift(req.shift))


class CheckRequest(BaseModel):
    check: str  # identity_scan, health_scan, warrant_check, transit_log, incident_history


@app.post("/api/subject/check")
async def run_check(req: CheckRequest):
    """Operator runs a scan or database query on the current subject."""
    return await _respond(game.run_check(req.check))


@app.get("/api/subject/questions")
async def get_questions():
    """Questions available given what has been checked so far."""
    return JSONResponse({"questions": game.available_questions(),
                         "asked": game.questions_asked})


class AskRequest(BaseModel):
    question_id: str
    tone: str = "firm"


@app.post("/api/subject/ask")
async def ask_subject(req: AskRequest):
    return await _respond(game.ask(req.question_id, req.tone))


class DecideRequest(BaseModel):
    verdict: str  # "APPROVE" or "DENY"


@app.post("/api/subject/decide")
async def decide(req: DecideRequest):
    return await _respond(game.decide(req.verdict))


@app.post("/api/subject/next")
async def next_subject():
    return await _respond(game.next_subject())


# ─────────────────────────────────────────────────────
# AUTHORING API (for MCP bridge)
# ─────────────────────────────────────────────────────

class TruthFlagsBody(BaseModel):
    model_config = ConfigDict(extra="forbid")
    has_warrant: StrictBool = False
    has_transit_issue: StrictBool = False
    has_incident: StrictBool = False
    has_medical_emergency: StrictBool = False


class DossierBody(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = ""
    date_of_birth: str = ""
    address: str = ""
    occupation: str = ""
    sex: str = "UNKNOWN"


class TellsBody(BaseModel):
    model_config = ConfigDict(extra="forbid")
    type: Optional[TellType] = None
    description: str = ""
    base_elevation: StrictInt = Field(0, ge=0, le=30)
    is_good_liar: StrictBool = False
    is_genuinely_stressed: StrictBool = False


class ToneLinesBody(BaseModel):
    model_config = ConfigDict(extra="forbid")
    soft: Optional[str] = None
    firm: Optional[str] = None
    harsh: Optional[str] = None


class SeedBody(BaseModel):
    """Authored subject seed. Field names match SubjectSeed."""
    model_config = ConfigDict(extra="forbid")
    id: str
    seed: StrictInt
    subject_type: SubjectType
    hierarchy_tier: HierarchyTier
    origin: OriginWorld
    truth_flags: TruthFlagsBody = Field(default_factory=TruthFlagsBody)
    name: str = ""
    sex: str = "M"
    role: Optional[SubjectRole] = None
    reason_for_visit: str = ""
    dossier: Optional[DossierBody] = None
    exception_tags: list[ExceptionTag] = []
    destination: str = "EARTH"
    greeting_text: str = ""
    bpm_tells: Optional[TellsBody] = None
    interrogation_responses: Optional[dict[str, Union[str, ToneLinesBody]]] = None


class DirectiveBody(BaseModel):
    model_config = ConfigDict(extra="forbid")
    id: Optional[str] = None
    base: DirectiveCondition
    exceptions: list[ExceptionType] = []
    hidden_exceptions: list[ExceptionType] = []
    required_checks: list[RequiredCheck] = []
    text: list[str] = []


class BuildRequest(BaseModel):
    seed: SeedBody
    shift: Optional[str] = None
    directive: Optional[DirectiveBody] = None


@app.post("/api/subjects/build")
async def build_subject(req: BuildRequest):
    """
    Build one subject from an authored seed, outside the running shift.
    The directive is either inline or a shift id (default shift when
    neither is given). Returns the full record including ground truth.
    Malformed bodies never get here; see validation_error().
    """
    try:
        seed = seed_from_dict(req.seed.model_dump(mode="json", exclude_none=True))
        if req.directive is not None:
            directive = directive_from_dict(req.directive.model_dump(mode="json", exclude_none=True))
        else:
            directive, _ = load_shift_roster(req.shift or DEFAULT_SHIFT)
        subject = build_subject_from_seed(seed, directive)
    except KeyError as e:
        return _bad_request(f"Missing or unknown key: {e.args[0]}")
    except ValueError as e:
        return _bad_request(str(e))

    return JSONResponse({
        "success": True,
        "directive": directive_to_dict(directive, include_hidden=True),
        "subject": subject_to_dict(subject, include_truth=True),
    })
