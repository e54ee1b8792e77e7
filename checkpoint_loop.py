"""
AMBER Checkpoint v1.0 — Checkpoint Loop
The shift state machine. The web server and MCP bridge both drive this object.

State machine:
  IDLE            -> No shift running.
  INSPECTING      -> A subject is at the booth. Checks and questions allowed.
  DECIDED         -> Verdict stamped and graded. Waiting for next_subject().
  SHIFT_COMPLETE  -> Roster exhausted. start_shift() begins another.

Player-action errors come back as {"success": False, "error": ...}.
Hidden directive exceptions never leave this object.
"""

import logging
from enum import Enum

from models import (
    GatheredInformation, Verdict, EvidenceKind, subject_to_dict, NO_WARRANT,
)
from shift_roster import load_shift_roster, DEFAULT_SHIFT
from director import build_shift_subjects
from directives import directive_display, get_missing_required_checks, format_required_checks
from interrogation import generate_default_response, generate_dynamic_questions, coerce_tone
from tells import calculate_question_bpm, greeting_bpm, question_rng

logger = logging.getLogger("amber.checkpoint")

MAX_QUESTIONS = 3

# check name -> evidence report it unlocks (None: scan, not a database query)
CHECK_KINDS = {
    "identity_scan": None,
    "health_scan": None,
    "warrant_check": EvidenceKind.WARRANT,
    "transit_log": EvidenceKind.TRANSIT,
    "incident_history": EvidenceKind.INCIDENT,
}


class Phase(str, Enum):
    IDLE = "idle"
    INSPECTING = "inspecting"
    DECIDED = "decided"
    SHIFT_COMPLETE = "shift_complete"


class CheckpointLoop:
    """One operator booth working through one shift at a time."""

    def __init__(self):
        self.phase: Phase = Phase.IDLE
        self.directive = None
        self.subjects: list = []
        self.index: int = 0
        self.info: GatheredInformation = GatheredInformation()
        self.questions_asked: int = 0
        self.transcript: list[dict] = []
        self.decisions: list[dict] = []

        # Callback: the web layer registers this to push updates
        self._on_event = None

    # ─────────────────────────────────────────────────
    # HELPERS
    # ─────────────────────────────────────────────────

    @property
    def current_subject(self):
        if self.phase in (Phase.INSPECTING, Phase.DECIDED) and self.index < len(self.subjects):
            return self.subjects[self.index]
        return None

    def _emit(self, event: str, data: dict):
        if self._on_event:
            self._on_event(event, data)

    def _error(self, message: str) -> dict:
        logger.warning(message)
        return {"success": False, "error": message}

    def _reset_booth(self):
        self.info = GatheredInformation()
        self.questions_asked = 0
        self.transcript = []

    # ─────────────────────────────────────────────────
    # SHIFT LIFECYCLE
    # ─────────────────────────────────────────────────

    def start_shift(self, shift_id: str = DEFAULT_SHIFT) -> dict:
        try:
            directive, seeds = load_shift_roster(shift_id)
        except KeyError as e:
            return self._error(str(e.args[0]))

        self.directive = directive
        self.subjects = build_shift_subjects(seeds, directive)
        self.index = 0
        self.decisions = []
        self._reset_booth()
        self.phase = Phase.INSPECTING if self.subjects else Phase.SHIFT_COMPLETE

        logger.info(f"Shift {shift_id} started: {len(self.subjects)} subject(s)")
        self._emit("shift_started", {"shift": shift_id, "subjects": len(self.subjects)})
        return {"success": True, "shift": shift_id, "subjects": len(self.subjects),
                "directive": directive_display(directive)}

    def next_subject(self) -> dict:
        if self.phase != Phase.DECIDED:
            return self._error(f"Cannot advance: phase is {self.phase.value}")
        self.index += 1
        self._reset_booth()
        if self.index >= len(self.subjects):
            self.phase = Phase.SHIFT_COMPLETE
            logger.info(f"Shift {self.directive.id} complete: {self.shift_stats()}")
            self._emit("shift_complete", self.shift_stats())
            return {"success": True, "shift_complete": True, "stats": self.shift_stats()}
        self.phase = Phase.INSPECTING
        return {"success": True, "shift_complete": False, "subject": self.current_subject.id}

    # ─────────────────────────────────────────────────
    # INSPECTION
    # ─────────────────────────────────────────────────

    def run_check(self, kind: str) -> dict:
        subject = self.current_subject
        if self.phase != Phase.INSPECTING or subject is None:
            return self._error("No subject under inspection")
        if kind not in CHECK_KINDS:
            return self._error(f"Unknown check '{kind}'. Available: {', '.join(CHECK_KINDS)}")

        setattr(self.info, kind, True)
        result = {"success": True, "check": kind}
        evidence_kind = CHECK_KINDS[kind]
        if evidence_kind is not None:
            result["report"] = subject.evidence_outputs[evidence_kind]
        elif kind == "identity_scan":
            player_view = subject_to_dict(subject)
            result["dossier"] = player_view["dossier"]
        else:
            result["bio_scan"] = dict(subject.bio_scan_data)
            result["biometrics"] = dict(subject.biometric_data)
        return result

    def available_questions(self) -> list:
        subject = self.current_subject
        if subject is None:
            return []
        return generate_dynamic_questions(subject, self.info)

    def ask(self, question_id: str, tone="firm") -> dict:
        subject = self.current_subject
        if self.phase != Phase.INSPECTING or subject is None:
            return self._error("No subject under inspection")
        if self.questions_asked >= MAX_QUESTIONS:
            return self._error(f"Question limit reached ({MAX_QUESTIONS})")

        self.questions_asked += 1
        tone = coerce_tone(tone)
        response = generate_default_response(subject, question_id, tone)
        reading = calculate_question_bpm(
            subject.base_bpm, question_id, self.questions_asked, subject.bpm_tells,
            rng=question_rng(question_id, self.questions_asked, subject.seed),
        )
        entry = {"question_id": question_id, "tone": tone.value,
                 "response": response, "bpm": reading,
                 "question_number": self.questions_asked}
        self.transcript.append(entry)
        return {"success": True, **entry,
                "questions_remaining": MAX_QUESTIONS - self.questions_asked}

    # ─────────────────────────────────────────────────
    # DECISION
    # ─────────────────────────────────────────────────

    def decide(self, verdict) -> dict:
        subject = self.current_subject
        if self.phase != Phase.INSPECTING or subject is None:
            return self._error("No subject under inspection")
        try:
            verdict = Verdict(str(verdict.value if isinstance(verdict, Verdict) else verdict).upper())
        except ValueError:
            return self._error(f"Unknown verdict '{verdict}'. Use APPROVE or DENY")

        missing = get_missing_required_checks(self.info, subject.required_checks)
        correct = verdict == subject.intended_outcome
        record = {
            "subject": subject.id,
            "verdict": verdict.value,
            "intended": subject.intended_outcome.value,
            "correct": correct,
            "missing_checks": [c.value for c in missing],
            "questions_asked": self.questions_asked,
        }
        self.decisions.append(record)
        self.phase = Phase.DECIDED

        logger.info(f"{subject.id}: {verdict.value} "
                    f"({'correct' if correct else 'wrong'}, intended {record['intended']})")
        self._emit("decision", record)
        return {"success": True, **record}

    def shift_stats(self) -> dict:
        return {
            "approved": sum(1 for d in self.decisions if d["verdict"] == Verdict.APPROVE.value),
            "denied": sum(1 for d in self.decisions if d["verdict"] == Verdict.DENY.value),
            "correct": sum(1 for d in self.decisions if d["correct"]),
            "protocol_breaches": sum(1 for d in self.decisions if d["missing_checks"]),
        }

    # ─────────────────────────────────────────────────
    # STATE FOR UI
    # ─────────────────────────────────────────────────

    def get_full_state(self) -> dict:
        """Player view. No ground truth, no hidden exceptions."""
        subject = self.current_subject
        state = {
            "phase": self.phase.value,
            "shift": self.directive.id if self.directive else None,
            "directive": directive_display(self.directive) if self.directive else [],
            "required_checks": (format_required_checks(self.directive.required_checks)
                                if self.directive else "NONE"),
            "position": self.index + 1 if subject else None,
            "total": len(self.subjects),
            "stats": self.shift_stats(),
            "subject": None,
        }
        if subject is not None:
            view = subject_to_dict(subject)
            state["subject"] = {
                "id": view["id"],
                "name": view["name"],
                "origin": view["origin"],
                "reason_for_visit": view["reason_for_visit"],
                "destination": view["destination"],
                "greeting_text": view["greeting_text"],
                "greeting_bpm": greeting_bpm(subject.bpm_tells),
                "warrant_on_file": subject.warrants != NO_WARRANT if self.info.warrant_check else None,
            }
            state["checks"] = {k: getattr(self.info, k) for k in CHECK_KINDS}
            state["transcript"] = list(self.transcript)
        return state
