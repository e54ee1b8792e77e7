"""
AMBER Checkpoint v1.0 — Data Models
Core data structures for subjects, directives and evidence.

Closed enumerations are str Enums: parsing a value outside the set raises
ValueError, which means a content bug upstream. Everything downstream of
parsing works on enum members only.

SubjectEvidence is frozen once generated. SubjectData is the enriched record
the presentation layer consumes.
"""

import json
from dataclasses import dataclass, field, asdict
from typing import Optional, Union
from enum import Enum


# ─────────────────────────────────────────────────────
# ENUMS
# ─────────────────────────────────────────────────────

class SubjectType(str, Enum):
    HUMAN = "HUMAN"
    HUMAN_CYBORG = "HUMAN_CYBORG"
    ROBOT_CYBORG = "ROBOT_CYBORG"
    REPLICANT = "REPLICANT"
    PLASTIC_SURGERY = "PLASTIC_SURGERY"
    AMPUTEE = "AMPUTEE"


class HierarchyTier(str, Enum):
    LOWER = "LOWER"
    STANDARD = "STANDARD"
    UPPER = "UPPER"
    VIP = "VIP"


class OriginWorld(str, Enum):
    EARTH = "EARTH"
    MARS = "MARS"
    TITAN = "TITAN"
    IO = "IO"
    EUROPA = "EUROPA"
    CERES = "CERES"


class SubjectRole(str, Enum):
    ENGINEER = "ENGINEER"
    MEDICAL = "MEDICAL"
    SECURITY = "SECURITY"
    DIPLOMAT = "DIPLOMAT"
    CIVILIAN = "CIVILIAN"


class ExceptionTag(str, Enum):
    """Scenario-author overrides that force an exception regardless of type."""
    CYBORG_OVERRIDE = "CYBORG_OVERRIDE"
    DIPLOMAT = "DIPLOMAT"
    EMERGENCY = "EMERGENCY"
    SEALED = "SEALED"
    VIP_OVERRIDE = "VIP_OVERRIDE"


class DirectiveCondition(str, Enum):
    WARRANTS = "WARRANTS"
    REPLICANTS = "REPLICANTS"
    SYNTHETICS = "SYNTHETICS"
    ENGINEERS = "ENGINEERS"
    TITAN_ORIGIN = "TITAN_ORIGIN"
    IO_ORIGIN = "IO_ORIGIN"
    NON_HUMANS = "NON_HUMANS"
    ALL = "ALL"


class ExceptionType(str, Enum):
    HUMANS = "HUMANS"
    VIP = "VIP"
    MEDICAL = "MEDICAL"
    EARTH_ORIGIN = "EARTH_ORIGIN"
    CYBORG = "CYBORG"
    DIPLOMAT = "DIPLOMAT"
    EMERGENCY = "EMERGENCY"


class Verdict(str, Enum):
    APPROVE = "APPROVE"
    DENY = "DENY"


class TellType(str, Enum):
    FALSE_NEGATIVE = "FALSE_NEGATIVE"    # good liar, reading stays calm
    FALSE_POSITIVE = "FALSE_POSITIVE"    # innocent stress, reading spikes
    CONTRADICTION = "CONTRADICTION"      # claims calm, instrument disagrees
    NORMAL = "NORMAL"


class Tone(str, Enum):
    SOFT = "soft"
    FIRM = "firm"
    HARSH = "harsh"


class EvidenceKind(str, Enum):
    WARRANT = "WARRANT"
    TRANSIT = "TRANSIT"
    INCIDENT = "INCIDENT"


class VerificationType(str, Enum):
    INCIDENT = "INCIDENT"
    WARRANT = "WARRANT"
    TRANSIT = "TRANSIT"


class RequiredCheck(str, Enum):
    DATABASE = "DATABASE"
    WARRANT = "WARRANT"
    TRANSIT = "TRANSIT"
    INCIDENT = "INCIDENT"


NO_WARRANT = "NONE"
REFUSAL = "I don't have to answer that."


# ─────────────────────────────────────────────────────
# SUBJECT INPUT
# ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class TruthFlags:
    """Ground truth. Every generated evidence item must be explainable by these."""
    has_warrant: bool = False
    has_transit_issue: bool = False
    has_incident: bool = False
    has_medical_emergency: bool = False


@dataclass
class Dossier:
    name: str = ""
    date_of_birth: str = ""             # YYYY-MM-DD
    address: str = ""
    occupation: str = ""
    sex: str = "UNKNOWN"                # MALE, FEMALE, UNKNOWN


@dataclass(frozen=True)
class BpmTells:
    """Behavioral bias on the biometric reading. Read-only."""
    type: Optional[TellType] = None
    description: str = ""
    base_elevation: int = 0             # 0-30
    is_good_liar: bool = False
    is_genuinely_stressed: bool = False


@dataclass(frozen=True)
class ToneTieredResponse:
    """
    A response that may supply any subset of the three tones.
    resolve() walks requested -> firm -> soft -> harsh -> refusal.
    """
    soft: Optional[str] = None
    firm: Optional[str] = None
    harsh: Optional[str] = None

    FALLBACK_ORDER = (Tone.FIRM, Tone.SOFT, Tone.HARSH)

    def get(self, tone: Tone) -> Optional[str]:
        return getattr(self, tone.value)

    def resolve(self, tone: Tone = Tone.FIRM) -> str:
        for candidate in (tone,) + self.FALLBACK_ORDER:
            text = self.get(candidate)
            if text:
                return text
        return REFUSAL


InterrogationResponse = Union[str, ToneTieredResponse]


@dataclass
class InterrogationResponses:
    """Per-subject question id -> canned line or tone-tiered lines."""
    responses: dict = field(default_factory=dict)

    def lookup(self, question_id: str) -> Optional[InterrogationResponse]:
        return self.responses.get(question_id)


@dataclass(frozen=True)
class SubjectSeed:
    """One subject before enrichment. Immutable."""
    id: str
    seed: int
    subject_type: SubjectType
    hierarchy_tier: HierarchyTier
    origin: OriginWorld
    truth_flags: TruthFlags = field(default_factory=TruthFlags)
    name: str = ""
    sex: str = "M"                      # M, F, X
    role: Optional[SubjectRole] = None
    reason_for_visit: str = ""
    dossier: Optional[Dossier] = None
    exception_tags: tuple = ()          # of ExceptionTag
    destination: str = "EARTH"
    greeting_text: str = ""
    bpm_tells: Optional[BpmTells] = None
    interrogation_responses: Optional[InterrogationResponses] = None


# ─────────────────────────────────────────────────────
# DIRECTIVE
# ─────────────────────────────────────────────────────

@dataclass
class DirectiveRule:
    """The administrative rule active for a shift."""
    id: str
    base: DirectiveCondition
    exceptions: list = field(default_factory=list)          # declared, player-visible
    hidden_exceptions: list = field(default_factory=list)   # withheld from UI
    required_checks: list = field(default_factory=list)     # of RequiredCheck
    text: list = field(default_factory=list)


@dataclass(frozen=True)
class DirectiveEvaluation:
    """Verdict plus the exceptions that applied, split by visibility."""
    intended_outcome: Verdict
    declared_exceptions: tuple = ()
    hidden_exceptions: tuple = ()

    @property
    def matched_exceptions(self) -> list:
        """Declared then hidden. Not safe to show the player as-is."""
        return list(self.declared_exceptions) + list(self.hidden_exceptions)


# ─────────────────────────────────────────────────────
# EVIDENCE
# ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class TravelEntry:
    from_location: str
    to_location: str
    date: str
    flagged: bool = False
    flag_note: Optional[str] = None


@dataclass(frozen=True)
class DatabaseQuery:
    travel_history: tuple = ()          # of TravelEntry
    last_seen_location: str = ""
    last_seen_date: str = ""
    discrepancies: tuple = ()


@dataclass(frozen=True)
class VerificationRecord:
    type: VerificationType
    date: str
    reference_id: str
    source: str
    summary: str
    contradiction: str
    question: Optional[str] = None


@dataclass(frozen=True)
class SubjectEvidence:
    warrants: str                       # detail or NO_WARRANT
    incidents: int
    database_query: DatabaseQuery
    warrant_description: Optional[str] = None
    verification_record: Optional[VerificationRecord] = None
    outputs: dict = field(default_factory=dict)  # EvidenceKind -> list[str]

    @property
    def has_warrant(self) -> bool:
        return self.warrants != NO_WARRANT

    def flagged_entries(self) -> list:
        return [t for t in self.database_query.travel_history if t.flagged]


# ─────────────────────────────────────────────────────
# GATHERED INFORMATION (what the operator has checked so far)
# ─────────────────────────────────────────────────────

@dataclass
class GatheredInformation:
    identity_scan: bool = False
    health_scan: bool = False
    warrant_check: bool = False
    transit_log: bool = False
    incident_history: bool = False

    def has_some(self) -> bool:
        return any(asdict(self).values())

    def has_all(self) -> bool:
        return all(asdict(self).values())


# ─────────────────────────────────────────────────────
# ENRICHED SUBJECT
# ─────────────────────────────────────────────────────

@dataclass
class SubjectData:
    """Factory base record, enriched by the director."""

    # Identity
    name: str
    id: str
    sex: str
    subject_type: SubjectType
    hierarchy_tier: HierarchyTier
    origin: OriginWorld
    role: Optional[SubjectRole] = None

    # Request
    reason_for_visit: str = ""
    destination: str = "EARTH"
    greeting_text: str = ""

    # Factory-generated detail
    dossier: Optional[Dossier] = None
    base_bpm: int = 72
    biometric_data: dict = field(default_factory=dict)
    bio_scan_data: dict = field(default_factory=dict)
    use_procedural_portrait: bool = False

    # Behavior
    bpm_tells: Optional[BpmTells] = None
    interrogation_responses: Optional[InterrogationResponses] = None

    # Evidence (director)
    warrants: str = NO_WARRANT
    warrant_description: Optional[str] = None
    incidents: int = 0
    database_query: Optional[DatabaseQuery] = None
    verification_record: Optional[VerificationRecord] = None
    evidence_outputs: dict = field(default_factory=dict)

    # Ground truth (director)
    intended_outcome: Optional[Verdict] = None
    required_checks: list = field(default_factory=list)
    truth_flags: Optional[TruthFlags] = None
    exception_tags: list = field(default_factory=list)
    seed: Optional[int] = None


# ─────────────────────────────────────────────────────
# SERIALIZATION
# ─────────────────────────────────────────────────────

def _plain(value):
    """asdict() output -> JSON-friendly (enums to values, tuples to lists)."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {_plain(k): _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


def evidence_to_dict(evidence: SubjectEvidence) -> dict:
    return _plain(asdict(evidence))


def directive_to_dict(directive: DirectiveRule, include_hidden: bool = False) -> dict:
    data = _plain(asdict(directive))
    if not include_hidden:
        data.pop("hidden_exceptions", None)
    return data


def subject_to_dict(subject: SubjectData, include_truth: bool = False) -> dict:
    """
    Serialize a subject for the presentation layer.
    Ground truth (intended outcome, truth flags, exception tags) is only
    included on request; the player view never gets it.
    """
    data = _plain(asdict(subject))
    responses = data.pop("interrogation_responses", None)
    data["has_custom_responses"] = bool(responses and responses.get("responses"))
    if not include_truth:
        for key in ("intended_outcome", "truth_flags", "exception_tags", "bpm_tells"):
            data.pop(key, None)
    return data


def subject_to_json(subject: SubjectData, include_truth: bool = False) -> str:
    return json.dumps(subject_to_dict(subject, include_truth), indent=2, ensure_ascii=False)


def directive_from_dict(data: dict) -> DirectiveRule:
    """Parse a directive. Raises ValueError on values outside the closed sets."""
    base = DirectiveCondition(data["base"])
    return DirectiveRule(
        id=data.get("id", f"CUSTOM_{base.value}"),
        base=base,
        exceptions=[ExceptionType(e) for e in data.get("exceptions", [])],
        hidden_exceptions=[ExceptionType(e) for e in data.get("hidden_exceptions", [])],
        required_checks=[RequiredCheck(c) for c in data.get("required_checks", [])],
        text=list(data.get("text", [])),
    )


def _responses_from_dict(data: dict) -> InterrogationResponses:
    responses = {}
    for qid, entry in data.items():
        if isinstance(entry, dict):
            responses[qid] = ToneTieredResponse(
                soft=entry.get("soft"), firm=entry.get("firm"), harsh=entry.get("harsh"),
            )
        else:
            responses[qid] = str(entry)
    return InterrogationResponses(responses=responses)


def _flag(flags: dict, key: str, section: str = "truth_flags") -> bool:
    """Flags must be real booleans; "false" is not False."""
    value = flags.get(key, False)
    if not isinstance(value, bool):
        raise ValueError(f"{section}.{key} must be true or false, got {value!r}")
    return value


def _section(data: dict, key: str, default=None):
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, dict):
        raise ValueError(f"{key} must be an object, got {value!r}")
    return value


def seed_from_dict(data: dict) -> SubjectSeed:
    """Parse a subject seed. Raises ValueError/KeyError on malformed content."""
    flags = _section(data, "truth_flags", {})
    tells = _section(data, "bpm_tells")
    dossier = _section(data, "dossier")
    responses = _section(data, "interrogation_responses")
    return SubjectSeed(
        id=data["id"],
        seed=int(data["seed"]),
        subject_type=SubjectType(data["subject_type"]),
        hierarchy_tier=HierarchyTier(data["hierarchy_tier"]),
        origin=OriginWorld(data["origin"]),
        truth_flags=TruthFlags(
            has_warrant=_flag(flags, "has_warrant"),
            has_transit_issue=_flag(flags, "has_transit_issue"),
            has_incident=_flag(flags, "has_incident"),
            has_medical_emergency=_flag(flags, "has_medical_emergency"),
        ),
        name=data.get("name", ""),
        sex=data.get("sex", "M"),
        role=SubjectRole(data["role"]) if data.get("role") else None,
        reason_for_visit=data.get("reason_for_visit", ""),
        dossier=Dossier(**dossier) if dossier else None,
        exception_tags=tuple(ExceptionTag(t) for t in data.get("exception_tags", [])),
        destination=data.get("destination", "EARTH"),
        greeting_text=data.get("greeting_text", ""),
        bpm_tells=BpmTells(
            type=TellType(tells["type"]) if tells.get("type") else None,
            description=tells.get("description", ""),
            base_elevation=int(tells.get("base_elevation", 0)),
            is_good_liar=_flag(tells, "is_good_liar", "bpm_tells"),
            is_genuinely_stressed=_flag(tells, "is_genuinely_stressed", "bpm_tells"),
        ) if tells else None,
        interrogation_responses=_responses_from_dict(responses) if responses else None,
    )
