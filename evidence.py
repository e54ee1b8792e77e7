"""
AMBER Checkpoint v1.0 — Evidence Synthesizer
Turns a subject seed + truth flags into a frozen evidence bundle.

Draw order on the subject's generator (do not reorder):
  1. warrant entry            (has_warrant)
  2. incident count 1-3       (has_incident)
  3. travel history           count 1-4; per entry: route, date, flag roll
                              + note (has_transit_issue); then repair pass
  4. discrepancies            count 1-3, sampled without replacement (has_incident)
  5. last seen location + date
  6. verification record      (has_incident or has_warrant)

Report text is built last from the bundle and draws nothing.
"""

import logging

from models import (
    SubjectSeed, SubjectEvidence, TravelEntry, DatabaseQuery,
    VerificationRecord, VerificationType, EvidenceKind, NO_WARRANT,
)
from rng import SeededRandom
from evidence_templates import (
    EVIDENCE_YEAR, WARRANT_ENTRIES, INCIDENT_DISCREPANCIES, TRANSIT_ROUTES,
    TRANSIT_FLAG_REASONS, LAST_SEEN_LOCATIONS, VERIFICATION_SOURCES,
    VERIFICATION_SUMMARIES, VERIFICATION_CONTRADICTIONS, VERIFICATION_QUESTIONS,
)

logger = logging.getLogger("amber.evidence")

VISIBLE_LINES = 3
FLAG_PROBABILITY = 0.5


# ─────────────────────────────────────────────────────
# DRAW HELPERS
# ─────────────────────────────────────────────────────

def format_date(rng: SeededRandom) -> str:
    month = rng.int(1, 12)
    day = rng.int(1, 28)
    return f"{EVIDENCE_YEAR}-{month:02d}-{day:02d}"


def build_travel_history(rng: SeededRandom, has_transit_issue: bool) -> list:
    """
    1-4 entries. With a transit issue each entry is flagged on a coin flip;
    if none came up flagged, the first one is forced so the issue always
    shows on the log.
    """
    entries = []
    count = rng.int(1, 4)
    for _ in range(count):
        origin, destination = rng.pick(TRANSIT_ROUTES)
        date = format_date(rng)
        flagged = has_transit_issue and rng.bool(FLAG_PROBABILITY)
        note = rng.pick(TRANSIT_FLAG_REASONS) if flagged else None
        entries.append(TravelEntry(origin, destination, date, flagged, note))

    if has_transit_issue and not any(e.flagged for e in entries):
        first = entries[0]
        entries[0] = TravelEntry(first.from_location, first.to_location, first.date,
                                 True, rng.pick(TRANSIT_FLAG_REASONS))
        logger.debug("Transit issue with no flagged entry; flagged first entry")

    return entries


def build_verification_record(rng: SeededRandom, record_type: VerificationType) -> VerificationRecord:
    date = format_date(rng)
    number = rng.int(1000, 9999)
    return VerificationRecord(
        type=record_type,
        date=date,
        reference_id=f"VR-{number}-{record_type.value[:3]}",
        source=rng.pick(VERIFICATION_SOURCES),
        summary=rng.pick(VERIFICATION_SUMMARIES),
        contradiction=rng.pick(VERIFICATION_CONTRADICTIONS),
        question=rng.pick(VERIFICATION_QUESTIONS),
    )


def verification_type_for(flags) -> VerificationType:
    if flags.has_incident:
        return VerificationType.TRANSIT if flags.has_transit_issue else VerificationType.INCIDENT
    return VerificationType.WARRANT


# ─────────────────────────────────────────────────────
# REPORT TEXT
# ─────────────────────────────────────────────────────

def _trailer(items: list, end_text: str) -> str:
    hidden = len(items) - VISIBLE_LINES
    return f"... {hidden} MORE" if hidden > 0 else end_text


def build_outputs(subject_id: str, warrants: str, incidents: int, query: DatabaseQuery) -> dict:
    """Three fixed-shape report blocks, one per evidence kind."""
    has_warrant = warrants != NO_WARRANT
    warrant_lines = [
        "AMBER DB / WARRANT INDEX",
        f"SUBJECT: {subject_id}",
        f"RESULT: {'ACTIVE WARRANT' if has_warrant else 'CLEAR'}",
        f"DETAIL: {warrants if has_warrant else NO_WARRANT}",
        f"INCIDENT COUNT: {incidents}",
        "EXTRACT COMPLETE",
    ]

    travel = list(query.travel_history)
    flagged = sum(1 for t in travel if t.flagged)
    transit_lines = [
        "AMBER DB / TRANSIT LOG",
        f"SUBJECT: {subject_id}",
        f"RECORDS: {len(travel)}",
        f"ALERT: {flagged} FLAGGED" if flagged else "ALERT: CLEAR",
    ]
    for t in travel[:VISIBLE_LINES]:
        mark = " [FLAGGED]" if t.flagged else ""
        transit_lines.append(f"{t.date}: {t.from_location} -> {t.to_location}{mark}")
    transit_lines.append(_trailer(travel, "... END OF LOG"))
    transit_lines.append("EXTRACT COMPLETE")

    discrepancies = list(query.discrepancies)
    incident_lines = [
        "AMBER DB / INCIDENT RECORD",
        f"SUBJECT: {subject_id}",
        f"ON FILE: {incidents}",
    ]
    for i, entry in enumerate(discrepancies[:VISIBLE_LINES], 1):
        incident_lines.append(f"ENTRY {i}: {entry}")
    incident_lines.append(_trailer(discrepancies, "... END OF RECORD"))
    incident_lines.append("EXTRACT COMPLETE")

    return {
        EvidenceKind.WARRANT: warrant_lines,
        EvidenceKind.TRANSIT: transit_lines,
        EvidenceKind.INCIDENT: incident_lines,
    }


# ─────────────────────────────────────────────────────
# SYNTHESIS
# ─────────────────────────────────────────────────────

def create_subject_evidence(seed: SubjectSeed) -> SubjectEvidence:
    """Build the evidence bundle for one subject. Pure function of the seed."""
    rng = SeededRandom(seed.seed)
    flags = seed.truth_flags

    warrant_entry = rng.pick(WARRANT_ENTRIES) if flags.has_warrant else None
    warrants = warrant_entry[0] if warrant_entry else NO_WARRANT
    incidents = rng.int(1, 3) if flags.has_incident else 0
    travel_history = build_travel_history(rng, flags.has_transit_issue)
    discrepancies = []
    if flags.has_incident:
        discrepancies = rng.pick_many(INCIDENT_DISCREPANCIES, rng.int(1, 3))

    query = DatabaseQuery(
        travel_history=tuple(travel_history),
        last_seen_location=rng.pick(LAST_SEEN_LOCATIONS),
        last_seen_date=format_date(rng),
        discrepancies=tuple(discrepancies),
    )

    record = None
    if flags.has_incident or flags.has_warrant:
        record = build_verification_record(rng, verification_type_for(flags))

    evidence = SubjectEvidence(
        warrants=warrants,
        incidents=incidents,
        database_query=query,
        warrant_description=warrant_entry[1] if warrant_entry else None,
        verification_record=record,
        outputs=build_outputs(seed.id, warrants, incidents, query),
    )

    logger.debug(f"Evidence {seed.id} (seed {seed.seed}): warrant={warrants}, "
                 f"incidents={incidents}, travel={len(travel_history)}, "
                 f"flagged={len(evidence.flagged_entries())}, draws={rng.draws}")
    return evidence


synthesize = create_subject_evidence
