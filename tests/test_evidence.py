import re

import pytest

from models import (
    TruthFlags, EvidenceKind, DatabaseQuery, TravelEntry, VerificationType, NO_WARRANT,
)
from evidence import (
    create_subject_evidence, build_outputs, verification_type_for, synthesize,
)
from evidence_templates import WARRANT_ENTRIES, INCIDENT_DISCREPANCIES, TRANSIT_FLAG_REASONS

ALL_FLAGS = [
    TruthFlags(has_warrant=w, has_transit_issue=t, has_incident=i)
    for w in (False, True) for t in (False, True) for i in (False, True)
]


def test_seed_42_transit_issue_only(make_seed):
    evidence = create_subject_evidence(make_seed(seed=42, truth_flags=TruthFlags(has_transit_issue=True)))

    assert evidence.warrants == NO_WARRANT
    assert not evidence.has_warrant
    assert evidence.incidents == 0
    assert 1 <= len(evidence.database_query.travel_history) <= 4
    assert len(evidence.flagged_entries()) >= 1
    assert evidence.database_query.discrepancies == ()
    assert evidence.verification_record is None
    assert "RESULT: CLEAR" in evidence.outputs[EvidenceKind.WARRANT]


def test_same_seed_same_evidence(make_seed):
    seed = make_seed(seed=1187, truth_flags=TruthFlags(True, True, True))
    assert create_subject_evidence(seed) == create_subject_evidence(seed)


def test_synthesize_alias(make_seed):
    seed = make_seed(seed=9)
    assert synthesize(seed) == create_subject_evidence(seed)


@pytest.mark.parametrize("flags", ALL_FLAGS)
def test_evidence_explained_by_flags(make_seed, flags):
    offenses = {offense for offense, _ in WARRANT_ENTRIES}
    for n in range(150):
        evidence = create_subject_evidence(make_seed(seed=n, truth_flags=flags))
        travel = evidence.database_query.travel_history

        assert 1 <= len(travel) <= 4
        if flags.has_transit_issue:
            assert evidence.flagged_entries()
            assert all(t.flag_note in TRANSIT_FLAG_REASONS for t in evidence.flagged_entries())
        else:
            assert not evidence.flagged_entries()

        if flags.has_warrant:
            assert evidence.warrants in offenses
            assert evidence.warrant_description
        else:
            assert evidence.warrants == NO_WARRANT
            assert evidence.warrant_description is None

        discrepancies = evidence.database_query.discrepancies
        if flags.has_incident:
            assert 1 <= evidence.incidents <= 3
            assert 1 <= len(discrepancies) <= 3
            assert len(set(discrepancies)) == len(discrepancies)
            assert set(discrepancies) <= set(INCIDENT_DISCREPANCIES)
        else:
            assert evidence.incidents == 0
            assert discrepancies == ()

        has_record = flags.has_warrant or flags.has_incident
        assert (evidence.verification_record is not None) == has_record


def test_dates_are_in_evidence_year(make_seed):
    evidence = create_subject_evidence(make_seed(seed=77, truth_flags=TruthFlags(True, True, True)))
    dates = [t.date for t in evidence.database_query.travel_history]
    dates.append(evidence.database_query.last_seen_date)
    dates.append(evidence.verification_record.date)
    for date in dates:
        assert re.fullmatch(r"3184-(0[1-9]|1[0-2])-(0[1-9]|1\d|2[0-8])", date)


def test_verification_reference_format(make_seed):
    evidence = create_subject_evidence(make_seed(seed=5, truth_flags=TruthFlags(has_warrant=True)))
    record = evidence.verification_record
    assert record.type == VerificationType.WARRANT
    assert re.fullmatch(r"VR-\d{4}-WAR", record.reference_id)


def test_verification_type_selection():
    assert verification_type_for(TruthFlags(has_warrant=True)) == VerificationType.WARRANT
    assert verification_type_for(TruthFlags(has_incident=True)) == VerificationType.INCIDENT
    assert verification_type_for(
        TruthFlags(has_incident=True, has_transit_issue=True)) == VerificationType.TRANSIT


def _travel(n, flagged=0):
    return tuple(TravelEntry("MARS", "EARTH", f"3184-01-0{i + 1}", i < flagged) for i in range(n))


def test_transit_report_trailer_counts_hidden_lines():
    lines = build_outputs("X", NO_WARRANT, 0, DatabaseQuery(travel_history=_travel(4, flagged=2)))
    transit = lines[EvidenceKind.TRANSIT]
    assert "ALERT: 2 FLAGGED" in transit
    assert "... 1 MORE" in transit
    assert sum(1 for line in transit if "->" in line) == 3


def test_transit_report_short_log():
    transit = build_outputs("X", NO_WARRANT, 0, DatabaseQuery(travel_history=_travel(2)))[EvidenceKind.TRANSIT]
    assert "ALERT: CLEAR" in transit
    assert "... END OF LOG" in transit


def test_incident_report_lines():
    query = DatabaseQuery(travel_history=_travel(1), discrepancies=("a", "b"))
    incident = build_outputs("X", NO_WARRANT, 2, query)[EvidenceKind.INCIDENT]
    assert incident[3:5] == ["ENTRY 1: a", "ENTRY 2: b"]
    assert "... END OF RECORD" in incident


def test_warrant_report_active():
    warrant = build_outputs("S-9", "IDENTITY FRAUD — FLAGGED", 1,
                            DatabaseQuery(travel_history=_travel(1)))[EvidenceKind.WARRANT]
    assert warrant[1] == "SUBJECT: S-9"
    assert "RESULT: ACTIVE WARRANT" in warrant
    assert "DETAIL: IDENTITY FRAUD — FLAGGED" in warrant
    assert warrant[-1] == "EXTRACT COMPLETE"
