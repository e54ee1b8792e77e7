"""
AMBER Checkpoint v1.0 — Evidence Templates
Fixed content tables for the evidence synthesizer.

Changing the length of any table changes which entry a given seed draws.
Treat reordering, adding or removing entries as a save-breaking change for
every seeded scenario and snapshot.
"""

EVIDENCE_YEAR = 3184

# (offense, description)
WARRANT_ENTRIES = [
    ("PRIOR THEFT — TRANSIT DOCK 11",
     "Cargo unit reported missing from Dock 11 manifest. Subject identified on "
     "surveillance during unloading window."),
    ("BREACH ASSISTANCE — UNCONFIRMED",
     "Subject linked to unauthorized access event. Evidence suggests role as "
     "facilitator, not primary actor."),
    ("DATA LEAK — ACTIVE INVESTIGATION",
     "Classified personnel files accessed from unauthorized terminal. Subject "
     "credentials used during breach."),
    ("CARGO TAMPERING — OPEN CASE",
     "Seals on restricted cargo found broken. Subject was last recorded handler "
     "before discrepancy detected."),
    ("IDENTITY FRAUD — FLAGGED",
     "Multiple credential sets traced to single biometric. Subject operating "
     "under assumed documentation."),
    ("ASSAULT — TITAN DOCKS INCIDENT",
     "Physical altercation reported at checkpoint. Subject identified by two "
     "witnesses. Medical costs outstanding."),
    ("TRANSIT VIOLATION — REPEATED",
     "Three or more unauthorized crossings logged. Subject bypassed checkpoints "
     "using forged clearance codes."),
    ("CONTRABAND POSSESSION — SUSPECTED",
     "Irregular scan patterns during previous transit. Contents unverified. "
     "Subject flagged for manual inspection."),
    ("OBSTRUCTION — AMBER PROTOCOL",
     "Subject interfered with security procedure. Refused compliance during "
     "routine verification sequence."),
    ("FORGERY — CREDENTIAL FABRICATION",
     "Work permit exhibits irregularities. Issuing authority has no record of "
     "approval. Pending tribunal review."),
]

INCIDENT_DISCREPANCIES = [
    "DESTINATION MISMATCH IN TRANSIT LOG",
    "CREDENTIAL ISSUE DATE INCONSISTENT",
    "BIOMETRIC SIGNATURE OUT OF RANGE",
    "RECENT ENTRY NOT DECLARED",
    "LICENSED EMPLOYER NOT FOUND",
]

# (from, to)
TRANSIT_ROUTES = [
    ("MARS", "EARTH"),
    ("TITAN", "MARS"),
    ("IO", "EUROPA"),
    ("EUROPA", "MARS"),
    ("CERES", "MARS"),
    ("TITAN", "CERES"),
    ("MARS", "LUNA RELAY"),
]

TRANSIT_FLAG_REASONS = [
    "UNAUTHORIZED SECTOR ACCESS",
    "EXPIRED TRANSIT PERMIT",
    "BIOMETRIC MISMATCH AT CHECKPOINT",
    "ROUTE UNDER ACTIVE INVESTIGATION",
    "MISSING TRANSIT CLEARANCE",
    "PREVIOUS INCIDENT ON THIS ROUTE",
    "RESTRICTED ZONE VIOLATION",
    "UNREGISTERED DEPARTURE POINT",
    "TRAVEL PATTERN ANOMALY DETECTED",
    "DESTINATION BLACKLISTED",
]

LAST_SEEN_LOCATIONS = [
    "AMBER CHECKPOINT",
    "LUNA RELAY",
    "MARS ORBITAL TERMINAL",
    "TITAN DOCKS",
]

VERIFICATION_SOURCES = [
    "DEPOT SECURITY",
    "CENTRAL AUTHORITY",
    "TRANSIT OVERSIGHT",
    "MEDICAL REVIEW BOARD",
]

VERIFICATION_SUMMARIES = [
    "Record indicates a mismatch between stated purpose and registry.",
    "File notes unresolved discrepancies in travel history.",
    "Documentation trail is incomplete or inconsistent.",
    "Flag raised by automated screening review.",
]

VERIFICATION_CONTRADICTIONS = [
    "Declared purpose does not match credential usage.",
    "Transit log conflicts with entry date.",
    "Credential issuer not found in registry.",
    "Stated employer denies knowledge of subject.",
]

VERIFICATION_QUESTIONS = [
    "Why does your file show a different purpose than your statement?",
    "Explain the conflict in your transit log.",
    "Why is your credential issuer unregistered?",
    "Who authorized your clearance?",
]
