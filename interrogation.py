"""
AMBER Checkpoint v1.0 — Interrogation
Resolves what a subject says to a question, and which questions the
operator can ask given what has been checked so far.

Response resolution:
  1. subject-specific entry for the question id
       plain string   -> verbatim, tone ignored
       tone-tiered    -> requested tone, then firm, soft, harsh, refusal
  2. canned domain answer keyed by exact question id
  3. neutral fallback for the tone

Always returns a non-empty string.
"""

from models import (
    SubjectData, Tone, ToneTieredResponse, GatheredInformation, NO_WARRANT,
    TellType, SubjectType, HierarchyTier,
)


NEUTRAL_FALLBACKS = {
    Tone.SOFT: "I... I'd rather not say. Is that all right?",
    Tone.FIRM: "I don't have to answer that.",
    Tone.HARSH: "You can shout all you like. I'm not answering that.",
}


def coerce_tone(tone) -> Tone:
    """Tone member or case-insensitive name; anything else counts as firm."""
    if isinstance(tone, Tone):
        return tone
    try:
        return Tone(str(tone).strip().lower())
    except ValueError:
        return Tone.FIRM


# ─────────────────────────────────────────────────────
# CANNED ANSWERS
# ─────────────────────────────────────────────────────

def _occupation(subject: SubjectData) -> str:
    return subject.dossier.occupation.lower() if subject.dossier and subject.dossier.occupation else ""


def _with_article(noun: str) -> str:
    return f"{'an' if noun[:1] in 'aeiou' else 'a'} {noun}"


def _reason(subject: SubjectData) -> str:
    return subject.reason_for_visit or "Personal business."


def _origin(subject):
    return f"I need to get to {subject.destination.title()}. {_reason(subject)}"


def _background(subject):
    job = _occupation(subject)
    if job:
        return f"I'm {_with_article(job)}. That's all you need to know."
    return "That's personal information."


def _identity_occupation(subject):
    job = _occupation(subject)
    if job:
        return f"Yes. I work as {_with_article(job)}. It's on my papers."
    return "My work isn't on file? Then your file is incomplete."


def _identity_address(subject):
    if subject.dossier and subject.dossier.address:
        return f"{subject.dossier.address}. Same as it's always been."
    return "I move around for work. There's no fixed address."


def _memory_test(subject):
    return (f"On {subject.origin.value.title()}? Work, sleep, the queue for the "
            f"shuttle. Nothing worth remembering.")


def _warrant(subject):
    if subject.warrants != NO_WARRANT:
        return "That warrant is a mistake. I've never been charged with anything."
    return "A warrant? There's nothing on me. Check again."


def _transit(subject):
    return "Those trips were for work. Every crossing had clearance at the time."


def _incidents(subject):
    if subject.incidents:
        return "That was a misunderstanding. It was resolved months ago."
    return "There's nothing on my record. Nothing."


CANNED_RESPONSES = {
    # identity
    "origin": _origin,
    "purpose": _reason,
    "duration": lambda s: "As long as necessary. I have valid documentation.",
    "background": _background,
    "previous": lambda s: "Maybe. I don't remember. Why does it matter?",
    "identity-occupation": _identity_occupation,
    "identity-address": _identity_address,
    # bio scan
    "synthetic": lambda s: "I'm as human as you are. Your scanner needs calibrating.",
    "cybernetic": lambda s: "Standard work implants. Everyone on the docks has them.",
    "fingerprint": lambda s: "Industrial burns. I lost the ridges years ago.",
    "surgery": lambda s: "Reconstructive surgery after an accident. It's on my medical file.",
    # records
    "warrant": _warrant,
    "transit": _transit,
    "incidents": _incidents,
    "verification": lambda s: "Whoever filed that report got the details wrong.",
    "cross-reference": lambda s: "I can explain all of it if you give me the time.",
    "specific-finding": lambda s: "That's not what it looks like.",
    # personality / pressure questions
    "nervous-pressure": lambda s: "No! No, I'm just tired. It's been a long trip.",
    "deceptive-catch": lambda s: "I didn't say that. You must have misheard me.",
    "memory-test": _memory_test,
    "authority-challenge": lambda s: "Fine. Ask your questions. Quickly.",
    "emotional-probe": lambda s: "I've told you everything. Please, I just need to get through.",
    "clarity-request": lambda s: f"I am here for this: {_reason(s)}",
    "calm-down": lambda s: "I'm calm. I'm calm. Go on.",
    "force-response": lambda s: "...Fine. What do you want to know?",
    "informal-probe": lambda s: f"Plainly? {_reason(s)} That's it.",
}


# ─────────────────────────────────────────────────────
# RESOLVER
# ─────────────────────────────────────────────────────

def generate_default_response(subject: SubjectData, question_id: str, tone="firm") -> str:
    tone = coerce_tone(tone)

    responses = subject.interrogation_responses
    entry = responses.lookup(question_id) if responses else None
    if isinstance(entry, ToneTieredResponse):
        return entry.resolve(tone)
    if entry:
        return entry

    canned = CANNED_RESPONSES.get(question_id)
    if canned:
        text = canned(subject)
        if text:
            return text

    return NEUTRAL_FALLBACKS[tone]


respond = generate_default_response


# ─────────────────────────────────────────────────────
# QUESTION GENERATION
# ─────────────────────────────────────────────────────

def _question(qid: str, text: str, **requires) -> dict:
    return {"id": qid, "text": text, "requires": sorted(k for k, v in requires.items() if v)}


def _basic_questions(subject: SubjectData) -> list:
    return [
        _question("origin", f"Why are you coming to {subject.destination.title()} "
                            f"from {subject.origin.value.title()}?"),
        _question("purpose", "What is your specific purpose for this visit?"),
        _question("duration", f"How long do you plan to stay on {subject.destination.title()}?"),
        _question("background", "Tell me about your background."),
        _question("previous", f"Have you been to {subject.destination.title()} before?"),
    ]


def _finding_questions(subject: SubjectData, info: GatheredInformation) -> list:
    questions = []
    bio = subject.bio_scan_data or {}

    if info.identity_scan and subject.dossier:
        questions.append(_question(
            "identity-occupation",
            f"The identity scan shows your occupation as {subject.dossier.occupation}. "
            f"Can you verify this?", identity_scan=True))
        questions.append(_question(
            "identity-address",
            f"Your dossier lists your address as {subject.dossier.address}. Is this current?",
            identity_scan=True))

    if info.health_scan:
        if bio.get("biological_type") == "REPLICANT":
            questions.append(_question(
                "synthetic", "The health scan shows synthetic biological markers. "
                             "Can you explain your biological status?", health_scan=True))
        if bio.get("augmentation_level", "NONE") != "NONE":
            questions.append(_question(
                "cybernetic", "The health scan detected cybernetic augmentations. "
                              "What modifications have you undergone?", health_scan=True))
        if not (subject.biometric_data or {}).get("fingerprint_match", True):
            questions.append(_question(
                "fingerprint", "Your fingerprints don't match standard human patterns. "
                               "Can you explain?", health_scan=True))
        if bio.get("biological_type") == "HUMAN_CYBORG":
            questions.append(_question(
                "surgery", "The health scan detected recent surgical modifications. "
                           "What was the procedure for?", health_scan=True))

    if info.warrant_check and subject.warrants != NO_WARRANT:
        questions.append(_question(
            "warrant", f"The system shows an active warrant: {subject.warrants}. Can you explain?",
            warrant_check=True))

    travel = subject.database_query.travel_history if subject.database_query else ()
    if info.transit_log and any(t.flagged for t in travel):
        questions.append(_question(
            "transit", "Your transit log shows flagged travel patterns. Can you explain these trips?",
            transit_log=True))

    if info.incident_history and subject.incidents > 0:
        questions.append(_question(
            "incidents", f"The records show {subject.incidents} incident(s) on file. What happened?",
            incident_history=True))

    record = subject.verification_record
    if record and record.question and (info.warrant_check or info.incident_history):
        questions.append(_question(
            "verification", record.question,
            warrant_check=info.warrant_check, incident_history=info.incident_history))

    return questions


def _collect_findings(subject: SubjectData, info: GatheredInformation) -> list:
    findings = []
    bio = subject.bio_scan_data or {}
    if info.identity_scan and subject.dossier:
        findings.append(f"identity: {subject.dossier.occupation} from {subject.dossier.address}")
    if info.health_scan and bio.get("biological_type") == "REPLICANT":
        findings.append("synthetic biological markers")
    if info.health_scan and bio.get("augmentation_level", "NONE") != "NONE":
        findings.append(f"cybernetic augmentations: {bio['augmentation_level']}")
    if info.warrant_check and subject.warrants != NO_WARRANT:
        findings.append(f"active warrant: {subject.warrants}")
    if info.transit_log and subject.database_query and subject.database_query.discrepancies:
        findings.append("transit log discrepancies")
    if info.incident_history and subject.incidents > 0:
        findings.append(f"{subject.incidents} incident(s) on record")
    return findings


def generate_dynamic_questions(subject: SubjectData, info: GatheredInformation) -> list:
    """
    Three tiers by investigation depth:
      nothing checked  -> basic questions
      some checks      -> one question per finding
      everything       -> a single cross-reference question
    Falls back to "purpose" if nothing applies.
    """
    if not info.has_some():
        return _basic_questions(subject)

    if not info.has_all():
        questions = _finding_questions(subject, info)
    else:
        questions = []
        findings = _collect_findings(subject, info)
        if len(findings) > 1:
            joined = ", ".join(findings[:-1]) + ", and " + findings[-1]
            questions.append(_question(
                "cross-reference",
                f"Your scans and records show {joined}. Explain these inconsistencies.",
                identity_scan=True, health_scan=True, warrant_check=True,
                transit_log=True, incident_history=True))
        elif findings:
            lead = "The system shows" if "warrant" in findings[0] else "The scan shows"
            questions.append(_question(
                "specific-finding", f"{lead} {findings[0]}. Can you explain this?",
                identity_scan=True, health_scan=True, warrant_check=True,
                transit_log=True, incident_history=True))

    seen = {q["id"] for q in questions}
    questions.extend(q for q in _pressure_questions(subject) if q["id"] not in seen)

    if not questions:
        questions.append(_question("purpose", "What is your specific purpose for this visit?"))
    return questions


def _pressure_questions(subject: SubjectData) -> list:
    """Pressure questions aimed at the subject's behavior rather than records."""
    questions = []
    tell_type = subject.bpm_tells.type if subject.bpm_tells else None
    if tell_type == TellType.CONTRADICTION:
        questions.append(_question(
            "nervous-pressure", "You seem uneasy. Is there something you're not telling me?"))
    elif tell_type == TellType.FALSE_NEGATIVE:
        questions.append(_question(
            "deceptive-catch", "That doesn't match what you said earlier. Explain the discrepancy."))
    elif tell_type == TellType.FALSE_POSITIVE:
        questions.append(_question(
            "emotional-probe", "I understand this is urgent for you. But I need truthful "
                               "answers. What aren't you telling me?"))
    if subject.subject_type == SubjectType.REPLICANT:
        questions.append(_question(
            "memory-test", f"Describe your last week on {subject.origin.value.title()}. "
                           f"Specific details, please."))
    if subject.hierarchy_tier == HierarchyTier.VIP:
        questions.append(_question(
            "authority-challenge", "Your status doesn't exempt you from standard verification. "
                                   "Cooperate or face detention."))
    return questions
