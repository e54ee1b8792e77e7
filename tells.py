"""
AMBER Checkpoint v1.0 — Behavioral Tell Simulator
Per-question BPM reading for the biometric display.

Each call is an independent sample. Nothing is carried between questions
except what the caller passes in (question_number).
"""

from models import BpmTells, TellType
from rng import SeededRandom

BPM_MIN = 40
BPM_MAX = 150
BASE_BPM = 72

GOOD_LIAR_SUPPRESSION = -15
GENUINE_STRESS_BOOST = 10
CONTRADICTION_BOOST = 20
HIGH_STRESS_BOOST = 10

HIGH_STRESS_KEYWORDS = ("synthetic", "replicant", "surgery", "fingerprint")


def tell_modifier(tells: BpmTells = None) -> int:
    """Static bias from the subject's tell configuration."""
    if tells is None:
        return 0
    modifier = tells.base_elevation or 0
    if tells.type == TellType.FALSE_NEGATIVE:
        if tells.is_good_liar:
            modifier += GOOD_LIAR_SUPPRESSION
    elif tells.type == TellType.FALSE_POSITIVE:
        if tells.is_genuinely_stressed:
            modifier += GENUINE_STRESS_BOOST
    elif tells.type == TellType.CONTRADICTION:
        modifier += CONTRADICTION_BOOST
    return modifier


def is_high_stress_question(question_id: str) -> bool:
    qid = question_id.lower()
    return any(word in qid for word in HIGH_STRESS_KEYWORDS)


def question_rng(question_id: str, question_number: int, subject_seed=None) -> SeededRandom:
    """Generator for one reading. Same inputs, same reading."""
    key = f"{subject_seed}:{question_id}:{question_number}"
    return SeededRandom(key)


def calculate_question_bpm(base_bpm: int, question_id: str, question_number: int,
                           tells: BpmTells = None, rng: SeededRandom = None) -> int:
    """
    Reading for the Nth question asked, clamped to [40, 150].
      elevation = 5 + 5*N + noise[0, 10)
      +10 on high-stress topics
    """
    if rng is None:
        rng = question_rng(question_id, question_number)

    elevation = 5 + 5 * question_number + rng.int(0, 9)
    if is_high_stress_question(question_id):
        elevation += HIGH_STRESS_BOOST

    reading = base_bpm + tell_modifier(tells) + elevation
    return max(BPM_MIN, min(BPM_MAX, reading))


bpm = calculate_question_bpm


def greeting_bpm(tells: BpmTells = None, greeting_modifier: int = 0) -> int:
    """Resting reading shown while the subject greets the operator."""
    elevation = tells.base_elevation if tells else 0
    reading = BASE_BPM + greeting_modifier + elevation // 2
    return max(BPM_MIN, min(BPM_MAX, reading))
