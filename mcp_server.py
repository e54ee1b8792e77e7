"""
AMBER Checkpoint v1.0 — MCP Server (Thin Bridge)
Claude Desktop connects to this via stdio. It bridges to the checkpoint HTTP API.

The model's role: read the booth, question subjects, and draft new subject
seeds. It does NOT stamp verdicts or advance the shift.

Tools:
  Booth inspection (read-only):
    get_checkpoint_state  — Shift, directive, current subject summary
    get_subject_file      — Checks run, transcript, available questions
  Interrogation:
    ask_subject           — Ask the current subject one question
  Authoring:
    build_subject         — Build a subject from a seed JSON and show ground truth
"""

import sys
import os
import json

ENGINE_DIR = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, ENGINE_DIR)

from mcp.server.fastmcp import FastMCP

server = FastMCP("amber-checkpoint")

GAME_SERVER = "http://localhost:8000"


def _get(path: str) -> str:
    """HTTP GET to the checkpoint server. Returns response text."""
    import urllib.request
    try:
        url = f"{GAME_SERVER}{path}"
        req = urllib.request.Request(url)
        with urllib.request.urlopen(req, timeout=10) as resp:
            return resp.read().decode("utf-8")
    except Exception as e:
        return json.dumps({"error": f"Checkpoint server unavailable: {e}"})


def _post(path: str, data: dict = None) -> str:
    """HTTP POST to the checkpoint server. Returns response text."""
    import urllib.request
    import urllib.error
    try:
        url = f"{GAME_SERVER}{path}"
        body = json.dumps(data or {}).encode("utf-8")
        req = urllib.request.Request(url, data=body, method="POST")
        req.add_header("Content-Type", "application/json")
        with urllib.request.urlopen(req, timeout=30) as resp:
            return resp.read().decode("utf-8")
    except urllib.error.HTTPError as e:
        # 400s carry a JSON error body worth passing through
        return e.read().decode("utf-8")
    except Exception as e:
        return json.dumps({"error": f"Checkpoint server unavailable: {e}"})


# ─────────────────────────────────────────────────────
# BOOTH INSPECTION (read-only)
# ─────────────────────────────────────────────────────

@server.tool()
def get_checkpoint_state() -> str:
    """
    Get a summary of the booth: active shift, the published directive,
    the subject at the window and the shift tally so far.
    """
    data = json.loads(_get("/api/state"))
    if "error" in data:
        return f"Error: {data['error']}"

    stats = data.get("stats", {})
    lines = [
        f"SHIFT: {data.get('shift') or '—'}",
        f"PHASE: {data.get('phase', '?')}",
        "DIRECTIVE:",
    ]
    for line in data.get("directive", []):
        lines.append(f"  {line}")
    lines.append(f"REQUIRED CHECKS: {data.get('required_checks', 'NONE')}")
    lines.append(f"TALLY: {stats.get('approved', 0)} approved, {stats.get('denied', 0)} denied, "
                 f"{stats.get('correct', 0)} correct")

    subject = data.get("subject")
    if subject:
        lines.append("")
        lines.append(f"SUBJECT {data.get('position')}/{data.get('total')}: "
                     f"{subject['name']} [{subject['id']}]")
        lines.append(f"  From {subject['origin']} to {subject['destination']}")
        lines.append(f"  \"{subject['greeting_text']}\"")
        lines.append(f"  BPM at greeting: {subject['greeting_bpm']}")
    elif data.get("phase") == "shift_complete":
        lines.append("")
        lines.append("Shift complete. No subject at the window.")

    return "\n".join(lines)


@server.tool()
def get_subject_file() -> str:
    """
    Get the working file on the current subject: which checks have been
    run, the interrogation transcript so far, and the questions the
    operator can ask next (by id).
    """
    state = json.loads(_get("/api/state"))
    if "error" in state:
        return f"Error: {state['error']}"
    subject = state.get("subject")
    if not subject:
        return "No subject at the window."

    lines = [f"FILE: {subject['name']} [{subject['id']}]", "", "CHECKS:"]
    for check, done in state.get("checks", {}).items():
        lines.append(f"  [{'x' if done else ' '}] {check}")

    transcript = state.get("transcript", [])
    if transcript:
        lines.append("")
        lines.append("TRANSCRIPT:")
        for entry in transcript:
            lines.append(f"  Q{entry['question_number']} {entry['question_id']} ({entry['tone']}) "
                         f"— {entry['bpm']} BPM")
            lines.append(f"    \"{entry['response']}\"")

    questions = json.loads(_get("/api/subject/questions"))
    lines.append("")
    lines.append("AVAILABLE QUESTIONS:")
    for q in questions.get("questions", []):
        lines.append(f"  {q['id']}: {q['text']}")

    return "\n".join(lines)


# ─────────────────────────────────────────────────────
# INTERROGATION
# ─────────────────────────────────────────────────────

@server.tool()
def ask_subject(question_id: str, tone: str = "firm") -> str:
    """
    Ask the current subject a question by id (see get_subject_file).
    tone is soft, firm or harsh. Each subject answers at most three questions.
    """
    data = json.loads(_post("/api/subject/ask", {"question_id": question_id, "tone": tone}))
    if not data.get("success"):
        return f"Error: {data.get('error', 'Unknown error')}"
    return (f"\"{data['response']}\"\n"
            f"BPM: {data['bpm']} (question {data['question_number']}, "
            f"{data['questions_remaining']} remaining)")


# ─────────────────────────────────────────────────────
# AUTHORING
# ─────────────────────────────────────────────────────

@server.tool()
def build_subject(seed_json: str, shift: str = "") -> str:
    """
    Build a subject from an authored seed and show what the engine makes of it.
    seed_json must be a JSON object with at least:
    {
      "id": "X-01", "seed": 42,
      "subject_type": "HUMAN", "hierarchy_tier": "STANDARD", "origin": "MARS",
      "truth_flags": {"has_warrant": false, "has_transit_issue": true,
                      "has_incident": false, "has_medical_emergency": false}
    }
    shift selects the directive (SHIFT_1..SHIFT_4); blank uses the default.
    """
    try:
        seed = json.loads(seed_json)
    except json.JSONDecodeError as e:
        return f"Error: seed_json is not valid JSON ({e})"

    payload = {"seed": seed}
    if shift:
        payload["shift"] = shift
    data = json.loads(_post("/api/subjects/build", payload))
    if not data.get("success"):
        return f"Error: {data.get('error', 'Unknown error')}"

    subject = data["subject"]
    lines = [
        f"{subject['name']} [{subject['id']}] under {data['directive']['id']}",
        f"  VERDICT: {subject['intended_outcome']}",
        f"  WARRANT: {subject['warrants']}",
        f"  INCIDENTS: {subject['incidents']}",
        "",
    ]
    for kind, report in subject.get("evidence_outputs", {}).items():
        lines.append(f"[{kind}]")
        lines.extend(f"  {line}" for line in report)
    return "\n".join(lines)


if __name__ == "__main__":
    server.run(transport="stdio")
