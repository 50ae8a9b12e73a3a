"""Prompt templates grounded on the site owner's resume profile."""

from __future__ import annotations

import re
from pathlib import Path


OWNER_NAME = "Harshal"


def _load_profile_text(name: str = "profile.txt") -> str:
    """Load the resume profile shipped next to this module."""
    path = Path(__file__).with_name(name)
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return ""


PROFILE = _load_profile_text()

RESUME_SYSTEM_INSTRUCTION = """You are an expert technical recruiter. Analyze the resume against the JD strictly.
Return ONLY a JSON response matching this schema:
{
  "match_score": Number (0-100),
  "key_strengths": [String],
  "missing_critical_skills": [String],
  "verdict": "1-sentence summary",
  "growth_plan": "Short encouraging sentence if score < 60, else null"
}"""

_CODE_FENCE = re.compile(r"```(?:json)?")


def build_chat_prompt(question: str, profile: str = PROFILE) -> str:
    return (
        f"You are {OWNER_NAME}'s AI Portfolio Assistant. Answer the following question "
        f"based strictly on {OWNER_NAME}'s profile below.\n\n"
        f"Profile:\n{profile}\n\n"
        f'User Question: "{question}"\n\n'
        "Guidelines:\n"
        "- Be professional, enthusiastic, and concise.\n"
        "- Highlight his hands-on experience with Oracle Cloud, secure Docker networking, "
        "and AI Ops if relevant.\n"
        f"- Use '{OWNER_NAME}' or 'He' when referring to him.\n"
    )


def build_resume_prompt(job_description: str, profile: str = PROFILE) -> str:
    return (
        f"{RESUME_SYSTEM_INSTRUCTION}\n"
        f"RESUME: {profile}\n"
        f"JOB DESCRIPTION: {job_description}\n"
    )


def strip_code_fences(text: str) -> str:
    """Drop Markdown code fences a model may wrap around JSON output."""
    return _CODE_FENCE.sub("", text).strip()


__all__ = [
    "PROFILE",
    "build_chat_prompt",
    "build_resume_prompt",
    "strip_code_fences",
]
