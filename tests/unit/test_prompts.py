# tests/unit/test_prompts.py
import pytest

from interviewprep_router.core.fallback import GENERAL, INTERVIEWS, PYTHON_ALGOS, REACT_JS, fallback_reply
from interviewprep_router.core.prompts import auto_category_for_messages, system_prompt_for


def _user(text):
    return [{"role": "user", "content": text}]


def test_explicit_category_wins():
    assert auto_category_for_messages(_user("fix my bug"), explicit="career_advice") == "career_advice"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("I get an exception in my code", "coding_help"),
        ("How do I prepare for a behavioral interview?", "interview_prep"),
        ("Should I accept this job offer?", "career_advice"),
        ("What is the time complexity of heapsort?", "technical_questions"),
        ("Hello there", "general"),
    ],
)
def test_auto_category(text, expected):
    assert auto_category_for_messages(_user(text), explicit="auto") == expected


def test_auto_ignores_assistant_text():
    msgs = [
        {"role": "assistant", "content": "Any interview questions?"},
        {"role": "user", "content": "Hello"},
    ]
    assert auto_category_for_messages(msgs, explicit=None) == "general"


def test_system_prompt_unknown_category_is_general():
    prompts = {"general": "G", "coding_help": "C"}
    assert system_prompt_for("coding_help", prompts) == "C"
    assert system_prompt_for("nonsense", prompts) == "G"


def test_system_prompt_from_router_yml():
    assert system_prompt_for("interview_prep").startswith("You are an expert interview coach")


@pytest.mark.parametrize(
    "message, expected",
    [
        ("How do React hooks work?", REACT_JS),
        ("Tips for a coding interview", INTERVIEWS),
        ("Explain Python dicts", PYTHON_ALGOS),
        ("What's the weather?", GENERAL),
        ("How do I parse JSON in Go?", GENERAL),
        ("Node.js event loop", REACT_JS),
        ("Interviewing tips", INTERVIEWS),
        ("", GENERAL),
    ],
)
def test_fallback_reply(message, expected):
    assert fallback_reply(message) == expected
