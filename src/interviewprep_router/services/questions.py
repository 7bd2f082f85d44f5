# src/interviewprep_router/services/questions.py
from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, List, Optional, Tuple

import requests

from interviewprep_router.core.errors import RouterError
from interviewprep_router.core.logging import redact
from interviewprep_router.core.route import Router
from interviewprep_router.models import ChatMessage, ProviderId

logger = logging.getLogger(__name__)

TYPE_INSTRUCTIONS = {
    "mcq": "multiple-choice questions with 4 options and one correct answer",
    "coding": "coding problems with clear problem statements, examples, and constraints",
    "subjective": "open-ended questions that require detailed explanations",
    "system-design": "system design questions focusing on architecture and scalability",
}

# minutes, by type then difficulty
TIME_LIMITS = {
    "mcq": {"easy": 5, "medium": 10, "hard": 15},
    "coding": {"easy": 30, "medium": 45, "hard": 60},
    "subjective": {"easy": 15, "medium": 25, "hard": 35},
    "system-design": {"easy": 30, "medium": 45, "hard": 60},
}

POINTS = {"easy": 10, "medium": 20, "hard": 30}

_FENCE_RE = re.compile(r"```json\n?|\n?```")


def get_time_limit(difficulty: str, qtype: str) -> int:
    return TIME_LIMITS.get(qtype, {}).get(difficulty, 30)


def get_points(difficulty: str) -> int:
    return POINTS.get(difficulty, 20)


def build_generation_prompt(
    domain: str,
    sub_domain: Optional[str],
    difficulty: str,
    qtype: str,
    count: int,
    tags: List[str],
    companies: List[str],
) -> str:
    scope = f"{domain} - {sub_domain}" if sub_domain else domain
    focus = f" and specifically {sub_domain}" if sub_domain else ""

    lines = [
        f"Generate exactly {count} {difficulty} level {TYPE_INSTRUCTIONS.get(qtype, qtype)} for {scope} domain.",
        "",
        "Requirements:",
        f"- Each question should be relevant to {domain}{focus}",
        f"- Difficulty level: {difficulty}",
        f"- Question type: {qtype}",
    ]
    if tags:
        lines.append(f"- Include these skills/tags: {', '.join(tags)}")
    if companies:
        lines.append(f"- Style questions similar to those asked by: {', '.join(companies)}")

    lines += [
        "",
        "For each question, provide:",
        "1. A clear, concise title",
        "2. Detailed question content",
        f"3. Appropriate difficulty for {difficulty} level",
        "4. Relevant tags and skills",
    ]
    if qtype == "mcq":
        lines.append("5. Four options (A, B, C, D) with correct answer")
    elif qtype == "coding":
        lines.append("5. Sample input/output, constraints, and hints")

    content_fields = ['"question": "Detailed question text",']
    if qtype == "mcq":
        content_fields.append(
            '"options": ["A) Option 1", "B) Option 2", "C) Option 3", "D) Option 4"], "correctAnswer": 0,'
        )
    if qtype == "coding":
        content_fields.append(
            '"sampleInput": "Example input", "sampleOutput": "Expected output", '
            '"constraints": "Problem constraints", "hints": ["Hint 1", "Hint 2"],'
        )
    content_fields.append('"explanation": "Detailed explanation"')
    content_block = "\n      ".join(content_fields)

    lines += [
        "",
        "Format your response as a JSON array:",
        "[",
        "  {",
        '    "title": "Question title",',
        '    "content": {',
        f"      {content_block}",
        "    },",
        '    "tags": ["tag1", "tag2"],',
        '    "skills": ["skill1", "skill2"],',
        '    "companies": ["company1", "company2"]',
        "  }",
        "]",
        "",
        "Ensure the response is valid JSON that can be parsed directly.",
    ]
    return "\n".join(lines)


def parse_questions(text: str) -> List[Dict[str, Any]]:
    """
    Parse the model output into a list of question dicts.
    Markdown ```json fences are stripped; a single object becomes a 1-item list.
    Raises ValueError when the text is not a JSON object/array.
    """
    cleaned = _FENCE_RE.sub("", text or "").strip()
    data = json.loads(cleaned)
    if isinstance(data, dict):
        return [data]
    if isinstance(data, list) and all(isinstance(q, dict) for q in data):
        return data
    raise ValueError(f"expected a JSON array of objects, got {type(data).__name__}")


def generate_fallback_questions(
    domain: str,
    sub_domain: Optional[str],
    difficulty: str,
    qtype: str,
    count: int,
) -> List[Dict[str, Any]]:
    scope = f"{domain} - {sub_domain}" if sub_domain else domain
    questions = []
    for i in range(count):
        content: Dict[str, Any] = {
            "question": f"This is a {difficulty} level {qtype} question for {scope}.",
        }
        if qtype == "mcq":
            content["options"] = ["A) Option 1", "B) Option 2", "C) Option 3", "D) Option 4"]
            content["correctAnswer"] = 0
        if qtype == "coding":
            content["sampleInput"] = "Sample input"
            content["sampleOutput"] = "Expected output"
            content["constraints"] = "Problem constraints"
            content["hints"] = ["Think about the problem step by step"]
        content["explanation"] = "This is a fallback question generated when AI is unavailable."

        questions.append(
            {
                "title": f"{domain} {qtype} Question {i + 1}",
                "content": content,
                "tags": [domain, difficulty],
                "skills": [domain],
                "companies": [],
            }
        )
    return questions


def _annotate(
    questions: List[Dict[str, Any]],
    difficulty: str,
    qtype: str,
    tags: List[str],
    companies: List[str],
) -> List[Dict[str, Any]]:
    out = []
    for q in questions:
        item = dict(q)
        item["difficulty"] = difficulty
        item["type"] = qtype
        item["tags"] = list(tags) + list(q.get("tags") or [])
        item["companies"] = list(companies) + list(q.get("companies") or [])
        item["time_limit"] = get_time_limit(difficulty, qtype)
        item["points"] = get_points(difficulty)
        out.append(item)
    return out


def generate_questions(
    router: Router,
    domain: str,
    difficulty: str,
    qtype: str,
    count: int = 5,
    sub_domain: Optional[str] = None,
    tags: Optional[List[str]] = None,
    companies: Optional[List[str]] = None,
) -> Tuple[List[Dict[str, Any]], str]:
    """
    Ask Gemini for practice questions.

    Returns (questions, source) where source is "ai" or "fallback". Any
    router, network or parse failure yields `count` static questions instead.
    """
    tags = tags or []
    companies = companies or []
    prompt = build_generation_prompt(domain, sub_domain, difficulty, qtype, count, tags, companies)

    try:
        result = router.call(ProviderId.gemini, [ChatMessage(role="user", content=prompt)], "")
        questions = parse_questions(result.content)
        source = "ai"
    except (RouterError, requests.RequestException, ValueError) as ex:
        logger.warning("Question generation fell back to static questions: %s", redact(ex))
        questions = generate_fallback_questions(domain, sub_domain, difficulty, qtype, count)
        source = "fallback"

    return _annotate(questions, difficulty, qtype, tags, companies), source
