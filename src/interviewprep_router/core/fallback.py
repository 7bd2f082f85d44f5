# src/interviewprep_router/core/fallback.py
"""Pre-written replies used when no provider answers."""

from __future__ import annotations

import re

REACT_JS = """I'd be happy to help with React/JavaScript! While I'm currently running in fallback mode, I can still provide some guidance:

**React Best Practices:**
- Use functional components with hooks
- Keep components small and focused
- Use proper state management (useState, useReducer, or external libraries)
- Implement proper error boundaries
- Follow the principle of composition over inheritance

**Common JavaScript Concepts:**
- Closures and scope
- Promises and async/await
- Event handling and DOM manipulation
- ES6+ features (arrow functions, destructuring, modules)

For more detailed help, please try again in a moment when our AI services are fully available."""

INTERVIEWS = """Great question about technical interviews! Here are some key tips:

**Technical Interview Preparation:**
1. **Data Structures & Algorithms**: Focus on arrays, linked lists, trees, graphs, and common algorithms
2. **System Design**: Understand scalability, load balancing, databases, and caching
3. **Coding Practice**: Use platforms like LeetCode, HackerRank, or CodeSignal
4. **Communication**: Explain your thought process clearly
5. **Ask Questions**: Clarify requirements before coding

**Common Interview Topics:**
- Time and space complexity analysis
- Database design and SQL queries
- API design and REST principles
- Testing strategies and debugging

I'm currently in fallback mode, but feel free to ask more specific questions when our full AI services are restored!"""

PYTHON_ALGOS = """Python is excellent for algorithms and data structures! Here's a quick overview:

**Python for Algorithms:**
- Clean, readable syntax perfect for interviews
- Rich standard library with useful data structures
- Built-in functions like sorted(), enumerate(), zip()
- List comprehensions for concise code

**Key Data Structures in Python:**
- Lists: Dynamic arrays with O(1) append
- Dictionaries: Hash tables with O(1) average lookup
- Sets: For unique elements and fast membership testing
- Collections module: deque, Counter, defaultdict

**Algorithm Patterns:**
- Two pointers technique
- Sliding window
- Dynamic programming
- Recursion with memoization

I'm in fallback mode right now, but I'd love to help with specific algorithm questions when our full AI services are back online!"""

GENERAL = """Thank you for your question! I'm currently running in fallback mode while our AI services are temporarily unavailable.

I'm designed to help with:
- Programming and software development
- Technical interview preparation
- Code review and debugging
- System design concepts
- Best practices and architecture

Please try asking your question again in a few moments when our full AI capabilities are restored. I'll be able to provide much more detailed and personalized assistance!"""


_REPLIES = [
    (re.compile(r"\b(react|javascript)|\bjs\b"), REACT_JS),
    (re.compile(r"\b(interview|coding)"), INTERVIEWS),
    (re.compile(r"\b(python|algorithm)"), PYTHON_ALGOS),
]


def fallback_reply(message: str) -> str:
    """Pick a canned reply by keyword; first match wins."""
    text = (message or "").lower()
    for pattern, reply in _REPLIES:
        if pattern.search(text):
            return reply
    return GENERAL
