from __future__ import annotations

import re


# Single-word messages that are small talk rather than a topic to explain
PLEASANTRIES = frozenset({"hi", "hello", "hey", "thanks", "bye", "goodbye", "please"})

CODING_KEYWORDS = (
	"function",
	"array",
	"loop",
	"algorithm",
	"sort",
	"search",
	"data structure",
	"linked list",
	"tree",
	"graph",
	"time complexity",
	"space complexity",
	"brute force",
	"optimal",
	"code",
	"problem",
	"program",
	"coding",
	"fibonacci",
)

_KEYWORD_RE = re.compile(
	r"\b(?:" + "|".join(re.escape(k) for k in CODING_KEYWORDS) + r")\b",
	re.IGNORECASE,
)


def is_coding_problem(message: str) -> bool:
	"""Decide whether a chat message is worth sending to the model as a coding problem.

	- Empty or whitespace-only text is rejected.
	- A single word is accepted unless it is a pleasantry (hi, thanks, ...);
	  a lone keyword like "fibonacci" is treated as a topic to explain.
	- Longer text needs at least one whole-word programming keyword.
	"""
	trimmed = (message or "").strip()
	words = trimmed.split()
	if not words:
		return False
	if len(words) == 1:
		return trimmed.lower() not in PLEASANTRIES
	return _KEYWORD_RE.search(trimmed) is not None
