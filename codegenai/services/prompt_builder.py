from __future__ import annotations

from enum import Enum
from typing import Dict, List


class TargetLanguage(str, Enum):
	JAVASCRIPT = "javascript"
	PYTHON = "python"
	CPP = "cpp"
	JAVA = "java"
	CSHARP = "csharp"
	GO = "go"

	@property
	def label(self) -> str:
		return LANGUAGE_LABELS[self]


LANGUAGE_LABELS: Dict[TargetLanguage, str] = {
	TargetLanguage.JAVASCRIPT: "JavaScript",
	TargetLanguage.PYTHON: "Python",
	TargetLanguage.CPP: "C++",
	TargetLanguage.JAVA: "Java",
	TargetLanguage.CSHARP: "C#",
	TargetLanguage.GO: "Go",
}

# Section labels the client splits and highlights on; keep them verbatim
SECTION_TITLES: List[str] = [
	"Brute Force Approach",
	"Better Approach",
	"Optimal Approach",
	"Edge Cases to Remember",
]

_APPROACH_CHECKLIST = (
	"   - Code implementation (if possible, otherwise describe the approach)\n"
	"   - Explanation\n"
	"   - Time and Space Complexity\n"
	"   - Dry run (show the execution steps with example input)\n"
)


def _approach_section(number: int, title: str) -> str:
	return f"{number}. {title}:\n{_APPROACH_CHECKLIST}"


def build_prompt(problem_statement: str, language: TargetLanguage | str) -> str:
	"""Build the instruction sent to the model for one coding problem.

	The problem statement is interpolated as-is, on the Problem Statement line and
	again in the edge cases section. The language tag appears in the
	opening line and in the code fence hint so answers come back as
	```<lang> blocks the client can highlight.
	"""
	lang = language.value if isinstance(language, TargetLanguage) else str(language)
	brute, better, optimal, edge_cases = SECTION_TITLES
	return (
		f"Provide the following information for the given coding problem statement, specifically in {lang}:\n\n"
		f"Problem Statement: {problem_statement}\n\n"
		+ _approach_section(1, brute) + "\n"
		+ _approach_section(2, better) + "\n"
		+ _approach_section(3, optimal) + "\n"
		+ f"4. {edge_cases}:\n"
		f"   - List any edge cases or special considerations for this problem ({problem_statement}).\n\n"
		"Respond in a clear and structured format. "
		f"Use code blocks (```{lang} ... ```) for code implementations, matching the selected language ({lang}). "
		"If a code implementation is not possible, clearly explain the approach. "
		"Ensure the code is directly copyable. Return code in separate code blocks from explanations."
	)
