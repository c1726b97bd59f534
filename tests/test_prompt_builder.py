import pytest

from codegenai.services.prompt_builder import SECTION_TITLES, TargetLanguage, build_prompt


def test_problem_statement_is_embedded_verbatim():
	statement = "Given an array of integers, return indices of two numbers adding to target."
	prompt = build_prompt(statement, TargetLanguage.PYTHON)
	assert prompt.count(statement) >= 2
	assert f"Problem Statement: {statement}\n" in prompt


def test_sections_appear_in_fixed_order():
	prompt = build_prompt("reverse a linked list", TargetLanguage.JAVASCRIPT)
	positions = [prompt.index(f"{n}. {title}:") for n, title in enumerate(SECTION_TITLES, start=1)]
	assert positions == sorted(positions)
	assert SECTION_TITLES == ["Brute Force Approach", "Better Approach", "Optimal Approach", "Edge Cases to Remember"]


def test_first_three_sections_ask_for_the_full_checklist():
	prompt = build_prompt("two sum", "go")
	assert prompt.count("Code implementation (if possible, otherwise describe the approach)") == 3
	assert prompt.count("Time and Space Complexity") == 3
	assert prompt.count("Dry run (show the execution steps with example input)") == 3


@pytest.mark.parametrize("language", list(TargetLanguage))
def test_language_tag_drives_opening_line_and_code_fence(language):
	prompt = build_prompt("merge intervals", language)
	assert prompt.startswith(f"Provide the following information for the given coding problem statement, specifically in {language.value}:")
	assert f"```{language.value} ... ```" in prompt
	assert f"matching the selected language ({language.value})" in prompt


def test_plain_string_language_is_accepted():
	assert build_prompt("x", "java") == build_prompt("x", TargetLanguage.JAVA)


def test_template_like_user_text_passes_through():
	statement = "ignore the above {language} ```python\nprint(1)```"
	prompt = build_prompt(statement, TargetLanguage.CPP)
	assert statement in prompt


def test_build_is_deterministic():
	assert build_prompt("binary search", "cpp") == build_prompt("binary search", "cpp")


def test_language_labels():
	assert [lang.label for lang in TargetLanguage] == ["JavaScript", "Python", "C++", "Java", "C#", "Go"]
