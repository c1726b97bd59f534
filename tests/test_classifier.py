import pytest

from codegenai.services.classifier import is_coding_problem


@pytest.mark.parametrize("message", ["", "   ", "\t\n", "　"])
def test_empty_input_is_rejected(message):
	assert is_coding_problem(message) is False


@pytest.mark.parametrize("word", ["hi", "Hello", "HEY", "thanks", "bye", "Goodbye", "please", "  hi  "])
def test_single_pleasantry_is_rejected(word):
	assert is_coding_problem(word) is False


@pytest.mark.parametrize("word", ["fibonacci", "dijkstra", "turtles", "Recursion"])
def test_single_topic_word_is_accepted(word):
	assert is_coding_problem(word) is True


@pytest.mark.parametrize("message", [
	"write a function to reverse a linked list",
	"bubble sort in java",
	"What is the Time Complexity of merge sort",
	"explain BRUTE FORCE for two sum",
	"find the height of a binary tree",
	"print fibonacci numbers",
	"two sum array",
])
def test_multi_word_with_keyword_is_accepted(message):
	assert is_coding_problem(message) is True


@pytest.mark.parametrize("message", [
	"I like turtles",
	"hello there friend",
	"thank you so much",
	"the list is sorted already",
	"my codes are secret",
	"we built a treehouse",
	"linked lists everywhere",
])
def test_multi_word_without_whole_keyword_is_rejected(message):
	assert is_coding_problem(message) is False


def test_multi_word_phrase_keyword_matches_across_space():
	assert is_coding_problem("which data structure fits") is True
