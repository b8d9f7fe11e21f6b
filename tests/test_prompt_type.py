import pytest

from vibe_codegen.llm import PromptType, detect_prompt_type


class TestDetectPromptType:
    @pytest.mark.parametrize("message,expected", [
        ("build a landing page for my bakery", PromptType.CODE_GENERATION),
        ("Create a todo app", PromptType.CODE_GENERATION),
        ("please add a dark mode toggle", PromptType.CODE_GENERATION),
        ("How do I center a div", PromptType.QUESTION),
        ("can you build it?", PromptType.QUESTION),
        ("the button is broken after the update", PromptType.QUESTION),
        ("hello there", PromptType.CHAT),
        ("thanks", PromptType.CHAT),
        ("random words here", PromptType.QUESTION),
    ])
    def test_classification(self, message, expected):
        assert detect_prompt_type(message) == expected

    def test_long_greeting_is_not_chat(self):
        message = "hey can we make a portfolio site with a gallery and contact form please"
        assert detect_prompt_type(message) == PromptType.CODE_GENERATION
