from enum import Enum


class PromptType(str, Enum):
    CODE_GENERATION = "code_generation"
    QUESTION = "question"
    CHAT = "chat"


CODE_KEYWORDS = [
    "build", "create", "generate", "write", "make", "add", "implement",
    "develop", "code", "fix", "update", "modify", "change", "convert",
    "design", "refactor", "remove", "delete", "replace", "integrate",
    "setup", "configure", "install", "deploy",
]

QUESTION_KEYWORDS = [
    "what", "why", "how", "when", "where", "which", "who",
    "explain", "tell me", "difference", "compare", "versus",
    "help", "error", "issue", "problem", "doesn't work",
    "not working", "failed", "broken", "debug",
]

CHAT_KEYWORDS = [
    "hello", "hi", "hey", "good morning", "good afternoon",
    "good evening", "thanks", "thank you", "bye", "goodbye",
]

# Короткие приветствия, длиннее считаем полноценным запросом
MAX_CHAT_WORDS = 10


def _mentions(text: str, keyword: str) -> bool:
    return text.startswith(keyword) or f" {keyword} " in text


def detect_prompt_type(message: str) -> PromptType:
    """Классифицировать сообщение пользователя. При сомнении считаем его вопросом."""
    lower = message.lower().strip()

    if "?" in lower:
        return PromptType.QUESTION

    if any(_mentions(lower, k) for k in QUESTION_KEYWORDS):
        return PromptType.QUESTION

    is_greeting = any(lower.startswith(k) or lower == k for k in CHAT_KEYWORDS)
    if is_greeting and len(lower.split(" ")) < MAX_CHAT_WORDS:
        return PromptType.CHAT

    if any(_mentions(lower, k) for k in CODE_KEYWORDS):
        return PromptType.CODE_GENERATION

    return PromptType.QUESTION
