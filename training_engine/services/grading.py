"""Pure quiz scoring helpers.

Nothing in this module touches the database; the quiz service loads the
question bank and hands it over.
"""
import re
from typing import Any, Dict, Iterable, Optional, Tuple

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


def question_points(question) -> int:
    """Point value of a question. Non-positive stored values count as 1."""
    points = getattr(question, "points", None) or 0
    return points if points > 0 else 1


def resolve_selected_index(value: Any) -> Optional[int]:
    """Decode a submitted answer into an option index.

    Accepts an int, an integral float (JSON numbers) or a string that is
    exactly an optionally signed ASCII integer; padded strings do not count.
    Anything else, booleans included, is treated as unanswered.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        if _INTEGER_PATTERN.fullmatch(value):
            return int(value)
    return None


def grade(questions: Iterable, answers: Dict[str, Any]) -> Tuple[int, int]:
    score = 0
    max_score = 0
    answers = answers or {}

    for question in questions:
        points = question_points(question)
        max_score += points

        selected = resolve_selected_index(answers.get(str(question.id)))
        if selected is not None and selected == question.correct_index:
            score += points

    return score, max_score


def percentage(score: int, max_score: int) -> int:
    if max_score <= 0:
        return 0
    # half-up: 62.5 -> 63
    return int(score * 100 / max_score + 0.5)


def is_passing(score: int, max_score: int, passing_score: Optional[int], material_loaded: bool = True) -> bool:
    """Without gradable questions nothing passes. A material that could not be
    loaded, or has no threshold, requires a perfect score."""
    if max_score <= 0:
        return False
    if material_loaded and passing_score is not None:
        return percentage(score, max_score) >= passing_score
    return score == max_score
