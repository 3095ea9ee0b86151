from types import SimpleNamespace

import pytest

from training_engine.services.grading import grade, is_passing, percentage, question_points, resolve_selected_index


def make_question(question_id, correct_index, points=1):
    return SimpleNamespace(id=question_id, correct_index=correct_index, points=points)


@pytest.mark.parametrize("value,expected", [
    (2, 2),
    ("3", 3),
    (" 1 ", None),
    ("1\n", None),
    ("+2", 2),
    ("-1", -1),
    (1.0, 1),
    (1.5, None),
    ("abc", None),
    ("", None),
    (None, None),
    (True, None),
    ([1], None),
    ({"index": 1}, None),
])
def test_resolve_selected_index(value, expected):
    assert resolve_selected_index(value) == expected


def test_question_points_floor_of_one():
    assert question_points(make_question("q", 0, points=3)) == 3
    assert question_points(make_question("q", 0, points=0)) == 1
    assert question_points(make_question("q", 0, points=-4)) == 1
    assert question_points(make_question("q", 0, points=None)) == 1


def test_grade_counts_correct_answers_by_points():
    questions = [make_question("q1", 0, points=2), make_question("q2", 3, points=1), make_question("q3", 1, points=5)]
    answers = {"q1": 0, "q2": "3", "q3": 2}

    assert grade(questions, answers) == (3, 8)


def test_grade_treats_malformed_answers_as_unanswered():
    questions = [make_question("q1", 1), make_question("q2", 1), make_question("q3", 1)]
    answers = {"q1": "one", "q2": [1]}

    assert grade(questions, answers) == (0, 3)


def test_grade_is_order_independent_and_pure():
    questions = [make_question("a", 0), make_question("b", 1), make_question("c", 2)]
    answers = {"a": 0, "b": 1, "c": 0}

    first = grade(questions, answers)
    assert first == grade(list(reversed(questions)), answers)
    assert first == grade(questions, dict(answers))
    assert first == (2, 3)


def test_grade_with_empty_bank():
    assert grade([], {"q1": 1}) == (0, 0)
    assert grade([], None) == (0, 0)


def test_non_positive_points_score_as_one():
    questions = [make_question("q1", 0, points=0)]
    assert grade(questions, {"q1": 0}) == (1, 1)


@pytest.mark.parametrize("score,max_score,expected", [
    (0, 0, 0),
    (5, 0, 0),
    (2, 2, 100),
    (1, 3, 33),
    (2, 3, 67),
    (5, 8, 63),
    (0, 4, 0),
])
def test_percentage(score, max_score, expected):
    assert percentage(score, max_score) == expected


def test_is_passing_uses_threshold_when_material_loaded():
    assert is_passing(1, 2, 50) is True
    assert is_passing(1, 3, 50) is False
    assert is_passing(0, 2, 0) is True


def test_is_passing_requires_perfect_score_without_threshold():
    assert is_passing(2, 2, None) is True
    assert is_passing(1, 2, None) is False
    assert is_passing(1, 2, 50, material_loaded=False) is False
    assert is_passing(2, 2, 50, material_loaded=False) is True


def test_is_passing_never_passes_empty_bank():
    assert is_passing(0, 0, 0) is False
    assert is_passing(0, 0, None, material_loaded=False) is False
