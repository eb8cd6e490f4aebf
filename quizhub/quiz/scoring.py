"""
Scoring of submitted answers.

Pure functions with no database or request access: they work on anything
that looks like a Question (``id``, ``choices``, ``is_multiple_choice``,
``points``) and on ``AnswerInput`` values.
"""
import math
from typing import Iterable, Sequence

from quizhub.quiz.payloads import AnswerInput


def correct_indexes(question) -> frozenset[int]:
    """Positions of the choices marked correct."""
    return frozenset(i for i, choice in enumerate(question.choices or []) if choice.get('is_correct'))


def is_answer_correct(question, selected: Iterable[int]) -> bool:
    """
    Check one answer against one question.

    Multiple-choice: the selection must equal the correct set exactly.
    Single-choice: exactly one selection, and it must be a correct one.
    """
    selected = frozenset(selected)
    correct = correct_indexes(question)
    if question.is_multiple_choice:
        return selected == correct
    return len(selected) == 1 and next(iter(selected)) in correct


def dedupe_answers(questions: Sequence, answers: Sequence[AnswerInput]) -> list[AnswerInput]:
    """
    Keep the first answer per question and drop answers to unknown questions.

    The result is what gets scored and persisted, so a question can never
    be counted twice whatever order the client sends answers in.
    """
    known = {q.id for q in questions}
    seen = set()
    kept = []
    for answer in answers:
        if answer.question_id not in known or answer.question_id in seen:
            continue
        seen.add(answer.question_id)
        kept.append(answer)
    return kept


def score_all(questions: Sequence, answers: Sequence[AnswerInput]) -> tuple[int, int]:
    """
    Score a full set of answers.

    Returns ``(score, max_score)``. ``max_score`` counts every question,
    answered or not; ``score`` sums the points of correctly answered ones.
    """
    by_id = {q.id: q for q in questions}
    max_score = sum(q.points for q in questions)
    score = 0
    for answer in dedupe_answers(questions, answers):
        question = by_id[answer.question_id]
        if is_answer_correct(question, answer.selected_choices):
            score += question.points
    return score, max_score


def percentage(score: int, max_score: int) -> int:
    """Whole-number percentage, rounded half up; 0 when nothing can be scored."""
    if max_score <= 0:
        return 0
    return math.floor(score / max_score * 100 + 0.5)
