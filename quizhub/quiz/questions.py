"""
Question management.

Questions can be added, changed or removed only while their quiz is a
draft, and only by the quiz owner.
"""
from flask import current_app

from quizhub import db
from quizhub.common.errors import Forbidden, InvalidState, NotFound
from quizhub.quiz.lifecycle import commit_or_rollback, get_owned_quiz, view_quiz
from quizhub.quiz.models import Question, Quiz
from quizhub.quiz.payloads import QuestionInput, QuestionPatch
from quizhub.quiz.permissions import Requester, can_edit_quiz, can_view_quiz
from quizhub.security import SecurityLogger


def _ensure_draft(quiz: Quiz, action: str) -> None:
    if quiz.is_published:
        raise InvalidState(f"Cannot {action} a published quiz")


def _get_question_and_quiz(question_id: int) -> tuple[Question, Quiz]:
    question = db.session.get(Question, question_id)
    if question is None:
        raise NotFound("Question not found")
    quiz = db.session.get(Quiz, question.quiz_id)
    if quiz is None:
        raise NotFound("Associated quiz not found")
    return question, quiz


def _get_editable_question(question_id: int, requester: Requester, action: str) -> tuple[Question, Quiz]:
    question, quiz = _get_question_and_quiz(question_id)
    if not can_edit_quiz(requester, quiz):
        SecurityLogger.log_forbidden(requester.id, f"question {question.id}", f"not the quiz owner ({action})")
        raise Forbidden(f"Not authorized to {action} this question")
    return question, quiz


def add_question(quiz_id: int, requester: Requester, data: QuestionInput) -> Question:
    quiz = get_owned_quiz(quiz_id, requester, "add questions to")
    _ensure_draft(quiz, "add questions to")

    question = Question(
        quiz_id=quiz.id,
        text=data.text,
        choices=[c.to_dict() for c in data.choices],
        is_multiple_choice=data.is_multiple_choice,
        points=data.points,
    )
    db.session.add(question)
    commit_or_rollback(f"add a question to quiz {quiz.id}")
    current_app.logger.info(f"Question {question.id} added to quiz {quiz.id}")
    return question


def list_questions(quiz_id: int, requester: Requester) -> tuple[Quiz, list[Question]]:
    quiz = view_quiz(quiz_id, requester)
    return quiz, quiz.questions.all()


def get_question(question_id: int, requester: Requester) -> tuple[Question, Quiz]:
    question, quiz = _get_question_and_quiz(question_id)
    if not can_view_quiz(requester, quiz):
        raise Forbidden("Not authorized to access this question")
    return question, quiz


def update_question(question_id: int, requester: Requester, patch: QuestionPatch) -> Question:
    question, quiz = _get_editable_question(question_id, requester, "update")
    _ensure_draft(quiz, "update questions in")

    if patch.text is not None:
        question.text = patch.text
    if patch.is_multiple_choice is not None:
        question.is_multiple_choice = patch.is_multiple_choice
    if patch.choices is not None:
        question.choices = [c.to_dict() for c in patch.choices]
    if patch.points is not None:
        question.points = patch.points

    commit_or_rollback(f"update question {question.id}")
    current_app.logger.info(f"Question {question.id} updated")
    return question


def delete_question(question_id: int, requester: Requester) -> None:
    question, quiz = _get_editable_question(question_id, requester, "delete")
    _ensure_draft(quiz, "delete questions from")

    db.session.delete(question)
    commit_or_rollback(f"delete question {question_id}")
    current_app.logger.info(f"Question {question_id} deleted from quiz {quiz.id}")
