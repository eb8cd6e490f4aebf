"""
Quiz lifecycle: creation, editing, publishing and deletion.

A quiz is created as a draft, edited while it is a draft, and published
once it has at least one question. Publishing is one-way.
"""
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from quizhub import db
from quizhub.common.errors import Forbidden, InvalidState, NotFound
from quizhub.quiz.models import Question, Quiz, Submission
from quizhub.quiz.payloads import QuizInput, QuizPatch
from quizhub.quiz.permissions import Requester, can_create_quiz, can_edit_quiz, can_view_quiz
from quizhub.security import SecurityLogger


def commit_or_rollback(action: str) -> None:
    """Commit the session; on a database error roll back, log and re-raise."""
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception(f"Database error while trying to {action}; rolled back")
        raise


def get_quiz(quiz_id: int) -> Quiz:
    quiz = db.session.get(Quiz, quiz_id)
    if quiz is None:
        raise NotFound("Quiz not found")
    return quiz


def get_owned_quiz(quiz_id: int, requester: Requester, action: str) -> Quiz:
    """Load a quiz and check the requester may modify it."""
    quiz = get_quiz(quiz_id)
    if not can_edit_quiz(requester, quiz):
        SecurityLogger.log_forbidden(requester.id, f"quiz {quiz.id}", f"not the owner ({action})")
        raise Forbidden(f"Not authorized to {action} this quiz")
    return quiz


def create_quiz(requester: Requester, data: QuizInput) -> Quiz:
    if not can_create_quiz(requester):
        raise Forbidden(f"User role {requester.role} is not authorized to create quizzes")

    quiz = Quiz(
        title=data.title,
        description=data.description,
        time_limit_minutes=data.time_limit_minutes,
        owner_id=requester.id,
        is_published=False,
    )
    db.session.add(quiz)
    commit_or_rollback("create a quiz")
    current_app.logger.info(f"Quiz {quiz.id} created by user {requester.id}")
    return quiz


def list_quizzes(requester: Requester) -> list[Quiz]:
    """Teachers get their own quizzes; everyone else gets all of them."""
    query = Quiz.query
    if requester.is_teacher:
        query = query.filter_by(owner_id=requester.id)
    return query.order_by(Quiz.created_at.desc(), Quiz.id.desc()).all()


def view_quiz(quiz_id: int, requester: Requester) -> Quiz:
    quiz = get_quiz(quiz_id)
    if not can_view_quiz(requester, quiz):
        SecurityLogger.log_forbidden(requester.id, f"quiz {quiz.id}", "teacher viewing another teacher's quiz")
        raise Forbidden("Not authorized to access this quiz")
    return quiz


def update_quiz(quiz_id: int, requester: Requester, patch: QuizPatch) -> Quiz:
    quiz = get_owned_quiz(quiz_id, requester, "update")
    if quiz.is_published:
        raise InvalidState("Cannot update a published quiz")

    for name, value in patch.fields.items():
        setattr(quiz, name, value)
    commit_or_rollback(f"update quiz {quiz.id}")
    current_app.logger.info(f"Quiz {quiz.id} updated ({', '.join(patch.fields)})")
    return quiz


def publish_quiz(quiz_id: int, requester: Requester) -> Quiz:
    """
    Publish a quiz.

    Requires at least one question. Publishing an already published quiz
    is accepted and leaves it published.
    """
    quiz = get_owned_quiz(quiz_id, requester, "publish")
    if quiz.get_question_count() == 0:
        raise InvalidState("Cannot publish a quiz without questions")

    if not quiz.is_published:
        quiz.is_published = True
        commit_or_rollback(f"publish quiz {quiz.id}")
        current_app.logger.info(f"Quiz {quiz.id} published")
    return quiz


def _purge_questions(quiz_id: int) -> int:
    return Question.query.filter_by(quiz_id=quiz_id).delete(synchronize_session=False)


def _purge_submissions(quiz_id: int) -> int:
    return Submission.query.filter_by(quiz_id=quiz_id).delete(synchronize_session=False)


def delete_quiz(quiz_id: int, requester: Requester) -> None:
    """
    Delete a quiz together with its questions and submissions.

    All three deletions share one transaction: if any step fails nothing
    is removed.
    """
    quiz = get_owned_quiz(quiz_id, requester, "delete")
    try:
        questions = _purge_questions(quiz.id)
        submissions = _purge_submissions(quiz.id)
        db.session.delete(quiz)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception(f"Failed to delete quiz {quiz_id}; rolled back")
        raise
    current_app.logger.info(
        f"Quiz {quiz_id} deleted with {questions} questions and {submissions} submissions"
    )
