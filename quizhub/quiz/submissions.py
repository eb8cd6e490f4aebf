"""
Quiz submission.

A student submits once per quiz. The existence check below gives a clear
error in the common case; the unique constraint on (quiz_id, user_id)
decides the race when two submissions arrive together.
"""
import math
from dataclasses import dataclass

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from quizhub import db
from quizhub.auth.models import utcnow
from quizhub.common.errors import Conflict, Forbidden, InvalidState, ValidationError
from quizhub.quiz.lifecycle import get_quiz
from quizhub.quiz.models import Quiz, Submission
from quizhub.quiz.payloads import SubmissionInput
from quizhub.quiz.permissions import Requester, can_submit
from quizhub.quiz.scoring import dedupe_answers, percentage, score_all


@dataclass(frozen=True)
class SubmissionResult:
    submission: Submission
    score: int
    max_score: int
    percentage: int

    def to_dict(self) -> dict:
        return {
            'submission': self.submission.to_dict(),
            'score': self.score,
            'max_score': self.max_score,
            'percentage': self.percentage,
        }


def find_submission(quiz_id: int, user_id: int) -> Submission | None:
    return Submission.query.filter_by(quiz_id=quiz_id, user_id=user_id).first()


def submit(quiz_id: int, requester: Requester, data: SubmissionInput) -> SubmissionResult:
    quiz: Quiz = get_quiz(quiz_id)
    if not can_submit(requester, quiz):
        raise Forbidden("Not authorized to submit this quiz")
    if not quiz.is_published:
        raise InvalidState("This quiz is not published yet")
    if find_submission(quiz.id, requester.id) is not None:
        raise Conflict("You have already submitted this quiz")

    questions = quiz.questions.all()
    if not questions:
        raise ValidationError("This quiz has no questions")

    answers = dedupe_answers(questions, data.answers)
    score, max_score = score_all(questions, answers)

    # One clock reading for both the stored timestamp and the duration
    now = utcnow()
    completion_time = max(0, math.floor((now - data.started_at).total_seconds()))

    submission = Submission(
        quiz_id=quiz.id,
        user_id=requester.id,
        answers=[a.to_dict() for a in answers],
        score=score,
        max_score=max_score,
        started_at=data.started_at,
        submitted_at=now,
        completion_time_seconds=completion_time,
    )
    db.session.add(submission)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        current_app.logger.warning(
            f"Duplicate submission rejected by constraint: quiz {quiz_id}, user {requester.id}"
        )
        raise Conflict("You have already submitted this quiz")
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception(f"Failed to save submission for quiz {quiz_id}")
        raise

    current_app.logger.info(
        f"Submission {submission.id}: user {requester.id} scored {score}/{max_score} on quiz {quiz_id}"
    )
    return SubmissionResult(submission, score, max_score, percentage(score, max_score))


def list_own_submissions(requester: Requester) -> list[Submission]:
    return (
        Submission.query.filter_by(user_id=requester.id)
        .order_by(Submission.submitted_at.desc())
        .all()
    )
