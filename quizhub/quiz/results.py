"""Summary statistics over a quiz's submissions."""
from dataclasses import asdict, dataclass
from typing import Sequence

from quizhub.common.errors import Forbidden
from quizhub.quiz.lifecycle import get_quiz
from quizhub.quiz.models import Submission
from quizhub.quiz.permissions import Requester, can_view_results
from quizhub.security import SecurityLogger


@dataclass(frozen=True)
class Stats:
    count: int = 0
    average_score: float = 0
    highest_score: int = 0
    lowest_score: int = 0
    average_completion_time_seconds: float = 0

    def to_dict(self) -> dict:
        return asdict(self)


def aggregate(submissions: Sequence) -> Stats:
    """Mean/max/min of raw scores and mean completion time; all zero when empty."""
    if not submissions:
        return Stats()
    scores = [s.score for s in submissions]
    times = [s.completion_time_seconds for s in submissions]
    return Stats(
        count=len(submissions),
        average_score=sum(scores) / len(scores),
        highest_score=max(scores),
        lowest_score=min(scores),
        average_completion_time_seconds=sum(times) / len(times),
    )


def quiz_results(quiz_id: int, requester: Requester) -> tuple[list[Submission], Stats]:
    quiz = get_quiz(quiz_id)
    if not can_view_results(requester, quiz):
        SecurityLogger.log_forbidden(requester.id, f"results of quiz {quiz.id}", "not the owner")
        raise Forbidden("Not authorized to access these results")
    submissions = quiz.submissions.order_by(Submission.submitted_at.asc()).all()
    return submissions, aggregate(submissions)
