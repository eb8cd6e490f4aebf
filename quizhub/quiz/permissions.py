"""
Authorization predicates for quiz operations.

Every core operation receives an explicit ``Requester`` and asks one of
these predicates instead of comparing roles inline.
"""
from dataclasses import dataclass

from flask_login import current_user

from quizhub.auth.models import User


@dataclass(frozen=True)
class Requester:
    """The authenticated identity behind a request."""
    id: int
    role: str

    @classmethod
    def from_user(cls, user) -> "Requester":
        return cls(id=user.id, role=user.role)

    @property
    def is_teacher(self) -> bool:
        return self.role == User.TEACHER

    @property
    def is_student(self) -> bool:
        return self.role == User.STUDENT


def can_create_quiz(requester: Requester) -> bool:
    return requester.is_teacher


def can_edit_quiz(requester: Requester, quiz) -> bool:
    """Only the owner may change a quiz or its questions."""
    return quiz.is_owned_by(requester.id)


def can_view_quiz(requester: Requester, quiz) -> bool:
    """Teachers see their own quizzes only; other roles may view any quiz."""
    if requester.is_teacher:
        return quiz.is_owned_by(requester.id)
    return True


def can_see_answers(requester: Requester, quiz) -> bool:
    """Correct-choice flags are shown to the owner only."""
    return quiz.is_owned_by(requester.id)


def can_submit(requester: Requester, quiz) -> bool:
    return requester.is_student and not quiz.is_owned_by(requester.id)


def can_view_results(requester: Requester, quiz) -> bool:
    return quiz.is_owned_by(requester.id)


def current_requester() -> Requester:
    """Requester for the logged-in user of the current request."""
    return Requester.from_user(current_user)
