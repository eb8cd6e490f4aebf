"""
Database models for quiz functionality.

A Quiz owns its Questions; each Question embeds an ordered list of
choices whose positions are the identifiers students answer with.
A Submission is written once per (quiz, user) and never changes.
"""
from sqlalchemy import event

from quizhub import db
from quizhub.auth.models import utcnow
from quizhub.quiz.payloads import TITLE_MAX_LENGTH, DESCRIPTION_MAX_LENGTH
from quizhub.quiz.scoring import correct_indexes


class Quiz(db.Model):
    """
    Model for quizzes.

    A quiz starts as a draft and is published exactly once;
    ``is_published`` never goes back to False.
    """
    __tablename__ = "quizzes"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(TITLE_MAX_LENGTH), nullable=False)
    description = db.Column(db.String(DESCRIPTION_MAX_LENGTH), nullable=False, default="")
    owner_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete='CASCADE'), nullable=False, index=True)
    is_published = db.Column(db.Boolean, default=False, nullable=False, index=True)
    time_limit_minutes = db.Column(db.Integer, nullable=True)  # None means no time limit
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    owner = db.relationship("User", foreign_keys=[owner_id])
    questions = db.relationship("Question", backref="quiz", lazy="dynamic", order_by="Question.id", passive_deletes=True)
    submissions = db.relationship("Submission", backref="quiz", lazy="dynamic", passive_deletes=True)

    def __repr__(self) -> str:
        return f"<Quiz {self.id}: {self.title}>"

    @property
    def status(self) -> str:
        return "published" if self.is_published else "draft"

    def is_owned_by(self, user_id: int) -> bool:
        return self.owner_id == user_id

    def get_question_count(self) -> int:
        return self.questions.count()

    def to_dict(self, include_questions: bool = False, show_answers: bool = False) -> dict:
        data = {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'owner_id': self.owner_id,
            'is_published': self.is_published,
            'status': self.status,
            'time_limit_minutes': self.time_limit_minutes,
            'question_count': self.get_question_count(),
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }
        if include_questions:
            data['questions'] = [q.to_dict(show_answers=show_answers) for q in self.questions.all()]
        return data


class Question(db.Model):
    """
    Model for quiz questions.

    ``choices`` is an ordered JSON list of ``{"text": str, "is_correct": bool}``.
    A single-choice question keeps at most one correct choice: when several
    are marked, only the first one (in list order) stays correct.
    """
    __tablename__ = "quiz_questions"

    id = db.Column(db.Integer, primary_key=True)
    quiz_id = db.Column(db.Integer, db.ForeignKey("quizzes.id", ondelete='CASCADE'), nullable=False, index=True)
    text = db.Column(db.Text, nullable=False)
    choices = db.Column(db.JSON, nullable=False, default=list)
    is_multiple_choice = db.Column(db.Boolean, default=False, nullable=False)
    points = db.Column(db.Integer, nullable=False, default=1)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<Question {self.id} of Quiz {self.quiz_id}>"

    def normalize_choices(self) -> None:
        """Keep only the first correct choice on a single-choice question."""
        if self.is_multiple_choice or len(correct_indexes(self)) <= 1:
            return
        first = min(correct_indexes(self))
        # Assign a new list so the JSON column is marked dirty
        self.choices = [
            {'text': choice['text'], 'is_correct': i == first}
            for i, choice in enumerate(self.choices)
        ]

    def to_dict(self, show_answers: bool = True) -> dict:
        if show_answers:
            choices = [{'text': c['text'], 'is_correct': bool(c.get('is_correct'))} for c in self.choices]
        else:
            choices = [{'text': c['text']} for c in self.choices]
        return {
            'id': self.id,
            'quiz_id': self.quiz_id,
            'text': self.text,
            'choices': choices,
            'is_multiple_choice': self.is_multiple_choice,
            'points': self.points,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }


@event.listens_for(Question, "before_insert")
@event.listens_for(Question, "before_update")
def _normalize_question_choices(mapper, connection, target):
    target.normalize_choices()


class Submission(db.Model):
    """
    Model for a student's single submission to a quiz.

    ``answers`` is a JSON list of ``{"question_id": int, "selected_choices": [int]}``.
    Score fields are computed once at creation.
    """
    __tablename__ = "submissions"

    id = db.Column(db.Integer, primary_key=True)
    quiz_id = db.Column(db.Integer, db.ForeignKey("quizzes.id", ondelete='CASCADE'), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete='CASCADE'), nullable=False, index=True)
    answers = db.Column(db.JSON, nullable=False, default=list)
    score = db.Column(db.Integer, nullable=False, default=0)
    max_score = db.Column(db.Integer, nullable=False)
    started_at = db.Column(db.DateTime, nullable=False)
    submitted_at = db.Column(db.DateTime, nullable=False, index=True)
    completion_time_seconds = db.Column(db.Integer, nullable=False)

    # Relationships
    user = db.relationship("User", foreign_keys=[user_id], backref=db.backref("submissions", lazy="dynamic"))

    __table_args__ = (
        db.UniqueConstraint('quiz_id', 'user_id', name='uq_submission_quiz_user'),
    )

    def __repr__(self) -> str:
        return f"<Submission {self.id}: User {self.user_id}, Quiz {self.quiz_id}>"

    def to_dict(self, include_user: bool = False, include_quiz: bool = False) -> dict:
        data = {
            'id': self.id,
            'quiz_id': self.quiz_id,
            'user_id': self.user_id,
            'answers': self.answers,
            'score': self.score,
            'max_score': self.max_score,
            'started_at': self.started_at.isoformat() if self.started_at else None,
            'submitted_at': self.submitted_at.isoformat() if self.submitted_at else None,
            'completion_time_seconds': self.completion_time_seconds,
        }
        if include_user and self.user is not None:
            data['user'] = {'id': self.user.id, 'name': self.user.name, 'email': self.user.email}
        if include_quiz and self.quiz is not None:
            data['quiz'] = {'id': self.quiz.id, 'title': self.quiz.title, 'description': self.quiz.description}
        return data
