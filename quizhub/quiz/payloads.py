"""
Typed request payloads for quiz operations.

Each ``from_json`` validates a raw JSON body and raises ``ValidationError``
with a client-facing message; core operations only ever see these objects.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from quizhub.common.errors import ValidationError

# Field limits, shared with the column definitions in quizhub.quiz.models
TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500
MIN_TIME_LIMIT, MAX_TIME_LIMIT = 1, 180
MIN_CHOICES = 2
MIN_POINTS, MAX_POINTS = 1, 10


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _parse_title(value) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("Title is required")
    title = value.strip()
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(f"Title cannot be more than {TITLE_MAX_LENGTH} characters")
    return title


def _parse_description(value) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError("Description must be a string")
    description = value.strip()
    if len(description) > DESCRIPTION_MAX_LENGTH:
        raise ValidationError(f"Description cannot be more than {DESCRIPTION_MAX_LENGTH} characters")
    return description


def _parse_time_limit(value) -> Optional[int]:
    if value is None:
        return None
    if not _is_int(value) or not MIN_TIME_LIMIT <= value <= MAX_TIME_LIMIT:
        raise ValidationError(f"Time limit must be between {MIN_TIME_LIMIT} and {MAX_TIME_LIMIT} minutes")
    return value


def _parse_points(value) -> int:
    if not _is_int(value) or not MIN_POINTS <= value <= MAX_POINTS:
        raise ValidationError(f"Points must be between {MIN_POINTS} and {MAX_POINTS}")
    return value


def _parse_bool(value, name: str) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(f"{name} must be a boolean")
    return value


def _parse_text(value) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("Question text is required")
    return value.strip()


@dataclass(frozen=True)
class QuizInput:
    title: str
    description: str = ""
    time_limit_minutes: Optional[int] = None

    @classmethod
    def from_json(cls, data: dict) -> "QuizInput":
        return cls(
            title=_parse_title(data.get('title')),
            description=_parse_description(data.get('description')),
            time_limit_minutes=_parse_time_limit(data.get('time_limit_minutes')),
        )


@dataclass(frozen=True)
class QuizPatch:
    """Partial quiz update; only the keys present in ``fields`` are applied."""
    fields: dict = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: dict) -> "QuizPatch":
        fields = {}
        if 'title' in data:
            fields['title'] = _parse_title(data['title'])
        if 'description' in data:
            fields['description'] = _parse_description(data['description'])
        if 'time_limit_minutes' in data:
            fields['time_limit_minutes'] = _parse_time_limit(data['time_limit_minutes'])
        if not fields:
            raise ValidationError("Nothing to update")
        return cls(fields=fields)


@dataclass(frozen=True)
class ChoiceInput:
    text: str
    is_correct: bool = False

    @classmethod
    def from_json(cls, data) -> "ChoiceInput":
        if not isinstance(data, dict):
            raise ValidationError("Each choice must be an object")
        text = data.get('text')
        if not isinstance(text, str) or not text.strip():
            raise ValidationError("Choice text is required")
        return cls(text=text.strip(), is_correct=_parse_bool(data.get('is_correct', False), "is_correct"))

    def to_dict(self) -> dict:
        return {'text': self.text, 'is_correct': self.is_correct}


def _parse_choices(value) -> tuple[ChoiceInput, ...]:
    if not isinstance(value, list) or len(value) < MIN_CHOICES:
        raise ValidationError(f"Question must have at least {MIN_CHOICES} choices")
    choices = tuple(ChoiceInput.from_json(c) for c in value)
    if not any(c.is_correct for c in choices):
        raise ValidationError("Question must have at least 1 correct choice")
    return choices


@dataclass(frozen=True)
class QuestionInput:
    text: str
    choices: tuple[ChoiceInput, ...]
    is_multiple_choice: bool = False
    points: int = 1

    @classmethod
    def from_json(cls, data: dict) -> "QuestionInput":
        return cls(
            text=_parse_text(data.get('text')),
            choices=_parse_choices(data.get('choices')),
            is_multiple_choice=_parse_bool(data.get('is_multiple_choice', False), "is_multiple_choice"),
            points=_parse_points(data.get('points', 1)),
        )


@dataclass(frozen=True)
class QuestionPatch:
    text: Optional[str] = None
    choices: Optional[tuple[ChoiceInput, ...]] = None
    is_multiple_choice: Optional[bool] = None
    points: Optional[int] = None

    @classmethod
    def from_json(cls, data: dict) -> "QuestionPatch":
        patch = cls(
            text=_parse_text(data['text']) if 'text' in data else None,
            choices=_parse_choices(data['choices']) if 'choices' in data else None,
            is_multiple_choice=(
                _parse_bool(data['is_multiple_choice'], "is_multiple_choice")
                if 'is_multiple_choice' in data else None
            ),
            points=_parse_points(data['points']) if 'points' in data else None,
        )
        if patch == cls():
            raise ValidationError("Nothing to update")
        return patch


@dataclass(frozen=True)
class AnswerInput:
    question_id: int
    selected_choices: frozenset[int]

    @classmethod
    def from_json(cls, data) -> "AnswerInput":
        if not isinstance(data, dict):
            raise ValidationError("Each answer must be an object")
        question_id = data.get('question_id')
        if isinstance(question_id, str) and question_id.isdigit():
            question_id = int(question_id)
        if not _is_int(question_id):
            raise ValidationError("Question ID is required")
        selected = data.get('selected_choices')
        if not isinstance(selected, list) or not all(_is_int(i) for i in selected):
            raise ValidationError("Selected choices must be an array of choice indexes")
        return cls(question_id=question_id, selected_choices=frozenset(selected))

    def to_dict(self) -> dict:
        return {'question_id': self.question_id, 'selected_choices': sorted(self.selected_choices)}


def _parse_timestamp(value) -> datetime:
    """Parse an ISO-8601 timestamp into a naive UTC datetime."""
    if not isinstance(value, str):
        raise ValidationError("Start time must be a valid date")
    try:
        parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError:
        raise ValidationError("Start time must be a valid date")
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


@dataclass(frozen=True)
class SubmissionInput:
    answers: tuple[AnswerInput, ...]
    started_at: datetime

    @classmethod
    def from_json(cls, data: dict) -> "SubmissionInput":
        answers = data.get('answers')
        if not isinstance(answers, list):
            raise ValidationError("Answers must be an array")
        return cls(
            answers=tuple(AnswerInput.from_json(a) for a in answers),
            started_at=_parse_timestamp(data.get('started_at')),
        )
