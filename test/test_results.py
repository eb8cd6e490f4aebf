"""
Test cases for results aggregation.
"""
from types import SimpleNamespace

import pytest

from quizhub.common.errors import Forbidden, NotFound
from quizhub.quiz.results import Stats, aggregate, quiz_results


def submission(score, seconds):
    return SimpleNamespace(score=score, completion_time_seconds=seconds)


class TestAggregate:
    """Test summary statistics."""

    def test_empty(self):
        """Test no submissions gives all zeros."""
        stats = aggregate([])
        assert stats == Stats()
        assert stats.to_dict() == {
            'count': 0,
            'average_score': 0,
            'highest_score': 0,
            'lowest_score': 0,
            'average_completion_time_seconds': 0,
        }

    def test_mean_max_min(self):
        """Test mean, highest and lowest of raw scores and times."""
        stats = aggregate([submission(2, 60), submission(4, 120), submission(3, 30)])
        assert stats.count == 3
        assert stats.average_score == 3
        assert stats.highest_score == 4
        assert stats.lowest_score == 2
        assert stats.average_completion_time_seconds == 70

    def test_single_submission(self):
        """Test one submission is its own average, high and low."""
        stats = aggregate([submission(5, 42)])
        assert (stats.average_score, stats.highest_score, stats.lowest_score) == (5, 5, 5)


class TestQuizResults:
    """Test the owner-only results query."""

    def test_owner_sees_results(self, published_quiz, as_teacher):
        """Test the owner gets an empty list and zero stats before any submission."""
        items, stats = quiz_results(published_quiz.id, as_teacher)
        assert items == []
        assert stats.count == 0

    def test_other_teacher_forbidden(self, published_quiz, as_other_teacher):
        """Test another teacher cannot read results."""
        with pytest.raises(Forbidden):
            quiz_results(published_quiz.id, as_other_teacher)

    def test_student_forbidden(self, published_quiz, as_student):
        """Test a student cannot read results."""
        with pytest.raises(Forbidden):
            quiz_results(published_quiz.id, as_student)

    def test_missing_quiz(self, as_teacher):
        """Test results for an unknown quiz."""
        with pytest.raises(NotFound):
            quiz_results(999, as_teacher)
