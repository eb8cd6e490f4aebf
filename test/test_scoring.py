"""
Test cases for answer scoring - no database or app needed.
"""
from types import SimpleNamespace

from quizhub.quiz.payloads import AnswerInput
from quizhub.quiz.scoring import correct_indexes, dedupe_answers, is_answer_correct, percentage, score_all


def question(qid, correct, multiple=False, points=1, size=4):
    choices = [{'text': f'choice {i}', 'is_correct': i in correct} for i in range(size)]
    return SimpleNamespace(id=qid, choices=choices, is_multiple_choice=multiple, points=points)


def answer(qid, *selected):
    return AnswerInput(question_id=qid, selected_choices=frozenset(selected))


class TestSingleChoice:
    """Single-choice questions need exactly one correct selection."""

    def test_correct_selection(self):
        """Test selecting the correct index scores."""
        assert is_answer_correct(question(1, {1}), {1}) is True

    def test_wrong_selection(self):
        """Test selecting a wrong index does not score."""
        assert is_answer_correct(question(1, {1}), {0}) is False

    def test_two_selections_rejected(self):
        """Test selecting the correct index plus another does not score."""
        assert is_answer_correct(question(1, {1}), {0, 1}) is False

    def test_empty_selection(self):
        """Test an empty selection does not score."""
        assert is_answer_correct(question(1, {1}), set()) is False


class TestMultipleChoice:
    """Multiple-choice questions need the exact set of correct choices."""

    def test_order_does_not_matter(self):
        """Test selecting {2, 0} matches correct set {0, 2}."""
        assert is_answer_correct(question(1, {0, 2}, multiple=True), [2, 0]) is True

    def test_subset_rejected(self):
        """Test a partial selection does not score."""
        assert is_answer_correct(question(1, {0, 2}, multiple=True), {0}) is False

    def test_superset_rejected(self):
        """Test selecting an extra choice does not score."""
        assert is_answer_correct(question(1, {0, 2}, multiple=True), {0, 1, 2}) is False

    def test_correct_indexes(self):
        """Test correct positions are read from the choice flags."""
        assert correct_indexes(question(1, {0, 3}, multiple=True)) == {0, 3}


class TestScoreAll:
    """Test totals over a whole quiz."""

    def test_partial_score(self):
        """Test 1/2/1 point questions with the first and last right give 2 of 4."""
        questions = [question(1, {1}, points=1), question(2, {0, 2}, multiple=True, points=2), question(3, {1}, points=1)]
        answers = [answer(1, 1), answer(2, 0), answer(3, 1)]

        score, max_score = score_all(questions, answers)

        assert (score, max_score) == (2, 4)
        assert percentage(score, max_score) == 50

    def test_unanswered_questions_count_towards_max(self):
        """Test max score includes questions without an answer."""
        questions = [question(1, {0}, points=3), question(2, {0}, points=5)]
        assert score_all(questions, [answer(1, 0)]) == (3, 8)

    def test_unknown_question_ignored(self):
        """Test an answer for a question not in the quiz adds nothing."""
        assert score_all([question(1, {0})], [answer(99, 0)]) == (0, 1)

    def test_duplicate_answers_count_once(self):
        """Test the same question answered twice is scored once."""
        questions = [question(1, {0}, points=4)]
        assert score_all(questions, [answer(1, 0), answer(1, 0)]) == (4, 4)

    def test_first_duplicate_wins(self):
        """Test the first answer for a question is the one that counts."""
        questions = [question(1, {0}, points=4)]
        assert score_all(questions, [answer(1, 2), answer(1, 0)]) == (0, 4)


class TestDedupeAnswers:
    """Test answer de-duplication before scoring."""

    def test_keeps_first_per_question_in_order(self):
        """Test only the first answer per question survives, order preserved."""
        questions = [question(1, {0}), question(2, {0})]
        kept = dedupe_answers(questions, [answer(2, 1), answer(1, 0), answer(2, 0)])
        assert kept == [answer(2, 1), answer(1, 0)]

    def test_drops_unknown_questions(self):
        """Test answers to questions outside the quiz are removed."""
        assert dedupe_answers([question(1, {0})], [answer(5, 0), answer(1, 0)]) == [answer(1, 0)]


class TestPercentage:
    """Test percentage rounding."""

    def test_zero_max_score(self):
        """Test no division by zero when nothing can be scored."""
        assert percentage(0, 0) == 0

    def test_rounds_half_up(self):
        """Test 1/8 (12.5%) rounds up to 13."""
        assert percentage(1, 8) == 13

    def test_rounds_down(self):
        """Test 1/3 rounds to 33."""
        assert percentage(1, 3) == 33

    def test_full_marks(self):
        """Test a perfect score is 100."""
        assert percentage(7, 7) == 100
