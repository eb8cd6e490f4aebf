"""
Routes for quiz submissions and results.

Students submit answers once per published quiz; the quiz owner reads
all submissions with summary statistics.
"""
from flask import jsonify

from quizhub.common.decorators import api_login_required, json_body, student_required, teacher_required
from quizhub.quiz import quiz_bp, results, submissions
from quizhub.quiz.payloads import SubmissionInput
from quizhub.quiz.permissions import current_requester


@quiz_bp.route('/quizzes/<int:quiz_id>/submit', methods=['POST'])
@student_required
def submit_quiz(quiz_id):
    """
    Submit answers and get the score back.

    Request body:
    {
        "answers": [
            {"question_id": 12, "selected_choices": [1]},
            {"question_id": 13, "selected_choices": [0, 2]}
        ],
        "started_at": "2026-01-01T10:00:00Z"
    }
    """
    data = SubmissionInput.from_json(json_body())
    result = submissions.submit(quiz_id, current_requester(), data)
    return jsonify({'success': True, 'data': result.to_dict()}), 201


@quiz_bp.route('/quizzes/<int:quiz_id>/results', methods=['GET'])
@teacher_required
def quiz_results(quiz_id):
    items, stats = results.quiz_results(quiz_id, current_requester())
    return jsonify({
        'success': True,
        'data': {
            'submissions': [s.to_dict(include_user=True) for s in items],
            'stats': stats.to_dict(),
        }
    }), 200


@quiz_bp.route('/submissions', methods=['GET'])
@api_login_required
def my_submissions():
    """The caller's own submissions, with quiz title and description."""
    items = submissions.list_own_submissions(current_requester())
    return jsonify({
        'success': True,
        'count': len(items),
        'data': [s.to_dict(include_quiz=True) for s in items]
    }), 200
