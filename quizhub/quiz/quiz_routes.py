"""
Routes for quiz management.

Teachers create, edit, publish and delete their own quizzes; any
logged-in user can list and read quizzes.
"""
from flask import jsonify

from quizhub.common.decorators import api_login_required, json_body, teacher_required
from quizhub.quiz import quiz_bp, lifecycle
from quizhub.quiz.payloads import QuizInput, QuizPatch
from quizhub.quiz.permissions import can_see_answers, current_requester


@quiz_bp.route('/quizzes', methods=['POST'])
@teacher_required
def create_quiz():
    """
    Create a new draft quiz.

    Request body:
    {
        "title": "Quiz Title",
        "description": "Optional description",
        "time_limit_minutes": 30  // Optional, 1-180
    }
    """
    data = QuizInput.from_json(json_body())
    quiz = lifecycle.create_quiz(current_requester(), data)
    return jsonify({'success': True, 'data': quiz.to_dict()}), 201


@quiz_bp.route('/quizzes', methods=['GET'])
@api_login_required
def list_quizzes():
    """Teachers see their own quizzes, students see all quizzes."""
    quizzes = lifecycle.list_quizzes(current_requester())
    return jsonify({
        'success': True,
        'count': len(quizzes),
        'data': [quiz.to_dict() for quiz in quizzes]
    }), 200


@quiz_bp.route('/quizzes/<int:quiz_id>', methods=['GET'])
@api_login_required
def get_quiz(quiz_id):
    """Quiz details with questions; answer keys only for the owner."""
    requester = current_requester()
    quiz = lifecycle.view_quiz(quiz_id, requester)
    return jsonify({
        'success': True,
        'data': quiz.to_dict(include_questions=True, show_answers=can_see_answers(requester, quiz))
    }), 200


@quiz_bp.route('/quizzes/<int:quiz_id>', methods=['PUT', 'PATCH'])
@teacher_required
def update_quiz(quiz_id):
    patch = QuizPatch.from_json(json_body())
    quiz = lifecycle.update_quiz(quiz_id, current_requester(), patch)
    return jsonify({'success': True, 'data': quiz.to_dict()}), 200


@quiz_bp.route('/quizzes/<int:quiz_id>', methods=['DELETE'])
@teacher_required
def delete_quiz(quiz_id):
    """Delete a quiz with all its questions and submissions."""
    lifecycle.delete_quiz(quiz_id, current_requester())
    return jsonify({'success': True, 'data': {}}), 200


@quiz_bp.route('/quizzes/<int:quiz_id>/publish', methods=['PUT'])
@teacher_required
def publish_quiz(quiz_id):
    quiz = lifecycle.publish_quiz(quiz_id, current_requester())
    return jsonify({'success': True, 'data': quiz.to_dict()}), 200
