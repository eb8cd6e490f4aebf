"""
Routes for quiz questions.

Writes are limited to the quiz owner and to draft quizzes.
"""
from flask import jsonify

from quizhub.common.decorators import api_login_required, json_body, teacher_required
from quizhub.quiz import quiz_bp, questions
from quizhub.quiz.payloads import QuestionInput, QuestionPatch
from quizhub.quiz.permissions import can_see_answers, current_requester


@quiz_bp.route('/quizzes/<int:quiz_id>/questions', methods=['POST'])
@teacher_required
def add_question(quiz_id):
    """
    Add a question to a draft quiz.

    Request body:
    {
        "text": "What is 2+2?",
        "choices": [
            {"text": "3", "is_correct": false},
            {"text": "4", "is_correct": true},
            {"text": "5", "is_correct": false}
        ],
        "is_multiple_choice": false,  // Optional, default false
        "points": 1  // Optional, 1-10, default 1
    }
    """
    data = QuestionInput.from_json(json_body())
    question = questions.add_question(quiz_id, current_requester(), data)
    return jsonify({'success': True, 'data': question.to_dict()}), 201


@quiz_bp.route('/quizzes/<int:quiz_id>/questions', methods=['GET'])
@api_login_required
def list_questions(quiz_id):
    requester = current_requester()
    quiz, items = questions.list_questions(quiz_id, requester)
    show_answers = can_see_answers(requester, quiz)
    return jsonify({
        'success': True,
        'count': len(items),
        'data': [q.to_dict(show_answers=show_answers) for q in items]
    }), 200


@quiz_bp.route('/questions/<int:question_id>', methods=['GET'])
@api_login_required
def get_question(question_id):
    requester = current_requester()
    question, quiz = questions.get_question(question_id, requester)
    return jsonify({
        'success': True,
        'data': question.to_dict(show_answers=can_see_answers(requester, quiz))
    }), 200


@quiz_bp.route('/questions/<int:question_id>', methods=['PUT', 'PATCH'])
@teacher_required
def update_question(question_id):
    patch = QuestionPatch.from_json(json_body())
    question = questions.update_question(question_id, current_requester(), patch)
    return jsonify({'success': True, 'data': question.to_dict()}), 200


@quiz_bp.route('/questions/<int:question_id>', methods=['DELETE'])
@teacher_required
def delete_question(question_id):
    questions.delete_question(question_id, current_requester())
    return jsonify({'success': True, 'data': {}}), 200
