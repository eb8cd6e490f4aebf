"""
Quiz module: quiz lifecycle, questions, submissions and results.

Teachers create quizzes, add questions and publish them; students
submit answers once per quiz and are scored automatically.
"""
from flask import Blueprint
from quizhub.config import config

quiz_bp = Blueprint('quiz', __name__, url_prefix=config.API_PREFIX)

from quizhub.quiz import quiz_routes, question_routes, submission_routes  # noqa: E402,F401
