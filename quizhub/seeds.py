"""
Demo data for local development.

Usage:
    flask --app quizhub:create_app seed [--reset]
"""
import click
from flask import current_app

from quizhub import db
from quizhub.auth.models import User
from quizhub.auth.utils import hash_password
from quizhub.quiz import lifecycle, questions
from quizhub.quiz.payloads import QuestionInput, QuizInput
from quizhub.quiz.permissions import Requester

DEMO_PASSWORD = "password123"

DEMO_USERS = [
    {'name': 'Teacher User', 'email': 'teacher@example.com', 'role': User.TEACHER},
    {'name': 'Student User', 'email': 'student@example.com', 'role': User.STUDENT},
]

SAMPLE_QUIZ = {
    'title': 'Sample Quiz',
    'description': 'This is a sample quiz for testing purposes',
    'time_limit_minutes': 30,
}

SAMPLE_QUESTIONS = [
    {
        'text': 'What is the capital of France?',
        'choices': [
            {'text': 'London', 'is_correct': False},
            {'text': 'Paris', 'is_correct': True},
            {'text': 'Berlin', 'is_correct': False},
            {'text': 'Madrid', 'is_correct': False},
        ],
        'is_multiple_choice': False,
        'points': 1,
    },
    {
        'text': 'Which of the following are programming languages?',
        'choices': [
            {'text': 'JavaScript', 'is_correct': True},
            {'text': 'HTML', 'is_correct': False},
            {'text': 'Python', 'is_correct': True},
            {'text': 'CSS', 'is_correct': False},
        ],
        'is_multiple_choice': True,
        'points': 2,
    },
    {
        'text': 'What is 2 + 2?',
        'choices': [
            {'text': '3', 'is_correct': False},
            {'text': '4', 'is_correct': True},
            {'text': '5', 'is_correct': False},
            {'text': '22', 'is_correct': False},
        ],
        'is_multiple_choice': False,
        'points': 1,
    },
]


def seed_demo_data() -> dict:
    """Create the demo users and one published sample quiz. Returns what was created."""
    users = {}
    for fields in DEMO_USERS:
        user = User.query.filter_by(email=fields['email']).first()
        if user is None:
            user = User(password_hash=hash_password(DEMO_PASSWORD), **fields)
            db.session.add(user)
        users[fields['role']] = user
    db.session.commit()

    teacher = Requester.from_user(users[User.TEACHER])
    quiz = lifecycle.create_quiz(teacher, QuizInput.from_json(SAMPLE_QUIZ))
    for question in SAMPLE_QUESTIONS:
        questions.add_question(quiz.id, teacher, QuestionInput.from_json(question))
    lifecycle.publish_quiz(quiz.id, teacher)

    current_app.logger.info(f"Seeded {len(users)} users and quiz {quiz.id}")
    return {'users': users, 'quiz': quiz}


def register_commands(app):
    @app.cli.command("seed")
    @click.option("--reset", is_flag=True, help="Drop and recreate all tables first.")
    def seed_command(reset):
        """Load demo users and a published sample quiz."""
        if reset:
            db.drop_all()
            db.create_all()
            click.echo("Database reset")
        created = seed_demo_data()
        click.echo(
            f"Seeded quiz {created['quiz'].id}; log in as teacher@example.com "
            f"or student@example.com with password '{DEMO_PASSWORD}'"
        )
