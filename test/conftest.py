"""
Pytest configuration and fixtures.
"""
import os

# Must be set before quizhub is imported: config is read at import time
os.environ['DATABASE_URL'] = 'sqlite:///:memory:'
os.environ['SECRET_KEY'] = 'test-secret-key'
os.environ['FLASK_ENV'] = 'testing'
os.environ['RATE_LIMIT_ENABLED'] = 'false'

import pytest
from flask import g

from quizhub import create_app, db
from quizhub.auth.models import User
from quizhub.auth.utils import hash_password
from quizhub.quiz.permissions import Requester
from quizhub.security import get_rate_limiter

PASSWORD = 'secret123'


@pytest.fixture(scope='function')
def app():
    """Create a fresh application and database for each test."""
    app = create_app()
    app.config['TESTING'] = True

    @app.teardown_request
    def forget_login_user(exc):
        # Client requests reuse the app context pushed below, and with it flask.g
        g.pop('_login_user', None)

    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()

    get_rate_limiter().reset()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


def make_user(name, email, role):
    user = User(name=name, email=email, password_hash=hash_password(PASSWORD), role=role)
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def teacher(app):
    return make_user('Teacher One', 'teacher@test.com', User.TEACHER)


@pytest.fixture
def other_teacher(app):
    return make_user('Teacher Two', 'teacher2@test.com', User.TEACHER)


@pytest.fixture
def student(app):
    return make_user('Student One', 'student@test.com', User.STUDENT)


@pytest.fixture
def other_student(app):
    return make_user('Student Two', 'student2@test.com', User.STUDENT)


def login_client(app, user):
    """Test client whose session belongs to ``user``."""
    client = app.test_client()
    with client.session_transaction() as sess:
        sess['_user_id'] = str(user.id)
        sess['_fresh'] = True
    return client


@pytest.fixture
def teacher_client(app, teacher):
    return login_client(app, teacher)


@pytest.fixture
def other_teacher_client(app, other_teacher):
    return login_client(app, other_teacher)


@pytest.fixture
def student_client(app, student):
    return login_client(app, student)


@pytest.fixture
def as_teacher(teacher):
    return Requester.from_user(teacher)


@pytest.fixture
def as_other_teacher(other_teacher):
    return Requester.from_user(other_teacher)


@pytest.fixture
def as_student(student):
    return Requester.from_user(student)


@pytest.fixture
def as_other_student(other_student):
    return Requester.from_user(other_student)


def single_choice_question(text='What is 2 + 2?', correct=1, points=1):
    choices = [{'text': str(i + 3), 'is_correct': i == correct} for i in range(4)]
    return {'text': text, 'choices': choices, 'is_multiple_choice': False, 'points': points}


def multi_choice_question(text='Pick the even numbers', correct=(0, 2), points=2):
    choices = [{'text': str(n), 'is_correct': i in correct} for i, n in enumerate((2, 3, 4, 5))]
    return {'text': text, 'choices': choices, 'is_multiple_choice': True, 'points': points}


def sample_questions():
    """Three questions worth 1, 2 and 1 points; correct answers {1}, {0, 2}, {1}."""
    return [
        single_choice_question('What is 2 + 2?', correct=1, points=1),
        multi_choice_question('Pick the even numbers', correct=(0, 2), points=2),
        single_choice_question('What is 1 + 3?', correct=1, points=1),
    ]


@pytest.fixture
def draft_quiz(as_teacher):
    """A draft quiz owned by ``teacher`` with the three sample questions."""
    from quizhub.quiz import lifecycle, questions
    from quizhub.quiz.payloads import QuestionInput, QuizInput

    quiz = lifecycle.create_quiz(as_teacher, QuizInput(title='Arithmetic', description='Warm-up', time_limit_minutes=10))
    for data in sample_questions():
        questions.add_question(quiz.id, as_teacher, QuestionInput.from_json(data))
    return quiz


@pytest.fixture
def published_quiz(draft_quiz, as_teacher):
    from quizhub.quiz import lifecycle

    return lifecycle.publish_quiz(draft_quiz.id, as_teacher)
