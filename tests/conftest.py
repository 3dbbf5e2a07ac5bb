# tests/conftest.py
from datetime import date

import pytest

from directory import StudentDirectory
from roster_store import counter_ids

TODAY = date(2026, 6, 1)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def strict_directory():
    return StudentDirectory('strict', id_generator=counter_ids(), today=lambda: TODAY)


@pytest.fixture
def extended_directory():
    return StudentDirectory('extended', id_generator=counter_ids(), today=lambda: TODAY)


@pytest.fixture
def strict_submission():
    """A submission that passes the strict rule set."""
    return {
        'name': 'John Doe',
        'email': 'JOHN@School.EDU',
        'phone': '9876543210',
        'parent_name': 'Jane Doe',
        'parent_phone': '9123456789',
    }


@pytest.fixture
def extended_submission(strict_submission):
    """A submission that passes the extended rule set."""
    return {
        **strict_submission,
        'student_id': 'CS2024001',
        'date_of_birth': '2006-09-15',
        'gender': 'Male',
        'course': 'Computer Science',
        'address': '12 Park Street, Kolkata',
    }


@pytest.fixture
def app(tmp_path):
    """Flask app with a fresh extended roster and temporary folders."""
    from app import app as flask_app

    flask_app.config['TESTING'] = True
    flask_app.config['UPLOAD_FOLDER'] = str(tmp_path / 'uploads')
    flask_app.config['EXPORT_FOLDER'] = str(tmp_path / 'exports')
    flask_app.config['STUDENT_DIRECTORY'] = StudentDirectory(
        'extended', id_generator=counter_ids(), today=lambda: TODAY
    )
    yield flask_app


@pytest.fixture
def client(app):
    return app.test_client()
