from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone

import pytest
from flask import Flask

from src.attendance_core.attendance_core.main import register_error_handlers
from src.attendance_core.attendance_core.sessions.codec import TokenCodec
from src.attendance_core.attendance_core.sessions.gate import SessionGate
from tests.fakes import TEST_SECRET


@pytest.fixture
def fixed_now():
    # 2025-12-09 09:30 in Asia/Manila
    return datetime(2025, 12, 9, 1, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def app():
    app = Flask(__name__)
    app.config["TESTING"] = True
    register_error_handlers(app)
    return app


@pytest.fixture
def codec(app):
    return TokenCodec(app, secret=TEST_SECRET)


@pytest.fixture
def gate(codec):
    return SessionGate(codec)


@pytest.fixture
def executor():
    pool = ThreadPoolExecutor(max_workers=2)
    yield pool
    pool.shutdown(wait=True)
