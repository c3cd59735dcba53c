import os
import sys
import pytest

# Ensure the backend root (containing the `repguess` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from repguess import create_app, socketio
from repguess.services.games.engine import get_engine
from repguess.services.games.scheduler import ScheduledTask


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    ROUND_DURATION_SEC = 30
    SUCCESS_RESTART_DELAY_SEC = 1
    TICK_INTERVAL_SEC = 0
    CUE_DURATION_MS = 300
    DEFAULT_DIFFICULTY = 'medium'
    REJECT_ZERO_GUESS = True
    TIMER_HEARTBEAT_SEC = 0
    CORS_ORIGINS = []


class ManualScheduler:
    """Collects delayed callbacks so tests decide when they fire."""

    def __init__(self):
        self.tasks = []

    def call_later(self, delay, fn, *args):
        task = ScheduledTask(delay, fn, args)
        self.tasks.append(task)
        return task

    @property
    def pending(self):
        return [t for t in self.tasks if not t.cancelled and not t.fired]

    def run_pending(self):
        for task in list(self.tasks):
            task.run()


class FixedRandom:
    """random.Random stand-in returning queued values, then the last one forever."""

    def __init__(self, *values):
        self.values = list(values) or [0.5]

    def random(self):
        if len(self.values) > 1:
            return self.values.pop(0)
        return self.values[0]


def value_for(target, low, high):
    """The random() result that makes draw_target pick ``target`` in [low, high]."""
    return (target - low + 0.5) / (high - low + 1)


@pytest.fixture()
def scheduler():
    return ManualScheduler()


@pytest.fixture()
def flask_app(scheduler):
    application = create_app(TestConfig, scheduler=scheduler)
    with application.app_context():
        yield application


@pytest.fixture()
def engine(flask_app):
    return get_engine(flask_app)


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    if test_client.is_connected('/ws'):
        test_client.disconnect(namespace='/ws')
