"""
Logging tests

Tests that LOG() output is gated by the verbosity of the connected state.
"""

import pytest

from formscan.lib.log import LOG, logger_configure, state_connectToLogger, verbosity_current
from formscan.models import ProgramState


@pytest.fixture
def messages():
    captured = []
    logger_configure(captured.append)
    yield captured
    state_connectToLogger(None)
    logger_configure()


class TestVerbosityGate:
    """Test level filtering against the connected state"""

    def test_disconnected_logs_nothing(self, messages):
        """Library use without a connected state is silent"""
        state_connectToLogger(None)
        LOG("hidden", level=1)
        assert messages == []
        assert verbosity_current() == 0

    def test_level_at_or_below_verbosity(self, messages):
        """Messages up to the state's verbosity are emitted"""
        state_connectToLogger(ProgramState(verbosity=2))
        LOG("progress", level=1)
        LOG("detail", level=2)
        assert len(messages) == 2
        assert "progress" in messages[0]
        assert "detail" in messages[1]

    def test_level_above_verbosity(self, messages):
        """Messages above the state's verbosity are dropped"""
        state_connectToLogger(ProgramState(verbosity=2))
        LOG("trace", level=3)
        assert messages == []

    def test_verbosity_follows_state(self, messages):
        """Reconnecting switches the governing verbosity"""
        state_connectToLogger(ProgramState(verbosity=3))
        assert verbosity_current() == 3
        state_connectToLogger(ProgramState(verbosity=0))
        LOG("quiet", level=1)
        assert messages == []

    def test_caller_in_record(self, messages):
        """The record names the calling function, not LOG itself"""
        state_connectToLogger(ProgramState(verbosity=1))
        LOG("here", level=1)
        assert "test_caller_in_record" in messages[0]
