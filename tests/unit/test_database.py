"""
Unit tests for the engine and session factories.
"""

from sqlmodel import Session

from forecast.database import PollSession, engine


class TestPollSession:

    def test_poll_sessions_keep_rows_loaded_after_commit(self):
        assert PollSession.kw["expire_on_commit"] is False
        assert PollSession.kw["bind"] is engine

    def test_poll_session_is_a_sqlmodel_session(self):
        with PollSession() as session:
            assert isinstance(session, Session)
