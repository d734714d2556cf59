"""
Pytest fixtures for patience tests.
"""

import pytest

from patience.engine_core.deck import deal_new_game
from patience.engine_core.reducer import Reducer
from patience.engine_core.state import GameState
from patience.session import GameLoop, Session


@pytest.fixture
def dealt_state() -> GameState:
    """A freshly dealt, reproducible game."""
    return deal_new_game(random_seed=1234)


@pytest.fixture
def reducer() -> Reducer:
    return Reducer()


@pytest.fixture
def session(dealt_state: GameState) -> Session:
    return Session(session_id="test_session", game_state=dealt_state)


@pytest.fixture
def game_loop(session: Session) -> GameLoop:
    return GameLoop(session)
