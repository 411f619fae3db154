from task_fixtures.core.session import FixtureSession
from task_fixtures.core.unique import unique_token


def test_new_session_is_unauthenticated():
    session = FixtureSession()

    assert not session.is_authenticated
    assert session.bearer_value() is None
    assert session.task_id is None


def test_bearer_value():
    session = FixtureSession(token="abc")

    assert session.is_authenticated
    assert session.bearer_value() == "Bearer abc"


def test_unique_tokens_do_not_repeat():
    tokens = [unique_token() for _ in range(500)]

    assert len(set(tokens)) == len(tokens)
