from task_fixtures.core.session import FixtureSession
from task_fixtures.core.transaction import Transaction
from task_fixtures.fixture_policy.invalid_token import INVALID_BEARER_VALUE, InvalidTokenPolicy


def test_sets_invalid_token_even_without_session_token():
    transaction = Transaction(full_path="/logout")

    InvalidTokenPolicy().apply(transaction, FixtureSession())

    assert transaction.headers["Authorization"] == INVALID_BEARER_VALUE == "Bearer invalid_token_here"


def test_overrides_session_token(session):
    transaction = Transaction(full_path="/tasks", headers={"Authorization": "Bearer setup-token"})

    InvalidTokenPolicy().apply(transaction, session)

    assert transaction.headers == {"Authorization": "Bearer invalid_token_here"}


def test_custom_value(session):
    transaction = Transaction(full_path="/tasks")

    InvalidTokenPolicy(header_value="Bearer expired").apply(transaction, session)

    assert transaction.headers["Authorization"] == "Bearer expired"
