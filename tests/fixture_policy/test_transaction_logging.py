import logging

from task_fixtures.core.transaction import Transaction
from task_fixtures.fixture_policy.transaction_logging import TransactionLoggingPolicy


def test_logs_method_path_status_and_name(session, caplog):
    transaction = Transaction(
        name="/tasks > Get user tasks > 200 > application/json",
        method="GET",
        full_path="/tasks",
        expected_status_code=200,
    )
    before = transaction.model_copy(deep=True)

    with caplog.at_level(logging.INFO):
        result = TransactionLoggingPolicy().apply(transaction, session)

    assert result == before
    assert "GET /tasks - 200" in caplog.text
    assert "Hook name: /tasks > Get user tasks > 200 > application/json" in caplog.text


def test_header_dump_is_redacted(session, caplog):
    transaction = Transaction(full_path="/tasks", headers={"Authorization": "Bearer setup-token"})

    with caplog.at_level(logging.DEBUG):
        TransactionLoggingPolicy(log_headers=True).apply(transaction, session)

    assert "[REDACTED]" in caplog.text
    assert "setup-token" not in caplog.text
