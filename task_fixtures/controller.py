# Prepares authenticated state for a Dredd run and adapts each transaction to it.

import logging
from typing import List, Optional

import httpx

from task_fixtures.api.client import TaskApiClient
from task_fixtures.api.datatypes import RegisterRequest, TaskCreate, UserCredentials
from task_fixtures.auth.token_source import LoginTokenSource, StaticTokenSource, TokenSource
from task_fixtures.core.dependency_container import DependencyContainer
from task_fixtures.core.report import FixtureReport, FixtureStatus
from task_fixtures.core.session import FixtureSession
from task_fixtures.core.transaction import Transaction
from task_fixtures.core.unique import unique_token
from task_fixtures.exceptions import ApiResponseError
from task_fixtures.fixture_policy.bearer_auth import BearerAuthPolicy
from task_fixtures.fixture_policy.fixture_policy import FixturePolicy
from task_fixtures.fixture_policy.transaction_logging import TransactionLoggingPolicy
from task_fixtures.fixtures.named_fixtures import NamedFixtures

logger = logging.getLogger(__name__)

SEED_TASK = TaskCreate(
    title="Test Task for Dredd",
    description="This is a test task for Dredd testing",
    status="pending",
    priority="high",
)

STEP_REGISTER = "register"
STEP_LOGIN = "login"
STEP_SEED_TASK = "seed_task"
STEP_DELETE_TASK = "delete_task"


class FixtureController:
    """Owns the FixtureSession of one Dredd run and every hook that reads or writes it.

    ``setup`` and ``teardown`` are best effort: every step outcome lands in a
    FixtureReport that is logged and returned, and nothing is raised for
    service or transport failures, so a fixture problem only fails the
    transactions that depend on it instead of aborting the run.

    Attributes:
        container: Settings and HTTP client factory.
        session: The authenticated state. Written only by ``setup``.
        named_fixtures: Per-transaction-name fixture table.
        each_policies: Policies applied to every transaction, in order.
    """

    def __init__(
        self,
        container: DependencyContainer,
        named_fixtures: Optional[NamedFixtures] = None,
        session: Optional[FixtureSession] = None,
        each_policies: Optional[List[FixturePolicy]] = None,
    ):
        self.container = container
        self.session = session if session is not None else FixtureSession()
        self.named_fixtures = named_fixtures if named_fixtures is not None else NamedFixtures()
        if each_policies is None:
            log_headers = container.settings.get_log_level() == "DEBUG"
            each_policies = [TransactionLoggingPolicy(log_headers=log_headers), BearerAuthPolicy()]
        self.each_policies = each_policies
        self.setup_report: Optional[FixtureReport] = None
        self.teardown_report: Optional[FixtureReport] = None

    # --- Suite-level hooks ---

    async def setup(self) -> FixtureReport:
        """Registers a fresh account, logs in and seeds one task."""
        report = FixtureReport(stage="setup")
        settings = self.container.settings

        token = unique_token()
        self.session.username = f"dredd_test_{token}"
        self.session.email = f"dredd_test_{token}@test.com"
        self.session.password = settings.get_test_user_password()

        async with self.container.create_http_client() as http_client:
            client = TaskApiClient(http_client)

            # Always registered: the login 200 fixture replays these credentials.
            await self._register(client, report)

            static_token = settings.get_static_token()
            token_source: TokenSource
            if static_token:
                token_source = StaticTokenSource(static_token)
            else:
                token_source = LoginTokenSource(
                    UserCredentials(email=self.session.email, password=self.session.password)
                )

            await self._login(client, token_source, report)
            await self._seed_task(client, report)

        self._log_report(report)
        self.setup_report = report
        return report

    async def _register(self, client: TaskApiClient, report: FixtureReport) -> None:
        request = RegisterRequest(
            username=self.session.username or "",
            email=self.session.email or "",
            password=self.session.password or "",
        )
        try:
            await client.register(request)
        except ApiResponseError as e:
            if e.is_client_error:
                report.record(STEP_REGISTER, FixtureStatus.SUCCESS, f"account already exists ({e.status_code})")
            else:
                report.record(STEP_REGISTER, FixtureStatus.FAILED, str(e))
            return
        except httpx.HTTPError as e:
            report.record(STEP_REGISTER, FixtureStatus.FAILED, f"{e.__class__.__name__}: {e}")
            return
        report.record(STEP_REGISTER, FixtureStatus.SUCCESS)

    async def _login(self, client: TaskApiClient, token_source: TokenSource, report: FixtureReport) -> None:
        try:
            self.session.token = await token_source.bearer_token(client)
        except ApiResponseError as e:
            report.record(STEP_LOGIN, FixtureStatus.FAILED, str(e))
            return
        except httpx.HTTPError as e:
            report.record(STEP_LOGIN, FixtureStatus.FAILED, f"{e.__class__.__name__}: {e}")
            return
        if isinstance(token_source, LoginTokenSource):
            self.session.user_id = token_source.user_id
        report.record(STEP_LOGIN, FixtureStatus.SUCCESS)

    async def _seed_task(self, client: TaskApiClient, report: FixtureReport) -> None:
        if not self.session.token:
            report.record(STEP_SEED_TASK, FixtureStatus.SKIPPED, "no token held")
            return
        try:
            record = await client.create_task(self.session.token, SEED_TASK)
        except ApiResponseError as e:
            report.record(STEP_SEED_TASK, FixtureStatus.FAILED, str(e))
            return
        except httpx.HTTPError as e:
            report.record(STEP_SEED_TASK, FixtureStatus.FAILED, f"{e.__class__.__name__}: {e}")
            return
        self.session.task_id = record.id
        report.record(STEP_SEED_TASK, FixtureStatus.SUCCESS, f"task id {record.id}")

    async def teardown(self) -> FixtureReport:
        """Deletes the seeded task if there is one."""
        report = FixtureReport(stage="teardown")

        if self.session.task_id is None or not self.session.token:
            report.record(STEP_DELETE_TASK, FixtureStatus.SKIPPED, "nothing seeded")
        else:
            async with self.container.create_http_client() as http_client:
                client = TaskApiClient(http_client)
                try:
                    await client.delete_task(self.session.token, self.session.task_id)
                except ApiResponseError as e:
                    report.record(STEP_DELETE_TASK, FixtureStatus.FAILED, str(e))
                except httpx.HTTPError as e:
                    report.record(STEP_DELETE_TASK, FixtureStatus.FAILED, f"{e.__class__.__name__}: {e}")
                else:
                    report.record(STEP_DELETE_TASK, FixtureStatus.SUCCESS, f"task id {self.session.task_id}")
                    self.session.task_id = None

        self._log_report(report)
        self.teardown_report = report
        return report

    @staticmethod
    def _log_report(report: FixtureReport) -> None:
        if report.status in (FixtureStatus.SUCCESS, FixtureStatus.SKIPPED):
            logger.info(report.summary())
        else:
            logger.warning(f"Degraded {report.summary()}")

    # --- Transaction-level hooks ---

    def before_each(self, transaction: Transaction) -> Transaction:
        """Logs the transaction and injects the bearer token where the path needs it."""
        for policy in self.each_policies:
            transaction = policy.apply(transaction, self.session)
        return transaction

    def before_named(self, transaction: Transaction) -> Transaction:
        """Applies the fixture registered for the transaction's name."""
        return self.named_fixtures.apply(transaction, self.session)
