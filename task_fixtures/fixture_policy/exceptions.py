# Fixture Policy Exceptions

from task_fixtures.exceptions import FixtureError


class FixturePolicyError(FixtureError):
    """Base exception for all fixture policy errors."""

    def __init__(self, *args, policy_name: str | None = None, detail: str | None = None):
        super().__init__(*args)
        self.policy_name = policy_name
        # Use the first arg as detail if detail kwarg is not provided and args exist
        self.detail = detail or (args[0] if args else None)


class FixtureLoadError(ValueError, FixturePolicyError):
    """Raised for errors while loading a fixture table or instantiating a policy from it."""

    def __init__(self, *args, policy_name: str | None = None, detail: str | None = None):
        FixturePolicyError.__init__(self, *args, policy_name=policy_name, detail=detail)
