"""Dredd hook file for the task-management API.

Run with::

    dredd api-description.yml http://127.0.0.1:8080 --language python --hookfiles task_fixtures/hooks.py

The dredd_hooks loader only registers module-level callables carrying its
decorator marks, so every hook below is bound to a module name.
"""

import dredd_hooks as hooks

from task_fixtures.core.logging import setup_logging
from task_fixtures.dredd_bridge import DreddHookBridge, build_controller

setup_logging()

bridge = DreddHookBridge(build_controller())


@hooks.before_all
def before_all(transactions):
    bridge.before_all(transactions)


@hooks.before_each
def before_each(transaction):
    bridge.before_each(transaction)


def before_named(transaction):
    bridge.before_named(transaction)


for transaction_name in bridge.controller.named_fixtures:
    before_named = hooks.before(transaction_name)(before_named)


@hooks.after_all
def after_all(transactions):
    bridge.after_all(transactions)
