import itertools
import time

_counter = itertools.count()


def unique_token() -> str:
    """Returns a time-based token for naming test accounts.

    Millisecond timestamps collide when two accounts are generated within the
    same millisecond, so a process-wide counter is appended.
    """
    return f"{int(time.time() * 1000)}_{next(_counter)}"
