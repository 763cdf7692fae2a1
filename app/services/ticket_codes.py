"""Ticket code generation.

Codes look like ``GAL-48213``. Draws are independent and are never checked
against the store, so two tickets can share a code (1 in 90000 per draw).
"""

import random

CODE_PREFIX = "GAL-"
CODE_MIN = 10000
CODE_MAX = 99999


def generate_ticket_code() -> str:
    """Return a new ticket code in the range GAL-10000 to GAL-99999."""
    return f"{CODE_PREFIX}{random.randint(CODE_MIN, CODE_MAX)}"
