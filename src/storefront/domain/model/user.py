"""User: read-only view of a customer account.

Accounts are managed elsewhere; orders only reference them by id and
show a short summary back to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class User:
    id: str
    name: str
    email: str
