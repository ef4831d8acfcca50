"""Identity view handed to other modules — no SQLAlchemy dependency."""

from dataclasses import dataclass


@dataclass
class User:
    id: str
    username: str
    is_active: bool
    balance: int   # cents, from the accounts row
