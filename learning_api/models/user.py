from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class User:
    id: int
    name: str
    email: str
    password_hash: str
    is_active: bool = True

    @staticmethod
    def new(
        *, id: int, name: str, email: str, password_hash: str, is_active: bool = True
    ) -> User:
        # Emails are matched exactly at login; normalize once, here.
        return User(
            id=id,
            name=name.strip(),
            email=email.strip().lower(),
            password_hash=password_hash,
            is_active=is_active,
        )
