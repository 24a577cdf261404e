from __future__ import annotations

import uuid
from typing import Any

import bcrypt

_users: dict[str, dict[str, Any]] = {}


def _hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode(), bcrypt.gensalt()).decode()


def _verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode(), hashed.encode())


def _public(email: str, record: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": record["id"],
        "email": email,
        "full_name": record["full_name"],
        "role": record["role"],
    }


def _seed_users() -> None:
    """Pre-seed demo users on import; ids line up with the seeded profiles."""
    demo = [
        ("user-1", "john.doe@example.com", "John Doe"),
        ("user-2", "jane.smith@example.com", "Jane Smith"),
        ("user-3", "mike.wilson@example.com", "Mike Wilson"),
    ]
    for user_id, email, name in demo:
        _users[email] = {
            "id": user_id,
            "full_name": name,
            "password_hash": _hash_password("password123"),
            "role": "user",
        }
    _users["admin@example.com"] = {
        "id": "admin-1",
        "full_name": "Site Admin",
        "password_hash": _hash_password("admin123"),
        "role": "admin",
    }


def authenticate(email: str, password: str) -> dict[str, Any] | None:
    """Verify credentials. Returns ``{id, email, full_name, role}`` or ``None``."""
    email = email.strip().lower()
    record = _users.get(email)
    if record and _verify_password(password, record["password_hash"]):
        return _public(email, record)
    return None


def register(email: str, password: str, full_name: str) -> dict[str, Any] | None:
    """Create a user account. Returns ``None`` when the email is taken."""
    email = email.strip().lower()
    if email in _users:
        return None
    record = {
        "id": f"user-{uuid.uuid4().hex[:12]}",
        "full_name": full_name,
        "password_hash": _hash_password(password),
        "role": "user",
    }
    _users[email] = record
    return _public(email, record)


def user_exists(user_id: str) -> bool:
    return any(r["id"] == user_id for r in _users.values())


_seed_users()
