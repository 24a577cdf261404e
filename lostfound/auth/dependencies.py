from __future__ import annotations

from fastapi import HTTPException, Request


def get_current_user(request: Request) -> dict | None:
    """Return the session user for pages that also work signed out."""
    return request.session.get("user")


def require_user(request: Request) -> dict:
    """Raise 401 unless someone is signed in."""
    user = request.session.get("user")
    if not user:
        raise HTTPException(status_code=401, detail="Please sign in to continue")
    return user


def require_admin(request: Request) -> dict:
    """Raise 401 if signed out, 403 for non-admin accounts."""
    user = require_user(request)
    if user.get("role") != "admin":
        raise HTTPException(status_code=403, detail="Admin access required")
    return user


def ensure_participant(user: dict, *owner_ids: str, action: str = "modify this record") -> None:
    """Raise 403 unless *user* is one of *owner_ids*."""
    if user["id"] not in owner_ids:
        raise HTTPException(status_code=403, detail=f"You are not allowed to {action}")
