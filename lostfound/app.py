from __future__ import annotations

import logging
import os

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from starlette.middleware.sessions import SessionMiddleware

from .analytics.aggregator import compute_analytics
from .analytics.store import get_events
from .auth.dependencies import (
    ensure_participant,
    get_current_user,
    require_admin,
    require_user,
)
from .auth.models import LoginRequest, SignupRequest
from .auth.users import authenticate, register, user_exists
from .items.models import (
    CATEGORIES,
    Conversation,
    Dashboard,
    FoundItemCreate,
    Item,
    ItemCreate,
    ItemStatus,
    ItemUpdate,
    MatchOut,
    MatchStatus,
    MatchStatusUpdate,
    Message,
    MessageCreate,
    Profile,
    ProfileUpdate,
)
from .items.query import ItemQuery
from .items.store import InMemoryStore, get_store
from .matching.service import link_found_report, matches_for_user
from .messaging.conversations import build_conversations
from .search.models import SearchRequest, SearchResponse, TimeRange
from .search.service import search_items

logger = logging.getLogger(__name__)

app = FastAPI(title="Lost & Found API", version="1.0.0")
app.add_middleware(
    SessionMiddleware,
    secret_key=os.environ.get("SESSION_SECRET", "lostfound-secret-change-in-production"),
)


def _get_item_or_404(store: InMemoryStore, item_id: str) -> Item:
    item = store.get_item(item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Item not found")
    return item


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata() -> dict:
    return {
        "categories": CATEGORIES,
        "statuses": [s.value for s in ItemStatus],
        "time_ranges": [t.value for t in TimeRange],
    }


@app.post("/search", response_model=SearchResponse)
def search(
    body: SearchRequest,
    store: InMemoryStore = Depends(get_store),
) -> SearchResponse:
    return search_items(store, body)


@app.get("/items", response_model=list[Item])
def list_items(
    status: ItemStatus | None = None,
    category: str | None = None,
    q: str | None = None,
    is_resolved: bool | None = None,
    mine: bool = False,
    limit: int = Query(default=50, ge=1, le=100),
    user: dict | None = Depends(get_current_user),
    store: InMemoryStore = Depends(get_store),
) -> list[Item]:
    query = ItemQuery()
    if mine:
        if not user:
            raise HTTPException(status_code=401, detail="Please sign in to continue")
        query = query.filter_by_field("user_id", user["id"])
    if status is not None:
        query = query.filter_by_field("status", status)
    if category:
        query = query.filter_by_field("category", category)
    query = query.matching_text(q)
    if is_resolved is not None:
        query = query.filter_by_field("is_resolved", is_resolved)
    return store.get_items(query.limit(limit)).data


@app.get("/items/{item_id}", response_model=Item)
def get_item(item_id: str, store: InMemoryStore = Depends(get_store)) -> Item:
    return _get_item_or_404(store, item_id)


# ── Auth endpoints ───────────────────────────────────────────────────────


@app.post("/auth/login")
def login(body: LoginRequest, request: Request) -> dict:
    user = authenticate(body.email, body.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    request.session["user"] = user
    return {"status": "ok", "user": user}


@app.post("/auth/signup", status_code=201)
def signup(
    body: SignupRequest,
    request: Request,
    store: InMemoryStore = Depends(get_store),
) -> dict:
    user = register(body.email, body.password, body.full_name)
    if not user:
        raise HTTPException(status_code=409, detail="User already exists")
    store.create_profile(user["id"], body.full_name, body.phone)
    request.session["user"] = user
    return {"status": "ok", "user": user}


@app.post("/auth/logout")
def logout(request: Request) -> dict:
    request.session.clear()
    return {"status": "logged_out"}


@app.get("/auth/me")
def auth_me(user: dict = Depends(require_user)) -> dict:
    return user


# ── Reporting ────────────────────────────────────────────────────────────


@app.post("/items/lost", response_model=Item, status_code=201)
def report_lost(
    body: ItemCreate,
    user: dict = Depends(require_user),
    store: InMemoryStore = Depends(get_store),
) -> Item:
    return store.create_item(body, user["id"], status=ItemStatus.lost)


@app.post("/items/found", response_model=Item, status_code=201)
def report_found(
    body: FoundItemCreate,
    user: dict = Depends(require_user),
    store: InMemoryStore = Depends(get_store),
) -> Item:
    # Validate the referenced listing before creating anything.
    lost_item = None
    if body.referenced_item_id:
        lost_item = _get_item_or_404(store, body.referenced_item_id)
        if lost_item.status != ItemStatus.lost:
            raise HTTPException(status_code=400, detail="Referenced item is not a lost report")
        if lost_item.user_id == user["id"]:
            raise HTTPException(status_code=400, detail="Cannot answer your own lost report")

    item = store.create_item(body, user["id"], status=ItemStatus.found)
    if lost_item is not None:
        link_found_report(store, lost_item, item)
    return item


@app.patch("/items/{item_id}", response_model=Item)
def update_item(
    item_id: str,
    body: ItemUpdate,
    user: dict = Depends(require_user),
    store: InMemoryStore = Depends(get_store),
) -> Item:
    item = _get_item_or_404(store, item_id)
    ensure_participant(user, item.user_id, action="edit this listing")
    return store.update_item(item_id, body)


# ── Matches ──────────────────────────────────────────────────────────────


@app.get("/matches", response_model=list[MatchOut])
def list_matches(
    status: MatchStatus | None = None,
    user: dict = Depends(require_user),
    store: InMemoryStore = Depends(get_store),
) -> list[MatchOut]:
    return matches_for_user(store, user["id"], status)


@app.patch("/matches/{match_id}", response_model=MatchOut)
def update_match(
    match_id: str,
    body: MatchStatusUpdate,
    user: dict = Depends(require_user),
    store: InMemoryStore = Depends(get_store),
) -> MatchOut:
    match = store.get_match(match_id)
    if match is None:
        raise HTTPException(status_code=404, detail="Match not found")
    ensure_participant(
        user, match.lost_item_user_id, match.found_item_user_id, action="review this match",
    )
    updated = store.update_match_status(match_id, body.status)
    logger.info("Match %s marked %s by %s", match_id, body.status.value, user["id"])
    return MatchOut(
        **updated.model_dump(),
        lost_item=store.get_item(updated.lost_item_id),
        found_item=store.get_item(updated.found_item_id),
    )


# ── Messages ─────────────────────────────────────────────────────────────


@app.get("/messages/conversations", response_model=list[Conversation])
def conversations(
    user: dict = Depends(require_user),
    store: InMemoryStore = Depends(get_store),
) -> list[Conversation]:
    messages = store.get_messages(user["id"])
    participants = {m.sender_id for m in messages} | {m.receiver_id for m in messages}
    items = {m.item_id: store.get_item(m.item_id) for m in messages if m.item_id}
    return build_conversations(
        user["id"],
        messages,
        store.get_profiles(participants),
        {k: v for k, v in items.items() if v is not None},
    )


@app.get("/messages/{other_user_id}", response_model=list[Message])
def thread(
    other_user_id: str,
    user: dict = Depends(require_user),
    store: InMemoryStore = Depends(get_store),
) -> list[Message]:
    store.mark_thread_read(user["id"], other_user_id)
    return store.get_thread(user["id"], other_user_id)


@app.post("/messages", response_model=Message, status_code=201)
def send_message(
    body: MessageCreate,
    user: dict = Depends(require_user),
    store: InMemoryStore = Depends(get_store),
) -> Message:
    if not body.content.strip():
        raise HTTPException(status_code=422, detail="Message cannot be empty")
    if body.receiver_id == user["id"]:
        raise HTTPException(status_code=400, detail="Cannot message yourself")
    if not user_exists(body.receiver_id):
        raise HTTPException(status_code=404, detail="Recipient not found")
    if body.item_id:
        _get_item_or_404(store, body.item_id)
    return store.send_message(user["id"], body)


@app.post("/messages/{message_id}/read", response_model=Message)
def mark_read(
    message_id: str,
    user: dict = Depends(require_user),
    store: InMemoryStore = Depends(get_store),
) -> Message:
    message = store.get_message(message_id)
    if message is None:
        raise HTTPException(status_code=404, detail="Message not found")
    ensure_participant(user, message.receiver_id, action="mark this message as read")
    return store.mark_message_read(message_id)


# ── Profile / dashboard ──────────────────────────────────────────────────


@app.get("/profile", response_model=Profile)
def get_profile(
    user: dict = Depends(require_user),
    store: InMemoryStore = Depends(get_store),
) -> Profile:
    profile = store.get_profile(user["id"])
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


@app.patch("/profile", response_model=Profile)
def update_profile(
    body: ProfileUpdate,
    user: dict = Depends(require_user),
    store: InMemoryStore = Depends(get_store),
) -> Profile:
    profile = store.update_profile(user["id"], body)
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


@app.get("/dashboard", response_model=Dashboard)
def dashboard(
    user: dict = Depends(require_user),
    store: InMemoryStore = Depends(get_store),
) -> Dashboard:
    mine = ItemQuery().filter_by_field("user_id", user["id"])
    open_items = ItemQuery().filter_by_field("is_resolved", False)
    return Dashboard(
        profile=store.get_profile(user["id"]),
        items=store.get_items(mine).data,
        open_items=store.get_items(open_items).data,
        pending_match_count=store.count_matches(user["id"], MatchStatus.pending),
        unread_message_count=store.count_unread(user["id"]),
    )


# ── Admin endpoints ──────────────────────────────────────────────────────


@app.get("/analytics")
def analytics(
    user: dict = Depends(require_admin),
    store: InMemoryStore = Depends(get_store),
) -> dict:
    return {**compute_analytics(get_events()), "listings": store.summary()}
