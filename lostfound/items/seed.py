"""Demo records the in-memory store starts from."""
from __future__ import annotations

from datetime import datetime

from .models import Item, ItemStatus, Match, MatchStatus, Message, Profile


def _ts(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def seed_profiles() -> list[Profile]:
    return [
        Profile(
            id="profile-1",
            user_id="user-1",
            full_name="John Doe",
            phone="+1 (555) 123-4567",
            created_at=_ts("2024-01-01T00:00:00Z"),
            updated_at=_ts("2024-01-01T00:00:00Z"),
        ),
        Profile(
            id="profile-2",
            user_id="user-2",
            full_name="Jane Smith",
            phone="+1 (555) 987-6543",
            created_at=_ts("2024-01-02T00:00:00Z"),
            updated_at=_ts("2024-01-02T00:00:00Z"),
        ),
        Profile(
            id="profile-3",
            user_id="user-3",
            full_name="Mike Wilson",
            created_at=_ts("2024-01-03T00:00:00Z"),
            updated_at=_ts("2024-01-03T00:00:00Z"),
        ),
    ]


def seed_items() -> list[Item]:
    return [
        Item(
            id="item-1",
            user_id="user-1",
            title="iPhone 13 Pro",
            description=(
                "Lost my iPhone 13 Pro in blue color near Central Park. It has a cracked "
                "screen protector and a black case with my initials 'JD' on it."
            ),
            category="Electronics",
            status=ItemStatus.lost,
            location="Central Park, NYC",
            date_lost_found="2024-01-15",
            contact_info="john.doe@example.com",
            created_at=_ts("2024-01-15T10:00:00Z"),
            updated_at=_ts("2024-01-15T10:00:00Z"),
        ),
        Item(
            id="item-2",
            user_id="user-2",
            title="Black Leather Wallet",
            description=(
                "Found a black leather wallet with credit cards and driver's license. "
                "Contains some cash and business cards."
            ),
            category="Bags & Wallets",
            status=ItemStatus.found,
            location="Times Square, NYC",
            date_lost_found="2024-01-14",
            contact_info="jane.smith@example.com",
            created_at=_ts("2024-01-14T15:30:00Z"),
            updated_at=_ts("2024-01-14T15:30:00Z"),
        ),
        Item(
            id="item-3",
            user_id="user-3",
            title="Red Bicycle",
            description=(
                "Lost my red mountain bike near Brooklyn Bridge. It has a white basket "
                "and a bell. Brand is Trek."
            ),
            category="Sports Equipment",
            status=ItemStatus.lost,
            location="Brooklyn Bridge, NYC",
            date_lost_found="2024-01-13",
            contact_info="mike.wilson@example.com",
            created_at=_ts("2024-01-13T09:15:00Z"),
            updated_at=_ts("2024-01-13T09:15:00Z"),
        ),
        Item(
            id="item-4",
            user_id="user-1",
            title="Blue Backpack",
            description=(
                "Found a blue Jansport backpack with textbooks and a laptop inside. "
                "Left at the coffee shop on 5th Avenue."
            ),
            category="Bags & Wallets",
            status=ItemStatus.found,
            location="5th Avenue Coffee Shop, New York",
            date_lost_found="2024-01-12",
            contact_info="john.doe@example.com",
            created_at=_ts("2024-01-12T14:20:00Z"),
            updated_at=_ts("2024-01-12T14:20:00Z"),
        ),
        Item(
            id="item-5",
            user_id="user-2",
            title="Gold Watch",
            description=(
                "Lost my grandfather's gold watch at the subway station. "
                "It's a vintage Rolex with sentimental value."
            ),
            category="Jewelry",
            status=ItemStatus.lost,
            location="Grand Central Station, NYC",
            date_lost_found="2024-01-11",
            contact_info="jane.smith@example.com",
            is_resolved=True,
            created_at=_ts("2024-01-11T08:45:00Z"),
            updated_at=_ts("2024-01-16T12:00:00Z"),
        ),
    ]


def seed_matches() -> list[Match]:
    return [
        Match(
            id="match-1",
            lost_item_id="item-1",
            found_item_id="item-2",
            lost_item_user_id="user-1",
            found_item_user_id="user-2",
            status=MatchStatus.pending,
            similarity_score=75,
            created_at=_ts("2024-01-16T10:00:00Z"),
            updated_at=_ts("2024-01-16T10:00:00Z"),
        ),
    ]


def seed_messages() -> list[Message]:
    return [
        Message(
            id="message-1",
            sender_id="user-2",
            receiver_id="user-1",
            item_id="item-1",
            content="Hi! I think I might have found your iPhone. Can you describe it in more detail?",
            is_read=False,
            created_at=_ts("2024-01-16T11:00:00Z"),
            updated_at=_ts("2024-01-16T11:00:00Z"),
        ),
        Message(
            id="message-2",
            sender_id="user-1",
            receiver_id="user-2",
            item_id="item-1",
            content=(
                "Yes! It's a blue iPhone 13 Pro with a cracked screen protector "
                "and black case with 'JD' initials."
            ),
            is_read=True,
            created_at=_ts("2024-01-16T11:15:00Z"),
            updated_at=_ts("2024-01-16T11:15:00Z"),
        ),
    ]
