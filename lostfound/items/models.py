from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

CATEGORIES: list[str] = [
    "Electronics",
    "Jewelry",
    "Clothing",
    "Bags & Wallets",
    "Keys",
    "Documents",
    "Sports Equipment",
    "Toys",
    "Books",
    "Other",
]


class ItemStatus(str, Enum):
    lost = "lost"
    found = "found"


class MatchStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    rejected = "rejected"


class Profile(BaseModel):
    id: str
    user_id: str
    full_name: str
    phone: str | None = None
    avatar_url: str | None = None
    created_at: datetime
    updated_at: datetime


class ProfileUpdate(BaseModel):
    full_name: str | None = Field(default=None, min_length=1)
    phone: str | None = None
    avatar_url: str | None = None


class Item(BaseModel):
    id: str
    user_id: str
    title: str
    description: str
    category: str
    status: ItemStatus
    location: str
    date_lost_found: str
    contact_info: str
    image_url: str | None = None
    is_resolved: bool = False
    created_at: datetime
    updated_at: datetime


class ItemCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    date_lost_found: str = Field(..., min_length=1, description="Date the item was lost or found")
    contact_info: str = Field(..., min_length=1)
    image_url: str | None = None
    status: ItemStatus = ItemStatus.lost


class FoundItemCreate(ItemCreate):
    referenced_item_id: str | None = Field(
        default=None, description="Lost item this found report answers"
    )


class ItemUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, min_length=1)
    category: str | None = Field(default=None, min_length=1)
    location: str | None = Field(default=None, min_length=1)
    date_lost_found: str | None = Field(default=None, min_length=1)
    contact_info: str | None = Field(default=None, min_length=1)
    image_url: str | None = None
    is_resolved: bool | None = None


class Match(BaseModel):
    id: str
    lost_item_id: str
    found_item_id: str
    lost_item_user_id: str
    found_item_user_id: str
    status: MatchStatus = MatchStatus.pending
    similarity_score: int = Field(default=0, ge=0, le=100)
    created_at: datetime
    updated_at: datetime


class MatchOut(Match):
    lost_item: Item | None = None
    found_item: Item | None = None


class MatchStatusUpdate(BaseModel):
    status: MatchStatus


class Message(BaseModel):
    id: str
    sender_id: str
    receiver_id: str
    item_id: str | None = None
    content: str
    is_read: bool = False
    created_at: datetime
    updated_at: datetime


class MessageCreate(BaseModel):
    receiver_id: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1, max_length=2000)
    item_id: str | None = None


class Conversation(BaseModel):
    id: str
    other_user_id: str
    other_user_name: str
    last_message: str
    last_message_time: datetime
    unread_count: int = 0
    item_id: str | None = None
    item_title: str | None = None


class Dashboard(BaseModel):
    profile: Profile | None
    items: list[Item]
    open_items: list[Item]
    pending_match_count: int
    unread_message_count: int
