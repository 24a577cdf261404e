from __future__ import annotations

from ..items.models import Conversation, Item, Message, Profile


def conversation_key(a: str, b: str) -> str:
    first, second = sorted((a, b))
    return f"{first}-{second}"


def build_conversations(
    user_id: str,
    messages: list[Message],
    profiles: dict[str, Profile],
    items: dict[str, Item],
) -> list[Conversation]:
    """Group *messages* by the other participant, most recent conversation first."""
    conversations: dict[str, Conversation] = {}

    for message in messages:
        other_id = message.receiver_id if message.sender_id == user_id else message.sender_id
        key = conversation_key(user_id, other_id)
        unread = int(message.receiver_id == user_id and not message.is_read)

        existing = conversations.get(key)
        if existing is None:
            profile = profiles.get(other_id)
            item = items.get(message.item_id) if message.item_id else None
            conversations[key] = Conversation(
                id=key,
                other_user_id=other_id,
                other_user_name=profile.full_name if profile else "Unknown User",
                last_message=message.content,
                last_message_time=message.created_at,
                unread_count=unread,
                item_id=message.item_id,
                item_title=item.title if item else None,
            )
            continue

        if message.created_at > existing.last_message_time:
            existing.last_message = message.content
            existing.last_message_time = message.created_at
        existing.unread_count += unread

    return sorted(conversations.values(), key=lambda c: c.last_message_time, reverse=True)
