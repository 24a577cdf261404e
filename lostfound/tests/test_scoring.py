from __future__ import annotations

from datetime import datetime, timedelta, timezone

from lostfound.items.models import Item, ItemStatus
from lostfound.search.models import ScoredItem
from lostfound.search.scoring import rank, score, smart_matches

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def _item(
    title="iPhone 13 Pro",
    description="blue phone",
    category="Electronics",
    created_at=NOW,
    item_id="item-1",
) -> Item:
    return Item(
        id=item_id,
        user_id="user-1",
        title=title,
        description=description,
        category=category,
        status=ItemStatus.lost,
        location="Chicago",
        date_lost_found="2024-05-30",
        contact_info="a@example.com",
        created_at=created_at,
        updated_at=created_at,
    )


def _scored(item_id: str, similarity: int) -> ScoredItem:
    return ScoredItem(**_item(item_id=item_id).model_dump(), similarity_score=similarity)


def test_empty_query_scores_zero():
    assert score(_item(), "", now=NOW) == 0


def test_title_phrase_match_clamps_to_100():
    # whole-query title hit (+100) and word hit (+25) plus recency exceed the cap
    assert score(_item(), "iphone", now=NOW) == 100
    assert score(_item(), "IPHONE 13", now=NOW) == 100


def test_word_match_plus_recency():
    # "iphone case" is not contained anywhere as a phrase; "iphone" hits the title
    assert score(_item(), "iphone case", now=NOW) == 25 + 10


def test_no_recency_bonus_for_old_items():
    old = _item(created_at=NOW - timedelta(days=7))
    assert score(old, "iphone case", now=NOW) == 25


def test_recency_bonus_just_inside_window():
    recent = _item(created_at=NOW - timedelta(days=6, hours=23))
    assert score(recent, "iphone case", now=NOW) == 35


def test_short_words_are_ignored():
    old = _item(created_at=NOW - timedelta(days=30))
    assert score(old, "xx 13 pr", now=NOW) == 0


def test_category_and_description_weights():
    old = _item(title="Keys", description="house keys on a ring", category="Keys",
                created_at=NOW - timedelta(days=30))
    assert score(old, "ring", now=NOW) == 50 + 15

    item = _item(title="Wallet", description="brown", category="Bags & Wallets",
                 created_at=NOW - timedelta(days=30))
    # phrase in title (+100) is enough to clamp
    assert score(item, "wallet", now=NOW) == 100
    assert score(item, "bags", now=NOW) == 75 + 20


def test_words_accumulate_without_deduplication():
    old = _item(title="Handset", description="old phone phone", category="Misc",
                created_at=NOW - timedelta(days=30))
    # each repeated word counts again: description phrase +50, two words x +15
    assert score(old, "phone phone", now=NOW) == 50 + 15 + 15


def test_score_is_case_insensitive():
    old = _item(created_at=NOW - timedelta(days=30))
    assert score(old, "BLUE", now=NOW) == score(old, "blue", now=NOW) == 65


def test_score_always_within_bounds():
    item = _item()
    for q in ["", "a", "iphone", "iphone 13 pro blue phone electronics", "zzz"]:
        assert 0 <= score(item, q, now=NOW) <= 100


def test_rank_is_stable_for_equal_scores():
    items = [_scored("a", 50), _scored("b", 90), _scored("c", 50)]
    assert [i.id for i in rank(items)] == ["b", "a", "c"]


def test_smart_matches_threshold_is_strict():
    items = [_scored("a", 30), _scored("b", 90), _scored("c", 10)]
    assert [i.id for i in smart_matches(items)] == ["b"]


def test_smart_matches_caps_at_limit():
    items = [_scored(f"i{n}", 40 + n) for n in range(15)]
    top = smart_matches(items)
    assert len(top) == 10
    assert top[0].id == "i14"
    assert [i.similarity_score for i in top] == sorted(
        (i.similarity_score for i in top), reverse=True
    )
