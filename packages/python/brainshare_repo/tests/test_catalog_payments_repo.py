import pytest
from pydantic import ValidationError

from brainshare_repo import (
    AnnouncementCreate,
    Badge,
    CommentCreate,
    PaymentCreate,
    PostCreate,
    TagCreate,
    UserRegistration,
    count_announcements,
    create_announcement,
    create_comment,
    create_post,
    create_tag,
    dashboard_counts,
    get_user,
    list_announcements,
    list_tags,
    record_payment,
    register_user,
)


@pytest.mark.asyncio
async def test_create_tag_is_idempotent_by_name(engine):
    first, created = await create_tag(engine, TagCreate(name="python "))
    again, created_again = await create_tag(engine, TagCreate(name="python"))
    await create_tag(engine, TagCreate(name="rust"))

    assert created and not created_again
    assert first.id == again.id
    assert [tag.name for tag in await list_tags(engine)] == ["python", "rust"]


@pytest.mark.parametrize("raw", ["", "   "])
def test_blank_tag_name_is_rejected(raw):
    with pytest.raises(ValidationError):
        TagCreate(name=raw)


def test_tag_name_is_stripped():
    assert TagCreate(name="  python ").name == "python"


@pytest.mark.asyncio
async def test_announcements_newest_first(engine):
    for title in ("first", "second"):
        await create_announcement(
            engine, "admin@x.com", AnnouncementCreate(title=title, description="d"), "Admin"
        )

    items = await list_announcements(engine)

    assert [a.title for a in items] == ["second", "first"]
    assert items[0].author_name == "Admin"
    assert await count_announcements(engine) == 2


@pytest.mark.asyncio
async def test_payment_upgrades_badge_to_gold(engine):
    await register_user(engine, "p@x.com", UserRegistration(name="Pay"))

    payment, outcome = await record_payment(
        engine, "p@x.com", PaymentCreate(transaction_id="pi_123", price=9.99)
    )

    assert payment.transaction_id == "pi_123"
    assert outcome.changed
    user = await get_user(engine, "p@x.com")
    assert user.badge is Badge.GOLD


@pytest.mark.asyncio
async def test_payment_for_unknown_user_is_still_recorded(engine, indexed_db):
    payment, outcome = await record_payment(
        engine, "ghost@x.com", PaymentCreate(transaction_id="pi_9", price=5)
    )

    assert not outcome.found
    assert await indexed_db["payments"].count_documents({"transactionId": "pi_9"}) == 1


@pytest.mark.asyncio
async def test_dashboard_counts(engine):
    await register_user(engine, "a@x.com")
    await register_user(engine, "b@x.com")
    post = await create_post(engine, "a@x.com", PostCreate(body="x"))
    await create_comment(engine, CommentCreate(post_id=post.id, body="y"))
    await create_tag(engine, TagCreate(name="go"))

    counts = await dashboard_counts(engine)

    assert (counts.users, counts.posts, counts.comments, counts.tags) == (2, 1, 1, 1)
