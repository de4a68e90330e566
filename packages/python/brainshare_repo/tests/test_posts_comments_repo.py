import pytest
from bson import ObjectId

from brainshare_repo import (
    CommentCreate,
    PostCreate,
    VoteDirection,
    create_comment,
    create_post,
    delete_comment,
    delete_post,
    get_post,
    get_user,
    list_comments,
    list_posts,
    list_reported_comments,
    list_user_posts,
    register_user,
    report_comment,
    vote,
)
from resource_query import ClientInputError, SortKey


async def _post(engine, email="a@x.com", body="hello", tag="python"):
    return await create_post(engine, email, PostCreate(title="t", body=body, tag=tag))


@pytest.mark.asyncio
async def test_new_post_starts_without_votes_and_counts_for_author(engine):
    await register_user(engine, "a@x.com")

    post = await _post(engine)

    assert post.up_vote == 0 and post.down_vote == 0
    assert post.email == "a@x.com"
    assert ObjectId.is_valid(post.id)
    user = await get_user(engine, "a@x.com")
    assert user.post_count == 1


@pytest.mark.asyncio
async def test_upvoting_twice_is_visible_on_fetch(engine):
    post = await _post(engine)

    await vote(engine, post.id, VoteDirection.UP)
    await vote(engine, post.id, VoteDirection.UP)

    fetched = await get_post(engine, post.id)
    assert fetched.up_vote == 2
    assert fetched.down_vote == 0


@pytest.mark.asyncio
async def test_vote_on_missing_post_returns_none(engine):
    assert await vote(engine, str(ObjectId()), VoteDirection.DOWN) is None


@pytest.mark.asyncio
async def test_list_posts_filters_tag_case_insensitively(engine):
    await _post(engine, tag="Python")
    await _post(engine, tag="micropython")
    await _post(engine, tag="rust")

    page = await list_posts(engine, tag="PYTHON")

    assert sorted(post.tag for post in page.items) == ["Python", "micropython"]
    assert page.total_pages is None


@pytest.mark.asyncio
async def test_list_posts_by_popularity(engine):
    quiet = await _post(engine, body="quiet")
    loud = await _post(engine, body="loud")
    await vote(engine, loud.id, VoteDirection.UP)
    await vote(engine, quiet.id, VoteDirection.DOWN)

    page = await list_posts(engine, sort=SortKey.POPULARITY)

    assert [post.body for post in page.items] == ["loud", "quiet"]
    assert [post.vote_difference for post in page.items] == [1, -1]


@pytest.mark.asyncio
async def test_user_posts_default_to_five_per_page(engine):
    for number in range(6):
        await _post(engine, body=f"mine {number}")
    await _post(engine, email="other@x.com")

    page = await list_user_posts(engine, "a@x.com")

    assert len(page.items) == 5
    assert page.total_count == 6
    assert page.total_pages == 2
    assert page.items[0].body == "mine 5"


@pytest.mark.asyncio
async def test_delete_post_reports_zero_when_gone(engine):
    post = await _post(engine)

    assert await delete_post(engine, post.id) == 1
    assert await delete_post(engine, post.id) == 0
    assert await get_post(engine, post.id) is None


@pytest.mark.asyncio
async def test_comments_page_in_writing_order(engine):
    post = await _post(engine)
    for number in range(1, 13):
        await create_comment(engine, CommentCreate(post_id=post.id, body=f"c{number}"))

    page = await list_comments(engine, post.id, page="2", limit="5")

    assert [comment.body for comment in page.items] == ["c6", "c7", "c8", "c9", "c10"]
    assert page.total_pages == 3
    assert page.current_page == 2


@pytest.mark.asyncio
async def test_comment_requires_well_formed_post_id(engine):
    with pytest.raises(ClientInputError):
        await create_comment(engine, CommentCreate(post_id="nope", body="x"))
    with pytest.raises(ClientInputError):
        await list_comments(engine, "nope")


@pytest.mark.asyncio
async def test_reported_comment_appears_in_moderation_list(engine):
    post = await _post(engine)
    spam = await create_comment(engine, CommentCreate(post_id=post.id, body="buy now"))
    await create_comment(engine, CommentCreate(post_id=post.id, body="nice post"))
    assert spam.reported is False

    outcome = await report_comment(engine, spam.id, "spam")

    assert outcome.found and outcome.changed
    reported = await list_reported_comments(engine)
    assert [(c.id, c.reported, c.feedback) for c in reported.items] == [(spam.id, True, "spam")]
    assert reported.total_count == 1


@pytest.mark.asyncio
async def test_reporting_missing_comment_is_not_found(engine):
    outcome = await report_comment(engine, str(ObjectId()), "spam")
    assert not outcome.found


@pytest.mark.asyncio
async def test_delete_comment(engine):
    post = await _post(engine)
    comment = await create_comment(engine, CommentCreate(post_id=post.id, body="bye"))

    assert await delete_comment(engine, comment.id) == 1
    assert await delete_comment(engine, comment.id) == 0
