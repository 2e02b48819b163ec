"""Tests for TagService."""

import pytest
from sqlalchemy import select

from notefeed.core.exceptions import ConflictError, NotFoundError
from notefeed.core.models import Note
from notefeed.core.models.tag import note_tags
from notefeed.core.schemas.tags import TagCreate, TagUpdate
from notefeed.core.services.tag_service import TagService


@pytest.fixture
def service(test_session):
    return TagService(test_session)


@pytest.mark.asyncio
async def test_names_are_unique_per_user_only(service, make_user):
    alice = await make_user()
    bob = await make_user()

    await service.create_tag(alice.id, TagCreate(name="python"))

    with pytest.raises(ConflictError) as exc:
        await service.create_tag(alice.id, TagCreate(name="python"))
    assert exc.value.message == "Tag with this name already exists"

    # another user, and a different case, are both fine
    assert (await service.create_tag(bob.id, TagCreate(name="python"))).name == "python"
    assert (await service.create_tag(alice.id, TagCreate(name="Python"))).name == "Python"


@pytest.mark.asyncio
async def test_rename_conflicts_but_not_with_itself(service, make_user, make_tag):
    user = await make_user()
    first = await make_tag(user, "one")
    await make_tag(user, "two")

    with pytest.raises(ConflictError):
        await service.update_tag(user.id, first.id, TagUpdate(name="two"))

    same = await service.update_tag(user.id, first.id, TagUpdate(name="one"))
    assert same.name == "one"

    renamed = await service.update_tag(user.id, first.id, TagUpdate(name="uno"))
    assert renamed.name == "uno"


@pytest.mark.asyncio
async def test_foreign_tags_are_not_found(service, make_user, make_tag):
    owner = await make_user()
    stranger = await make_user()
    tag = await make_tag(owner, "mine")

    with pytest.raises(NotFoundError) as exc:
        await service.get_tag(stranger.id, tag.id)
    assert exc.value.message == "Tag not found"

    with pytest.raises(NotFoundError):
        await service.delete_tag(stranger.id, tag.id)


@pytest.mark.asyncio
async def test_delete_unlinks_notes_but_keeps_them(
    service, test_session, make_user, make_domain, make_tag, make_note
):
    user = await make_user()
    domain = await make_domain(user)
    doomed = await make_tag(user, "doomed")
    kept = await make_tag(user, "kept")
    note = await make_note(user, domain, tags=[doomed, kept])

    await service.delete_tag(user.id, doomed.id)

    assert (await test_session.execute(select(Note.id))).scalars().all() == [note.id]
    links = (await test_session.execute(select(note_tags.c.tag_id))).scalars().all()
    assert links == [kept.id]


@pytest.mark.asyncio
async def test_list_search_and_sort(service, make_user, make_tag):
    user = await make_user()
    for name in ("beta", "alpha", "alphabet"):
        await make_tag(user, name)

    by_name = await service.list_tags(user.id, sort="name")
    assert [t.name for t in by_name.items] == ["alpha", "alphabet", "beta"]

    found = await service.list_tags(user.id, filters={"search": "ALPHA"}, sort="-name")
    assert [t.name for t in found.items] == ["alphabet", "alpha"]
