"""NoteRepository, DomainRepository and TagRepository against SQLite."""

import pytest
from sqlalchemy import func, select

from notefeed.core.models import Note, Tag, note_tags
from notefeed.core.repositories.domain_repository import DomainRepository
from notefeed.core.repositories.note_repository import NoteRepository
from notefeed.core.repositories.tag_repository import TagRepository


async def count(session, stmt) -> int:
    return (await session.execute(select(func.count()).select_from(stmt.subquery()))).scalar()


@pytest.mark.asyncio
async def test_get_by_id_and_user_hides_other_authors(test_session, make_user, make_domain, make_note):
    alice = await make_user()
    bob = await make_user()
    note = await make_note(alice, await make_domain(alice))

    repo = NoteRepository(test_session)
    loaded = await repo.get_by_id_and_user(note.id, alice.id)
    assert loaded.author.id == alice.id
    assert loaded.domain.name == "General"
    assert loaded.tags == []

    assert await repo.get_by_id_and_user(note.id, bob.id) is None


@pytest.mark.asyncio
async def test_delete_note_keeps_tags_and_domain(test_session, make_user, make_domain, make_tag, make_note):
    user = await make_user()
    domain = await make_domain(user)
    tag = await make_tag(user, "kept")
    note = await make_note(user, domain, tags=[tag])

    await NoteRepository(test_session).delete_note(note)

    assert await count(test_session, select(Note)) == 0
    assert await count(test_session, select(note_tags)) == 0
    assert await count(test_session, select(Tag)) == 1
    assert await DomainRepository(test_session).get_by_id_and_user(domain.id, user.id) is not None


@pytest.mark.asyncio
async def test_delete_domain_removes_its_notes(test_session, make_user, make_domain, make_tag, make_note):
    user = await make_user()
    doomed = await make_domain(user, name="Doomed")
    kept = await make_domain(user, name="Kept")
    tag = await make_tag(user, "shared")
    await make_note(user, doomed, title="gone", tags=[tag])
    await make_note(user, kept, title="stays", tags=[tag])

    await DomainRepository(test_session).delete_domain(doomed)

    titles = (await test_session.execute(select(Note.title))).scalars().all()
    assert titles == ["stays"]
    assert await count(test_session, select(note_tags)) == 1


@pytest.mark.asyncio
async def test_delete_tag_keeps_notes(test_session, make_user, make_domain, make_tag, make_note):
    user = await make_user()
    tag = await make_tag(user, "temporary")
    await make_note(user, await make_domain(user), tags=[tag])

    await TagRepository(test_session).delete_tag(tag)

    assert await count(test_session, select(Note)) == 1
    assert await count(test_session, select(note_tags)) == 0


@pytest.mark.asyncio
async def test_get_owned_ids_filters_and_dedupes(test_session, make_user, make_tag):
    alice = await make_user()
    bob = await make_user()
    a1 = await make_tag(alice, "one")
    a2 = await make_tag(alice, "two")
    b1 = await make_tag(bob, "one")

    owned = await TagRepository(test_session).get_owned_ids([a2.id, b1.id, a1.id, a2.id, 999], alice.id)
    assert owned == [a2.id, a1.id]


@pytest.mark.asyncio
async def test_domain_search_and_sort(test_session, make_user, make_domain):
    user = await make_user()
    await make_domain(user, name="Spanish", description="Verbs and vocab")
    await make_domain(user, name="Cooking", description="Spanish recipes")
    await make_domain(user, name="Guitar")

    page = await DomainRepository(test_session).list_user_domains(
        user.id, filters={"search": "spanish"}, sort="name"
    )
    assert [d.name for d in page.items] == ["Cooking", "Spanish"]
    assert page.pagination.total == 2
