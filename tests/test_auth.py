from studymate.api.auth import get_or_create_user


async def test_get_or_create_user_creates_once(db):
    first = await get_or_create_user(db, "uid-a", email="a@studymate.local", display_name="A")
    second = await get_or_create_user(db, "uid-a")
    assert first.id == second.id
    assert second.email == "a@studymate.local"


async def test_get_or_create_user_recovers_from_duplicate_insert(db, user, monkeypatch):
    uid, user_id = user.firebase_uid, user.id
    real_scalar = db.scalar
    lookups = []

    async def first_lookup_misses(stmt, *args, **kwargs):
        # the first lookup runs before a concurrent request commits the same uid
        lookups.append(stmt)
        if len(lookups) == 1:
            return None
        return await real_scalar(stmt, *args, **kwargs)

    monkeypatch.setattr(db, "scalar", first_lookup_misses)
    found = await get_or_create_user(db, uid)

    assert found is not None
    assert found.id == user_id
    assert len(lookups) == 2
