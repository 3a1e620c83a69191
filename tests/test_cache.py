def test_lookup_missing_key(cache):
    assert cache.lookup("mal:naruto") is None


def test_fresh_entry_returns_age_and_value(cache, clock):
    cache.insert("mal:naruto", "envelope")
    clock.advance(42)

    age, value = cache.lookup("mal:naruto")
    assert age == 42
    assert value == "envelope"


def test_entry_expires_at_ttl(cache, clock):
    """Usable only while now - stored_at < ttl"""
    cache.insert("mal:naruto", "envelope")

    clock.advance(299)
    assert cache.lookup("mal:naruto") is not None
    clock.advance(1)
    assert cache.lookup("mal:naruto") is None


def test_stale_entry_is_not_evicted(cache, clock):
    cache.insert("mal:naruto", "envelope")
    clock.advance(1000)

    assert cache.lookup("mal:naruto") is None
    assert "mal:naruto" in cache
    assert len(cache) == 1


def test_insert_overwrites_and_resets_timestamp(cache, clock):
    cache.insert("mal:naruto", "old")
    clock.advance(400)
    cache.insert("mal:naruto", "new")

    age, value = cache.lookup("mal:naruto")
    assert age == 0
    assert value == "new"
    assert len(cache) == 1
