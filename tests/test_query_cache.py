from ccms_core_lib.clients import QueryCache


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def test_fresh_entry_is_served():
    cache = QueryCache()
    cache.set("/api/cases", [1, 2])
    assert cache.get("/api/cases").data == [1, 2]
    assert "/api/cases" in cache
    assert len(cache) == 1


def test_missing_entry():
    assert QueryCache().get("/api/cases") is None


def test_invalidate_marks_path_and_nested_paths():
    cache = QueryCache()
    cache.set("/api/config/forms", [])
    cache.set("/api/config/forms/case_form", [])
    cache.set("/api/config/formsets", [])
    cache.set("/api/cases", [])

    assert cache.invalidate("/api/config/forms") == 2

    assert cache.get("/api/config/forms") is None
    assert cache.get("/api/config/forms/case_form") is None
    assert cache.get("/api/config/formsets") is not None
    assert cache.get("/api/cases") is not None


def test_refetch_clears_staleness():
    cache = QueryCache()
    cache.set("/api/cases", [1])
    cache.invalidate("/api/cases")
    cache.set("/api/cases", [1, 2])
    assert cache.get("/api/cases").data == [1, 2]


def test_entries_age_out():
    clock = FakeClock()
    cache = QueryCache(stale_after=30, clock=clock)
    cache.set("/api/threats", [])

    clock.now = 29
    assert cache.get("/api/threats") is not None
    clock.now = 30
    assert cache.get("/api/threats") is None


def test_clear():
    cache = QueryCache()
    cache.set("/api/cases", [])
    cache.clear()
    assert len(cache) == 0
