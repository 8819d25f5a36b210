import threading

from minisuite.kv_store import KVStore


def test_set_then_get():
    store = KVStore()
    assert store.set("name", "alice") is True
    assert store.get("name") == "alice"


def test_get_missing_returns_none():
    assert KVStore().get("missing") is None


def test_overwrite_keeps_one_entry():
    store = KVStore()
    store.set("k", "v1")
    store.set("k", "v2")
    assert store.get("k") == "v2"
    assert len(store) == 1


def test_delete():
    store = KVStore()
    store.set("k", "v")
    assert store.delete("k") is True
    assert store.delete("k") is False
    assert store.get("k") is None
    assert len(store) == 0


def test_delete_key_with_empty_value():
    store = KVStore()
    store.set("k", "")
    assert store.delete("k") is True
    assert not store.exists("k")


def test_exists_and_contains():
    store = KVStore()
    store.set("k", "v")
    assert store.exists("k")
    assert "k" in store
    assert not store.exists("other")
    assert "other" not in store


def test_concurrent_sets():
    store = KVStore()

    def writer(prefix):
        for n in range(100):
            store.set(f"{prefix}-{n}", str(n))

    threads = [threading.Thread(target=writer, args=(p,)) for p in "abcd"]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert len(store) == 4 * 100
    assert store.get("c-42") == "42"