import threading

from plaincache.simple_store import SimpleKVStore


def test_get_missing_key():
    store = SimpleKVStore()
    assert store.get("/missing") == (None, False)


def test_set_then_get():
    store = SimpleKVStore()
    store.set("/user1", b"Alice")
    assert store.get("/user1") == (b"Alice", True)


def test_empty_value_is_not_absence():
    store = SimpleKVStore()
    store.set("/empty", b"")
    assert store.get("/empty") == (b"", True)


def test_last_write_wins():
    store = SimpleKVStore()
    store.set("/k", b"v1")
    store.set("/k", b"v2")
    assert store.get("/k") == (b"v2", True)
    assert store.size() == 1


def test_delete():
    store = SimpleKVStore()
    store.set("/k", b"v")
    store.delete("/k")
    assert store.get("/k") == (None, False)

    # deleting again is a no-op
    store.delete("/k")
    assert store.size() == 0


def test_concurrent_writers_on_distinct_keys():
    store = SimpleKVStore()

    def writer(n):
        for i in range(200):
            store.set(f"/key{n}", f"value{n}-{i}".encode())

    threads = [threading.Thread(target=writer, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert store.size() == 8
    for n in range(8):
        assert store.get(f"/key{n}") == (f"value{n}-199".encode(), True)


def test_readers_never_see_a_mixed_value():
    store = SimpleKVStore()
    values = [b"a" * 4096, b"b" * 4096]
    store.set("/shared", values[0])
    stop = threading.Event()
    seen = []

    def writer():
        i = 0
        while not stop.is_set():
            store.set("/shared", values[i % 2])
            i += 1

    def reader():
        for _ in range(2000):
            value, found = store.get("/shared")
            seen.append(found and value in values)

    w = threading.Thread(target=writer)
    readers = [threading.Thread(target=reader) for _ in range(4)]
    w.start()
    for r in readers:
        r.start()
    for r in readers:
        r.join()
    stop.set()
    w.join()

    assert all(seen)
