from .rwlock import ReadWriteLock


class SimpleKVStore:
    """In-memory path -> bytes mapping behind a single reader/writer lock."""

    def __init__(self):
        self._data = {}
        self._lock = ReadWriteLock()

    def get(self, key):
        with self._lock.read_locked():
            if key in self._data:
                return self._data[key], True
        return None, False

    def set(self, key, value):
        with self._lock.write_locked():
            self._data[key] = value

    def delete(self, key):
        with self._lock.write_locked():
            self._data.pop(key, None)

    def size(self):
        with self._lock.read_locked():
            return len(self._data)
