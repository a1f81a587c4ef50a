import json
import os
import tempfile
import threading
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel

from .base import (
    Include,
    OrderBy,
    Record,
    Repository,
    TableSpec,
    Where,
    clean_data,
    matches,
    normalize_order_by,
    paginate,
    sort_records,
    values_equal,
)
from .errors import CorruptStorageError, DuplicateKeyError

_locks: Dict[str, threading.RLock] = {}
_locks_guard = threading.Lock()


def _lock_for(path: str) -> threading.RLock:
    # Every JsonFile pointing at the same path shares one lock
    key = os.path.abspath(path)
    with _locks_guard:
        if key not in _locks:
            _locks[key] = threading.RLock()
        return _locks[key]


class JsonFile:
    """One JSON document on disk, read and rewritten as a whole.

    A missing or blank file reads as ``empty()``. Anything that does not parse
    into the expected top-level type raises ``CorruptStorageError``.
    """

    expected_type: type = list

    def __init__(self, path: str):
        self.path = path
        self.lock = _lock_for(path)

    def empty(self):
        return self.expected_type()

    def read(self):
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = f.read()
        except FileNotFoundError:
            return self.empty()

        if not raw.strip():
            return self.empty()
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CorruptStorageError(self.path, str(e)) from e
        if not isinstance(data, self.expected_type):
            raise CorruptStorageError(
                self.path, f"expected a top-level {self.expected_type.__name__}, got {type(data).__name__}"
            )
        return data

    def write(self, data) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)

        # Write next to the target, then swap it in
        fd, temp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(temp_path, self.path)
        except BaseException:
            if os.path.exists(temp_path):
                os.remove(temp_path)
            raise


class JsonTable(JsonFile):
    """A table file: a single top-level array of flat records."""
    expected_type = list


class JsonObjectFile(JsonFile):
    """A flat key/value object, used by settings and company info."""
    expected_type = dict


class LocalRepository(Repository):
    """Repository over a JSON table file.

    Every call re-reads the file, so edits made by other tools are picked up
    immediately. Writes rewrite the whole file while holding the table lock.
    """

    def __init__(self, spec: TableSpec, table: JsonTable):
        super().__init__(spec)
        self.table = table

    def find_many(
        self,
        where: Optional[Where] = None,
        order_by: Optional[OrderBy] = None,
        include: Optional[Include] = None,
        skip: int = 0,
        take: Optional[int] = None,
    ) -> List[Record]:
        order = normalize_order_by(order_by)
        self._check_query(where, order)

        records = [r for r in self.table.read() if matches(r, where)]
        records = paginate(sort_records(records, order), skip, take)
        return self._attach_includes(records, include)

    def find_unique(self, where: Where, include: Optional[Include] = None) -> Optional[Record]:
        name, value = self._unique_key(where)
        for record in self.table.read():
            if values_equal(record.get(name), value):
                return self._attach_includes([record], include)[0]
        return None

    def count(self, where: Optional[Where] = None) -> int:
        self._check_query(where)
        return sum(1 for r in self.table.read() if matches(r, where))

    def create(self, data: Union[Mapping[str, Any], BaseModel]) -> Record:
        data = clean_data(data)
        with self.table.lock:
            records = self.table.read()
            self._check_unique_fields(records, data)
            record = self._new_record(data, {r.get("id") for r in records})
            records.append(record)
            self.table.write(records)
        return dict(record)

    def update(self, where: Where, data: Union[Mapping[str, Any], BaseModel]) -> Optional[Record]:
        name, value = self._unique_key(where)
        changes = self._changes(data)
        with self.table.lock:
            records = self.table.read()
            index = self._index_of(records, name, value)
            if index is None:
                return None

            others = records[:index] + records[index + 1:]
            self._check_unique_fields(others, changes)
            records[index] = {**records[index], **changes}
            self.table.write(records)
            return dict(records[index])

    def delete(self, where: Where) -> bool:
        name, value = self._unique_key(where)
        with self.table.lock:
            records = self.table.read()
            index = self._index_of(records, name, value)
            if index is None:
                return False
            del records[index]
            self.table.write(records)
        return True

    def delete_many(self, where: Optional[Where] = None) -> int:
        self._check_query(where)
        with self.table.lock:
            records = self.table.read()
            kept = [r for r in records if not matches(r, where)]
            removed = len(records) - len(kept)
            if removed:
                self.table.write(kept)
        return removed

    def _index_of(self, records: List[Record], name: str, value: Any) -> Optional[int]:
        for index, record in enumerate(records):
            if values_equal(record.get(name), value):
                return index
        return None

    def _check_unique_fields(self, records: List[Record], data: Record) -> None:
        for name in self.spec.unique_fields:
            if name == "id" or data.get(name) is None:
                continue
            if any(values_equal(r.get(name), data[name]) for r in records):
                raise DuplicateKeyError(self.spec.name, name, data[name])
