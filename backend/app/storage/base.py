from __future__ import annotations

import copy
import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import BaseModel

from .errors import InvalidQueryError
from .ids import generate_id, unique_id

Record = Dict[str, Any]
Where = Mapping[str, Any]
OrderBy = Union[Mapping[str, str], Sequence[Mapping[str, str]]]
Include = Mapping[str, bool]


class _Unset:
    """Marks a field as "not supplied" in create/update payloads."""

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET = _Unset()


@dataclass(frozen=True)
class Relation:
    """A related table that ``include`` can attach under ``name``.

    ``many=False`` attaches the single record whose ``foreign_key`` equals the
    owner's ``local_key`` (or ``None``); ``many=True`` attaches every match as a
    list ordered by ``order_by``.
    """
    name: str
    target: str
    local_key: str
    foreign_key: str
    many: bool = False
    order_by: Optional[Mapping[str, str]] = None


@dataclass(frozen=True)
class TableSpec:
    """Shape of one table, shared by the file engine and the SQL engine."""
    name: str
    fields: Tuple[str, ...]
    defaults: Mapping[str, Any] = field(default_factory=dict)
    id_prefix: Optional[str] = None
    id_factory: Optional[Callable[[Record], Optional[str]]] = None
    unique_fields: Tuple[str, ...] = ("id",)
    relations: Tuple[Relation, ...] = ()

    def relation(self, name: str) -> Relation:
        for rel in self.relations:
            if rel.name == name:
                return rel
        raise InvalidQueryError(f"{self.name} has no relation {name!r}")


def normalize_order_by(order_by: Optional[OrderBy]) -> List[Tuple[str, bool]]:
    """Flatten ``order_by`` into ``[(field, descending), ...]``."""
    if not order_by:
        return []
    items = [order_by] if isinstance(order_by, Mapping) else list(order_by)
    result = []
    for item in items:
        for name, direction in item.items():
            direction = str(direction).lower()
            if direction not in ("asc", "desc"):
                raise InvalidQueryError(f"Sort direction for {name!r} must be 'asc' or 'desc'")
            result.append((name, direction == "desc"))
    return result


def clean_data(data: Union[Mapping[str, Any], BaseModel, None]) -> Record:
    """Payload as a plain dict, without the fields the caller did not supply."""
    if data is None:
        return {}
    if isinstance(data, BaseModel):
        # JSON mode: datetimes become ISO strings, the same in both engines
        data = data.model_dump(mode="json", exclude_unset=True)
    return {k: v for k, v in dict(data).items() if v is not UNSET}


def values_equal(left: Any, right: Any) -> bool:
    # True == 1 in Python; a boolean filter must only match booleans
    if isinstance(left, bool) != isinstance(right, bool):
        return False
    return left == right


def matches(record: Mapping[str, Any], where: Optional[Where]) -> bool:
    if not where:
        return True
    return all(values_equal(record.get(k), v) for k, v in where.items())


def sort_value(value: Any) -> tuple:
    # NULLs last in ascending order, like PostgreSQL
    if value is None:
        return (1, 0, "")
    if isinstance(value, (bool, int, float)):
        return (0, 0, value)
    if isinstance(value, str):
        # Case-insensitive, the raw value breaks ties
        return (0, 1, value.casefold(), value)
    return (0, 2, json.dumps(value, sort_keys=True, ensure_ascii=False))


def sort_records(records: List[Record], order: List[Tuple[str, bool]]) -> List[Record]:
    """Stable multi-key sort; equal keys keep their storage order."""
    for name, descending in reversed(order):
        records.sort(key=lambda r: sort_value(r.get(name)), reverse=descending)
    return records


def paginate(records: List[Record], skip: int = 0, take: Optional[int] = None) -> List[Record]:
    start = max(0, int(skip or 0))
    if take is None:
        return records[start:]
    return records[start:start + max(0, int(take))]


class Repository(ABC):
    """CRUD and query operations over one table.

    Implementations return plain dicts and signal "not found" with ``None`` or
    ``False``; they raise only for corrupt storage or invalid queries.
    """

    def __init__(self, spec: TableSpec):
        self.spec = spec
        self._registry: Mapping[str, "Repository"] = {}

    def bind(self, registry: Mapping[str, "Repository"]) -> None:
        """Give the repository access to the tables its relations point at."""
        self._registry = registry

    @abstractmethod
    def find_many(
        self,
        where: Optional[Where] = None,
        order_by: Optional[OrderBy] = None,
        include: Optional[Include] = None,
        skip: int = 0,
        take: Optional[int] = None,
    ) -> List[Record]:
        ...

    @abstractmethod
    def find_unique(self, where: Where, include: Optional[Include] = None) -> Optional[Record]:
        ...

    @abstractmethod
    def count(self, where: Optional[Where] = None) -> int:
        ...

    @abstractmethod
    def create(self, data: Union[Mapping[str, Any], BaseModel]) -> Record:
        ...

    @abstractmethod
    def update(self, where: Where, data: Union[Mapping[str, Any], BaseModel]) -> Optional[Record]:
        ...

    @abstractmethod
    def delete(self, where: Where) -> bool:
        ...

    @abstractmethod
    def delete_many(self, where: Optional[Where] = None) -> int:
        ...

    # ----- shared contract checks -----

    def _check_fields(self, names, what: str) -> None:
        unknown = [n for n in names if n not in self.spec.fields]
        if unknown:
            raise InvalidQueryError(f"Unknown {what} field(s) for {self.spec.name}: {', '.join(unknown)}")

    def _check_query(self, where: Optional[Where], order: List[Tuple[str, bool]] = ()) -> None:
        if where:
            self._check_fields(where.keys(), "where")
        self._check_fields([name for name, _ in order], "orderBy")

    def _unique_key(self, where: Where) -> Tuple[str, Any]:
        if not where or len(where) != 1:
            raise InvalidQueryError(
                f"{self.spec.name} lookups need exactly one unique field: {', '.join(self.spec.unique_fields)}"
            )
        (name, value), = where.items()
        if name not in self.spec.unique_fields:
            raise InvalidQueryError(f"{self.spec.name}.{name} is not a unique field")
        if value is None:
            raise InvalidQueryError(f"{self.spec.name}.{name} lookup value is missing")
        return name, value

    def _new_record(self, data: Record, taken_ids) -> Record:
        """Full record for ``create``: id, defaults, then the supplied fields."""
        self._check_fields(data.keys(), "data")
        record = {name: None for name in self.spec.fields}
        record.update(copy.deepcopy(dict(self.spec.defaults)))
        record.update(data)

        candidate = data.get("id")
        if not candidate and self.spec.id_factory:
            candidate = self.spec.id_factory(record)
        if not candidate:
            candidate = generate_id(self.spec.id_prefix or self.spec.name)
        record["id"] = unique_id(candidate, taken_ids)
        return record

    def _changes(self, data: Union[Mapping[str, Any], BaseModel]) -> Record:
        changes = clean_data(data)
        changes.pop("id", None)
        self._check_fields(changes.keys(), "data")
        return changes

    # ----- relation includes -----

    def _attach_includes(self, records: List[Record], include: Optional[Include]) -> List[Record]:
        if not include:
            return records
        for name, wanted in include.items():
            rel = self.spec.relation(name)
            if not wanted:
                continue
            target = self._registry.get(rel.target)
            if target is None:
                raise InvalidQueryError(f"Relation {name!r} of {self.spec.name} is not bound")

            if rel.many:
                grouped: Dict[Any, List[Record]] = {}
                for row in target.find_many(order_by=rel.order_by):
                    grouped.setdefault(row.get(rel.foreign_key), []).append(row)
                for record in records:
                    record[rel.name] = list(grouped.get(record.get(rel.local_key), []))
            else:
                by_key: Dict[Any, Record] = {}
                for row in target.find_many():
                    by_key.setdefault(row.get(rel.foreign_key), row)
                for record in records:
                    # A parent deleted out-of-band leaves the relation empty
                    parent = by_key.get(record.get(rel.local_key))
                    record[rel.name] = dict(parent) if parent is not None else None
        return records
