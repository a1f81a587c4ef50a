from contextlib import contextmanager
from typing import Any, List, Mapping, Optional, Union

from pydantic import BaseModel
from sqlalchemy import String, delete as sql_delete, func, select

from .base import (
    Include,
    OrderBy,
    Record,
    Repository,
    TableSpec,
    Where,
    clean_data,
    normalize_order_by,
)
from .errors import DuplicateKeyError


class SqlRepository(Repository):
    """Repository backed by a SQLAlchemy model.

    The model must have one column per field of its ``TableSpec`` plus an integer
    ``position`` column. ``position`` records insertion order and breaks ties
    after the requested sort keys, which gives the same stable ordering as the
    JSON file engine.
    """

    def __init__(self, spec: TableSpec, session_factory, model):
        super().__init__(spec)
        self._session_factory = session_factory
        self.model = model

    @contextmanager
    def _session(self):
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def _to_dict(self, row) -> Record:
        return {name: getattr(row, name) for name in self.spec.fields}

    def _filtered(self, stmt, where: Optional[Where]):
        for name, value in (where or {}).items():
            column = getattr(self.model, name)
            stmt = stmt.where(column.is_(None) if value is None else column == value)
        return stmt

    def _ordered(self, stmt, order):
        clauses = []
        for name, descending in order:
            column = getattr(self.model, name)
            keys = [func.lower(column), column] if isinstance(column.type, String) else [column]
            for key in keys:
                clauses.append(key.desc().nulls_first() if descending else key.asc().nulls_last())
        clauses.append(self.model.position.asc())
        return stmt.order_by(*clauses)

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

        stmt = self._ordered(self._filtered(select(self.model), where), order)
        if skip:
            stmt = stmt.offset(max(0, int(skip)))
        if take is not None:
            stmt = stmt.limit(max(0, int(take)))

        with self._session() as session:
            records = [self._to_dict(row) for row in session.scalars(stmt)]
        return self._attach_includes(records, include)

    def find_unique(self, where: Where, include: Optional[Include] = None) -> Optional[Record]:
        self._unique_key(where)
        with self._session() as session:
            row = session.scalars(self._filtered(select(self.model), where).limit(1)).first()
            if row is None:
                return None
            record = self._to_dict(row)
        return self._attach_includes([record], include)[0]

    def count(self, where: Optional[Where] = None) -> int:
        self._check_query(where)
        stmt = self._filtered(select(func.count()).select_from(self.model), where)
        with self._session() as session:
            return session.scalar(stmt)

    def create(self, data: Union[Mapping[str, Any], BaseModel]) -> Record:
        data = clean_data(data)
        with self._session() as session:
            self._check_unique_fields(session, data)
            taken = set(session.scalars(select(self.model.id)))
            record = self._new_record(data, taken)

            last = session.scalar(select(func.max(self.model.position)))
            session.add(self.model(**record, position=(last or 0) + 1))
            session.flush()
        return record

    def update(self, where: Where, data: Union[Mapping[str, Any], BaseModel]) -> Optional[Record]:
        self._unique_key(where)
        changes = self._changes(data)
        with self._session() as session:
            row = session.scalars(self._filtered(select(self.model), where).limit(1)).first()
            if row is None:
                return None
            self._check_unique_fields(session, changes, exclude_id=row.id)
            for name, value in changes.items():
                setattr(row, name, value)
            session.flush()
            return self._to_dict(row)

    def delete(self, where: Where) -> bool:
        self._unique_key(where)
        with self._session() as session:
            row = session.scalars(self._filtered(select(self.model), where).limit(1)).first()
            if row is None:
                return False
            session.delete(row)
        return True

    def delete_many(self, where: Optional[Where] = None) -> int:
        self._check_query(where)
        with self._session() as session:
            result = session.execute(self._filtered(sql_delete(self.model), where))
            return result.rowcount

    def _check_unique_fields(self, session, data: Record, exclude_id: Optional[str] = None) -> None:
        for name in self.spec.unique_fields:
            if name == "id" or data.get(name) is None:
                continue
            stmt = select(self.model.id).where(getattr(self.model, name) == data[name])
            if exclude_id is not None:
                stmt = stmt.where(self.model.id != exclude_id)
            if session.scalars(stmt).first() is not None:
                raise DuplicateKeyError(self.spec.name, name, data[name])
