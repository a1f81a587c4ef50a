from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import select

from .local import JsonObjectFile


class KeyValueStore(ABC):
    """Unordered string settings (site settings, company info)."""

    @abstractmethod
    def as_dict(self) -> Dict[str, str]:
        ...

    @abstractmethod
    def merge(self, values: Mapping[str, Any]) -> Dict[str, str]:
        """Shallow-merge ``values`` into the store and return the result."""

    def find_many(self) -> List[Dict[str, str]]:
        return [{"key": k, "value": v} for k, v in self.as_dict().items()]

    def get(self, key: str) -> Optional[str]:
        # An empty value counts as unset
        return self.as_dict().get(key) or None

    def set(self, key: str, value: Any) -> None:
        self.merge({key: value})

    def upsert(self, key: str, value: Any) -> Dict[str, str]:
        self.merge({key: value})
        return {"key": key, "value": str(value)}


class LocalKeyValueStore(KeyValueStore):
    def __init__(self, file: JsonObjectFile):
        self.file = file

    def as_dict(self) -> Dict[str, str]:
        return dict(self.file.read())

    def merge(self, values: Mapping[str, Any]) -> Dict[str, str]:
        with self.file.lock:
            current = self.file.read()
            current.update({k: str(v) for k, v in values.items()})
            self.file.write(current)
        return dict(current)


class SqlKeyValueStore(KeyValueStore):
    def __init__(self, session_factory, model):
        self._session_factory = session_factory
        self.model = model

    def as_dict(self) -> Dict[str, str]:
        session = self._session_factory()
        try:
            rows = session.scalars(select(self.model)).all()
            return {row.key: row.value for row in rows}
        finally:
            session.close()

    def merge(self, values: Mapping[str, Any]) -> Dict[str, str]:
        session = self._session_factory()
        try:
            for key, value in values.items():
                row = session.get(self.model, key)
                if row is None:
                    session.add(self.model(key=key, value=str(value)))
                else:
                    row.value = str(value)
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
        return self.as_dict()
