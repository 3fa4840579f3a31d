import copy
import logging
import os
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pydantic
from pydantic_core import PydanticSerializationError

from .errors import RecordNotFoundError, RequestBodyError

Record = Dict[str, Any]
Table = Dict[str, List[Record]]

_TABLE = pydantic.TypeAdapter(Table)
_RECORD = pydantic.TypeAdapter(Record)


def _id_of(record: Record) -> Optional[int]:
    try:
        return int(record["id"])
    except (KeyError, TypeError, ValueError):
        return None


def _checked(record: Record) -> Record:
    """
    :raises RequestBodyError: the record can not be saved as json
    """
    try:
        _RECORD.dump_json(record)
    except PydanticSerializationError as e:
        raise RequestBodyError(f"record can not be stored: {e}") from e
    return record


class Store:
    """
    The mock records, by resource name.

    A single lock serializes all access, persisting included.
    Every mutation writes the whole table before it returns.
    """

    log = logging.getLogger("mockapi3.store")

    def __init__(self, path: Optional[Union[str, Path]] = None):
        """
        :param path: the json file the table is loaded from & saved to, None keeps the table in memory
        """
        self.path: Optional[Path] = Path(path) if path is not None else None
        self._lock = threading.Lock()
        self._data: Table = self._load()

    def _load(self) -> Table:
        if self.path is None:
            return dict()
        try:
            data = _TABLE.validate_json(self.path.read_bytes())
        except FileNotFoundError:
            self.log.info(f"{self.path} does not exist, starting empty")
            return dict()
        except (OSError, pydantic.ValidationError) as e:
            self.log.warning(f"{self.path} can not be loaded, starting empty: {e}")
            return dict()
        self.log.info(f"loaded {sum(map(len, data.values()))} records of {len(data)} resources from {self.path}")
        return data

    def _save(self) -> None:
        if self.path is None:
            return
        tmp = self.path.with_name(f".{self.path.name}.tmp")
        try:
            tmp.write_bytes(_TABLE.dump_json(self._data, indent=2))
            os.replace(tmp, self.path)
        except (OSError, PydanticSerializationError) as e:
            # the mutation is kept in memory
            self.log.exception(f"saving {self.path} failed: {e}")

    def _index(self, resource: str, identifier: Any) -> int:
        for idx, record in enumerate(self._data.get(resource, [])):
            if _id_of(record) == identifier:
                return idx
        raise RecordNotFoundError(f"{resource} {identifier} not found", resource, identifier)

    def ensure(self, resource: str) -> None:
        """
        register an empty list for a resource, not persisted
        """
        with self._lock:
            self._data.setdefault(resource, [])

    def resources(self) -> List[str]:
        with self._lock:
            return sorted(self._data.keys())

    def get(self, resource: str) -> List[Record]:
        """
        all records of the resource, in order of creation
        """
        with self._lock:
            return copy.deepcopy(self._data.get(resource, []))

    def find(self, resource: str, identifier: Any) -> Record:
        """
        :raises RecordNotFoundError:
        """
        with self._lock:
            idx = self._index(resource, identifier)
            return copy.deepcopy(self._data[resource][idx])

    def create(self, resource: str, fields: Record) -> Record:
        """
        store a new record, the id is assigned

        ids are max(id) + 1, an id is reused only if the record with the highest id was deleted

        :raises RequestBodyError: the fields can not be saved as json
        """
        with self._lock:
            records = self._data.setdefault(resource, [])
            record = _checked(copy.deepcopy(fields))
            record["id"] = max(filter(None, map(_id_of, records)), default=0) + 1
            records.append(record)
            self._save()
            return copy.deepcopy(record)

    def update(self, resource: str, identifier: Any, fields: Record) -> Record:
        """
        merge fields into the record, the id is kept

        :raises RecordNotFoundError:
        :raises RequestBodyError: the merged record can not be saved as json
        """
        with self._lock:
            idx = self._index(resource, identifier)
            record = copy.deepcopy(self._data[resource][idx])
            record.update({k: copy.deepcopy(v) for k, v in fields.items() if k != "id"})
            self._data[resource][idx] = _checked(record)
            self._save()
            return copy.deepcopy(record)

    def delete(self, resource: str, identifier: Any) -> None:
        """
        :raises RecordNotFoundError:
        """
        with self._lock:
            idx = self._index(resource, identifier)
            del self._data[resource][idx]
            self._save()
