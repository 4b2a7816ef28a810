"""
Query descriptor types.

Descriptors are plain structured data produced by the outer ORM layer and
consumed once by a statement generator. Every type accepts either an
instance or a mapping; mappings may use snake_case or the camelCase keys
the outer layer emits (``allowNull``, ``tableAs``, ``indexHints``...).
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from .exceptions import GenerationError, InvalidColumnReference


class _NotSet:
    """Sentinel for options that were not supplied at all."""

    _instance = None

    def __new__(cls) -> "_NotSet":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NOT_SET"

    def __bool__(self) -> bool:
        return False


NOT_SET: Any = _NotSet()


def _camel_to_snake(key: str) -> str:
    out = []
    for char in key:
        if char.isupper():
            out.append("_")
            out.append(char.lower())
        else:
            out.append(char)
    return "".join(out)


def _normalize_keys(
    value: Mapping[str, Any], allowed: Sequence[str], kind: str
) -> Dict[str, Any]:
    normalized: Dict[str, Any] = {}
    for key, item in value.items():
        name = _camel_to_snake(key)
        if name not in allowed:
            raise GenerationError(f"Unknown {kind} option '{key}'", node=value)
        normalized[name] = item
    return normalized


def _field_names(cls: type) -> Tuple[str, ...]:
    return tuple(f.name for f in fields(cls))


@dataclass(frozen=True)
class TableRef:
    """A table name with an optional schema."""

    table_name: str
    schema: Optional[str] = None

    @classmethod
    def from_value(cls, value: Union[str, "TableRef", Mapping[str, Any]]) -> "TableRef":
        if isinstance(value, TableRef):
            return value
        if isinstance(value, str):
            return cls(value)
        if isinstance(value, Mapping):
            data = _normalize_keys(value, _field_names(cls), "table")
            if "table_name" not in data:
                raise InvalidColumnReference("Table reference needs a table name", node=value)
            return cls(**data)
        raise InvalidColumnReference("Unsupported table reference", node=value)


@dataclass(frozen=True)
class ModelRef:
    """Minimal model reference: the alias used for the main table and its primary key."""

    name: str
    primary_key: str = "id"


class IndexHintType(str, Enum):
    """Recognised index hint kinds."""

    USE = "USE"
    FORCE = "FORCE"
    IGNORE = "IGNORE"


@dataclass(frozen=True)
class IndexHint:
    type: Any
    values: Tuple[str, ...] = ()

    @property
    def kind(self) -> str:
        raw = self.type.value if isinstance(self.type, Enum) else self.type
        return str(raw).upper()

    @classmethod
    def from_value(cls, value: Union["IndexHint", Mapping[str, Any]]) -> "IndexHint":
        if isinstance(value, IndexHint):
            return value
        if isinstance(value, Mapping):
            data = _normalize_keys(value, _field_names(cls), "index hint")
            return cls(type=data.get("type"), values=tuple(data.get("values") or ()))
        raise GenerationError("Index hints must be mappings with 'type' and 'values'", node=value)


@dataclass(frozen=True)
class SelectOptions:
    """Everything selectQuery needs besides the table."""

    attributes: Optional[Sequence[Any]] = None
    where: Any = None
    group: Any = None
    having: Any = None
    order: Any = None
    limit: Optional[int] = None
    offset: Optional[int] = None
    index_hints: Tuple[IndexHint, ...] = ()
    sub_query: bool = False
    table_as: Optional[str] = None

    @classmethod
    def from_value(cls, value: Union[None, "SelectOptions", Mapping[str, Any]]) -> "SelectOptions":
        if value is None:
            return cls()
        if isinstance(value, SelectOptions):
            return value
        if isinstance(value, Mapping):
            data = _normalize_keys(value, _field_names(cls), "select")
            hints = data.get("index_hints") or ()
            data["index_hints"] = tuple(IndexHint.from_value(hint) for hint in hints)
            data["sub_query"] = bool(data.get("sub_query", False))
            return cls(**data)
        raise GenerationError("Select options must be a mapping", node=value)


@dataclass(frozen=True)
class StatementOptions:
    """
    Per-call options for INSERT, UPDATE and DELETE.

    ``omit_null`` left as None falls back to the generator-wide setting.
    """

    omit_null: Optional[bool] = None
    ignore_duplicates: bool = False
    limit: Optional[int] = None

    @classmethod
    def from_value(cls, value: Union[None, "StatementOptions", Mapping[str, Any]]) -> "StatementOptions":
        if value is None:
            return cls()
        if isinstance(value, StatementOptions):
            return value
        if isinstance(value, Mapping):
            data = _normalize_keys(value, _field_names(cls), "statement")
            data["ignore_duplicates"] = bool(data.get("ignore_duplicates", False))
            return cls(**data)
        raise GenerationError("Statement options must be a mapping", node=value)


@dataclass(frozen=True)
class References:
    """Foreign key target of a column definition."""

    table: Any
    key: Optional[str] = None

    @classmethod
    def from_value(cls, value: Union["References", Mapping[str, Any], str]) -> "References":
        if isinstance(value, References):
            return value
        if isinstance(value, str):
            return cls(table=value)
        if isinstance(value, Mapping):
            data = _normalize_keys(value, ("table", "key", "model"), "references")
            table = data.get("table", data.get("model"))
            if table is None:
                raise InvalidColumnReference("References need a target table", node=value)
            return cls(table=table, key=data.get("key"))
        raise InvalidColumnReference("Unsupported references descriptor", node=value)


@dataclass(frozen=True)
class ColumnDefinition:
    """DDL description of a single column."""

    type: str
    allow_null: Optional[bool] = None
    default_value: Any = NOT_SET
    primary_key: bool = False
    auto_increment: bool = False
    unique: bool = False
    comment: Optional[str] = None
    first: bool = False
    after: Optional[str] = None
    references: Optional[References] = None
    on_delete: Optional[str] = None
    on_update: Optional[str] = None
    binary: bool = False

    @classmethod
    def from_value(cls, value: Union[str, "ColumnDefinition", Mapping[str, Any]]) -> "ColumnDefinition":
        if isinstance(value, ColumnDefinition):
            return value
        if isinstance(value, str):
            return cls(type=value)
        if isinstance(value, Mapping):
            data = _normalize_keys(value, _field_names(cls), "column")
            if "type" not in data:
                raise InvalidColumnReference("Column definition needs a type", node=value)
            if data.get("references") is not None:
                data["references"] = References.from_value(data["references"])
            # only a literal True marks the column; a constraint name string does not
            data["unique"] = data.get("unique") is True
            return cls(**data)
        raise InvalidColumnReference("Unsupported column definition", node=value)


@dataclass(frozen=True)
class UniqueKey:
    """Multi-column unique constraint for createTableQuery."""

    fields: Tuple[str, ...]
    name: Optional[str] = None

    @classmethod
    def from_value(cls, value: Union["UniqueKey", Mapping[str, Any], Sequence[str]], name: Optional[str] = None) -> "UniqueKey":
        if isinstance(value, UniqueKey):
            return value
        if isinstance(value, Mapping):
            data = _normalize_keys(value, ("fields", "name", "custom_index"), "unique key")
            return cls(fields=tuple(data.get("fields") or ()), name=data.get("name", name))
        return cls(fields=tuple(value), name=name)


def unique_keys_from_value(value: Any) -> List[UniqueKey]:
    """Accept a list of unique keys or a mapping of name -> unique key."""
    if not value:
        return []
    if isinstance(value, Mapping):
        return [UniqueKey.from_value(spec, name=name) for name, spec in value.items()]
    return [UniqueKey.from_value(spec) for spec in value]


@dataclass(frozen=True)
class TableOptions:
    """Table-level options for createTableQuery."""

    comment: Optional[str] = None
    charset: Optional[str] = None
    collate: Optional[str] = None
    row_format: Optional[str] = None
    unique_keys: Tuple[UniqueKey, ...] = field(default_factory=tuple)

    @classmethod
    def from_value(cls, value: Union[None, "TableOptions", Mapping[str, Any]]) -> "TableOptions":
        if value is None:
            return cls()
        if isinstance(value, TableOptions):
            return value
        if isinstance(value, Mapping):
            data = _normalize_keys(value, _field_names(cls), "table")
            data["unique_keys"] = tuple(unique_keys_from_value(data.get("unique_keys")))
            return cls(**data)
        raise GenerationError("Table options must be a mapping", node=value)


__all__ = [
    "NOT_SET",
    "TableRef",
    "ModelRef",
    "IndexHintType",
    "IndexHint",
    "SelectOptions",
    "StatementOptions",
    "References",
    "ColumnDefinition",
    "UniqueKey",
    "unique_keys_from_value",
    "TableOptions",
]
