"""Common record container for SalesPad entities.

Architecture:
    Customers, addresses, items, sales documents and line items all share
    one shape: a flat dict of vendor fields, one of which identifies the
    record. Entity holds those properties; thin subclasses only declare an
    immutable EntityType (endpoint + identifier field).

    Entities are built by ``EntityMaterializer`` from raw API rows. The
    materializer trims the fixed-width padding the service adds to strings,
    merges user-defined fields, and applies the client's field map before
    handing the finished properties to the entity.

Design Decisions:
    - Field maps are per-client, read-only mappings rather than class state,
      so two clients can remap the same entity type differently
    - A cross-reference of raw key -> (mapped key, API type) lets other
      objects read a value by its original name via ``unmapped()``
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, ClassVar

from ..core.exceptions import ConfigurationError

FieldMapValue = str | Callable[[Any], Mapping[str, Any]]
FieldMap = Mapping[str, FieldMapValue]

EMPTY_FIELD_MAP: FieldMap = MappingProxyType({})

USER_FIELD_NAMES = "UserFieldNames"
USER_FIELD_DATA = "UserFieldData"


@dataclass(frozen=True)
class EntityType:
    """Static description of one entity collection.

    Attributes:
        name: Short display name (e.g., "Customer")
        endpoint: Collection path, or "" when the type cannot be queried directly
        id_key: Raw field that identifies a record
    """

    name: str
    endpoint: str
    id_key: str


def freeze_field_map(field_map: Mapping[str, Any] | None) -> FieldMap:
    """Validate a field map and return a read-only copy.

    Raises:
        ConfigurationError: If a value is neither a key name nor a callable
    """
    if not field_map:
        return EMPTY_FIELD_MAP
    for key, target in field_map.items():
        if not (isinstance(target, str) or callable(target)):
            raise ConfigurationError(f"Unsupported field map: {key}")
    return MappingProxyType(dict(field_map))


def _api_type(value: Any) -> type | None:
    # bool must be checked before int
    for kind in (bool, int, float, str):
        if isinstance(value, kind):
            return kind
    return None


class Entity:
    """A single record returned by a SalesPad endpoint."""

    entity_type: ClassVar[EntityType] = EntityType(name="Entity", endpoint="", id_key="")

    def __init__(self, field_map: FieldMap = EMPTY_FIELD_MAP) -> None:
        # Populated through set(); application code receives entities from
        # PagedSequence and resources rather than constructing them.
        self._field_map = field_map
        self._properties: dict[str, Any] = {}
        self._xref: dict[str, tuple[str, type | None]] = {}
        self._id: Any = None

    @property
    def id(self) -> Any:
        """Identifier value captured from ``entity_type.id_key``."""
        return self._id

    def set(self, key: str, value: Any) -> None:
        """Store a property under its raw key, applying the field map."""
        raw_key = key
        raw_value = value
        if raw_key == self.entity_type.id_key:
            self._id = raw_value

        target = self._field_map.get(raw_key)
        if target is None:
            self._properties[raw_key] = raw_value
            mapped_key = raw_key
        elif isinstance(target, str):
            self._properties[target] = raw_value
            mapped_key = target
        elif callable(target):
            mapped = dict(target(raw_value))
            if not mapped:
                raise ConfigurationError(f"Field map for {raw_key} returned no values")
            self._properties.update(mapped)
            mapped_key = next(iter(mapped))
        else:
            raise ConfigurationError(f"Unsupported field map: {raw_key}")

        if raw_key not in self._xref:
            self._xref[raw_key] = (mapped_key, _api_type(raw_value))

    def unmapped(self, raw_key: str) -> Any:
        """Return a value by its original API field name, in its API type.

        Lets one object read another's fields reliably even when the
        application has renamed them with a field map.
        """
        if raw_key not in self._xref:
            return None
        key, api_type = self._xref[raw_key]
        if key not in self._properties:
            return None
        value = self._properties[key]
        if value is None or api_type is None:
            return value
        if api_type is bool and isinstance(value, str):
            return value != "" and value.lower() != "false"
        return api_type(value)

    def get(self, key: str, default: Any = None) -> Any:
        return self._properties.get(key, default)

    def to_dict(self) -> dict[str, Any]:
        return dict(self._properties)

    def keys(self) -> list[str]:
        return list(self._properties)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return self._properties.get(name)

    def __getitem__(self, key: str) -> Any:
        return self._properties[key]

    def __contains__(self, key: object) -> bool:
        return key in self._properties

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entity):
            return NotImplemented
        return type(self) is type(other) and self._properties == other._properties

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self._id!r})"

    def __str__(self) -> str:
        lines = [f"{self.entity_type.name} {self._id if self._id is not None else ''}".rstrip()]
        if self._properties:
            width = max(len(key) for key in self._properties)
            for key, value in self._properties.items():
                lines.append(f"{key:>{width}}: {value!r}")
        return "\n".join(lines)
