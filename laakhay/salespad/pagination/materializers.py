"""Materializers turn one raw API row into an application-level element."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Protocol, runtime_checkable

from ..core.exceptions import ConfigurationError, ProtocolError
from ..models.entity import (
    EMPTY_FIELD_MAP,
    USER_FIELD_DATA,
    USER_FIELD_NAMES,
    Entity,
    FieldMap,
)


@runtime_checkable
class Materializer(Protocol):
    """Anything that can build one element from one raw row."""

    def materialize(self, row: Any) -> Any: ...


def clean_value(value: Any) -> Any:
    """Trim the right-padding the service adds to fixed-width strings."""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, list):
        return [clean_value(v) for v in value]
    if isinstance(value, dict):
        return {k: clean_value(v) for k, v in value.items()}
    return value


def merge_user_fields(row: Mapping[str, Any]) -> dict[str, Any]:
    """Fold ``UserFieldNames``/``UserFieldData`` pairs into the row itself.

    Merged user fields are a convenience only; they cannot be used in
    ``$filter`` queries.
    """
    properties = dict(row)
    if USER_FIELD_NAMES in properties and USER_FIELD_DATA in properties:
        names = properties.pop(USER_FIELD_NAMES) or []
        data = properties.pop(USER_FIELD_DATA) or []
        properties.update(zip(names, data))
    return properties


class EntityMaterializer:
    """Builds ``entity_cls`` instances, applying a client's field map."""

    def __init__(self, entity_cls: type[Entity], field_map: FieldMap = EMPTY_FIELD_MAP) -> None:
        if not (isinstance(entity_cls, type) and issubclass(entity_cls, Entity)):
            raise ConfigurationError(f"Not an Entity type: {entity_cls!r}")
        self.entity_cls = entity_cls
        self.field_map = field_map

    def materialize(self, row: Any) -> Entity:
        if not isinstance(row, Mapping):
            raise ProtocolError(
                f"Expected a record for {self.entity_cls.entity_type.name}, got {type(row).__name__}"
            )
        entity = self.entity_cls(self.field_map)
        for key, value in merge_user_fields(row).items():
            entity.set(key, clean_value(value))
        return entity

    def __repr__(self) -> str:
        return f"EntityMaterializer({self.entity_cls.__name__})"


class TransformMaterializer:
    """Wraps a plain function; no trimming or field mapping is applied."""

    def __init__(self, func: Callable[[Any], Any]) -> None:
        if not callable(func):
            raise ConfigurationError(f"Not a callable transform: {func!r}")
        self.func = func

    def materialize(self, row: Any) -> Any:
        return self.func(row)

    def __repr__(self) -> str:
        return f"TransformMaterializer({getattr(self.func, '__name__', self.func)!r})"


def as_materializer(target: Any, field_map: FieldMap = EMPTY_FIELD_MAP) -> Materializer:
    """Resolve an entity class, a callable or a materializer.

    Raises:
        ConfigurationError: If target is none of those
    """
    if isinstance(target, type) and issubclass(target, Entity):
        return EntityMaterializer(target, field_map)
    if isinstance(target, (EntityMaterializer, TransformMaterializer)):
        return target
    if not isinstance(target, type) and isinstance(target, Materializer):
        return target
    if callable(target) and not isinstance(target, type):
        return TransformMaterializer(target)
    raise ConfigurationError(f"Not a valid entity type or callable: {target!r}")
