"""ActiveRecord class for rows bound to a schema."""

import logging
from collections.abc import Mapping
from typing import Any, ClassVar, Optional, TYPE_CHECKING, get_origin, get_type_hints

from .content import JSONContent, SemiStructured
from .exceptions import AttributeNotFoundError
from .result import Result

if TYPE_CHECKING:
    from .schema import Schema

logger = logging.getLogger(__name__)


def declared_fields(cls: type) -> dict[str, Any]:
    """Return the fields a record type declares, with their class defaults.

    Declared fields are the public, non-ClassVar annotations of the class
    and its bases. Fields without a class default map to None.

    Args:
        cls: ActiveRecord subtype

    Returns:
        Dictionary mapping field names to default values
    """
    try:
        hints = get_type_hints(cls)
    except Exception:
        # Fallback to raw annotations if forward references don't resolve
        hints = {}
        for klass in reversed(cls.__mro__):
            hints.update(getattr(klass, '__annotations__', {}))

    fields = {}
    for name, hint in hints.items():
        if name.startswith('_') or hint is ClassVar or get_origin(hint) is ClassVar:
            continue
        fields[name] = getattr(cls, name, None)
    return fields


class DeclaredField:
    """Class-level accessor for a declared record field.

    Reads and writes go to the record's field store, so a declared default
    on the class never shadows the value held by an instance. Read from the
    class, it returns the default.
    """

    def __init__(self, name: str, default: Any = None):
        self.name = name
        self.default = default

    def __get__(self, instance, owner=None):
        if instance is None:
            return self.default
        return instance._fields.get(self.name, self.default)

    def __set__(self, instance, value):
        instance._fields[self.name] = value

    def __repr__(self) -> str:
        return f"DeclaredField({self.name!r}, default={self.default!r})"


class ActiveRecord:
    """One row of a schema, with dynamic attribute resolution.

    Attribute reads resolve in a fixed order and stop at the first match:

    1. a field held by the record (declared on the type, hydrated or set)
    2. a column of the owning schema, by name or alias
    3. a key of the semi-structured content from ``get_json_object()``

    Field values live in a store of their own, apart from the record's
    methods, so a column named ``get`` or ``hydrate`` never hides them.

    ``get`` and ``call`` return a Result; attribute notation
    (``record.email``) unwraps it and raises AttributeNotFoundError on a
    miss. Assignment (``record.email = x``) always stores a field on the
    record and never touches the schema.

    Example:
        >>> class User(ActiveRecord):
        ...     display_name: str = ""
        >>> user = User(schema).hydrate({"id": 1, "email": "a@example.com"})
        >>> user.email
        'a@example.com'
    """

    _declared_fields: ClassVar[dict[str, Any]] = {}
    _get_strategies: ClassVar[tuple[str, ...]] = (
        "_field_value",
        "_column_value",
        "_content_value",
    )
    _call_strategies: ClassVar[tuple[str, ...]] = (
        "_method_call",
        "_content_call",
    )

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls._declared_fields = declared_fields(cls)
        for name, default in cls._declared_fields.items():
            setattr(cls, name, DeclaredField(name, default))

    def __init__(self, schema: "Schema"):
        """Initialize an ActiveRecord.

        Args:
            schema: Schema the record belongs to (not owned by the record)
        """
        self._schema = schema
        self._fields: dict[str, Any] = dict(self._declared_fields)

    def get_schema(self) -> "Schema":
        """Return the schema this record is bound to."""
        return self._schema

    def get_json_object(self) -> Optional[SemiStructured]:
        """Return the semi-structured content behind this record, if any.

        Subtypes that own such content override this. The base record has
        none.
        """
        return None

    def hydrate(self, row: Any) -> "ActiveRecord":
        """Populate fields from a result row.

        Keys naming a declared field are skipped. Other keys are looked up
        in the schema by name or alias and stored under the column name.
        Keys matching neither are dropped.

        Args:
            row: Mapping, SQLAlchemy Row, or anything exposing ``_mapping``

        Returns:
            This record, for chaining
        """
        data = row if isinstance(row, Mapping) else getattr(row, '_mapping', None)
        if data is None:
            raise TypeError(f"Cannot hydrate {type(self).__name__} from {type(row).__name__}")

        for key, value in data.items():
            if key in self._declared_fields:
                continue
            column = self._schema.get_scheme().find_by_name_or_alias(key)
            if column is None:
                logger.debug("Dropping key %r: not a column of %s", key, self._schema.get_name())
                continue
            self._fields[column.name] = value
        return self

    def get(self, name: str) -> Result:
        """Resolve an attribute through fields, schema columns and content."""
        for strategy in self._get_strategies:
            result = getattr(self, strategy)(name)
            if result.found:
                return result
        logger.debug("Attribute %r not found on %s", name, type(self).__name__)
        return Result.absent(name, f"{type(self).__name__} has no attribute {name!r}")

    def set(self, name: str, value: Any) -> "ActiveRecord":
        """Store a field on the record. The schema is not consulted."""
        self._fields[name] = value
        return self

    def call(self, method: str, *args, **kwargs) -> Result:
        """Invoke a record method, falling back to the content's method."""
        for strategy in self._call_strategies:
            result = getattr(self, strategy)(method, *args, **kwargs)
            if result.found:
                return result
        logger.debug("Method %r not found on %s", method, type(self).__name__)
        return Result.absent(method, f"{type(self).__name__} has no method {method!r}")

    def to_dict(self) -> dict[str, Any]:
        """Return all fields held by the record."""
        return dict(self._fields)

    def _field_value(self, name: str) -> Result:
        if name in self._fields:
            return Result.ok(self._fields[name], name)
        return Result.absent(name)

    def _column_value(self, name: str) -> Result:
        column = self._schema.get_scheme().find_by_name_or_alias(name)
        if column is None:
            return Result.absent(name)
        return Result.ok(column.value, name)

    def _content_value(self, name: str) -> Result:
        content = self.get_json_object()
        if content is None:
            return Result.absent(name)
        return content.get(name)

    def _method_call(self, method: str, *args, **kwargs) -> Result:
        if method.startswith('_') or method in self._declared_fields:
            return Result.absent(method)
        if not callable(getattr(type(self), method, None)):
            return Result.absent(method)
        return Result.ok(getattr(self, method)(*args, **kwargs), method)

    def _content_call(self, method: str, *args, **kwargs) -> Result:
        content = self.get_json_object()
        if content is None:
            return Result.absent(method)
        return content.invoke(method, *args, **kwargs)

    def __getattr__(self, name: str) -> Any:
        """Resolve attributes missing from the record itself."""
        if name.startswith('_'):
            raise AttributeError(name)
        result = self.get(name)
        if not result.found:
            raise AttributeNotFoundError(result.reason, name=name, target=type(self).__name__)
        return result.value

    def __setattr__(self, name: str, value: Any) -> None:
        """Store public names as record fields; private ones as attributes."""
        if name.startswith('_') or isinstance(getattr(type(self), name, None), property):
            object.__setattr__(self, name, value)
        else:
            self._fields[name] = value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_dict()!r})"


class JSONRecord(ActiveRecord):
    """Record whose fallback content is a JSON column.

    ``json_column`` names the column holding the JSON document, either as
    text or as an already decoded mapping. The hydrated field wins over the
    schema column's value. Content that is not a JSON object (an array, a
    scalar or malformed text) counts as no content.
    """

    json_column: ClassVar[str] = "content"

    def get_json_object(self) -> Optional[JSONContent]:
        value = self._fields.get(self.json_column)
        if value is None:
            column = self._schema.get_scheme().find(self.json_column)
            value = column.value if column is not None else None
        if value is None:
            return None
        if isinstance(value, JSONContent):
            return value
        try:
            return JSONContent(value)
        except ValueError as e:
            logger.debug("Ignoring %s.%s content: %s", type(self).__name__, self.json_column, e)
            return None
