"""
Canonical names for whitelist lookups.

The registry is keyed by qualified-name strings only. These helpers turn the
bindings produced by the analysed program's front end into those strings:

- Top-level and member types use their erased qualified name
  (``java.util.Map<K, V>`` -> ``java.util.Map``).
- Types declared inside a method are named after the enclosing type and
  method: ``com.foo.Outer.run.Local``. Anonymous types use ``$`` in place of
  a simple name: ``com.foo.Outer.run.$``.
- Fields are ``<declaring type name>.<field name>``.
"""

from __future__ import annotations

from dataclasses import dataclass

ANONYMOUS_PLACEHOLDER = "$"


@dataclass(frozen=True)
class TypeBinding:
    """A resolved type as seen by the analysis."""

    qualified_name: str
    name: str = ""
    declaring_method: MethodBinding | None = None
    is_anonymous: bool = False


@dataclass(frozen=True)
class MethodBinding:
    """A method that declares local or anonymous types."""

    name: str
    declaring_class: TypeBinding


@dataclass(frozen=True)
class FieldBinding:
    """A field declared by a type."""

    name: str
    declaring_class: TypeBinding


def erase(qualified_name: str) -> str:
    """
    Strip every generic argument list from a qualified type name.

    Examples:
        >>> erase("java.util.Map<java.lang.String, java.util.List<T>>")
        'java.util.Map'
        >>> erase("a.Outer<T>.Inner")
        'a.Outer.Inner'
    """
    if "<" not in qualified_name:
        return qualified_name

    depth = 0
    chars = []
    for char in qualified_name:
        if char == "<":
            depth += 1
        elif char == ">":
            depth = max(depth - 1, 0)
        elif depth == 0:
            chars.append(char)
    return "".join(chars).strip()


def type_name(type_binding: TypeBinding) -> str:
    """Return the canonical whitelist name of a type."""
    method = type_binding.declaring_method
    if method is not None:
        simple = ANONYMOUS_PLACEHOLDER if type_binding.is_anonymous else type_binding.name
        return f"{type_name(method.declaring_class)}.{method.name}.{simple}"
    return erase(type_binding.qualified_name)


def field_name(field_binding: FieldBinding) -> str:
    """Return the canonical whitelist name of a field."""
    return f"{type_name(field_binding.declaring_class)}.{field_binding.name}"


def as_type_name(value: str | TypeBinding) -> str:
    """Accept either a canonical type name or a binding."""
    if isinstance(value, TypeBinding):
        return type_name(value)
    return value


def as_field_name(value: str | FieldBinding) -> str:
    """Accept either a canonical field name or a binding."""
    if isinstance(value, FieldBinding):
        return field_name(value)
    return value
