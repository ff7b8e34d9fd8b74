"""
Whitelist registry.

Main classes:
- WhitelistBuilder: mutable accumulator filled while rule files are read
- Whitelist: frozen registry answering the analysis' suppression queries

The builder is only used during startup. build() copies its tables into
frozensets, and Whitelist exposes no way to change them afterwards, so one
instance can be shared by any number of reader threads without locking.

Tables:
- fields: bare field rules (field suppressed whatever its type)
- typed fields: field name -> set of type names
- types: exact type names
- namespaces: prefixes matching a name and everything nested under it
- outers: types whose enclosing scope is whitelisted
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from cyclefinder.shared.infrastructure.logging import get_logger
from cyclefinder.whitelist.models import RuleKind, RuleSource, WhitelistRule, WhitelistStats
from cyclefinder.whitelist.naming import FieldBinding, TypeBinding, as_field_name, as_type_name
from cyclefinder.whitelist.parser import iter_rules, parse_entry

logger = get_logger(__name__)


class WhitelistBuilder:
    """
    Collects rules before the registry is frozen.

    All tables are unions: adding a rule twice, or adding files in a
    different order, yields the same registry.
    """

    def __init__(self) -> None:
        self._fields: set[str] = set()
        self._fields_with_types: defaultdict[str, set[str]] = defaultdict(set)
        self._types: set[str] = set()
        self._namespaces: set[str] = set()
        self._outers: set[str] = set()

    def add_rule(self, rule: WhitelistRule) -> WhitelistBuilder:
        """Add a parsed rule to the matching table."""
        if rule.kind is RuleKind.FIELD:
            if rule.type_name is None:
                self._fields.add(rule.name)
            else:
                self._fields_with_types[rule.name].add(rule.type_name)
        elif rule.kind is RuleKind.TYPE:
            self._types.add(rule.name)
        elif rule.kind is RuleKind.NAMESPACE:
            self._namespaces.add(rule.name)
        elif rule.kind is RuleKind.OUTER:
            self._outers.add(rule.name)
        return self

    def add_rules(self, rules: Iterable[WhitelistRule]) -> WhitelistBuilder:
        for rule in rules:
            self.add_rule(rule)
        return self

    def add_entry(self, entry: str, source: RuleSource | None = None) -> WhitelistBuilder:
        """
        Parse and add a single entry such as ``"type com.foo.Bar"``.

        Raises:
            MalformedRuleError: If the entry is not a valid rule
        """
        return self.add_rule(parse_entry(entry.strip(), source))

    def add_lines(self, lines: Iterable[str], path: str | None = None) -> int:
        """
        Parse and add every rule in ``lines``.

        Blank and comment-only lines are skipped. The first malformed line
        raises MalformedRuleError.

        Returns:
            Number of rules read
        """
        count = 0
        for rule in iter_rules(lines, path=path):
            self.add_rule(rule)
            count += 1
        return count

    def build(self) -> Whitelist:
        """Freeze the collected tables into a Whitelist."""
        whitelist = Whitelist(
            fields=self._fields,
            fields_with_types=self._fields_with_types,
            types=self._types,
            namespaces=self._namespaces,
            outers=self._outers,
        )
        logger.debug("whitelist_built", **whitelist.stats().to_json())
        return whitelist


class Whitelist:
    """
    Read-only whitelist registry.

    Every query accepts a canonical name string or a binding from
    cyclefinder.whitelist.naming. Queries never raise: an unknown name is
    simply not whitelisted.
    """

    __slots__ = ("_fields", "_fields_with_types", "_types", "_namespaces", "_outers")

    def __init__(
        self,
        fields: Iterable[str] = (),
        fields_with_types: Mapping[str, Iterable[str]] | None = None,
        types: Iterable[str] = (),
        namespaces: Iterable[str] = (),
        outers: Iterable[str] = (),
    ):
        self._fields = frozenset(fields)
        self._fields_with_types: Mapping[str, frozenset[str]] = MappingProxyType({
            name: frozenset(type_names)
            for name, type_names in (fields_with_types or {}).items()
            if type_names
        })
        self._types = frozenset(types)
        self._namespaces = frozenset(namespaces)
        self._outers = frozenset(outers)

    @classmethod
    def empty(cls) -> Whitelist:
        return cls()

    @classmethod
    def from_entries(cls, entries: Iterable[str]) -> Whitelist:
        """Build a registry from in-memory rule lines."""
        builder = WhitelistBuilder()
        builder.add_lines(entries)
        return builder.build()

    # ── Queries ───────────────────────────────────────────────────────────────

    def contains_field(self, field: str | FieldBinding) -> bool:
        """True if the field has a bare field rule. The field's type is not considered."""
        return as_field_name(field) in self._fields

    def has_whitelisted_types_for_field(self, field: str | FieldBinding) -> bool:
        """True if at least one typed field rule names this field."""
        return as_field_name(field) in self._fields_with_types

    def is_whitelisted_type_for_field(
        self,
        field: str | FieldBinding,
        type_: str | TypeBinding,
    ) -> bool:
        """True if the exact (field, type) pair has a typed field rule."""
        type_names = self._fields_with_types.get(as_field_name(field))
        return type_names is not None and as_type_name(type_) in type_names

    def has_outer_for_type(self, type_: str | TypeBinding) -> bool:
        """True if the type has an outer rule."""
        return as_type_name(type_) in self._outers

    def contains_type(self, type_: str | TypeBinding) -> bool:
        """
        True if the type has a type rule, or it or one of its enclosing
        names has a namespace rule.

        ``com.foo.sub.Inner`` is checked against the namespaces
        ``com.foo.sub.Inner``, ``com.foo.sub``, ``com.foo`` and ``com``.
        """
        name = as_type_name(type_)
        if name in self._types:
            return True
        while True:
            if name in self._namespaces:
                return True
            idx = name.rfind(".")
            if idx < 0:
                return False
            name = name[:idx]

    # ── Introspection ─────────────────────────────────────────────────────────

    def stats(self) -> WhitelistStats:
        return WhitelistStats(
            fields=len(self._fields),
            typed_fields=sum(len(t) for t in self._fields_with_types.values()),
            types=len(self._types),
            namespaces=len(self._namespaces),
            outers=len(self._outers),
        )

    def rules(self) -> tuple[WhitelistRule, ...]:
        """Return every entry as a rule, sorted by kind then name."""
        rules = [WhitelistRule(RuleKind.FIELD, name) for name in self._fields]
        rules.extend(
            WhitelistRule(RuleKind.FIELD, name, type_name=type_name)
            for name, type_names in self._fields_with_types.items()
            for type_name in type_names
        )
        rules.extend(WhitelistRule(RuleKind.TYPE, name) for name in self._types)
        rules.extend(WhitelistRule(RuleKind.NAMESPACE, name) for name in self._namespaces)
        rules.extend(WhitelistRule(RuleKind.OUTER, name) for name in self._outers)
        return tuple(sorted(rules, key=WhitelistRule.sort_key))

    def merge(self, other: Whitelist) -> Whitelist:
        """Return a new registry holding the union of both."""
        fields_with_types: defaultdict[str, set[str]] = defaultdict(set)
        for table in (self._fields_with_types, other._fields_with_types):
            for name, type_names in table.items():
                fields_with_types[name].update(type_names)
        return Whitelist(
            fields=self._fields | other._fields,
            fields_with_types=fields_with_types,
            types=self._types | other._types,
            namespaces=self._namespaces | other._namespaces,
            outers=self._outers | other._outers,
        )

    def __or__(self, other: object) -> Whitelist:
        if not isinstance(other, Whitelist):
            return NotImplemented
        return self.merge(other)

    @property
    def is_empty(self) -> bool:
        return len(self) == 0

    def __len__(self) -> int:
        return self.stats().total

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Whitelist):
            return NotImplemented
        return (
            self._fields == other._fields
            and dict(self._fields_with_types) == dict(other._fields_with_types)
            and self._types == other._types
            and self._namespaces == other._namespaces
            and self._outers == other._outers
        )

    __hash__ = None

    def __repr__(self) -> str:
        stats = self.stats()
        return (
            f"Whitelist(fields={stats.fields}, typed_fields={stats.typed_fields}, "
            f"types={stats.types}, namespaces={stats.namespaces}, outers={stats.outers})"
        )
