"""
Whitelist rule models.

These models describe the entries of a whitelist file:
- RuleKind: keyword of a rule line (field, type, namespace, outer)
- RuleSource: where a rule came from, for diagnostics
- WhitelistRule: one parsed rule
- WhitelistStats: number of entries in each registry table

Rule file syntax:
```
field com.foo.Bar.baz                  # bare field rule
field com.foo.Bar.qux com.foo.Other    # typed field rule
type com.foo.Excluded
namespace com.foo.sub
outer com.foo.Bar
```
"""

from dataclasses import dataclass, field
from enum import Enum

from cyclefinder.shared.domain.base_model import BaseDomainModel


class RuleKind(Enum):
    """Kind of whitelist rule. The value is the keyword used in rule files."""

    FIELD = "field"
    TYPE = "type"
    NAMESPACE = "namespace"
    OUTER = "outer"

    @classmethod
    def from_keyword(cls, keyword: str) -> "RuleKind | None":
        """Look up a rule kind by its case-insensitive keyword."""
        try:
            return cls(keyword.lower())
        except ValueError:
            return None


@dataclass(frozen=True)
class RuleSource(BaseDomainModel):
    """Location of a rule in a whitelist file."""

    path: str | None = None
    line: int | None = None


@dataclass(frozen=True)
class WhitelistRule(BaseDomainModel):
    """
    A single whitelist rule.

    Examples:
    - WhitelistRule(RuleKind.FIELD, "com.foo.Bar.baz")
    - WhitelistRule(RuleKind.FIELD, "com.foo.Bar.qux", type_name="com.foo.Other")
    - WhitelistRule(RuleKind.NAMESPACE, "com.foo.sub")

    Only FIELD rules may carry a type_name. The source location is
    informational and does not take part in equality.
    """

    kind: RuleKind
    name: str
    type_name: str | None = None
    source: RuleSource | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.type_name is not None and self.kind is not RuleKind.FIELD:
            raise ValueError(f"Only field rules can name a type, got {self.kind.value} rule")

    @property
    def is_typed_field(self) -> bool:
        """True for field rules restricted to a single type."""
        return self.kind is RuleKind.FIELD and self.type_name is not None

    def to_entry(self) -> str:
        """Render the rule as a whitelist file line."""
        if self.type_name is not None:
            return f"{self.kind.value} {self.name} {self.type_name}"
        return f"{self.kind.value} {self.name}"

    def sort_key(self) -> tuple[str, str, str]:
        return (self.kind.value, self.name, self.type_name or "")


@dataclass(frozen=True)
class WhitelistStats(BaseDomainModel):
    """Number of distinct entries held by each registry table."""

    fields: int = 0
    typed_fields: int = 0
    types: int = 0
    namespaces: int = 0
    outers: int = 0

    @property
    def total(self) -> int:
        return self.fields + self.typed_fields + self.types + self.namespaces + self.outers
