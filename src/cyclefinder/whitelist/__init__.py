"""
Whitelist module for suppressing reference cycle reports.

Rules come from plain-text whitelist files (one rule per line) and exempt
fields, field/type pairs, types, whole namespaces and outer scopes from the
cycle analysis.

Exports:
    - RuleKind: Enum for rule keywords
    - WhitelistRule: Individual parsed rule
    - WhitelistStats: Entry counts per table
    - Whitelist: Frozen registry answering suppression queries
    - WhitelistBuilder: Mutable builder producing a Whitelist
    - TypeBinding, MethodBinding, FieldBinding: Inputs for name qualification
    - type_name, field_name: Canonical name helpers
    - parse_entry, parse_line: Rule parsing
    - load_whitelist: Load whitelist files
    - load_project_config: Load whitelist paths from project config
"""

from cyclefinder.whitelist.config_loader import ProjectConfig, load_project_config
from cyclefinder.whitelist.loader import load_whitelist, load_whitelist_file
from cyclefinder.whitelist.models import RuleKind, RuleSource, WhitelistRule, WhitelistStats
from cyclefinder.whitelist.naming import (
    FieldBinding,
    MethodBinding,
    TypeBinding,
    field_name,
    type_name,
)
from cyclefinder.whitelist.parser import parse_entry, parse_line
from cyclefinder.whitelist.registry import Whitelist, WhitelistBuilder

__all__ = [
    "RuleKind",
    "RuleSource",
    "WhitelistRule",
    "WhitelistStats",
    "Whitelist",
    "WhitelistBuilder",
    "TypeBinding",
    "MethodBinding",
    "FieldBinding",
    "type_name",
    "field_name",
    "parse_entry",
    "parse_line",
    "load_whitelist",
    "load_whitelist_file",
    "ProjectConfig",
    "load_project_config",
]
