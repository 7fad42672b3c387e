# colorizer/adapters/persistence/schema.py
"""
persistence/schema.py
---------------------

Versioned on-disk schema for color settings.

The document mirrors the rule store field for field, and nothing more:

    {
      "schema_version": 1,
      "rule_sets": {
        "Default": [
          {"expression": "level == WARN",
           "background": {"r": 255, "g": 255, "b": 153},
           "foreground": {"r": 0, "g": 0, "b": 0}}
        ]
      }
    }

Compiled predicates are never stored; `decode_rule_store` recompiles each
expression with the injected compiler.
"""

from __future__ import annotations

import json
from typing import Dict, List, Mapping, Optional, Sequence, Union

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from colorizer.core.domain.exceptions import (
    ColorSettingsSchemaError,
    ColorSettingsTruncatedError,
    ExpressionCompileError,
    UnsupportedSchemaVersionError,
)
from colorizer.core.domain.models import Color, ColorRule, RuleStore
from colorizer.core.ports.predicate_compiler import IPredicateCompiler

logger = structlog.get_logger()

SCHEMA_VERSION = 1


class ColorRuleRecord(BaseModel):
    expression: str
    background: Optional[Color] = None
    foreground: Optional[Color] = None

    model_config = ConfigDict(extra="forbid")


class RuleStoreDocument(BaseModel):
    schema_version: int = Field(SCHEMA_VERSION, ge=1)
    rule_sets: Dict[str, List[ColorRuleRecord]] = Field(default_factory=dict)


def encode_rule_store(store: Mapping[str, Sequence[ColorRule]]) -> str:
    """Serializes every rule set, preserving set order and rule order."""
    document = RuleStoreDocument(
        rule_sets={
            name: [
                ColorRuleRecord(
                    expression=rule.expression,
                    background=rule.background,
                    foreground=rule.foreground,
                )
                for rule in rules
            ]
            for name, rules in store.items()
        }
    )
    return document.model_dump_json(indent=2)


def _is_truncated(text: str, error: json.JSONDecodeError) -> bool:
    # A document cut off mid-write fails at the very end of the input,
    # or inside a string that never closes.
    if error.msg.startswith("Unterminated string"):
        return True
    return error.pos >= len(text.rstrip())


def decode_rule_store(name: str, data: Union[bytes, str], compiler: IPredicateCompiler) -> RuleStore:
    """
    Parses a stored document back into a rule store.

    Args:
        name: The collection name, used for error reporting only.
        data: The raw document, as stored bytes or already-decoded text.
        compiler: Recompiles each rule's expression.

    Raises:
        ColorSettingsTruncatedError: The document is empty or cut off.
        UnsupportedSchemaVersionError: Written by a newer schema version.
        ColorSettingsSchemaError: Anything else structurally wrong.
    """
    if isinstance(data, bytes):
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as e:
            # A multi-byte character cut off at the end is a partial write.
            if e.reason == "unexpected end of data":
                raise ColorSettingsTruncatedError(name) from e
            raise ColorSettingsSchemaError(name, f"not UTF-8 text: {e.reason}") from e
    else:
        text = data

    if not text.strip():
        raise ColorSettingsTruncatedError(name)

    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        if _is_truncated(text, e):
            raise ColorSettingsTruncatedError(name) from e
        raise ColorSettingsSchemaError(name, f"invalid JSON: {e.msg}") from e
    except RecursionError as e:
        raise ColorSettingsSchemaError(name, "document nested too deeply") from e

    if not isinstance(raw, dict):
        raise ColorSettingsSchemaError(name, "top-level value must be an object")

    version = raw.get("schema_version")
    if isinstance(version, int) and version > SCHEMA_VERSION:
        raise UnsupportedSchemaVersionError(name, version)

    try:
        document = RuleStoreDocument.model_validate(raw)
    except ValidationError as e:
        raise ColorSettingsSchemaError(name, str(e)) from e

    store: RuleStore = {}
    for rule_set_name, records in document.rule_sets.items():
        rules = []
        for record in records:
            try:
                rules.append(
                    ColorRule.compile(
                        record.expression,
                        compiler,
                        background=record.background,
                        foreground=record.foreground,
                    )
                )
            except ExpressionCompileError as e:
                # One stale expression should not cost the whole collection.
                logger.warning(
                    "color_rule_skipped",
                    name=name,
                    rule_set=rule_set_name,
                    expression=record.expression,
                    error=e.reason,
                )
        store[rule_set_name] = rules
    return store
