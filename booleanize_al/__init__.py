"""Predicate, humanize and scope helpers for boolean columns."""

from booleanize_al.base import Base, BooleanizeMixin
from booleanize_al.config import Config, get_default_config, set_defaults
from booleanize_al.declaration import (
    BareName,
    BoolAttrSpec,
    Declaration,
    PairMap,
    Triple,
    parse,
)
from booleanize_al.errors import (
    BooleanizeError,
    InvalidArrayShape,
    InvalidConfigShape,
    InvalidDeclarationKind,
    InvalidPairShape,
)
from booleanize_al.generator import (
    BoolAttr,
    BoolScope,
    ScopeBag,
    bool_attrs,
    booleanize,
)

__all__ = [
    "BareName",
    "Base",
    "BoolAttr",
    "BoolAttrSpec",
    "BoolScope",
    "BooleanizeError",
    "BooleanizeMixin",
    "Config",
    "Declaration",
    "InvalidArrayShape",
    "InvalidConfigShape",
    "InvalidDeclarationKind",
    "InvalidPairShape",
    "PairMap",
    "ScopeBag",
    "Triple",
    "bool_attrs",
    "booleanize",
    "get_default_config",
    "parse",
    "set_defaults",
]
