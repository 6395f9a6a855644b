import keyword
import logging
from collections.abc import Mapping
from typing import Any, Iterable, Iterator, List, Optional, Tuple, Union

from attrs import define, field

from booleanize_al.errors import (
    InvalidArrayShape,
    InvalidDeclarationKind,
    InvalidPairShape,
)

logger = logging.getLogger(__name__)


def is_identifier(value: Any) -> bool:
    """Tell if the value can be used as the name of a model attribute."""
    return (
        isinstance(value, str)
        and value.isidentifier()
        and not keyword.iskeyword(value)
    )


def is_text_pair(value: Any) -> bool:
    """Tell if the value is a ('str_for_true', 'str_for_false') pair."""
    return (
        isinstance(value, (list, tuple))
        and len(value) == 2
        and all(isinstance(v, str) for v in value)
    )


@define(frozen=True)
class BoolAttrSpec:
    """The normalized declaration of a boolean attribute.

    Attributes:
        name: The name of the attribute in the model.
        true_text: The text to show when the value is true. `None` means
            that the configured default (or `True`) is used.
        false_text: The text to show when the value is false. `None` means
            that the configured default (or `False`) is used.
    """

    name: str
    true_text: Optional[str] = None
    false_text: Optional[str] = None


@define(frozen=True)
class BareName:
    """A declaration consisting of the attribute name alone."""

    name: str


@define(frozen=True)
class Triple:
    """A `('attr_name', 'str_for_true', 'str_for_false')` declaration."""

    name: str
    true_text: str
    false_text: str


@define(frozen=True)
class PairMap:
    """A `{'attr_name': ('str_for_true', 'str_for_false')}` declaration.

    The pairs are stored as received and are validated when the declaration
    is expanded, in the order in which they were inserted in the mapping.
    """

    pairs: Tuple[Tuple[Any, Any], ...] = field(converter=tuple)

    @classmethod
    def from_mapping(cls, mapping: Mapping) -> "PairMap":
        return cls(pairs=tuple(mapping.items()))


Declaration = Union[BareName, Triple, PairMap]


def classify(entry: Any) -> Declaration:
    """Recognize the shape of a raw declaration entry.

    Args:
        entry: A field name, a three element list or tuple, a mapping from
            field names to text pairs or an already built declaration.

    Raises:
        InvalidArrayShape: The entry is a list or tuple but not a
            well-formed triple.
        InvalidDeclarationKind: The entry has some other shape.

    Returns:
        The declaration variant for this entry.
    """
    if isinstance(entry, (BareName, Triple, PairMap)):
        return entry

    if is_identifier(entry):
        return BareName(name=entry)

    if isinstance(entry, (list, tuple)):
        if (
            len(entry) == 3
            and is_identifier(entry[0])
            and isinstance(entry[1], str)
            and isinstance(entry[2], str)
        ):
            return Triple(
                name=entry[0], true_text=entry[1], false_text=entry[2]
            )
        raise InvalidArrayShape(entry)

    if isinstance(entry, Mapping):
        return PairMap.from_mapping(entry)

    raise InvalidDeclarationKind(entry)


def expand(declaration: Declaration) -> Iterator[BoolAttrSpec]:
    """Produce the normalized attributes of a declaration.

    Mapping declarations are validated pair by pair; the first bad pair
    raises `InvalidPairShape` and nothing past it is produced.
    """
    if isinstance(declaration, BareName):
        yield BoolAttrSpec(name=declaration.name)
    elif isinstance(declaration, Triple):
        yield BoolAttrSpec(
            name=declaration.name,
            true_text=declaration.true_text,
            false_text=declaration.false_text,
        )
    elif isinstance(declaration, PairMap):
        for key, value in declaration.pairs:
            if not is_identifier(key) or not is_text_pair(value):
                raise InvalidPairShape(key, value)
            yield BoolAttrSpec(
                name=key, true_text=value[0], false_text=value[1]
            )
    else:
        raise InvalidDeclarationKind(declaration)


def parse(entries: Iterable[Any]) -> List[BoolAttrSpec]:
    """Normalize a list of declaration entries.

    All entries are validated before the result is returned, so a bad entry
    anywhere in the list means that no attribute is produced.

    Args:
        entries: The raw entries (see `classify()`).

    Returns:
        The normalized attributes, in the order of the entries.
    """
    result: List[BoolAttrSpec] = []
    for entry in entries:
        result.extend(expand(classify(entry)))
    logger.debug(
        "Parsed %d boolean attribute(s): %s",
        len(result),
        ", ".join(s.name for s in result),
    )
    return result
