from typing import TYPE_CHECKING, Any, Dict, Generator, List

from sqlalchemy.orm import DeclarativeBase

from booleanize_al.declaration import parse
from booleanize_al.generator import (
    BoolAttr,
    bind_scopes,
    bool_attrs,
    booleanize,
    install_bool_attrs,
)

if TYPE_CHECKING:
    from booleanize_al.visitor import BoolVisitor


def entry_list(value: Any) -> List[Any]:
    """The entries of a `__booleanize__` attribute.

    Only a list holds several entries; any other value is one entry.
    """
    if isinstance(value, list):
        return list(value)
    return [value]


def declaring_classes(cls: type) -> List[type]:
    """The classes whose `__booleanize__` is declared on `cls`.

    These are the plain mixins that `cls` brings in, outermost first, and
    then `cls` itself. Mixins already used by a mapped parent are skipped,
    as their attributes are inherited from it.
    """
    inherited = set()
    for base in cls.__bases__:
        if issubclass(base, BooleanizeMixin):
            inherited.update(base.__mro__)

    result = [
        c
        for c in reversed(cls.__mro__[1:])
        if c not in inherited and "__booleanize__" in c.__dict__
    ]
    if "__booleanize__" in cls.__dict__:
        result.append(cls)
    return result


class BooleanizeMixin:
    """Adds boolean attribute declarations to declarative models.

    A model lists its boolean attributes in the `__booleanize__` class
    attribute; they are installed right after the class is mapped:

        class User(Base):
            __tablename__ = "users"
            __booleanize__ = [
                "active",
                ("smart", "Yes!", "No, very dumb"),
                {"deleted": ("Yes, I'm gone", "No, I'm still here!")},
            ]

    A lone entry does not need to be wrapped in a list; a tuple is always a
    single `(name, true_text, false_text)` entry.

    Plain mixins (classes that are not mapped) can also carry
    `__booleanize__`, next to the columns they provide. Their entries are
    declared on each model that uses them, before the entries of the model.

    The `__booleanize_config__` class attribute can hold the `Config` used
    for default texts; when missing, the process-wide one is used.

    The mixin must come before `DeclarativeBase` in the list of bases.
    """

    __booleanize_config__ = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        # Validate the declarations before the class is mapped.
        entries: List[Any] = []
        for source in declaring_classes(cls):
            entries.extend(entry_list(source.__dict__["__booleanize__"]))
        specs = parse(entries) if entries else []

        super().__init_subclass__(**kwargs)
        if specs:
            install_bool_attrs(cls, specs, config=cls.__booleanize_config__)
        bind_scopes(cls)

    @classmethod
    def booleanize(cls, *entries: Any) -> Dict[str, BoolAttr]:
        """Declare boolean attributes of this model.

        See `booleanize_al.generator.booleanize()` for the accepted
        entries.
        """
        return booleanize(cls, *entries, config=cls.__booleanize_config__)

    @classmethod
    def bool_attrs(cls) -> Dict[str, BoolAttr]:
        """The boolean attributes declared for this model."""
        return bool_attrs(cls)

    @classmethod
    def all_models(cls) -> Generator[type, None, None]:
        for mapper in cls.registry.mappers:  # type: ignore
            yield mapper.class_

    @classmethod
    def visit(
        cls,
        visitor: "BoolVisitor",
    ) -> None:
        for model in sorted(cls.all_models(), key=lambda m: m.__name__):
            attrs = bool_attrs(model)
            if not attrs and visitor.skip_plain:
                continue

            # Visit the model itself.
            visitor.visit_model(model)  # type: ignore

            # Then visit all boolean attributes of the model.
            for attr in attrs.values():
                visitor.visit_bool_attr(model, attr)  # type: ignore


class Base(BooleanizeMixin, DeclarativeBase):
    """Declarative base for models with boolean attribute declarations."""
