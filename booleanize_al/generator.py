import logging
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Dict,
    Iterable,
    Iterator,
    List,
    Optional,
    Tuple,
)

from attrs import define, field
from sqlalchemy import case, or_, select

from booleanize_al.config import Config, get_default_config
from booleanize_al.declaration import BoolAttrSpec, parse

if TYPE_CHECKING:
    from sqlalchemy import Select
    from sqlalchemy.sql.elements import ColumnElement

logger = logging.getLogger(__name__)

BOOL_ATTRS_KEY = "__bool_attrs__"
SCOPES_KEY = "scopes"
DEFAULT_TRUE_TEXT = "True"
DEFAULT_FALSE_TEXT = "False"


def predicate_name(name: str) -> str:
    """The name of the method that tells if the attribute is true."""
    return f"is_{name}"


def humanize_name(name: str) -> str:
    """The name of the method that returns the display text."""
    return f"{name}_humanize"


def true_scope_name(name: str) -> str:
    return name


def false_scope_name(name: str) -> str:
    return f"not_{name}"


@define(frozen=True)
class BoolScope:
    """A named filter that selects the records of a model by a boolean field.

    The scope can be called without arguments to create a new select
    statement for the model or with a select statement to narrow it.

    A `None` value in the database is treated as false: the `not_<field>`
    scope matches `IS FALSE OR IS NULL`, not just `= false`. The true and
    the false scope of a field split the table in two disjoint sets, in
    line with `is_<field>()` being false for `None`.

    Attributes:
        model: The ORM class.
        field_name: The name of the boolean attribute.
        value: The value the attribute must have.
    """

    model: type
    field_name: str
    value: bool

    def __repr__(self) -> str:
        return f"BoolScope({self.model.__name__}.{self.name})"

    @property
    def name(self) -> str:
        """The name of the scope in the model's scope bag."""
        if self.value:
            return true_scope_name(self.field_name)
        return false_scope_name(self.field_name)

    def condition(self) -> "ColumnElement[bool]":
        """The where clause of this scope."""
        fld = getattr(self.model, self.field_name, None)
        assert (
            fld is not None
        ), f"{self.model.__name__} must have a `{self.field_name}` column"
        if self.value:
            return fld.is_(True)
        return or_(fld.is_(None), fld.is_(False))

    def apply(self, sel: "Select") -> "Select":
        """Restrict a select statement to the records in this scope."""
        return sel.where(self.condition())

    def create(self) -> "Select":
        """Create a select statement for the records in this scope."""
        return self.apply(select(self.model))

    def __call__(self, sel: Optional["Select"] = None) -> "Select":
        if sel is None:
            return self.create()
        return self.apply(sel)


@define
class ScopeBag:
    """The named scopes of a model, available as `Model.scopes.<name>`."""

    _scopes: Dict[str, BoolScope] = field(factory=dict)

    def __getattr__(self, name: str) -> BoolScope:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._scopes[name]
        except KeyError:
            raise AttributeError(
                f"No scope named '{name}'; available scopes are: "
                f"{', '.join(self._scopes.keys())}"
            ) from None

    def __getitem__(self, name: str) -> BoolScope:
        return self._scopes[name]

    def __contains__(self, name: str) -> bool:
        return name in self._scopes

    def __iter__(self) -> Iterator[str]:
        yield from self._scopes.keys()

    def __len__(self) -> int:
        return len(self._scopes)

    @property
    def names(self) -> List[str]:
        """The names of all scopes in the bag."""
        return list(self._scopes.keys())

    def add(self, scope: BoolScope) -> None:
        """Add a scope, replacing any scope with the same name."""
        self._scopes[scope.name] = scope


@define(frozen=True)
class BoolAttr:
    """The capabilities generated for a boolean attribute of a model.

    Attributes:
        name: The name of the attribute.
        true_text: The text shown for true values.
        false_text: The text shown for false and missing values.
        true_scope: Selects the records where the attribute is true.
        false_scope: Selects the records where the attribute is false or
            missing.
    """

    name: str
    true_text: str
    false_text: str
    true_scope: BoolScope = field(repr=False)
    false_scope: BoolScope = field(repr=False)

    @property
    def predicate_name(self) -> str:
        return predicate_name(self.name)

    @property
    def humanize_name(self) -> str:
        return humanize_name(self.name)

    def is_true(self, record: Any) -> bool:
        """The value of the attribute in the record as a strict boolean."""
        return bool(getattr(record, self.name, None))

    def humanize(self, record: Any) -> str:
        """The display text for the current value of the attribute."""
        return self.true_text if self.is_true(record) else self.false_text

    def humanize_expression(self) -> "ColumnElement[str]":
        """A SQL expression that evaluates to the display text."""
        fld = getattr(self.true_scope.model, self.name)
        return case(
            (fld.is_(True), self.true_text),
            else_=self.false_text,
        ).label(self.humanize_name)


def resolve_texts(spec: BoolAttrSpec, config: Config) -> Tuple[str, str]:
    """Compute the texts for an attribute.

    Explicit texts win, then the configured defaults, then `True` and
    `False`.
    """
    true_text = spec.true_text
    if true_text is None:
        true_text = config.get_default_for_true()
    if true_text is None:
        true_text = DEFAULT_TRUE_TEXT

    false_text = spec.false_text
    if false_text is None:
        false_text = config.get_default_for_false()
    if false_text is None:
        false_text = DEFAULT_FALSE_TEXT
    return str(true_text), str(false_text)


def _make_predicate(name: str) -> Callable[[Any], bool]:
    def predicate(self) -> bool:
        return bool(getattr(self, name, None))

    predicate.__name__ = predicate_name(name)
    predicate.__qualname__ = predicate.__name__
    predicate.__doc__ = f"Tell if `{name}` is true."
    return predicate


def _make_humanize(
    predicate: Callable[[Any], bool], true_text: str, false_text: str
) -> Callable[[Any], str]:
    def humanize(self) -> str:
        return true_text if predicate(self) else false_text

    return humanize


def _own_table(model: type) -> Dict[str, "BoolAttr"]:
    # Each class keeps its own table so that subclasses do not write into
    # the table of the parent.
    table = model.__dict__.get(BOOL_ATTRS_KEY, None)
    if table is None:
        table = {}
        setattr(model, BOOL_ATTRS_KEY, table)
    return table


def _own_scopes(model: type) -> ScopeBag:
    bag = model.__dict__.get(SCOPES_KEY, None)
    if bag is None:
        # Inherited attributes get scopes that select the subclass.
        bag = ScopeBag()
        for name in bool_attrs(model):
            bag.add(BoolScope(model=model, field_name=name, value=True))
            bag.add(BoolScope(model=model, field_name=name, value=False))
        setattr(model, SCOPES_KEY, bag)
    return bag


def bind_scopes(model: type) -> None:
    """Give a model its own scopes for the attributes it inherits.

    The scopes of a subclass select the records of the subclass, even when
    the subclass declares no attribute of its own.
    """
    if bool_attrs(model):
        _own_scopes(model)


def install_bool_attr(
    model: type, spec: BoolAttrSpec, config: Config
) -> BoolAttr:
    """Install the methods and scopes for one attribute in the model.

    An attribute that was already declared is replaced.

    Args:
        model: The ORM class.
        spec: The normalized declaration.
        config: Provides default texts for missing ones.

    Returns:
        The record of what was installed.
    """
    true_text, false_text = resolve_texts(spec, config)
    attr = BoolAttr(
        name=spec.name,
        true_text=true_text,
        false_text=false_text,
        true_scope=BoolScope(model=model, field_name=spec.name, value=True),
        false_scope=BoolScope(model=model, field_name=spec.name, value=False),
    )

    predicate = _make_predicate(attr.name)
    humanize = _make_humanize(predicate, true_text, false_text)
    humanize.__name__ = attr.humanize_name
    humanize.__qualname__ = humanize.__name__
    humanize.__doc__ = (
        f"Return {true_text!r} if `{attr.name}` is true, "
        f"{false_text!r} otherwise."
    )
    setattr(model, attr.predicate_name, predicate)
    setattr(model, attr.humanize_name, humanize)

    scopes = _own_scopes(model)
    scopes.add(attr.true_scope)
    scopes.add(attr.false_scope)

    table = _own_table(model)
    if attr.name in table:
        logger.debug("Replacing %s.%s", model.__name__, attr.name)
    table[attr.name] = attr

    logger.debug(
        "%s.%s: %r / %r",
        model.__name__,
        attr.name,
        true_text,
        false_text,
    )
    return attr


def booleanize(
    model: type, *entries: Any, config: Optional[Config] = None
) -> Dict[str, BoolAttr]:
    """Declare boolean attributes of a model.

    Each entry can be:

    - the name of the attribute: `"active"`;
    - a three element sequence: `("smart", "Yes!", "No, very dumb")`;
    - a mapping: `{"deleted": ("Yes, I'm gone", "No, I'm still here!")}`.

    For each attribute the model receives the `is_<name>()` and
    `<name>_humanize()` methods and the `<name>` and `not_<name>` scopes
    in `Model.scopes`.

    Args:
        model: The ORM class.
        entries: The declarations.
        config: Provides default texts; the process-wide configuration is
            used if not provided.

    Raises:
        BooleanizeError: One of the entries is malformed. Nothing is
            installed in this case.

    Returns:
        The installed attributes by name.
    """
    return install_bool_attrs(model, parse(entries), config=config)


def install_bool_attrs(
    model: type,
    specs: Iterable[BoolAttrSpec],
    config: Optional[Config] = None,
) -> Dict[str, BoolAttr]:
    """Install already parsed declarations in a model.

    Args:
        model: The ORM class.
        specs: The normalized declarations, in the order they were made.
        config: Provides default texts; the process-wide configuration is
            used if not provided.

    Returns:
        The installed attributes by name.
    """
    if config is None:
        config = get_default_config()

    result: Dict[str, BoolAttr] = {}
    for spec in specs:
        result[spec.name] = install_bool_attr(model, spec, config)
    return result


def bool_attrs(model: type) -> Dict[str, BoolAttr]:
    """The boolean attributes of a model, including inherited ones."""
    result: Dict[str, BoolAttr] = {}
    for cls in reversed(model.__mro__):
        result.update(cls.__dict__.get(BOOL_ATTRS_KEY, None) or {})
    return result
