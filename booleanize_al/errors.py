from typing import Any

USAGE = (
    "You can only pass a field name ('attr_name'), a three element "
    "sequence ('attr_name', 'str_for_true', 'str_for_false') or a mapping "
    "{'attr_name': ('str_for_true', 'str_for_false')}."
)


class BooleanizeError(ValueError):
    """Base class for errors raised while declaring boolean attributes.

    Attributes:
        value: The offending value, as received from the caller.
    """

    value: Any

    def __init__(self, msg: str, value: Any):
        super().__init__(msg)
        self.value = value


class InvalidDeclarationKind(BooleanizeError):
    """The entry is neither a name, a three element sequence nor a mapping."""

    def __init__(self, value: Any):
        super().__init__(f"{USAGE} You passed {value!r}", value)


class InvalidArrayShape(BooleanizeError):
    """The sequence entry is not a ('attr_name', 'true', 'false') triple."""

    def __init__(self, value: Any):
        super().__init__(f"{USAGE} You passed {value!r}", value)


class InvalidPairShape(BooleanizeError):
    """A mapping entry has a bad key or a value that is not a text pair.

    Attributes:
        key: The key of the mapping that holds the bad pair.
    """

    key: Any

    def __init__(self, key: Any, value: Any):
        super().__init__(
            f"{USAGE} You passed {key!r}: {value!r}",
            value,
        )
        self.key = key


class InvalidConfigShape(BooleanizeError):
    """The default texts must provide both the `true` and the `false` text."""

    def __init__(self, value: Any, reason: str = ""):
        msg = (
            "Default texts must be given as a mapping with both a 'true' "
            f"and a 'false' text. You passed {value!r}"
        )
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg, value)
