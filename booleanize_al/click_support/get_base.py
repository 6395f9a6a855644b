import click

from booleanize_al.base import BooleanizeMixin
from booleanize_al.py_support import get_symbol_from_path


class GetBase(click.ParamType):
    """A custom Click parameter type for loading a declarative base.

    The user enters a module.name:base string, and this class loads the base
    class and returns it. The base must use the `BooleanizeMixin`.
    """

    name = "base"

    def convert(self, value, param, ctx):
        if isinstance(value, type):
            return value
        try:
            base = get_symbol_from_path(value)
        except Exception as e:
            self.fail(f"Could not load base '{value}': {e}", param, ctx)

        if not isinstance(base, type) or not issubclass(
            base, BooleanizeMixin
        ):
            self.fail(
                f"'{value}' is not a class derived from BooleanizeMixin",
                param,
                ctx,
            )
        return base
