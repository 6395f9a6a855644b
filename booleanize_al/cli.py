import logging
from typing import Optional, Type

import click
from attrs import define, field
from dotenv import find_dotenv, load_dotenv

from booleanize_al.__version__ import __version__
from booleanize_al.base import BooleanizeMixin
from booleanize_al.click_support.get_base import GetBase
from booleanize_al.config import (
    FALSE_TEXT_ENV,
    TRUE_TEXT_ENV,
    get_default_config,
)
from booleanize_al.errors import InvalidConfigShape
from booleanize_al.generator import BoolAttr
from booleanize_al.visitor import BoolVisitor

logger = logging.getLogger(__name__)


@define
class ShowVisitor(BoolVisitor):
    """Collects a text description of the boolean attributes."""

    lines: list = field(factory=list, init=False)

    def visit_model(self, model: type) -> None:
        if self.lines:
            self.lines.append("")
        table = getattr(model, "__tablename__", "")
        self.lines.append(f"{model.__name__} ({table})")

    def visit_bool_attr(self, model: type, attr: BoolAttr) -> None:
        self.lines.append(f"  {attr.name}")
        self.lines.append(
            f"    methods: {attr.predicate_name}(), {attr.humanize_name}()"
        )
        self.lines.append(
            f"    scopes: {attr.true_scope.name}, {attr.false_scope.name}"
        )
        self.lines.append(
            f"    texts: {attr.true_text!r} / {attr.false_text!r}"
        )


@click.group()
@click.option("--debug/--no-debug", default=False)
@click.option(
    "--true-text",
    type=str,
    default=None,
    envvar=TRUE_TEXT_ENV,
    help="Default text for true values.",
)
@click.option(
    "--false-text",
    type=str,
    default=None,
    envvar=FALSE_TEXT_ENV,
    help="Default text for false values.",
)
@click.version_option(__version__, prog_name="booleanize-al")
def cli(debug: bool, true_text: Optional[str], false_text: Optional[str]):
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="[%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.debug("Debug mode is on")
    load_dotenv(find_dotenv(usecwd=True))

    config = get_default_config()
    try:
        if true_text is None and false_text is None:
            # The .env file may provide them.
            config.load_env(use_dotenv=False)
        else:
            config.set_defaults({"true": true_text, "false": false_text})
    except InvalidConfigShape as e:
        raise click.UsageError(
            "--true-text and --false-text must be used together"
        ) from e


@cli.command()
@click.argument(
    "base",
    metavar="BASE",
    type=GetBase(),
)
@click.option(
    "--all/--booleanized",
    "show_all",
    default=False,
    help="Also list the models that have no boolean attributes.",
)
def show(base: Type[BooleanizeMixin], show_all: bool):
    """Show the boolean attributes of all models in a base.

    Arguments:
        BASE: The declarative base as `module.path:Base`.
    """
    logger.debug("Listing the models of %s", base.__name__)
    visitor = ShowVisitor(skip_plain=not show_all)
    base.visit(visitor)
    if not visitor.lines:
        click.echo("No boolean attributes found.")
        return
    for line in visitor.lines:
        click.echo(line)


if __name__ == "__main__":
    cli()
