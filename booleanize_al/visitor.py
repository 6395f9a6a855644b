from typing import TYPE_CHECKING, Optional, Type

from attrs import define, field

if TYPE_CHECKING:
    from booleanize_al.base import Base
    from booleanize_al.generator import BoolAttr


@define
class BoolVisitor:
    """A visitor that walks the boolean attributes of all models of a base.

    Attributes:
        skip_plain: Do not visit the models that have no boolean attributes.
    """

    skip_plain: bool = field(default=True)

    def visit_model(self, model: Type["Base"]) -> None:
        """Visit a model.

        Args:
            model: The model that is being visited.
        """

    def visit_bool_attr(self, model: Type["Base"], attr: "BoolAttr") -> None:
        """Visit a boolean attribute.

        Args:
            model: The model that contains the attribute.
            attr: The attribute that is being visited.
        """

    @classmethod
    def run(cls, base: Optional[Type["Base"]] = None, *args, **kwargs):
        """Run the visitor."""
        from booleanize_al.base import Base as DbBase

        v = cls(*args, **kwargs)
        if base is None:
            base = DbBase
        base.visit(v)  # type: ignore
        return v
