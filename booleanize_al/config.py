import logging
import os
import threading
from collections.abc import Mapping
from typing import Any, Optional

from attrs import define, field
from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pyrsistent import pmap
from pyrsistent.typing import PMap

from booleanize_al.errors import InvalidConfigShape

TRUE_TEXT_ENV = "BOOLEANIZE_TRUE_TEXT"
FALSE_TEXT_ENV = "BOOLEANIZE_FALSE_TEXT"

logger = logging.getLogger(__name__)


class DefaultTextsInfo(BaseModel):
    """Parser for the default texts of boolean attributes.

    Both texts are required. They can be provided under the `true` and
    `false` keys or under the `for_true` and `for_false` keys.

    Attributes:
        for_true: The text used for true values.
        for_false: The text used for false (and missing) values.
    """

    model_config = ConfigDict(populate_by_name=True)

    for_true: str = Field(alias="true")
    for_false: str = Field(alias="false")


def _key_name(key: Any) -> Any:
    # Allow {True: "Yes", False: "No"}.
    if key is True:
        return "true"
    if key is False:
        return "false"
    return key


def parse_default_texts(texts: Any) -> DefaultTextsInfo:
    """Validate the structure given to `Config.set_defaults()`.

    Raises:
        InvalidConfigShape: The value is not a mapping or one of the texts
            is missing or is not a string.
    """
    if not isinstance(texts, Mapping):
        raise InvalidConfigShape(texts, "not a mapping")
    try:
        return DefaultTextsInfo.model_validate(
            {_key_name(k): v for k, v in texts.items()}
        )
    except ValidationError as e:
        reason = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in e.errors()
        )
        raise InvalidConfigShape(texts, reason) from e


@define
class Config:
    """The default texts used by attributes declared without explicit texts.

    The texts are kept in an immutable map that is replaced as a whole on
    each change, so readers always see a consistent pair.

    Attributes:
        texts: The current `true` and `false` texts; empty until
            `set_defaults()` is called, which is the only way to fill them.
    """

    texts: PMap[str, str] = field(factory=pmap, init=False)
    _lock: threading.Lock = field(
        factory=threading.Lock, init=False, repr=False
    )

    @property
    def is_configured(self) -> bool:
        """Tell if the default texts were set."""
        return len(self.texts) > 0

    def set_defaults(self, texts: Any) -> None:
        """Replace the default texts.

        Args:
            texts: A mapping with both a `true` and a `false` text, like
                `{"true": "Yes", "false": "No"}`.

        Raises:
            InvalidConfigShape: The structure is not valid; the current
                texts are kept.
        """
        info = parse_default_texts(texts)
        snapshot = pmap({"true": info.for_true, "false": info.for_false})
        with self._lock:
            self.texts = snapshot
        logger.debug(
            "Default texts set to %r / %r", info.for_true, info.for_false
        )

    def _lookup(self, key: str) -> Optional[str]:
        try:
            return self.texts.get(key, None)
        except Exception:
            logger.exception("Failed to read the default %s text", key)
            return None

    def get_default_for_true(self) -> Optional[str]:
        """The default text for true values or None if never configured."""
        return self._lookup("true")

    def get_default_for_false(self) -> Optional[str]:
        """The default text for false values or None if never configured."""
        return self._lookup("false")

    def load_env(self, use_dotenv: bool = True) -> bool:
        """Read the default texts from the environment.

        The `BOOLEANIZE_TRUE_TEXT` and `BOOLEANIZE_FALSE_TEXT` variables
        must either be both set or both missing.

        Args:
            use_dotenv: Load the `.env` file found in the current directory
                (or its parents) before reading the variables.

        Raises:
            InvalidConfigShape: Only one of the variables is set.

        Returns:
            True if the texts were changed, False if the variables are
            missing.
        """
        if use_dotenv:
            load_dotenv(find_dotenv(usecwd=True))
        for_true = os.environ.get(TRUE_TEXT_ENV, None)
        for_false = os.environ.get(FALSE_TEXT_ENV, None)
        if for_true is None and for_false is None:
            return False

        texts = {}
        if for_true is not None:
            texts["true"] = for_true
        if for_false is not None:
            texts["false"] = for_false
        self.set_defaults(texts)
        return True


default_config = Config()


def get_default_config() -> Config:
    """The process-wide configuration used when none is provided."""
    return default_config


def set_defaults(texts: Any) -> None:
    """Set the process-wide default texts.

    Example:

        set_defaults({"true": "Yes", "false": "No"})
    """
    get_default_config().set_defaults(texts)
