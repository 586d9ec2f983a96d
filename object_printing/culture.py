"""
Culture-aware leaf formatting used by the scoped builder sugar.
"""

import math
from typing import Dict, Union

from pydantic import BaseModel, ConfigDict, Field


class NumberCulture(BaseModel):
    """Separators and signs used to format numbers for one culture."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Culture identifier, e.g. 'de-DE'")
    decimal_separator: str = Field(default=".", min_length=1)
    group_separator: str = Field(default=",")
    negative_sign: str = Field(default="-", min_length=1)
    use_grouping: bool = Field(default=False, description="Insert group separators every three integer digits")

    def with_grouping(self, use_grouping: bool = True) -> 'NumberCulture':
        """Return a copy of this culture with digit grouping switched on or off."""
        return self.model_copy(update={"use_grouping": use_grouping})


INVARIANT = NumberCulture(name="invariant")

CULTURES: Dict[str, NumberCulture] = {
    culture.name.lower(): culture for culture in (
        INVARIANT,
        NumberCulture(name="en-US", decimal_separator=".", group_separator=","),
        NumberCulture(name="en-GB", decimal_separator=".", group_separator=","),
        NumberCulture(name="de-DE", decimal_separator=",", group_separator="."),
        NumberCulture(name="fr-FR", decimal_separator=",", group_separator=" "),
        NumberCulture(name="ru-RU", decimal_separator=",", group_separator="\xa0"),
    )
}

CultureLike = Union[NumberCulture, str]


def get_culture(culture: CultureLike) -> NumberCulture:
    """
    Look up a culture by name, or pass an existing culture through.

    Raises:
        KeyError: If no built-in culture has the given name
    """
    if isinstance(culture, NumberCulture):
        return culture
    try:
        return CULTURES[culture.lower()]
    except KeyError:
        raise KeyError(f"Unknown culture '{culture}'. Known cultures: {sorted(CULTURES)}") from None


def _group(digits: str, separator: str) -> str:
    head = len(digits) % 3 or 3
    groups = [digits[:head]] + [digits[i:i + 3] for i in range(head, len(digits), 3)]
    return separator.join(groups)


def format_number(value: Union[int, float], culture: CultureLike) -> str:
    """
    Format an integer or float using the separators of a culture.

    Digits are produced the way ``str()`` produces them; only the decimal
    separator, the negative sign and optional digit grouping change.
    """
    culture = get_culture(culture)

    if isinstance(value, float) and not math.isfinite(value):
        return str(value)

    text = str(abs(value))
    mantissa, exponent_marker, exponent = text.partition('e')
    integer_part, point, fraction = mantissa.partition('.')

    if culture.use_grouping:
        integer_part = _group(integer_part, culture.group_separator)

    formatted = integer_part + (culture.decimal_separator + fraction if point else "")
    formatted += exponent_marker + exponent
    if value < 0:
        formatted = culture.negative_sign + formatted
    return formatted


def truncate(value: str, max_length: int) -> str:
    """
    Return at most the first ``max_length`` characters of ``value``.

    Raises:
        ValueError: If ``max_length`` is negative
    """
    if max_length < 0:
        raise ValueError(f"max_length must be non-negative, got {max_length}")
    if not value:
        return value
    return value if len(value) <= max_length else value[:max_length]
