from decimal import Decimal
from typing import Annotated

from pydantic import PlainSerializer


def format_decimal(value: Decimal) -> str:
    """Render a decimal as plain text without trailing zeros ("150", "-2.5")"""
    value = Decimal(value)
    if value == 0:
        return "0"
    return format(value.normalize(), "f")


# Decimal that goes over the wire as a string so no precision is lost
DecimalStr = Annotated[Decimal, PlainSerializer(format_decimal, return_type=str, when_used="json")]
