"""Shared request model configuration."""

from datetime import date
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from dividend_tracker.core.timezone import parse_trade_date


class CamelRequest(BaseModel):
    """Request body that accepts camelCase keys as well as snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def parse_optional_date(value: Any) -> Optional[date]:
    """Loose date parsing for request fields; blank means not given."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, (str, date)):
        return parse_trade_date(value)
    return value
