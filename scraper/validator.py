"""
Validation of user-supplied scrape parameters.
"""

from typing import Any, Literal, Union
from urllib.parse import urlparse

import pydantic
import structlog
from pydantic import BaseModel, field_validator

from .errors import ValidationError
from .models import PAGES_MAX, SortType

logger = structlog.get_logger(__name__)


class ScrapeParams(BaseModel):
    url: str
    sort_type: SortType
    pages: Union[int, Literal["max"]]
    clean: bool

    @field_validator("url", mode="before")
    @classmethod
    def check_url(cls, value: Any) -> str:
        parsed = urlparse(value) if isinstance(value, str) else None
        if (
            parsed is None
            or parsed.netloc != "www.google.com"
            or not parsed.path.startswith("/maps/place/")
        ):
            raise ValueError(f"Invalid URL: {value}")
        return value

    @field_validator("sort_type", mode="before")
    @classmethod
    def check_sort_type(cls, value: Any) -> SortType:
        if isinstance(value, SortType):
            return value
        if not isinstance(value, str) or value not in SortType.__members__:
            raise ValueError(f"Invalid sort type: {value}")
        return SortType[value]

    @field_validator("pages", mode="before")
    @classmethod
    def check_pages(cls, value: Any) -> Union[int, str]:
        if value == PAGES_MAX:
            return value
        if isinstance(value, bool):
            raise ValueError(f"Invalid pages value: {value}")
        try:
            pages = int(str(value).strip())
        except ValueError:
            raise ValueError(f"Invalid pages value: {value}") from None
        if pages < 1:
            raise ValueError(f"Invalid pages value: {value}")
        return pages

    @field_validator("clean", mode="before")
    @classmethod
    def check_clean(cls, value: Any) -> bool:
        if not isinstance(value, bool):
            raise ValueError(f"Invalid value for 'clean': {value}")
        return value


def validate_params(url: Any, sort_type: Any, pages: Any, clean: Any) -> ScrapeParams:
    """Validate raw scrape parameters.

    Raises:
        ValidationError: on the first invalid parameter.
    """
    try:
        return ScrapeParams(url=url, sort_type=sort_type, pages=pages, clean=clean)
    except pydantic.ValidationError as e:
        errors = e.errors()
        first = errors[0]
        cause = first.get("ctx", {}).get("error")
        message = str(cause) if cause is not None else first["msg"]
        logger.warning("invalid_scrape_params", error=message)
        raise ValidationError(message, details={"errors": [err["msg"] for err in errors]}) from e
