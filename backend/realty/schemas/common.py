# realty/schemas/common.py
from typing import Annotated, Any, List, Optional

from pydantic import BeforeValidator


def _list_or_empty(value: Any) -> Any:
    if value is None or value == "":
        return []
    if isinstance(value, str):
        return [value]
    return value


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


# NULL array columns come back as []
StrList = Annotated[List[str], BeforeValidator(_list_or_empty)]

# Form inputs send "" for untouched optional fields
OptionalFloat = Annotated[Optional[float], BeforeValidator(_blank_to_none)]
OptionalInt = Annotated[Optional[int], BeforeValidator(_blank_to_none)]
OptionalStr = Annotated[Optional[str], BeforeValidator(_blank_to_none)]
