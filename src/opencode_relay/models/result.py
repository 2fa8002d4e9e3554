"""
Tagged lookup results.

Server lookups return one of Ok / NotFound / TransportFailure instead of a
nullable payload, so callers branch on the outcome with isinstance().
"""

from typing import Generic, TypeVar, Union

from opencode_relay.errors import OpenCodeError

T = TypeVar("T")


class Ok(Generic[T]):
    __slots__ = ("value",)

    def __init__(self, value: T):
        self.value = value

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


class NotFound:
    __slots__ = ("key",)

    def __init__(self, key: str):
        self.key = key

    def __repr__(self) -> str:
        return f"NotFound({self.key!r})"


class TransportFailure:
    __slots__ = ("error",)

    def __init__(self, error: OpenCodeError):
        self.error = error

    @property
    def detail(self) -> str:
        return str(self.error)

    def __repr__(self) -> str:
        return f"TransportFailure({self.detail!r})"


LookupResult = Union[Ok[T], NotFound, TransportFailure]
