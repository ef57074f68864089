from typing import Generic, TypeVar

import attrs


T = TypeVar('T')


@attrs.define(frozen=True)
class StoreRead(Generic[T]):
    """
    A document read from the seat store.

    degraded=True means the store could not be read (or the stored document
    could not be decoded) and value holds the documented default instead.
    """

    value: T
    degraded: bool = False
