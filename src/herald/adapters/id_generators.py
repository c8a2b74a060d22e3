"""ID generators for HERALD.

`ULIDGenerator` is the production generator; `SimpleIdGenerator` gives tests
predictable ids.
"""

import threading

from ulid import monotonic

from herald.interfaces.id_generator import IdGenerator

# pylint: disable=too-few-public-methods


class ULIDGenerator(IdGenerator):
    """Monotonic ULIDs (``ulid-py``), serialized across threads.

    ULIDs sort by creation time, so the stores' "order by id" lists
    integrations and environments in the order they were created.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()

    def new_id(self) -> str:
        with self._lock:
            return str(monotonic.new())


class SimpleIdGenerator(IdGenerator):
    """Zero-padded counter: ``00000000000000000000000001``, ``...02``, ...

    Not for production; ids restart at 1 in every process.
    """

    def __init__(self, length: int = 26) -> None:
        self._counter = 0
        self._length = length
        self._lock = threading.Lock()

    def new_id(self) -> str:
        with self._lock:
            self._counter += 1
            return f"{self._counter:0{self._length}d}"
