"""Interface for ID generators.

Generated ids key integrations and environments, and their tail doubles as
the short suffix that keeps auto-generated integration identifiers unique.
"""

import abc

# pylint: disable=too-few-public-methods


class IdGenerator(abc.ABC):
    """Contract for an ID generator."""

    @abc.abstractmethod
    def new_id(self) -> str:
        """Return a new unique identifier of at most 64 characters."""

    def new_suffix(self, length: int) -> str:
        """Return the lowercased last `length` characters of a fresh id.

        Generators whose ids share a prefix (a timestamp, a counter's padding)
        vary fastest at the end, which is why the tail is used.
        """
        return self.new_id()[-length:].lower()
