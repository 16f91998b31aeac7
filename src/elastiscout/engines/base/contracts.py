"""Row contracts — What a model must expose to be indexed and searched."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Protocol, runtime_checkable


class Searchable(Protocol):
    """An application row that can be written to and loaded back from an index."""

    @classmethod
    def searchable_as(cls) -> str:
        """Index name shared by every row of this type."""
        ...

    @classmethod
    def get_key_name(cls) -> str:
        """Name of the primary-key attribute."""
        ...

    @classmethod
    def find_many(cls, keys: Iterable[Any]) -> Sequence[Searchable]:
        """Bulk-load rows whose primary key is in ``keys``, in any order."""
        ...

    def get_key(self) -> Any:
        """Primary-key value, used as the document id."""
        ...

    def to_searchable_dict(self) -> Mapping[str, Any]:
        """Serializable field map stored as the document body."""
        ...


@runtime_checkable
class SupportsSoftDelete(Protocol):
    """Rows that support logical deletion."""

    def is_trashed(self) -> bool:
        """Whether the row is logically deleted."""
        ...
