"""Test doubles: searchable rows and an in-memory Elasticsearch client."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, ClassVar

# ── Searchable rows ───────────────────────────────────────────────────────────


@dataclass
class Post:
    """Minimal searchable row backed by a class-level table."""

    id: int
    title: str
    body: str = ""
    status: str = "published"

    table: ClassVar[dict[int, Post]] = {}

    @classmethod
    def searchable_as(cls) -> str:
        return "posts"

    @classmethod
    def get_key_name(cls) -> str:
        return "id"

    @classmethod
    def find_many(cls, keys: Iterable[Any]) -> list[Post]:
        wanted = {int(k) for k in keys}
        return [row for key, row in cls.table.items() if key in wanted]

    def get_key(self) -> int:
        return self.id

    def to_searchable_dict(self) -> dict[str, Any]:
        return {"title": self.title, "body": self.body, "status": self.status}


@dataclass
class Comment:
    """Searchable row that supports logical deletion."""

    id: int
    text: str
    deleted: bool = False

    table: ClassVar[dict[int, Comment]] = {}

    @classmethod
    def searchable_as(cls) -> str:
        return "comments"

    @classmethod
    def get_key_name(cls) -> str:
        return "id"

    @classmethod
    def find_many(cls, keys: Iterable[Any]) -> list[Comment]:
        wanted = {int(k) for k in keys}
        return [row for key, row in cls.table.items() if key in wanted]

    def get_key(self) -> int:
        return self.id

    def to_searchable_dict(self) -> dict[str, Any]:
        return {"text": self.text}

    def is_trashed(self) -> bool:
        return self.deleted


def make_response(ids: list[Any], total: int | None = None) -> dict[str, Any]:
    """Build a search response with one hit per id."""
    return {
        "took": 1,
        "hits": {
            "total": {"value": len(ids) if total is None else total, "relation": "eq"},
            "hits": [{"_index": "posts", "_id": str(i), "_score": 1.0, "_source": {}} for i in ids],
        },
    }


# ── In-memory backend ─────────────────────────────────────────────────────────


@dataclass
class _FakeIndices:
    store: dict[str, dict[str, dict[str, Any]]]
    bodies: dict[str, dict[str, Any]] = field(default_factory=dict)

    def exists(self, index: str) -> bool:
        return index in self.store

    def create(self, index: str, **body: Any) -> dict[str, Any]:
        self.store[index] = {}
        self.bodies[index] = body
        return {"acknowledged": True, "index": index}

    def delete(self, index: str, ignore_unavailable: bool = False) -> dict[str, Any]:
        self.store.pop(index, None)
        return {"acknowledged": True}


class InMemoryElasticsearch:
    """Tiny stand-in for the client with substring wildcard and term semantics."""

    def __init__(self) -> None:
        self.store: dict[str, dict[str, dict[str, Any]]] = {}
        self.indices = _FakeIndices(self.store)

    def index(self, index: str, id: Any, document: dict[str, Any]) -> dict[str, Any]:
        self.store[index][str(id)] = dict(document)
        return {"_id": str(id), "result": "created"}

    def delete(self, index: str, id: Any) -> dict[str, Any]:
        del self.store[index][str(id)]
        return {"_id": str(id), "result": "deleted"}

    def search(self, index: str, query: dict[str, Any], size: int = 10, from_: int = 0) -> dict[str, Any]:
        matched = [doc_id for doc_id, doc in self.store[index].items() if self._matches(query["bool"], doc)]
        page = matched[from_ : from_ + size]
        return {
            "hits": {
                "total": {"value": len(matched), "relation": "eq"},
                "hits": [{"_index": index, "_id": doc_id, "_source": self.store[index][doc_id]} for doc_id in page],
            }
        }

    @staticmethod
    def _matches(clause: dict[str, Any], doc: dict[str, Any]) -> bool:
        for term in clause.get("filter", []):
            ((name, value),) = term["term"].items()
            if doc.get(name) != value:
                return False
        should = clause.get("should", [])
        if not should:
            return True
        for wildcard in should:
            ((name, pattern),) = wildcard["wildcard"].items()
            if pattern.strip("*") in str(doc.get(name, "")):
                return True
        return False
