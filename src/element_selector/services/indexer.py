"""Indexing step: expose the filtered text stored in a side-channel field."""

from __future__ import annotations

from ..domain.models import IndexDocument, ParsedDocument


class SelectorFieldIndexer:
    """Copies ``metadata[storage_field]`` into the index document.

    Without a storage field the filtered text already replaced the primary
    text, so there is nothing to copy.
    """

    def __init__(self, storage_field: str | None = None):
        self._storage_field = storage_field or None

    @property
    def storage_field(self) -> str | None:
        return self._storage_field

    def index(self, index_doc: IndexDocument, parsed: ParsedDocument) -> IndexDocument:
        if self._storage_field is None:
            return index_doc
        stripped = parsed.metadata.get(self._storage_field)
        if stripped is not None:
            index_doc.add(self._storage_field, stripped)
        return index_doc
