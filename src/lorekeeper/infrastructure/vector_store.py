"""Write-only vector store sink for stored summaries."""

import asyncio
import logging
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class VectorSink(Protocol):
    """Accepts documents for indexing; nothing is ever read back."""

    async def add(
        self,
        ids: list[str],
        documents: list[str],
        metadatas: list[dict[str, Any]],
    ) -> None: ...


class ChromaVectorSink:
    """Pushes documents into a ChromaDB collection over HTTP."""

    def __init__(self, host: str, port: int, collection_name: str) -> None:
        """Initialize the sink. The connection is opened on first use."""
        self.host = host
        self.port = port
        self.collection_name = collection_name
        self._collection = None

    def _get_collection(self):
        """Get or create the Chroma collection."""
        if self._collection is None:
            import chromadb

            client = chromadb.HttpClient(host=self.host, port=self.port)
            self._collection = client.get_or_create_collection(name=self.collection_name)
            logger.info(
                f"Connected to Chroma collection '{self.collection_name}' "
                f"at {self.host}:{self.port}"
            )
        return self._collection

    def _add_sync(
        self,
        ids: list[str],
        documents: list[str],
        metadatas: list[dict[str, Any]],
    ) -> None:
        self._get_collection().add(ids=ids, documents=documents, metadatas=metadatas)

    async def add(
        self,
        ids: list[str],
        documents: list[str],
        metadatas: list[dict[str, Any]],
    ) -> None:
        """Add documents without blocking the event loop."""
        await asyncio.to_thread(self._add_sync, ids, documents, metadatas)
