"""
JSON file-based adapter implementing DatabaseInterface.
Same semantics as the in-memory store, but every write is persisted to
documents.json so processed pages survive restarts.
"""
import json
import asyncio
from pathlib import Path
from typing import List, Optional
from threading import Lock

from pydantic import ValidationError

from .memory_adapter import MemoryAdapter
from ...models.document import NewspaperDocument
from ...core.logging_config import get_logger

logger = get_logger(__name__)


class JSONAdapter(MemoryAdapter):
    """
    JSON file-based document store.
    Documents are held in memory and written out as an ordered JSON array.
    """

    def __init__(self, data_dir: Optional[Path] = None):
        """
        Initialize JSON adapter.

        Args:
            data_dir: Directory to store JSON files (defaults to backend/data/json_db)
        """
        super().__init__()
        if data_dir is None:
            base_dir = Path(__file__).resolve().parent.parent.parent.parent
            data_dir = base_dir / "data" / "json_db"

        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.documents_file = self.data_dir / "documents.json"

        # Guards the file itself; writes happen in the executor
        self._file_lock = Lock()

    async def initialize(self):
        """Initialize store - load data from the JSON file."""
        async with self._lock:
            self._documents.clear()
            for doc in self._load_data():
                self._documents[doc.id] = doc
        logger.info(f"Loaded {len(self._documents)} documents from {self.documents_file}")

    async def close(self):
        """Close store - flush data to the JSON file."""
        async with self._lock:
            await self._save_data()

    def _load_data(self) -> List[NewspaperDocument]:
        if not self.documents_file.exists():
            return []
        try:
            with open(self.documents_file, 'r', encoding='utf-8') as f:
                raw = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not load {self.documents_file}: {e}")
            return []

        documents = []
        for item in raw if isinstance(raw, list) else []:
            try:
                documents.append(NewspaperDocument.model_validate(item))
            except ValidationError as e:
                logger.warning(f"Skipping unreadable document record: {e}")
        return documents

    async def _save_data(self):
        """Save data from memory to the JSON file."""
        # Snapshot on the event loop; only the file write leaves it
        payload = [doc.to_response() for doc in self._documents.values()]

        def _save():
            with self._file_lock:
                tmp_file = self.documents_file.with_suffix(".json.tmp")
                with open(tmp_file, 'w', encoding='utf-8') as f:
                    json.dump(payload, f, indent=2, ensure_ascii=False)
                tmp_file.replace(self.documents_file)

        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, _save)

    async def _after_write(self):
        await self._save_data()
