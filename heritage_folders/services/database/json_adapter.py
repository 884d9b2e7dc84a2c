"""
JSON file-based adapter implementing DatabaseInterface.
Perfect for local demos - stores all folder records in a JSON file.
Data persists between restarts, no database setup needed.
"""
import asyncio
import json
from pathlib import Path
from typing import Dict, List, Optional

from .memory_adapter import MemoryAdapter
from ...core.config import BASE_DIR
from ...core.logging_config import get_logger

logger = get_logger(__name__)


class JSONAdapter(MemoryAdapter):
    """
    JSON file-based database adapter.

    Serves reads from memory and rewrites ``folders.json`` on every commit.
    A commit becomes visible to readers only after its file write succeeded,
    and commits reach the file in the order they were made.
    """

    def __init__(self, data_dir: Optional[Path] = None):
        """
        Initialize JSON adapter.

        Args:
            data_dir: Directory to store JSON files (defaults to <project>/data/json_db)
        """
        super().__init__()
        if data_dir is None:
            data_dir = BASE_DIR / "data" / "json_db"

        self.data_dir = Path(data_dir)
        self.folders_file = self.data_dir / "folders.json"

        # Orders snapshot-and-write across every commit, whatever the site
        self._write_lock = asyncio.Lock()

    async def initialize(self):
        """Initialize database - load data from the JSON file."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self._load_data()

    async def close(self):
        """Close database - save data to the JSON file."""
        async with self._write_lock:
            await self._save_data(self._folders)

    def _load_data(self):
        """Load folder records into memory and rebuild indexes."""
        self._folders.clear()
        self._site_index.clear()

        if not self.folders_file.exists():
            return

        try:
            with open(self.folders_file, 'r', encoding='utf-8') as f:
                records: Dict[str, Dict] = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.warning(f"Could not load {self.folders_file}: {e}")
            return

        self._apply(list(records.values()), [])
        logger.info(f"Loaded {len(self._folders)} folders from {self.folders_file}")

    def _write_file(self, snapshot: str):
        tmp_file = self.folders_file.with_suffix(".json.tmp")
        with open(tmp_file, 'w', encoding='utf-8') as f:
            f.write(snapshot)
        tmp_file.replace(self.folders_file)

    async def _save_data(self, folders: Dict[str, Dict]):
        """Save folder records to the JSON file."""
        snapshot = json.dumps(folders, indent=2, ensure_ascii=False)

        # Run in executor to avoid blocking
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._write_file, snapshot)

    async def _commit(self, upserts: List[Dict], deletes: List[str]) -> None:
        async with self._write_lock:
            folders = dict(self._folders)
            site_index = {site_id: list(ids) for site_id, ids in self._site_index.items()}
            self._apply_to(folders, site_index, upserts, deletes)

            await self._save_data(folders)

            # Readers only see the new state once it is on disk
            self._folders = folders
            self._site_index = site_index

    async def commit(self, upserts: List[Dict], deletes: List[str]) -> None:
        # A cancelled request must not leave the file half-written
        await asyncio.shield(self._commit(upserts, deletes))
