"""JSON file persistence for the custom word set."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable, List, Union

from ..core.dictionary import CustomWordSet
from ..core.exceptions import DictionaryError

logger = logging.getLogger(__name__)


class CustomWordStore:
    """
    Loads and saves custom words as a JSON list.

    The file is rewritten atomically through a temporary file in the same
    directory, so a crash mid-save leaves the previous list intact. A missing
    file reads as an empty list.

    Examples:
        >>> store = CustomWordStore("~/.config/proofmark/words.json")
        >>> words = store.load()
        >>> words.add("Kevin")
        >>> store.save(words)
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    def load(self) -> CustomWordSet:
        """Read the stored words.

        Raises:
            DictionaryError: If the file exists but is not a JSON list of strings
        """
        if not self.path.exists():
            return CustomWordSet()

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise DictionaryError(
                f"Failed to read custom words from {self.path}: {e}", store_path=str(self.path)
            ) from e

        if not isinstance(data, list) or not all(isinstance(word, str) for word in data):
            raise DictionaryError(
                f"Custom word file {self.path} must contain a JSON list of strings",
                store_path=str(self.path),
            )

        words = CustomWordSet(word for word in data if word.strip())
        logger.debug(f"Loaded {len(words)} custom words from {self.path}")
        return words

    def save(self, words: Iterable[str]) -> None:
        """Replace the stored list with ``words``, keeping their order."""
        content = json.dumps(list(words), indent=2, ensure_ascii=False).encode("utf-8")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._write_file_atomic(content)
        logger.debug(f"Saved custom words to {self.path}")

    def add(self, word: str) -> bool:
        """Add one word to the stored list; returns whether it was new."""
        words = self.load()
        added = words.add(word)
        if added:
            self.save(words)
        return added

    def list_words(self) -> List[str]:
        return self.load().words

    def _write_file_atomic(self, content: bytes) -> None:
        """Write file atomically using temporary file."""
        with tempfile.NamedTemporaryFile(
            mode="wb",
            dir=self.path.parent,
            delete=False,
            prefix=f".{self.path.name}.tmp",
        ) as tmp_file:
            tmp_file.write(content)
            tmp_file.flush()
            os.fsync(tmp_file.fileno())
            temp_path = Path(tmp_file.name)

        try:
            temp_path.replace(self.path)
        except OSError as e:
            if temp_path.exists():
                temp_path.unlink()
            raise DictionaryError(
                f"Failed to save custom words to {self.path}: {e}", store_path=str(self.path)
            ) from e
