from __future__ import annotations

import json
from pathlib import Path
from typing import Protocol

from .models.document import Document


class DocumentRepository(Protocol):
    def get(self, document_id: str) -> Document:
        ...


class LocalDocumentRepository:
    def __init__(self, *, base_path: Path) -> None:
        self._base_path = base_path

    def get(self, document_id: str) -> Document:
        file_path = self._base_path / f"{Path(document_id).name}.json"
        if not file_path.exists():
            raise FileNotFoundError(f"Design document not found: {file_path}")
        with file_path.open("r", encoding="utf-8") as fp:
            data = json.load(fp)
        return Document.model_validate(data)


__all__ = ["DocumentRepository", "LocalDocumentRepository"]
