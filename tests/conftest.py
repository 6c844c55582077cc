from __future__ import annotations

import os
from pathlib import Path

import pytest

DATA_DIR = Path(__file__).resolve().parent.parent / "data" / "documents"

# The API module reads its configuration at import time
os.environ.setdefault("ENVIRONMENT", "dev")
os.environ.setdefault("DOCUMENTS_PATH", str(DATA_DIR))
os.environ.setdefault("CHAT_REPLY_DELAY_SECONDS", "0.05")

from flutter_ui_designer.models.document import Document  # noqa: E402
from flutter_ui_designer.models.element import DesignElement  # noqa: E402


def load_document(name: str) -> Document:
    fixture_path = DATA_DIR / f"{name}.json"
    return Document.model_validate_json(fixture_path.read_text(encoding="utf-8"))


@pytest.fixture
def login_document() -> Document:
    return load_document("DOC-login-flow")


@pytest.fixture
def make_state():
    """Build a distinguishable one-element screen state."""

    def _make(marker: int) -> list[DesignElement]:
        return [DesignElement(id=f"element-{marker}", type="button", x=float(marker), y=0.0)]

    return _make
