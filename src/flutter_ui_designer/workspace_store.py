from __future__ import annotations

import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Dict

from .chat import REPLY_DELAY_SECONDS
from .models.document import Document
from .workspace import DesignerWorkspace

logger = logging.getLogger(__name__)


class WorkspaceStore:
    def __init__(self, *, reply_delay: float = REPLY_DELAY_SECONDS) -> None:
        self._workspaces: Dict[str, DesignerWorkspace] = {}
        self._lock = threading.Lock()
        self._reply_delay = reply_delay

    def create_workspace(self, *, document: Document | None = None) -> tuple[str, DesignerWorkspace]:
        with self._lock:
            workspace_id = self._generate_id()
            workspace = DesignerWorkspace(document, reply_delay=self._reply_delay)
            self._workspaces[workspace_id] = workspace
            logger.info("Created workspace", extra={"workspace_id": workspace_id})
            return workspace_id, workspace

    def get_workspace(self, workspace_id: str) -> DesignerWorkspace | None:
        with self._lock:
            return self._workspaces.get(workspace_id)

    def delete_workspace(self, workspace_id: str) -> bool:
        with self._lock:
            workspace = self._workspaces.pop(workspace_id, None)
        if workspace is None:
            return False
        workspace.close()
        logger.info("Closed workspace", extra={"workspace_id": workspace_id})
        return True

    def close_all(self) -> None:
        with self._lock:
            workspaces = list(self._workspaces.values())
            self._workspaces.clear()
        for workspace in workspaces:
            workspace.close()

    def __len__(self) -> int:
        with self._lock:
            return len(self._workspaces)

    def _generate_id(self) -> str:
        ts = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
        suffix = uuid.uuid4().hex[:6]
        return f"ws_{ts}_{suffix}"


__all__ = ["WorkspaceStore"]
