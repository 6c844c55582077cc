from __future__ import annotations

import os
import uuid
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator, Literal

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, Field

from flutter_ui_designer.document_repository import LocalDocumentRepository
from flutter_ui_designer.generator import FlutterCodeGenerator, GenerationOptions
from flutter_ui_designer.logging_config import set_trace_id, set_workspace_id, setup_logging
from flutter_ui_designer.models.chat import ChatMessage
from flutter_ui_designer.models.document import Document, Screen
from flutter_ui_designer.models.element import DesignElement
from flutter_ui_designer.workspace import DesignerWorkspace
from flutter_ui_designer.workspace_store import WorkspaceStore


class GenerateCodeRequest(BaseModel):
    elements: list[DesignElement] | None = None
    document: Document | None = None
    options: GenerationOptions = Field(default_factory=GenerationOptions)


class GenerateCodeResponse(BaseModel):
    code: str


class CreateWorkspaceRequest(BaseModel):
    document_id: str | None = None
    document: Document | None = Field(default=None, description="Optional inline document payload")


class AddElementRequest(BaseModel):
    type: str
    x: float = 0.0
    y: float = 0.0
    screen_id: str | None = None


class UpdateElementRequest(BaseModel):
    x: float | None = None
    y: float | None = None
    width: float | None = None
    height: float | None = None
    properties: dict[str, Any] | None = None


class ScreenRequest(BaseModel):
    name: str


class ChatRequest(BaseModel):
    text: str = Field(min_length=1)


class HistoryResponse(BaseModel):
    cursor: int
    length: int
    can_undo: bool
    can_redo: bool


class WorkspaceResponse(BaseModel):
    id: str
    document: Document
    history: HistoryResponse

    @staticmethod
    def from_workspace(workspace_id: str, workspace: DesignerWorkspace) -> "WorkspaceResponse":
        state = workspace.history_state()
        return WorkspaceResponse(
            id=workspace_id,
            document=workspace.document(),
            history=HistoryResponse(
                cursor=state.cursor,
                length=state.length,
                can_undo=state.can_undo,
                can_redo=state.can_redo,
            ),
        )


# Environment configuration
ENVIRONMENT = os.getenv("ENVIRONMENT", "dev")
PROJECT_ID = os.getenv("PROJECT_ID")
DOCUMENTS_PATH = os.getenv("DOCUMENTS_PATH", "data/documents")
CHAT_REPLY_DELAY_SECONDS = float(os.getenv("CHAT_REPLY_DELAY_SECONDS", "1.0"))

# Setup logging
setup_logging(environment=ENVIRONMENT, project_id=PROJECT_ID)

workspace_store = WorkspaceStore(reply_delay=CHAT_REPLY_DELAY_SECONDS)
code_generator = FlutterCodeGenerator()
repository = LocalDocumentRepository(base_path=Path(DOCUMENTS_PATH).resolve())


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    yield
    workspace_store.close_all()


app = FastAPI(title="Flutter UI Designer API", version="0.1.0", lifespan=lifespan)


@app.middleware("http")
async def trace_requests(request: Request, call_next):
    set_trace_id(request.headers.get("x-cloud-trace-context", str(uuid.uuid4())))
    return await call_next(request)


def _workspace(workspace_id: str) -> DesignerWorkspace:
    workspace = workspace_store.get_workspace(workspace_id)
    if workspace is None:
        raise HTTPException(status_code=404, detail="Workspace not found")
    set_workspace_id(workspace_id)
    return workspace


def _workspace_response(workspace_id: str, workspace: DesignerWorkspace) -> WorkspaceResponse:
    return WorkspaceResponse.from_workspace(workspace_id, workspace)


@app.post("/v1/code:generate", response_model=GenerateCodeResponse)
def generate_code(request: GenerateCodeRequest) -> GenerateCodeResponse:
    if request.document is not None:
        code = code_generator.generate(request.document, request.options)
    else:
        code = code_generator.generate(request.elements or [], request.options)
    return GenerateCodeResponse(code=code)


@app.post("/v1/workspaces", response_model=WorkspaceResponse, status_code=201)
def create_workspace(request: CreateWorkspaceRequest) -> WorkspaceResponse:
    document = request.document
    if document is None and request.document_id:
        try:
            document = repository.get(request.document_id)
        except FileNotFoundError as exc:
            raise HTTPException(status_code=404, detail="Document not found") from exc
    workspace_id, workspace = workspace_store.create_workspace(document=document)
    return _workspace_response(workspace_id, workspace)


@app.get("/v1/workspaces/{workspace_id}", response_model=WorkspaceResponse)
def get_workspace(workspace_id: str) -> WorkspaceResponse:
    return _workspace_response(workspace_id, _workspace(workspace_id))


@app.delete("/v1/workspaces/{workspace_id}", status_code=204)
async def delete_workspace(workspace_id: str) -> None:
    if not workspace_store.delete_workspace(workspace_id):
        raise HTTPException(status_code=404, detail="Workspace not found")


@app.post("/v1/workspaces/{workspace_id}/elements", response_model=DesignElement, status_code=201)
def add_element(workspace_id: str, request: AddElementRequest) -> DesignElement:
    element = _workspace(workspace_id).add_element(request.type, request.x, request.y, screen_id=request.screen_id)
    if element is None:
        raise HTTPException(status_code=404, detail="Screen not found")
    return element


@app.patch("/v1/workspaces/{workspace_id}/elements/{element_id}", response_model=DesignElement)
def update_element(workspace_id: str, element_id: str, request: UpdateElementRequest) -> DesignElement:
    element = _workspace(workspace_id).update_element(element_id, request.model_dump(exclude_none=True))
    if element is None:
        raise HTTPException(status_code=404, detail="Element not found")
    return element


@app.delete("/v1/workspaces/{workspace_id}/elements/{element_id}", status_code=204)
def remove_element(workspace_id: str, element_id: str) -> None:
    if not _workspace(workspace_id).remove_element(element_id):
        raise HTTPException(status_code=404, detail="Element not found")


@app.post("/v1/workspaces/{workspace_id}/clear", response_model=WorkspaceResponse)
def clear_canvas(workspace_id: str) -> WorkspaceResponse:
    workspace = _workspace(workspace_id)
    workspace.clear_canvas()
    return _workspace_response(workspace_id, workspace)


@app.post("/v1/workspaces/{workspace_id}/undo", response_model=WorkspaceResponse)
def undo(workspace_id: str) -> WorkspaceResponse:
    workspace = _workspace(workspace_id)
    workspace.undo()
    return _workspace_response(workspace_id, workspace)


@app.post("/v1/workspaces/{workspace_id}/redo", response_model=WorkspaceResponse)
def redo(workspace_id: str) -> WorkspaceResponse:
    workspace = _workspace(workspace_id)
    workspace.redo()
    return _workspace_response(workspace_id, workspace)


@app.post("/v1/workspaces/{workspace_id}/screens", response_model=Screen, status_code=201)
def add_screen(workspace_id: str, request: ScreenRequest) -> Screen:
    return _workspace(workspace_id).add_screen(request.name)


@app.patch("/v1/workspaces/{workspace_id}/screens/{screen_id}", response_model=WorkspaceResponse)
def rename_screen(workspace_id: str, screen_id: str, request: ScreenRequest) -> WorkspaceResponse:
    workspace = _workspace(workspace_id)
    if not workspace.rename_screen(screen_id, request.name):
        raise HTTPException(status_code=404, detail="Screen not found")
    return _workspace_response(workspace_id, workspace)


@app.delete("/v1/workspaces/{workspace_id}/screens/{screen_id}", response_model=WorkspaceResponse)
def delete_screen(workspace_id: str, screen_id: str) -> WorkspaceResponse:
    workspace = _workspace(workspace_id)
    if workspace.document().find_screen(screen_id) is None:
        raise HTTPException(status_code=404, detail="Screen not found")
    if not workspace.delete_screen(screen_id):
        raise HTTPException(status_code=409, detail="Cannot delete the last screen")
    return _workspace_response(workspace_id, workspace)


@app.post("/v1/workspaces/{workspace_id}/screens/{screen_id}/select", response_model=WorkspaceResponse)
def select_screen(workspace_id: str, screen_id: str) -> WorkspaceResponse:
    workspace = _workspace(workspace_id)
    if not workspace.select_screen(screen_id):
        raise HTTPException(status_code=404, detail="Screen not found")
    return _workspace_response(workspace_id, workspace)


@app.get("/v1/workspaces/{workspace_id}/code", response_class=PlainTextResponse)
def workspace_code(
    workspace_id: str,
    dark_mode: bool = False,
    scope: Literal["screen", "document"] = "screen",
) -> str:
    workspace = _workspace(workspace_id)
    return workspace.generate_code(
        GenerationOptions(dark_mode=dark_mode),
        whole_document=scope == "document",
    )


@app.get("/v1/workspaces/{workspace_id}/chat", response_model=list[ChatMessage])
def list_chat_messages(workspace_id: str) -> list[ChatMessage]:
    return _workspace(workspace_id).chat.messages()


@app.post("/v1/workspaces/{workspace_id}/chat", response_model=ChatMessage, status_code=201)
async def send_chat_message(workspace_id: str, request: ChatRequest) -> ChatMessage:
    # Async so the delayed reply is scheduled on the server's event loop
    message = _workspace(workspace_id).send_chat_message(request.text)
    if message is None:
        raise HTTPException(status_code=409, detail="Chat session is closed")
    return message


@app.get("/health")
async def healthcheck() -> JSONResponse:
    return JSONResponse({"status": "ok"})
