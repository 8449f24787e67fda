import logging
import time
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import Body, Depends, FastAPI, HTTPException, status

from ngfix.config import find_config_file, load_config
from ngfix.registry import CodeFixes
from codefixes import ALL_CODE_FIXES

from .auth import ClientContext, get_current_client
from .models import (
    CodeFixInfo, FixAllRequest, FixAllResponse, FixesAtPositionRequest,
    FixesAtPositionResponse,
)
from .services.codefix import CodeFixService, InvalidRequestError
from .settings import settings

SERVER_VERSION = "0.1.0"

logger = logging.getLogger(__name__)

_service: Optional[CodeFixService] = None


def _configure_logging() -> None:
    logging.basicConfig(
        level=settings.effective_log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_service() -> CodeFixService:
    """Load engine config and register every code fix."""
    config_path = settings.config_path or find_config_file()
    config = load_config(config_path)
    if config_path:
        logger.info("Loaded engine config from %s", config_path)
    code_fixes = CodeFixes(ALL_CODE_FIXES, config)
    return CodeFixService(code_fixes, config)


def get_service() -> CodeFixService:
    global _service
    if _service is None:
        _service = build_service()
    return _service


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application startup and shutdown."""
    _configure_logging()
    service = get_service()
    logger.info("[startup] Registered code fixes: %s", ", ".join(service.code_fixes.get_fix_ids()))
    yield


app = FastAPI(
    title="ng-codefix - Code Fix Service",
    lifespan=lifespan
)


@app.get("/health")
def health(service: CodeFixService = Depends(get_service)):
    """
    Health check endpoint - no authentication required.
    """
    return {
        "status": "ok",
        "version": SERVER_VERSION,
        "parser": "tree-sitter" if service.adapter.is_available() else "unavailable",
        "fix_ids": service.code_fixes.get_fix_ids(),
        "timestamp": int(time.time()),
        "auth_required": bool(settings.api_keys),
    }


@app.get("/codefixes", response_model=List[CodeFixInfo])
def list_code_fixes(
    client: ClientContext = Depends(get_current_client),
    service: CodeFixService = Depends(get_service),
):
    """List registered code fixes with their fix ids and error codes."""
    return service.list_fixes()


@app.post("/codefixes/fix-all", response_model=FixAllResponse)
def fix_all(
    req: FixAllRequest = Body(...),
    client: ClientContext = Depends(get_current_client),
    service: CodeFixService = Depends(get_service),
):
    """
    Apply one code fix across every diagnostic of its kind.

    Returns the text changes grouped by file; applying them is up to the caller.
    """
    if service.code_fixes.get_meta(req.fix_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown fix id '{req.fix_id}'")
    try:
        return service.fix_all(req)
    except InvalidRequestError as e:
        raise HTTPException(status_code=422, detail=str(e))


@app.post("/codefixes/at-position", response_model=FixesAtPositionResponse)
def fixes_at_position(
    req: FixesAtPositionRequest = Body(...),
    client: ClientContext = Depends(get_current_client),
    service: CodeFixService = Depends(get_service),
):
    """Single-diagnostic code actions for a position."""
    try:
        return service.fixes_at_position(req)
    except InvalidRequestError as e:
        raise HTTPException(status_code=422, detail=str(e))
