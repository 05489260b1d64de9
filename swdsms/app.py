import logging
import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from swdsms.core.config import get_settings
from swdsms.core.logging import setup_logging
from swdsms.repositories.errors import RemoteStoreError
from swdsms.routers import auth as auth_router
from swdsms.routers import reports as reports_router
from swdsms.services.account_service import AccountService
from swdsms.services.failover import FailoverRouter
from swdsms.services.report_service import ReportService

logger = logging.getLogger(__name__)


def create_app(storage_router: FailoverRouter | None = None) -> FastAPI:
    """Build the API app; uvicorn calls this as a factory."""
    settings = get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(title="SWDSMS API")

    storage = storage_router or FailoverRouter.from_settings(settings)
    app.state.storage_router = storage
    app.state.account_service = AccountService(storage)
    app.state.report_service = ReportService(storage)

    @app.exception_handler(RemoteStoreError)
    async def remote_store_error(request: Request, exc: RemoteStoreError):
        logger.error("Remote backend call failed on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse({"error": "Server error"}, status_code=500)

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError):
        fields = sorted({".".join(str(p) for p in err.get("loc", ())[1:]) for err in exc.errors()} - {""})
        message = f"Invalid fields: {', '.join(fields)}" if fields else "Invalid request body"
        return JSONResponse({"error": message}, status_code=400)

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse({"error": "Server error"}, status_code=500)

    @app.get("/api/health")
    def health():
        return {"ok": True, "backend": storage.backend_name}

    app.include_router(auth_router.router)
    app.include_router(reports_router.router)

    # Mounted last so /api routes win over static paths.
    if os.path.isdir(settings.static_dir):
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")

    return app
