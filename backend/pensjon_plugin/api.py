from contextlib import asynccontextmanager
from typing import Optional
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from pensjon_plugin.config import Settings, load_settings, resolve_log_level
from pensjon_plugin.handler import get_metadata, handle_harvest
from pensjon_plugin.integrations.errors import AdapterError, Severity
from pensjon_plugin.integrations.norsk_pensjon_client import NorskPensjonClient, create_session
from pensjon_plugin.metadata import EVIDENCE_CODE_NAME, METADATA_FUNCTION_NAME
import logging

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

STATUS_BY_SEVERITY = {
    Severity.PERMANENT_CLIENT: 400,
    Severity.PERMANENT_SERVER: 502,
    Severity.TRANSIENT: 503,
}


def error_response(error: AdapterError) -> JSONResponse:
    logger.error(
        f"Harvest failed ({error.severity.value}, {error.code.name}): {error.detail}",
        exc_info=error.cause,
    )
    return JSONResponse(status_code=STATUS_BY_SEVERITY[error.severity], content=error.to_dict())


def get_client(request: Request) -> NorskPensjonClient:
    return request.app.state.client


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        resolved = settings or load_settings()
        logging.getLogger().setLevel(resolve_log_level(resolved.log_level))
        session = create_session()
        app.state.client = NorskPensjonClient(session, resolved.norsk_pensjon_url)
        try:
            yield
        finally:
            await session.close()

    app = FastAPI(
        title="Norsk Pensjon Evidence Plugin",
        description="Harvests pension evidence from Norsk Pensjon",
        version="1.0.0",
        lifespan=lifespan,
    )

    @app.get("/")
    def root():
        return {
            "message": "Norsk Pensjon Evidence Plugin",
            "version": "1.0.0",
            "endpoints": {
                "health": "/health",
                "harvest": f"/api/{EVIDENCE_CODE_NAME}",
                "metadata": f"/api/{METADATA_FUNCTION_NAME}",
            },
        }

    @app.get("/health")
    def health():
        return {"status": "healthy", "service": "Norsk Pensjon Evidence Plugin"}

    @app.post(f"/api/{EVIDENCE_CODE_NAME}")
    async def harvest(request: Request, client: NorskPensjonClient = Depends(get_client)):
        """
        Harvest the "default" evidence value for the subject in the request body.

        - **subjectParty.norwegianSocialSecurityNumber**: the subject's national identifier
        """
        logger.info(f"Running func '{EVIDENCE_CODE_NAME}'")
        result = await handle_harvest(await request.body(), client)
        if isinstance(result, AdapterError):
            return error_response(result)
        return [value.model_dump(mode="json") for value in result]

    @app.get(f"/api/{METADATA_FUNCTION_NAME}")
    def metadata():
        logger.info(f"Running func metadata for {METADATA_FUNCTION_NAME}")
        return [code.model_dump(mode="json") for code in get_metadata()]

    return app


app = create_app()
