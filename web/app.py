"""
FastAPI application for the rent fairness engine.

Production deployment configuration via environment variables.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fairness import (
    ComputationError,
    FairnessEngineError,
    RentFairnessEvaluator,
    ValidationError,
    get_property_store,
)
from fairness.store import build_property_store
from fairness import __version__ as ENGINE_VERSION
from utils.config import Config
from web.schemas import RentalFairnessRequest


logger = logging.getLogger(__name__)


# Paths answered by the evaluation endpoint; the second matches the path
# used by existing browser clients of the hosted function
EVALUATE_PATHS = ("/api/rental-fairness", "/functions/v1/rental-fairness")


def _format_request_errors(exc: RequestValidationError) -> str:
    """Flatten pydantic errors into one field-level message."""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "Invalid value")
        messages.append(f"{location}: {message}" if location else message)
    return "Invalid request: " + "; ".join(messages)


def create_app(
    config: Optional[Config] = None,
    evaluator: Optional[RentFairnessEvaluator] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Application configuration (default: from environment)
        evaluator: Evaluation pipeline (default: built from config)
    """
    shared_store = config is None
    config = config or Config.load()

    app = FastAPI(
        title="Rent Fairness Engine",
        description="Scores how fairly a rental property is priced against its market",
        version=ENGINE_VERSION,
        debug=config.debug,
    )

    # Healthcheck endpoints: synchronous, no IO
    @app.get("/", include_in_schema=False)
    def root():
        """Root healthcheck. No dependencies, no IO."""
        return {"status": "ok"}

    @app.get("/health", include_in_schema=False)
    def health():
        """Secondary health endpoint. No dependencies, no IO."""
        return {"status": "healthy"}

    # CORS middleware - browser callers; preflight answered for allowed origins
    allow_all = "*" in config.allowed_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else config.allowed_origins,
        allow_credentials=not allow_all,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if evaluator is None:
        # An explicit config gets its own store; the default app shares the singleton
        store = get_property_store(config) if shared_store else build_property_store(config)
        evaluator = RentFairnessEvaluator(
            store=store,
            comparable_limit=config.comparable_limit,
            store_timeout_seconds=config.store_timeout_seconds,
            currency=config.currency,
        )
    app.state.evaluator = evaluator

    # ==========================================================================
    # Error responses: {"error": "..."}
    # ==========================================================================

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": _format_request_errors(exc)})

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(ComputationError)
    async def computation_error_handler(request: Request, exc: ComputationError):
        logger.error("Rental fairness computation failed: %s", exc)
        return JSONResponse(status_code=500, content={"error": f"Server error: {exc}"})

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception("Error in rental fairness calculation")
        return JSONResponse(status_code=500, content={"error": f"Server error: {exc}"})

    # ==========================================================================
    # Evaluation
    # ==========================================================================

    async def evaluate_rental_fairness(payload: RentalFairnessRequest):
        """
        Evaluate how fairly a property is priced.

        Returns:
            fairnessScore, analysis, recommendations, fairPriceRange, summary
        """
        request = payload.to_domain()
        try:
            result = await evaluator.evaluate(request)
        except FairnessEngineError:
            raise
        except Exception as e:
            # Answered here so the response still passes through CORS
            logger.exception("Error in rental fairness calculation")
            return JSONResponse(status_code=500, content={"error": f"Server error: {e}"})
        return result.to_dict()

    for path in EVALUATE_PATHS:
        app.add_api_route(path, evaluate_rental_fairness, methods=["POST"])

    @app.get("/api/health")
    async def api_health():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": ENGINE_VERSION,
            "property_store": config.property_store,
            "environment": "development" if config.debug else "production",
        }

    return app


# Create app instance for uvicorn
app = create_app()
