from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from waste_intake.api.v1.router import router as v1_router
from waste_intake.core.config import get_settings
from waste_intake.core.errors import DomainError


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title="Waste Intake Normalizer API", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(DomainError)
    def domain_error_handler(_, exc: DomainError):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    app.include_router(v1_router, prefix="/v1")
    return app


def run() -> None:
    import uvicorn

    from waste_intake.core.logging_utils import configure_logging

    settings = get_settings()
    configure_logging(settings.log_level)

    uvicorn.run(
        "waste_intake.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.reload,
    )


app = create_app()

if __name__ == "__main__":  # pragma: no cover
    run()
