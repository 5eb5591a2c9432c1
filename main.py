"""
Sankofa backend: public storefront API and backoffice for property sales
and land-development projects.

Run locally with `python main.py` or `uvicorn main:app --reload`.
"""
import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from config import DEFAULT_JWT_SECRET, Settings
from database import build_engine, build_session_factory, init_db
from errors import register_error_handlers
from routers import (
    admin,
    auth,
    clients,
    content,
    deals,
    invoices,
    leads,
    payments,
    projects,
    properties,
    services,
    uploads,
    users,
)
from services.storage_service import UploadStorage

logger = logging.getLogger(__name__)


def create_app(settings: Settings = None) -> FastAPI:
    settings = settings or Settings.from_env()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if settings.jwt_secret == DEFAULT_JWT_SECRET:
        logger.warning("JWT_SECRET is not set, signing tokens with the development secret")

    engine = build_engine(settings.database_url, echo=settings.sql_echo)
    init_db(engine)

    app = FastAPI(title="Sankofa API")
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.storage = UploadStorage.from_settings(settings)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins or ["*"],
        allow_credentials=bool(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Uploaded files are embedded by other origins
    @app.middleware("http")
    async def upload_headers_middleware(request: Request, call_next):
        response = await call_next(request)
        if request.url.path.startswith("/uploads"):
            response.headers["Access-Control-Allow-Origin"] = "*"
            response.headers["Cross-Origin-Resource-Policy"] = "cross-origin"
        return response

    # Mount static uploads
    app.mount("/uploads", StaticFiles(directory=settings.upload_dir), name="uploads")

    register_error_handlers(app)

    # Storefront
    app.include_router(auth.router)
    app.include_router(properties.router)
    app.include_router(projects.router)
    app.include_router(services.router)
    app.include_router(leads.router)
    app.include_router(content.page_router)
    app.include_router(content.company_router)
    app.include_router(uploads.router)

    # Backoffice
    app.include_router(properties.admin_router)
    app.include_router(projects.admin_router)
    app.include_router(services.admin_router)
    app.include_router(leads.admin_router)
    app.include_router(content.admin_company_router)
    app.include_router(clients.router)
    app.include_router(deals.router)
    app.include_router(invoices.router)
    app.include_router(payments.router)
    app.include_router(users.router)
    app.include_router(admin.router)

    @app.get("/api/health", tags=["health"])
    def health():
        return {"ok": True}

    logger.info("Sankofa API ready (database: %s)", engine.url.render_as_string(hide_password=True))
    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=app.state.settings.port, reload=True)
