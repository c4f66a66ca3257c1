"""จุดเริ่มต้นของแอป FastAPI: ลงทะเบียน middleware, router และวงจรชีวิตของฐานข้อมูล"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from portal.config import Settings, settings as default_settings
from portal.database import Base, Database
import portal.models  # noqa: F401 - โหลดโมเดลเพื่อลงทะเบียน metadata
from portal.routers import admin_taxonomy, taxonomy
from portal.utils.schema_sync import sync_missing_schema_objects

logger = logging.getLogger(__name__)


def create_app(app_settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    app_settings = app_settings or default_settings
    logging.basicConfig(
        level=app_settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db = database or Database(app_settings.DATABASE_URL)
        app.state.database = db
        sync_missing_schema_objects(db.engine, Base.metadata)
        logger.info("database ready: %s", db.engine.url.render_as_string(hide_password=True))
        try:
            yield
        finally:
            db.close()
            logger.info("database connections closed")

    app = FastAPI(
        title="ระบบสารานุกรมอนุกรมวิธาน",
        description="ค้นหา ไฮไลต์ และแก้ไขรายการสารานุกรม taxon แบบมีเวอร์ชัน",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        debug=app_settings.DEBUG,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": jsonable_encoder(exc.errors())},
        )

    app.include_router(taxonomy.router)
    app.include_router(admin_taxonomy.router)

    @app.get("/api/health")
    def health_check():
        return {"status": "ok", "service": "taxonomy-portal"}

    return app


app = create_app()


def run(app_settings: Optional[Settings] = None):
    """เปิด API server ด้วย uvicorn ถ้า DEBUG จะรีโหลดเมื่อโค้ดเปลี่ยน"""
    app_settings = app_settings or default_settings
    uvicorn.run(
        "portal.main:app",
        host=app_settings.HOST,
        port=app_settings.PORT,
        reload=app_settings.DEBUG,
        log_level=app_settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
