# backend/app/main.py
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from typing import Optional
import os
import time
import logging

from .api.v1 import auth, backup, banners, brands, faqs, partners, site_settings, vehicle_items, vehicles
from .core.config import settings
from .storage.errors import CorruptStorageError, DuplicateKeyError, InvalidQueryError
from .storage.store import LOCAL, TABLE_FILES, DataStore, build_local_store, build_store

# Setup Logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

origins = [
    "http://localhost",
    "http://localhost:3000",
    "http://localhost:8000",
]


def check_store(store: DataStore) -> str:
    """'connected' or an error string for the health endpoint"""
    try:
        if store.mode == LOCAL:
            present = [name for name in TABLE_FILES.values() if os.path.exists(os.path.join(store.location, name))]
            # Reading one table proves the files parse
            store.brands.count()
            return f"connected ({len(present)}/{len(TABLE_FILES)} table files)"

        from sqlalchemy import text
        from .core.database import SessionLocal
        db = SessionLocal()
        try:
            db.execute(text("SELECT 1"))
        finally:
            db.close()
        return "connected"
    except Exception as e:
        logger.error(f"Storage health check failed: {e}")
        return f"error: {str(e)}"


def check_redis() -> str:
    try:
        import redis
        redis_client = redis.Redis.from_url(settings.REDIS_URL, socket_connect_timeout=1)
        redis_client.ping()
        return "connected"
    except Exception as e:
        logger.error(f"Redis health check failed: {e}")
        return f"error: {str(e)}"


def register_routers(app: FastAPI) -> None:
    logger.info("Registering API routers...")

    app.include_router(auth.router, prefix="/api/v1/auth", tags=["🔐 Auth"])

    app.include_router(brands.router, prefix="/api/v1/brands", tags=["🏷️ Brands"])
    app.include_router(vehicles.router, prefix="/api/v1/vehicles", tags=["🚗 Vehicles"])
    app.include_router(faqs.router, prefix="/api/v1/faqs", tags=["❓ FAQ"])
    app.include_router(banners.router, prefix="/api/v1/banners", tags=["🖼️ Banners"])
    app.include_router(partners.router, prefix="/api/v1/partners", tags=["🤝 Partners"])
    app.include_router(site_settings.router, prefix="/api/v1/site", tags=["⚙️ Site"])

    app.include_router(brands.admin_router, prefix="/api/v1/admin/brands", tags=["🛠️ Admin"])
    app.include_router(vehicles.admin_router, prefix="/api/v1/admin/vehicles", tags=["🛠️ Admin"])
    item_routers = (
        vehicle_items.trims_router,
        vehicle_items.colors_router,
        vehicle_items.options_router,
        vehicle_items.import_router,
    )
    for item_router in item_routers:
        app.include_router(item_router, prefix="/api/v1/admin/vehicles", tags=["🛠️ Admin"])
    app.include_router(faqs.admin_router, prefix="/api/v1/admin/faqs", tags=["🛠️ Admin"])
    app.include_router(banners.admin_router, prefix="/api/v1/admin/banners", tags=["🛠️ Admin"])
    app.include_router(partners.admin_router, prefix="/api/v1/admin/partners", tags=["🛠️ Admin"])
    app.include_router(site_settings.admin_router, prefix="/api/v1/admin/site", tags=["🛠️ Admin"])
    app.include_router(backup.router, prefix="/api/v1/admin/backup", tags=["💾 Backup"])

    logger.info("✅ All routers registered successfully")


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(CorruptStorageError)
    async def corrupt_storage_handler(request: Request, exc: CorruptStorageError):
        logger.error(f"Corrupt data file: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "Corrupt Data", "message": str(exc), "request_path": request.url.path},
        )

    @app.exception_handler(InvalidQueryError)
    async def invalid_query_handler(request: Request, exc: InvalidQueryError):
        return JSONResponse(status_code=400, content={"error": "Invalid Query", "message": str(exc)})

    @app.exception_handler(DuplicateKeyError)
    async def duplicate_key_handler(request: Request, exc: DuplicateKeyError):
        return JSONResponse(status_code=409, content={"error": "Duplicate", "message": str(exc)})


def create_app(store: Optional[DataStore] = None, fallback_store: Optional[DataStore] = None) -> FastAPI:
    app = FastAPI(
        title="Rent Car Catalog API",
        description="Vehicle catalog for long-term rental, backed by JSON files or a relational database",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc"
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # The storage strategy is chosen once; routes only see the DataStore
    app.state.store = store or build_store(settings)
    if fallback_store is None and app.state.store.mode != LOCAL:
        fallback_store = build_local_store(settings.DATA_DIR)
    app.state.fallback_store = fallback_store
    logger.info(f"Storage mode: {app.state.store.mode} ({app.state.store.location})")

    register_routers(app)
    register_error_handlers(app)

    @app.get("/", tags=["System"])
    def read_root():
        return {
            "message": "🚗 Rent Car Catalog API",
            "version": "1.0.0",
            "storage": app.state.store.mode,
            "documentation": "/docs",
            "health_check": "/health",
        }

    @app.get("/health", tags=["System"])
    def health_check():
        storage_status = check_store(app.state.store)
        return {
            "status": "healthy" if storage_status.startswith("connected") else "degraded",
            "service": "Rent Car Catalog",
            "timestamp": time.time(),
            "components": {
                "storage": storage_status,
                "storage_mode": app.state.store.mode,
                "redis": check_redis(),
            },
        }

    @app.on_event("startup")
    async def startup_event():
        print("\n" + "="*80)
        print("🚗 RENT CAR CATALOG STARTING...")
        print("="*80)
        print("\n📋 API Endpoints:")

        routes_by_tag = {}
        for route in app.routes:
            if hasattr(route, "methods") and hasattr(route, "tags"):
                tags = route.tags if route.tags else ["Untagged"]
                for tag in tags:
                    methods = ", ".join(sorted(route.methods))
                    routes_by_tag.setdefault(tag, []).append(f"   {methods:8} {route.path}")

        for tag, routes in sorted(routes_by_tag.items()):
            print(f"\n{tag}:")
            for route in routes:
                print(route)

        print("\n" + "="*80)
        print(f"✅ BACKEND IS READY! Storage: {app.state.store.mode}")
        print("📚 API Documentation: http://localhost:8000/docs")
        print("💚 Health Check: http://localhost:8000/health")
        print("="*80 + "\n")

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all incoming requests"""
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time

        logger.info(
            f"{request.method} {request.url.path} "
            f"- Status: {response.status_code} "
            f"- Time: {process_time:.3f}s"
        )
        return response

    return app


app = create_app()
