from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from activity import router as activity_router
from agency import router as agency_router
from amenities import router as amenities_router
from auth import router as auth_router
from building_styles import router as building_styles_router
from cities import router as cities_router
from cities_data import router as cities_data_router
from column_actions import router as column_actions_router
from comments import router as comments_router
from company import router as company_router
from core import config, db, uploads
from core.errors import register_exception_handlers
from core.logging_setup import configure_logging
from files import router as files_router
from notices import router as notices_router
from settings import router as settings_router
from settings.maintenance import MaintenanceMiddleware
from tasks import router as tasks_router

configure_logging()


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Initialize the DB pool once per process. Schema changes are applied
    # separately with `python -m manage migrate`.
    await db.init_pool()
    try:
        yield
    finally:
        await db.close_pool()


app = FastAPI(title="realty-admin-api", lifespan=lifespan)

API_PREFIX = config.api_prefix()

app.add_middleware(MaintenanceMiddleware, api_prefix=API_PREFIX)
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(auth_router.router, prefix=f"{API_PREFIX}/auth", tags=["auth"])
app.include_router(agency_router.router, prefix=f"{API_PREFIX}/agency", tags=["agency"])
app.include_router(company_router.router, prefix=f"{API_PREFIX}/company", tags=["company"])
app.include_router(cities_router.router, prefix=f"{API_PREFIX}/cities", tags=["cities"])
app.include_router(cities_data_router.router, prefix=f"{API_PREFIX}/cities-data", tags=["cities-data"])
app.include_router(building_styles_router.router, prefix=f"{API_PREFIX}/building-styles", tags=["building-styles"])
app.include_router(amenities_router.router, prefix=f"{API_PREFIX}/commercial-amenities", tags=["commercial-amenities"])
app.include_router(column_actions_router.router, prefix=f"{API_PREFIX}/column-actions", tags=["column-actions"])
app.include_router(notices_router.router, prefix=f"{API_PREFIX}/notices", tags=["notices"])
app.include_router(tasks_router.router, prefix=f"{API_PREFIX}/tasks", tags=["tasks"])
app.include_router(comments_router.router, prefix=f"{API_PREFIX}/comments", tags=["comments"])
app.include_router(settings_router.router, prefix=f"{API_PREFIX}/admin/settings", tags=["settings"])
app.include_router(activity_router.router, prefix=f"{API_PREFIX}/recent-activity", tags=["activity"])
app.include_router(files_router.router, prefix=f"{API_PREFIX}/uploads", tags=["uploads"])

app.mount("/uploads", StaticFiles(directory=uploads.uploads_root(), check_dir=False), name="uploads")


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": "realty-admin-api"}
