import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from covercraft.core import config
from covercraft.core.logging_config import setup_logging

# ✅ Import All API Routes
from covercraft.api.routes import auth, system, dashboard, profile, cover_letters, functions

logger = logging.getLogger(__name__)


# ============================================
# ✅ STARTUP
# ============================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(config.LOG_LEVEL, config.LOG_DIR)

    if config.RUN_MIGRATIONS:
        from covercraft.db.migrate import run_migrations
        run_migrations()
    else:
        from covercraft.db.init_db import init_db
        init_db()

    if not config.OPENAI_API_KEY:
        logger.warning("OPENAI_API_KEY not configured - generation requests will fail")

    logger.info("CoverCraft API started")
    yield


# ============================================
# ✅ FASTAPI APP INIT
# ============================================

app = FastAPI(title="CoverCraft API", lifespan=lifespan)

# ✅ CORS: any origin, fixed header allow-list
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
)


# ============================================
# ✅ REGISTER ALL ROUTERS
# ============================================

app.include_router(system.router)
app.include_router(auth.router)
app.include_router(dashboard.router)
app.include_router(profile.router)
app.include_router(cover_letters.router)
app.include_router(functions.router)
