# cartografia/main.py
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cartografia.core.config import settings
from cartografia.core.init_db import init_tables
from cartografia.routers import analysis, areas, auth, communities, households

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Em produção usamos Alembic; isto é para desenvolvimento local
    if settings.AUTO_CREATE_TABLES and settings.STORAGE_BACKEND == "postgres":
        await init_tables()
    yield

app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Autenticação
app.include_router(auth.router, tags=["auth"])

app.include_router(areas.router)
app.include_router(households.router)
app.include_router(communities.router)
app.include_router(analysis.router)

@app.get("/")
async def health_check():
    return {"status": "ok", "message": f"{settings.PROJECT_NAME} API is running", "backend": settings.STORAGE_BACKEND}
