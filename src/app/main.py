# src/app/main.py
from __future__ import annotations
import logging
import sys
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.app.config import settings
from src.app.routers.detection import router as detection_router
from src.app.routers.operations import router as operations_router
from src.app.routers.recipes import router as recipes_router
from src.app.routers.workbench import router as workbench_router

# Simple stdout logging (fine for dev and containers)
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

app = FastAPI(title="NovaChef API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(operations_router)
app.include_router(recipes_router)
app.include_router(workbench_router)
app.include_router(detection_router)


@app.get("/health")
def health():
    return {"ok": True}
