import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import CORS_ORIGINS, LOG_LEVEL

# Routers
from routers.config import router as config_router
from routers.health import router as health_router
from routers.sessions import router as sessions_router

logger = logging.getLogger("times-tables")
logging.basicConfig(level=LOG_LEVEL)

app = FastAPI(title="Times Tables – Quiz API")

# Allow calls from the quiz front end
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
def health_root():
    return {"ok": True}


app.include_router(sessions_router)  # /sessions/...
app.include_router(config_router)  # /config
app.include_router(health_router)  # /health/...
