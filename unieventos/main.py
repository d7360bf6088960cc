import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from unieventos.core import config
from unieventos.database.db import Base, engine
from unieventos.models import events, users  # noqa: F401  registers tables
from unieventos.routes import auth, dashboard, home
from unieventos.routes import events as event_routes

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="UniEventos")

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Create all tables (in production, use migrations such as Alembic)
Base.metadata.create_all(bind=engine)

# Include the routers
app.include_router(home.router)
app.include_router(auth.router)
app.include_router(dashboard.router)
app.include_router(event_routes.router)
