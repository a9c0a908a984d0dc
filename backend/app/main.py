# ApplyDesk backend entrypoint: FastAPI app, routers and error translation.

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.app.api import collaboration
from backend.app.api import colleges
from backend.app.api import dashboard
from backend.app.api import documents
from backend.app.api import essays
from backend.app.api import login
from backend.app.api import onboarding
from backend.app.api import register
from backend.app.api import tasks
from backend.app.api import workspace
from backend.app.core.dev_seed import ensure_default_dev_users
from backend.app.core.errors import ApplyDeskError
from backend.app.core.logging_config import configure_logging
from backend.app.core.settings import get_settings
from backend.app.db.session import SessionLocal

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI()
settings = get_settings()

origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(register.router)
app.include_router(login.router)
app.include_router(onboarding.router)
app.include_router(collaboration.router)
app.include_router(colleges.router)
app.include_router(tasks.router)
app.include_router(essays.router)
app.include_router(documents.router)
app.include_router(dashboard.router)
app.include_router(workspace.router)


@app.exception_handler(ApplyDeskError)
async def handle_app_error(request: Request, exc: ApplyDeskError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


@app.get("/")
def read_root():
    return {"app": "ApplyDesk backend", "status": "ok"}


@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.on_event("startup")
def seed_default_dev_users():
    if settings.environment != "development":
        return
    db = SessionLocal()
    try:
        ensure_default_dev_users(db)
    finally:
        db.close()
