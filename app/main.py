import logging

from fastapi import FastAPI

from app.core.config import get_settings
from app.core.cors import SiteCORSMiddleware
from app.core.logging import configure_logging
from app.core.security import ensure_admin_account
from app.db.base import Base, SessionLocal, engine
from app.api.routes import auth
from app.api.routes import admin as admin_router
from app.api.routes import review as review_router
from app.api.routes import generate_review as generate_review_router

configure_logging()

logger = logging.getLogger(__name__)

settings = get_settings()
app = FastAPI(title=settings.app_name)

app.add_middleware(
    SiteCORSMiddleware,
    exclude_prefixes=["/functions/"],
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def startup():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        ensure_admin_account(db)
    finally:
        db.close()
    logger.info("Application startup complete.")


@app.get("/")
def root():
    return {"message": "Portfolio Site API running"}


app.include_router(auth.router, prefix="/api/auth")
app.include_router(generate_review_router.router)
app.include_router(review_router.router)
app.include_router(admin_router.router)
