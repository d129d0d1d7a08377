import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from admin_gateway.core.config import CORS_ORIGINS, LOG_LEVEL
from admin_gateway.core.errors import register_exception_handlers
from admin_gateway.core.logging_middleware import LoggingMiddleware
from admin_gateway.db.init_db import init_db
from admin_gateway.routers.admin import router as admin_router
from admin_gateway.routers.auth import router as auth_router
from admin_gateway.routers.courses import router as courses_router
from admin_gateway.routers.enrollments import router as enrollments_router
from admin_gateway.routers.profile import router as profile_router

logging.basicConfig(level=LOG_LEVEL)

app = FastAPI(title="Admin Gateway")

register_exception_handlers(app)

# Middleware (last added runs first: CORS answers preflights before anything else)
app.add_middleware(LoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
    max_age=86400,
)


# Health check
@app.get("/health")
def health():
    return {"status": "ok"}


# Startup event
@app.on_event("startup")
def on_startup():
    init_db()


# Include routers
app.include_router(auth_router, prefix="/auth", tags=["auth"])
app.include_router(admin_router, prefix="/admin", tags=["admin"])
app.include_router(enrollments_router, prefix="/admin", tags=["enrollments"])
app.include_router(courses_router, prefix="/admin", tags=["courses"])
app.include_router(profile_router, prefix="/profile", tags=["profile"])
