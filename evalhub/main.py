"""
FastAPI Main Application
"""
import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from evalhub.config import settings
from evalhub.database import init_db
from evalhub.errors import AppError
from evalhub.routers import auth, users, departments, evaluations, user_data

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

# Initialize database
init_db()

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    debug=settings.debug
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def error_response(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
        headers=headers
    )


# Exception handlers
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    """Translate domain errors to their HTTP status"""
    headers = None
    if exc.status_code == 401:
        headers = {"WWW-Authenticate": "Bearer"}
    return error_response(exc.status_code, exc.message, headers)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Unknown routes and methods use the same error envelope"""
    return error_response(exc.status_code, str(exc.detail), exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Request validation errors are reported as 400

    Messages of all failing fields are joined into one message
    """
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "Invalid value")
        messages.append(f"{location}: {message}" if location else message)
    return error_response(400, ", ".join(messages) or "Invalid data")


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return error_response(500, "Server Error")


# API routers (with /api prefix)
app.include_router(auth.router, prefix="/api")
app.include_router(users.router, prefix="/api")
app.include_router(departments.router, prefix="/api")
app.include_router(evaluations.router, prefix="/api")
app.include_router(user_data.router, prefix="/api")


@app.on_event("startup")
async def startup_event():
    """Startup event"""
    logger.info(f"{settings.app_name} v{settings.app_version} started")

    if not (settings.seed_admin_email and settings.seed_admin_password):
        return

    from evalhub.database import SessionLocal
    from evalhub.services.users import ensure_admin

    db = SessionLocal()
    try:
        admin = ensure_admin(db, settings.seed_admin_email, settings.seed_admin_password)
        if admin:
            logger.info(f"Created admin account {admin.email}")
    finally:
        db.close()


@app.get("/")
async def root():
    """Root endpoint"""
    return {"success": True, "message": f"{settings.app_name} API is running"}


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "version": settings.app_version}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000, reload=settings.debug)
