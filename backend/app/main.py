import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from app.core.config import settings
from app.core.database import ping_database, close_database
from app.services.result import SERVER_ERROR_MESSAGE
from app.api.routes import auth, courses

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage app lifecycle events.

    Startup: Check that MongoDB is reachable (logged, not fatal)
    Shutdown: Close the MongoDB client
    """
    ping_database()
    yield
    close_database()


app = FastAPI(
    title="Online Learning Platform API",
    description="Accounts and course catalog for an online-learning platform",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(courses.router)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors as {"message": ...} like every other response"""
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Malformed or wrongly typed input is client-correctable, so it gets the same
    400 {"message": ...} shape as the service-level validation errors instead
    of FastAPI's default 422.
    """
    errors = exc.errors()
    if errors:
        first = errors[0]
        # loc is ("body", "price") style; drop the "body"/"query" prefix
        field = ".".join(str(part) for part in first.get("loc", ())[1:])
        message = f"Invalid value for {field}: {first.get('msg')}" if field else f"Invalid request: {first.get('msg')}"
    else:
        message = "Invalid request."
    return JSONResponse(status_code=400, content={"message": message})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Anything the services did not catch becomes an opaque 500"""
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"message": SERVER_ERROR_MESSAGE})


@app.get("/", response_class=PlainTextResponse)
def root():
    """Root endpoint - plaintext liveness message"""
    return "Online Learning Platform API is running..."


@app.get("/health")
def health():
    """Health check endpoint - used by monitoring/deployment tools"""
    return {"status": "healthy"}
