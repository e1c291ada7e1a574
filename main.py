import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.cors import CORSMiddleware

from core.config_loader import settings
from core.database import Base, engine
from core.errors import SwapError
from core.logging import setup_logging, RequestIdMiddleware

from auth.routes.auth_router import auth_router
from user.router import user_router
from shift.router import shift_router, user_shift_router
from swaprequest.router import swap_request_router, user_swap_request_router
from interest.router import interest_router
from cleanup.router import cleanup_router
import models_bootstrap

log = structlog.get_logger(__name__)

openapi_tags = [
    {
        "name": "Swap Requests",
        "description": "Post a shift and say what you would take for it",
    },
    {
        "name": "Interests",
        "description": "Offer one of your shifts against a swap request",
    },
    {
        "name": "Health Checks",
        "description": "Application health checks",
    }
]

setup_logging()

app = FastAPI(title="Shift Swap", openapi_tags=openapi_tags)

app.add_middleware(RequestIdMiddleware)

if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            str(origin).strip("/") for origin in settings.BACKEND_CORS_ORIGINS
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(SwapError)
async def swap_error_handler(request: Request, exc: SwapError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0]["msg"] if errors else "Invalid request data"
    return JSONResponse(
        status_code=422,
        content={"kind": "validation", "detail": first.removeprefix("Value error, "), "errors": jsonable(errors)},
    )


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError):
    log.error("store_error", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=500, content={"kind": "internal", "detail": "Internal server error"})


def jsonable(errors: list[dict]) -> list[dict]:
    return [{"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")} for e in errors]


@app.on_event("startup")
def create_tables():
    if settings.AUTO_CREATE_DB:
        Base.metadata.create_all(bind=engine)


app.include_router(auth_router, prefix="/api")
app.include_router(user_router, prefix="/api")
app.include_router(shift_router, prefix="/api")
app.include_router(user_shift_router, prefix="/api")
app.include_router(swap_request_router, prefix="/api")
app.include_router(user_swap_request_router, prefix="/api")
app.include_router(interest_router, prefix="/api")
app.include_router(cleanup_router, prefix="/api")


@app.get("/health", tags=['Health Checks'])
def read_root():
    return {"health": "true"}
