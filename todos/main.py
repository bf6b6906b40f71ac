import structlog
from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from todos import config
from todos.exceptions import UnsupportedOperationError
from todos.logging_config import setup_logging
from todos.routers import todo_router, user_router

log = structlog.get_logger()


async def unsupported_operation_handler(request: Request, exc: UnsupportedOperationError):
    log.error("unsupported operation", backend=exc.backend, operation=exc.operation, path=request.url.path)
    return JSONResponse(status_code=501, content={"detail": str(exc)})


def create_app(title: str, routers: list[tuple[APIRouter, str, str]]) -> FastAPI:
    setup_logging()
    app = FastAPI(title=title)
    app.add_middleware(
        SessionMiddleware,
        secret_key=config.SESSION_SECRET,
        session_cookie=config.SESSION_COOKIE,
        max_age=config.SESSION_MAX_AGE,
        https_only=False,
    )
    app.add_exception_handler(UnsupportedOperationError, unsupported_operation_handler)
    for router, prefix, tag in routers:
        app.include_router(router, prefix=prefix, tags=[tag])
    return app


app = create_app(
    "Todo Lists",
    [
        (user_router.router, "/users", "Users"),
        (todo_router.router, "/lists", "Todo Lists"),
    ],
)


# Root health
@app.get("/")
async def read_root():
    return {"status": "ok", "backend": config.TODOS_BACKEND}
