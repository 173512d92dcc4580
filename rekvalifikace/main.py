import logging
import os

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from rekvalifikace.database import engine, init_db
from rekvalifikace.errors import (
    ConflictError,
    IntegrityConflictError,
    NotFoundError,
    ReferenceNotFoundError,
    RosterError,
    UnauthorizedError,
    ValidationError,
)
from rekvalifikace.routers import (
    auth as auth_router,
    evaluations as evaluation_router,
    roles as role_router,
    students as student_router,
    subjects as subject_router,
    teachers as teacher_router,
    users as user_router,
)
from rekvalifikace.services.users import ensure_superadmin

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = {
    ReferenceNotFoundError: 400,
    NotFoundError: 404,
    ConflictError: 409,
    IntegrityConflictError: 409,
    UnauthorizedError: 403,
    ValidationError: 422,
}


def status_for(exc: RosterError) -> int:
    for error_type, status_code in _STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            return status_code
    return 400


def _bootstrap_superadmin(bind: Engine) -> None:
    username = os.getenv("SUPERADMIN_USERNAME")
    password = os.getenv("SUPERADMIN_PASSWORD")
    if not username or not password:
        return
    email = os.getenv("SUPERADMIN_EMAIL", f"{username}@rekvalifikace.cz")
    with Session(bind) as db:
        try:
            ensure_superadmin(db, username, email, password)
        except PydanticValidationError as exc:
            # приложение поднимается и без начального SuperAdmin
            logger.warning("SuperAdmin %s не создан: %s", username, exc.errors()[0]["msg"])


def create_app(bind: Engine | None = None) -> FastAPI:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    bind = bind or engine
    app = FastAPI(title="Rekvalifikace")
    init_db(bind)
    _bootstrap_superadmin(bind)

    @app.exception_handler(RosterError)
    async def roster_error_handler(request: Request, exc: RosterError):
        return JSONResponse(status_code=status_for(exc), content={"detail": str(exc)})

    app.include_router(auth_router.router)
    app.include_router(teacher_router.router)
    app.include_router(student_router.router)
    app.include_router(subject_router.router)
    app.include_router(evaluation_router.router)
    app.include_router(role_router.router)
    app.include_router(user_router.router)
    return app


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("rekvalifikace.main:create_app", factory=True, host="127.0.0.1", port=8000, reload=True)
