from fastapi import FastAPI, Depends, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from contextlib import asynccontextmanager
import logging

from .config import settings, validate_runtime_config
from .db import get_db, init_db
from .errors import AuthServiceError
from .schemas import UserCreate, UserLogin, MessageResponse, LoginResponse, ErrorResponse
from .auth import register_user, authenticate_user, create_access_token
from .utils.event_logger import log_auth_event
from .routes import health

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Check config and create tables on startup"""
    validate_runtime_config()
    init_db()
    yield


app = FastAPI(title="Student Portal Auth Service", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)


@app.exception_handler(AuthServiceError)
async def auth_service_error_handler(_request: Request, exc: AuthServiceError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": AuthServiceError.default_message},
    )


ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


@app.post(
    "/signup",
    status_code=status.HTTP_201_CREATED,
    response_model=MessageResponse,
    responses=ERROR_RESPONSES,
)
def signup(user: UserCreate, request: Request, db: Session = Depends(get_db)):
    try:
        new_user = register_user(user, db)
    except AuthServiceError as e:
        log_auth_event("signup_failure", user.email, request, reason=e.message)
        raise

    log_auth_event("signup_success", new_user.email, request, user_id=new_user.id)
    return MessageResponse(message="User created successfully")


@app.post(
    "/login",
    response_model=LoginResponse,
    responses={**ERROR_RESPONSES, status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
def login(credentials: UserLogin, request: Request, db: Session = Depends(get_db)):
    try:
        user = authenticate_user(credentials, db)
    except AuthServiceError as e:
        log_auth_event("login_failure", credentials.email, request, reason=e.message)
        raise

    log_auth_event("login_success", user.email, request, user_id=user.id)
    token = create_access_token(user.id)
    return LoginResponse(token=token)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
