import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from blog.config import settings
from blog.core.exceptions import BlogError, ConstraintViolation, DuplicateEmail, NotFound, ValidationError
from blog.db.session import Base, SessionLocal, engine
from blog.routes import comments, posts, users
from blog.seed import seed_database
import blog.models  # ensure all model modules are imported and mappers registered

logging.basicConfig(level=settings.LOG_LEVEL)

# Status code per error kind; anything else from the data layer is a 500
ERROR_STATUS = {
    NotFound: status.HTTP_404_NOT_FOUND,
    DuplicateEmail: status.HTTP_400_BAD_REQUEST,
    ValidationError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ConstraintViolation: status.HTTP_409_CONFLICT,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    if settings.SEED_ON_STARTUP:
        db = SessionLocal()
        try:
            seed_database(db)
        finally:
            db.close()
    yield


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(BlogError)
async def blog_error_handler(request: Request, exc: BlogError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    for error_type, code in ERROR_STATUS.items():
        if isinstance(exc, error_type):
            status_code = code
            break
    logging.debug(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


app.include_router(users.router)
app.include_router(posts.router)
app.include_router(comments.router)


@app.get("/")
async def read_root():
    return {"message": f"{settings.APP_NAME} API is running"}
