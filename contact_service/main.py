import logging
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from .db import init_db, make_engine, make_session_factory
from .errors import ContactError, MissingFieldsError, unhandled_exception_handler
from .models import build_submission
from .repository import insert_submission
from .schemas import ErrorOut, SubmissionCreated
from .security import hash_password
from .settings import Settings, get_settings
from .uploads import UploadHandler

logger = logging.getLogger(__name__)

router = APIRouter()

def get_db(request: Request):
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()

def get_upload_handler(request: Request) -> UploadHandler:
    return request.app.state.uploads

def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings

@router.get("/healthz")
def healthz():
    return {"status": "ok"}

@router.post(
    "/api/contact",
    status_code=201,
    response_model=SubmissionCreated,
    responses={400: {"model": ErrorOut}, 500: {"model": ErrorOut}},
)
async def submit_contact(
    request: Request,
    db: Session = Depends(get_db),
    uploads: UploadHandler = Depends(get_upload_handler),
    settings: Settings = Depends(get_app_settings),
):
    try:
        upload = await uploads.handle(request)
    except ContactError as e:
        logger.warning("Rejected upload: %s", e.message)
        return e.to_response()
    except Exception as e:
        return await unhandled_exception_handler(request, e)

    logger.info(
        "Received submission fields=%s image=%s (%d bytes)",
        sorted(upload.fields), upload.original_filename, upload.image_size,
    )

    try:
        sub = build_submission(upload.fields, upload.image_path)
    except MissingFieldsError as e:
        logger.info("Missing required fields: %s", ", ".join(e.missing))
        if settings.cleanup_orphaned_uploads:
            uploads.discard(upload.image_path)
        return e.to_response()

    try:
        sub.password = await run_in_threadpool(hash_password, sub.password, settings)
        new_id = await run_in_threadpool(insert_submission, db, sub)
    except Exception as e:
        if settings.cleanup_orphaned_uploads:
            uploads.discard(upload.image_path)
        return await unhandled_exception_handler(request, e)

    logger.info("Stored contact submission id=%s", new_id)
    return SubmissionCreated()

def create_app(settings: Optional[Settings] = None, engine: Optional[Engine] = None) -> FastAPI:
    settings = settings or get_settings()
    engine = engine or make_engine(settings)

    app = FastAPI(title="Contact Form Service", version="1.0.0")
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = make_session_factory(engine)
    app.state.uploads = UploadHandler.from_settings(settings)
    app.state.uploads.ensure_dir()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(Exception, unhandled_exception_handler)
    app.include_router(router)
    app.mount(settings.upload_url_prefix, StaticFiles(directory=settings.upload_dir), name="uploads")

    @app.on_event("startup")
    def _startup():
        init_db(app.state.engine)

    @app.on_event("shutdown")
    def _shutdown():
        app.state.engine.dispose()

    return app
