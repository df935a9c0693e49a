"""
Point d'entrée principal de l'API StarDesk.
Démarrage : uvicorn stardesk.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from stardesk.config import settings
from stardesk.database import get_store
from stardesk.exceptions import StarDeskError
from stardesk.routers import auth, feedbacks, homeworks, student, submissions

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """
    Handler console pour les loggers "stardesk.*". Uvicorn ne configure que ses propres
    loggers : sans handler, les messages INFO seraient perdus.
    """
    package_logger = logging.getLogger("stardesk")
    package_logger.setLevel(settings.LOG_LEVEL.upper())
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s : %(message)s"))
        package_logger.addHandler(handler)


configure_logging()

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Cycle de vie de l'application : initialise le stockage s'il est absent."""
    # Passe par la table des overrides pour que les tests puissent injecter leur store
    store_factory = app.dependency_overrides.get(get_store, get_store)
    store_factory().initialize()
    logger.info("Stockage prêt (backend %s).", settings.STORE_BACKEND)
    yield


app = FastAPI(
    title="StarDesk API",
    description="Suivi des devoirs et retours enseignant/élève, avec récompenses en étoiles",
    version=VERSION,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)


@app.middleware("http")
async def catch_unhandled_exceptions(request: Request, call_next):
    """
    Intercepte toutes les exceptions non gérées (y compris les erreurs d'E/S du stockage).
    Déclaré avant CORSMiddleware, donc exécuté à l'intérieur : la réponse 500 reçoit
    les headers CORS. Un @app.exception_handler(Exception) tournerait dans
    ServerErrorMiddleware, hors de CORSMiddleware.
    """
    try:
        return await call_next(request)
    except Exception as exc:
        logger.error("Exception non gérée : %s", exc, exc_info=True)
        return JSONResponse(status_code=500, content={"error": str(exc) or "Erreur interne."})


# CORS ouvert : les interfaces web/mobile sont servies depuis d'autres origines.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


app.include_router(auth.router)
app.include_router(homeworks.router)
app.include_router(submissions.router)
app.include_router(feedbacks.router)
app.include_router(student.router)


@app.exception_handler(StarDeskError)
async def stardesk_error_handler(request: Request, exc: StarDeskError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Corps manquant, champ absent ou invalide → 400 avec le premier message lisible."""
    errors = exc.errors()
    if not errors:
        return JSONResponse(status_code=400, content={"error": "Requête invalide."})
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Requête invalide.").removeprefix("Value error, ")
    return JSONResponse(status_code=400, content={"error": f"{field} : {message}" if field else message})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail
    if exc.status_code == 404 and request.url.path.startswith("/api/"):
        message = "API Not Found"
    return JSONResponse(status_code=exc.status_code, content={"error": message}, headers=exc.headers)


@app.get("/api/health", tags=["Santé"])
def health_check():
    """Vérifie que l'API est opérationnelle."""
    return {"status": "ok", "service": "StarDesk API", "version": VERSION}


@app.get("/api/schema-suggestion", tags=["Santé"])
def schema_suggestion():
    """Champs du modèle de données, requis et recommandés, à l'usage des interfaces clientes."""
    return {
        "requiredFields": [
            "name", "role(teacher/student)", "username", "passwordHash",
            "homeworkNumber", "content", "count", "deadline", "feedback",
        ],
        "recommendedFields": [
            "user.id(UUID)", "createdAt", "updatedAt", "submission.status", "feedback.rating(1~5)",
            "teacherMessage", "sessionToken", "lastLoginAt", "deviceId", "pushToken",
        ],
    }
