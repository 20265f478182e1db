from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.exceptions import ServiceException, service_exception_handler
from app.core.logging_config import setup_logging

# IMPORTANTE: Importar Base y Engine para que funcione la creación de tablas
from app.db.session import engine, Base

# Importar modelos para que SQLAlchemy los "vea" antes de crear las tablas
from app.db.models import _all

# Importar las rutas (los routers)
from app.api.admin import router as admin_router
from app.api.scoring import router as scoring_router
from app.api.standings import router as standings_router


setup_logging()

app = FastAPI(
    title="Podium - Puntuación y Estadísticas",
    version="1.0.0"
)

# Creamos las tablas en la base de datos
Base.metadata.create_all(bind=engine)

# Conectamos las piezas (routers)
app.include_router(admin_router)
app.include_router(scoring_router)
app.include_router(standings_router)

app.add_exception_handler(ServiceException, service_exception_handler)

# Configuramos el permiso para que el frontend pueda hablar con Python
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/")
def read_root():
    return {"message": "API Podium funcionando 🏁"}
