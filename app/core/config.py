import os

from dotenv import load_dotenv

# Cargamos el .env de la raíz del proyecto (si existe)
basedir = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
load_dotenv(os.path.join(basedir, ".env"))


class Settings:
    """
    Configuración leída del entorno.
    Todo tiene un valor por defecto para poder arrancar en local sin .env.
    """

    def __init__(self):
        self.DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///./podium.db")

        self.SECRET_KEY = os.environ.get("SECRET_KEY", "change-me")
        self.ALGORITHM = os.environ.get("ALGORITHM", "HS256")

        self.LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

        # Puntos por defecto cuando una temporada no tiene reglas propias
        self.DEFAULT_EXACT_MATCH_POINTS = int(os.environ.get("DEFAULT_EXACT_MATCH_POINTS", 25))
        self.DEFAULT_ONE_OFF_POINTS = int(os.environ.get("DEFAULT_ONE_OFF_POINTS", 18))
        self.DEFAULT_TWO_OFF_POINTS = int(os.environ.get("DEFAULT_TWO_OFF_POINTS", 15))

        origins = os.environ.get(
            "CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173"
        )
        self.CORS_ORIGINS = [o.strip() for o in origins.split(",") if o.strip()]


settings = Settings()
