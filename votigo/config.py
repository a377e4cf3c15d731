import os

from dotenv import load_dotenv

load_dotenv()


class Config:
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///votigo.db")
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-only-change-me")

    ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
    ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "")

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
