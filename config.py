import os
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = os.path.abspath(os.path.dirname(__file__))

# Static category catalog used to resolve /tools/<slug> pages
CATEGORIES = [
    "AI Tools",
    "APIs",
    "Analytics",
    "Authentication",
    "Backend",
    "Browser Extensions",
    "CLI",
    "Code Review",
    "Databases",
    "Design Tools",
    "DevOps",
    "Documentation",
    "Frontend",
    "Monitoring",
    "Open Source",
    "Productivity",
    "Security",
    "Testing",
]


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "devhunt-dev-secret-key")

    DATABASE_URL = os.getenv('DATABASE_URL')

    if DATABASE_URL:
        # Heroku/Render style URLs use postgres:// but SQLAlchemy needs postgresql://
        if DATABASE_URL.startswith("postgres://"):
            DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)
        SQLALCHEMY_DATABASE_URI = DATABASE_URL
    else:
        SQLALCHEMY_DATABASE_URI = "sqlite:///" + os.path.join(BASE_DIR, "instance", "app.db")

    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Uploads
    UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", os.path.join(BASE_DIR, "static", "uploads"))
    UPLOAD_URL_BASE = os.getenv("UPLOAD_URL_BASE", "/static/uploads")
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 16 MB

    SITE_URL = os.getenv("SITE_URL", "https://devhunt.org")
    CATEGORIES = CATEGORIES

    MAX_SCREENSHOTS = 5
    SCREENSHOT_WIDTH = 512
    LOGO_WIDTH = 220
    PRODUCTS_PAGE_SIZE = 50

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
