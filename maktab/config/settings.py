import os
from typing import List
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Load the appropriate environment file
env_file = '.env.local'
load_dotenv(env_file)

class Settings(BaseSettings):
    """Application settings."""
    # App settings
    APP_ENV: str = os.getenv('APP_ENV', 'production')
    PORT: int = int(os.getenv('PORT', 5000))
    APP_ID: str = os.getenv('APP_ID', 'maktab')

    # Remote document store. Leave empty to run on the local fallback store.
    DATABASE_URL: str = os.getenv('DATABASE_URL', '')

    # Local fallback store
    LOCAL_STORE_DIR: str = os.getenv('LOCAL_STORE_DIR', '.maktab_data')
    LOCAL_STORE_LATENCY_MS: int = int(os.getenv('LOCAL_STORE_LATENCY_MS', 300))

    # Contact numbers that always log in as teacher (comma separated)
    ADMIN_CONTACTS: str = os.getenv('ADMIN_CONTACTS', '9332039381,9832414854')

    # Cloudinary signed uploads
    CLOUDINARY_CLOUD_NAME: str = os.getenv('CLOUDINARY_CLOUD_NAME', '')
    CLOUDINARY_API_KEY: str = os.getenv('CLOUDINARY_API_KEY', '')
    CLOUDINARY_API_SECRET: str = os.getenv('CLOUDINARY_API_SECRET', '')
    UPLOAD_TIMEOUT: float = float(os.getenv('UPLOAD_TIMEOUT', 30))

    # CORS
    FRONTEND_URL: str = os.getenv('FRONTEND_URL', '')
    ALLOW_ALL_ORIGINS: bool = os.getenv('ALLOW_ALL_ORIGINS', 'false').lower() == 'true'

    # API settings
    API_TITLE: str = "Maktab School API"
    API_DESCRIPTION: str = "Backend API for student records, results, attendance and fees"
    API_VERSION: str = "1.0.0"
    API_DOCS_URL: str = "/api/docs"
    API_REDOC_URL: str = "/api/redoc"
    API_OPENAPI_URL: str = "/api/openapi.json"

    @property
    def admin_contact_list(self) -> List[str]:
        return [c.strip() for c in self.ADMIN_CONTACTS.split(',') if c.strip()]

    class Config:
        env_file = env_file

settings = Settings()
