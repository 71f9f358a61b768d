"""Application configuration settings"""

import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_PATH = os.getenv("LOG_PATH") or None
    LOG_FORMAT = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s",
    )

    # Firebase (same variables the web front end reads)
    FIREBASE_API_KEY = os.getenv("FIREBASE_API_KEY", "")
    FIREBASE_AUTH_DOMAIN = os.getenv("FIREBASE_AUTH_DOMAIN", "")
    FIREBASE_PROJECT_ID = os.getenv("FIREBASE_PROJECT_ID", "")
    FIREBASE_STORAGE_BUCKET = os.getenv("FIREBASE_STORAGE_BUCKET", "")
    FIREBASE_MESSAGING_SENDER_ID = os.getenv("FIREBASE_MESSAGING_SENDER_ID", "")
    FIREBASE_APP_ID = os.getenv("FIREBASE_APP_ID", "")
    # Service-account JSON path; empty means application default credentials
    FIREBASE_CREDENTIALS = os.getenv("FIREBASE_CREDENTIALS", "")
    FIREBASE_AUTH_URL = os.getenv(
        "FIREBASE_AUTH_URL", "https://identitytoolkit.googleapis.com/v1"
    )
    FIREBASE_JWKS_URL = os.getenv(
        "FIREBASE_JWKS_URL",
        "https://www.googleapis.com/service_accounts/v1/jwk/securetoken@system.gserviceaccount.com",
    )

    # Document store backend: "firestore" or "memory"
    STORE_BACKEND = os.getenv("STORE_BACKEND", "firestore").lower()

    # Cloudinary
    CLOUDINARY_CLOUD_NAME = os.getenv("CLOUDINARY_CLOUD_NAME", "")
    CLOUDINARY_UPLOAD_PRESET = os.getenv("CLOUDINARY_UPLOAD_PRESET", "")
    CLOUDINARY_API_URL = os.getenv(
        "CLOUDINARY_API_URL", "https://api.cloudinary.com/v1_1"
    )
    MAX_UPLOAD_MB = float(os.getenv("MAX_UPLOAD_MB", "10"))

    # Outbound HTTP
    HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "15"))

    # API
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")
    CONVERSATION_USER_LIMIT: int = int(os.getenv("CONVERSATION_USER_LIMIT", "100"))
    LISTING_LIMIT: int = int(os.getenv("LISTING_LIMIT", "500"))

    # Collections
    BOOKS_COLLECTION = "books"
    MESSAGES_COLLECTION = "messages"
    CONVERSATIONS_COLLECTION = "conversations"

    @classmethod
    def missing_firebase_settings(cls) -> list[str]:
        required = {
            "FIREBASE_API_KEY": cls.FIREBASE_API_KEY,
            "FIREBASE_AUTH_DOMAIN": cls.FIREBASE_AUTH_DOMAIN,
            "FIREBASE_PROJECT_ID": cls.FIREBASE_PROJECT_ID,
            "FIREBASE_APP_ID": cls.FIREBASE_APP_ID,
        }
        return [name for name, value in required.items() if not value]
