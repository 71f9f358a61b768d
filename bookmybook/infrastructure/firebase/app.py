"""
Firebase App - process-wide handle to the initialized Firebase SDK.

FirebaseApp.init() is safe to await from many coroutines at once: the first
caller initializes the SDK (in a worker thread, it does blocking I/O) while
the others wait on the same lock and receive the same instance.
FirebaseApp.shutdown() deletes the SDK app so a later init() starts fresh.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

import firebase_admin
from firebase_admin import credentials, firestore, firestore_async

from bookmybook.config.settings import Config
from bookmybook.domain.exceptions import ConfigError

logger = logging.getLogger(__name__)


class FirebaseApp:
    """Singleton wrapper around firebase_admin.App and its Firestore clients."""

    _instance: Optional[FirebaseApp] = None
    _init_lock: Optional[asyncio.Lock] = None
    _lock_loop: Optional[asyncio.AbstractEventLoop] = None

    def __init__(self, app: firebase_admin.App):
        self.app = app
        self.db = firestore.client(app=app)  # sync client, used for on_snapshot watches
        self.async_db = firestore_async.client(app=app)

    @classmethod
    def _lock(cls) -> asyncio.Lock:
        # asyncio.Lock is bound to one loop; a new loop gets a new lock
        loop = asyncio.get_running_loop()
        if cls._init_lock is None or cls._lock_loop is not loop:
            cls._init_lock = asyncio.Lock()
            cls._lock_loop = loop
        return cls._init_lock

    @classmethod
    def _create(cls) -> FirebaseApp:
        missing = Config.missing_firebase_settings()
        if missing:
            logger.warning(
                "Firebase credentials not configured. Please set these environment "
                f"variables: {', '.join(missing)}"
            )
            raise ConfigError("Firebase credentials not configured", missing=missing)

        credential: Any
        if Config.FIREBASE_CREDENTIALS:
            credential = credentials.Certificate(Config.FIREBASE_CREDENTIALS)
        else:
            credential = credentials.ApplicationDefault()

        app = firebase_admin.initialize_app(
            credential,
            {
                "projectId": Config.FIREBASE_PROJECT_ID,
                "storageBucket": Config.FIREBASE_STORAGE_BUCKET or None,
            },
        )
        logger.info(f"[Firebase] Initialized app for project {Config.FIREBASE_PROJECT_ID}")
        return cls(app)

    @classmethod
    async def init(cls) -> FirebaseApp:
        if cls._instance is not None:
            return cls._instance
        async with cls._lock():
            if cls._instance is None:
                cls._instance = await asyncio.to_thread(cls._create)
        return cls._instance

    @classmethod
    async def shutdown(cls) -> None:
        async with cls._lock():
            instance, cls._instance = cls._instance, None
            if instance is not None:
                await asyncio.to_thread(firebase_admin.delete_app, instance.app)
                logger.info("[Firebase] App deleted")
