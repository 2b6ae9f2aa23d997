# market/core/db.py
"""Database engine and session utilities.

The engine is created lazily on first use and memoized per database URL for
the lifetime of the process. The driver keeps its own connection pool, so the
same engine is shared by every request.
"""
import threading
from typing import Dict, Iterator

from fastapi import Depends
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from market.core.config import Settings, get_settings
from market.utils.logger import get_logger

logger = get_logger(__name__)

Base = declarative_base()

_engines: Dict[str, Engine] = {}
_sessionmakers: Dict[str, sessionmaker] = {}
_lock = threading.Lock()


def _normalize_url(url: str) -> str:
    # SQLAlchemy 2.x는 'postgres://' 스킴을 받지 않음
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+psycopg2://", 1)
    return url


def get_engine(url: str) -> Engine:
    url = _normalize_url(url)
    engine = _engines.get(url)
    if engine is not None:
        return engine

    with _lock:
        engine = _engines.get(url)
        if engine is None:
            if url.startswith("sqlite"):
                engine = create_engine(url, connect_args={"check_same_thread": False})
            else:
                engine = create_engine(url, pool_pre_ping=True)
            init_db(engine)
            _engines[url] = engine
            _sessionmakers[url] = sessionmaker(autocommit=False, autoflush=False, bind=engine)
            logger.info("Database engine created (backend=%s)", engine.url.get_backend_name())
    return engine


def get_sessionmaker(url: str) -> sessionmaker:
    url = _normalize_url(url)
    get_engine(url)
    return _sessionmakers[url]


def init_db(engine: Engine) -> None:
    # 모델을 import 해야 metadata에 테이블이 등록됨
    from market.models import comment, topic  # noqa: F401

    Base.metadata.create_all(bind=engine)


def dispose_engines() -> None:
    with _lock:
        for engine in _engines.values():
            engine.dispose()
        _engines.clear()
        _sessionmakers.clear()


def get_db(settings: Settings = Depends(get_settings)) -> Iterator[Session]:
    db = get_sessionmaker(settings.DATABASE_URL)()
    try:
        yield db
    finally:
        db.close()
