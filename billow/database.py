"""
데이터베이스 연결 설정

A ``Database`` owns one SQLAlchemy engine and its session factory.  It is
constructed once at startup, opened (tables created) and closed (engine
disposed) by the application lifespan.
"""
import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

logger = logging.getLogger(__name__)

Base = declarative_base()


class Database:
    def __init__(self, url: str, echo: bool = False, **engine_kwargs):
        # SQLite 사용 시 check_same_thread=False 필요
        connect_args = engine_kwargs.pop("connect_args", {})
        if url.startswith("sqlite"):
            connect_args.setdefault("check_same_thread", False)

        self.url = url
        self.engine = create_engine(
            url,
            connect_args=connect_args,
            echo=echo,
            **engine_kwargs,
        )
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def open(self) -> None:
        # Import models so Base.metadata knows about them
        import billow.models  # noqa: F401
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database tables ready (%s)", self.url)

    def close(self) -> None:
        self.engine.dispose()
        logger.info("Database closed (%s)", self.url)

    def session(self):
        return self.SessionLocal()
