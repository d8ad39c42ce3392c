from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker, declarative_base
from core.config import settings


def build_engine(database_url: str = settings.database_url):
    """
    Create the engine for the configured store.
    SQLite needs check_same_thread off because FastAPI serves sync routes from a threadpool.
    """
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            echo=settings.debug,
            connect_args={"check_same_thread": False},
        )

    return create_engine(
        database_url,
        echo=settings.debug,
        pool_size=10,
        max_overflow=20,
        pool_pre_ping=True,
        pool_recycle=3600,
        connect_args={"connect_timeout": 10},
    )


engine = build_engine()

# Базовий клас для моделей
Base = declarative_base()

# Фабрика сесій
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """
    Dependency для FastAPI: отримаємо сесію та закриємо її після запиту.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def test_connection():
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
            print("✅ Успішне підключення!")
            print(f"Database: {engine.url.render_as_string(hide_password=True)}")
    except Exception as e:
        print("❌ Помилка підключення:")
        print(e)

if __name__ == "__main__":
    test_connection()
