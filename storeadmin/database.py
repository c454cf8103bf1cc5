from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

# Carrega as variáveis de ambiente do arquivo .env antes de ler as configurações
load_dotenv()

from .core.config import settings  # noqa: E402

connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    # O SQLite só aceita a conexão na thread que a criou, a menos que isto seja desligado
    connect_args["check_same_thread"] = False

# Cria o "motor" (engine) do SQLAlchemy
engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)

# Fábrica de sessões usada em cada pedido (request) à API e nos jobs
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# Classe Base para nossos modelos (ORM)
Base = declarative_base()
