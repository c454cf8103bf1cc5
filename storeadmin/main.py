# storeadmin/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .core.config import settings
from .database import Base, engine
from .routers import banners, categories, deals, homepage, orders, products, promos

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Sem migrations: cria as tabelas que ainda não existem
    Base.metadata.create_all(bind=engine)
    yield

app = FastAPI(
    lifespan=lifespan,
    title="Store Admin API",
    description="Back-end de administração da loja: vitrines, catálogo, ofertas e pedidos."
)

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Erros de validação do corpo/parâmetros viram 400, como os demais argumentos inválidos."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )

for router in (categories, products, deals, banners, homepage, promos, orders):
    app.include_router(router.router, prefix=settings.API_PREFIX)

@app.get("/")
def read_root():
    """
    Endpoint raiz. Apenas confirma que a API está no ar.
    """
    return {"message": "Store Admin API is running"}
