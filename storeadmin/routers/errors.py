# storeadmin/routers/errors.py

from fastapi import HTTPException, status

from ..services.errors import ConflictError, InvalidArgumentError, NotFoundError, ServiceError

def to_http_exception(exc: ServiceError) -> HTTPException:
    """Traduz uma exceção de negócio para o erro HTTP correspondente."""
    if isinstance(exc, NotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, ConflictError):
        code = status.HTTP_409_CONFLICT
    elif isinstance(exc, InvalidArgumentError):
        code = status.HTTP_400_BAD_REQUEST
    else:
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return HTTPException(status_code=code, detail=str(exc))
