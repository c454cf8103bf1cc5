# storeadmin/services/errors.py

# Exceções de negócio levantadas pelos serviços. Os routers traduzem cada
# uma para o status HTTP correspondente (ver routers/errors.py).

class ServiceError(Exception):
    """Base de todas as exceções de negócio."""

class NotFoundError(ServiceError, LookupError):
    """A entidade referenciada não existe (ou não pertence ao pai informado)."""

class InvalidArgumentError(ServiceError, ValueError):
    """Campo ausente ou inválido para a operação, ou resultado proibido (ex: preço negativo)."""

class ConflictError(ServiceError):
    """Nome/código duplicado, ou entidade ainda em uso por outra."""
