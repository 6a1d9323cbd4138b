"""
EccoServ - Domain Errors
Erros de domínio levantados pelos serviços e convertidos em HTTP no main
"""
from typing import Optional


class DomainError(Exception):
    """Base dos erros de negócio"""
    status_code = 400

    def __init__(self, message: str, detail: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail or {}


class ValidationError(DomainError):
    """Entrada inválida (campo ausente, enum desconhecido, período inválido)"""
    status_code = 400


class BusinessRuleError(DomainError):
    """Regra de negócio violada (email duplicado, transição proibida)"""
    status_code = 400


class AuthenticationError(DomainError):
    status_code = 401


class PermissionDeniedError(DomainError):
    status_code = 403


class NotFoundError(DomainError):
    """Entidade referenciada não existe"""
    status_code = 404

    def __init__(self, kind: str, entity_id: Optional[str] = None):
        label = kind.replace("_", " ").capitalize()
        super().__init__(f"{label} not found", {"kind": kind, "id": entity_id})
        self.kind = kind
        self.entity_id = entity_id


class OrphanedReferenceError(DomainError):
    """
    Registro existe mas alguma chave estrangeira da cadeia não resolve.
    Usado nas consultas de um único registro em vez de devolver objeto parcial.
    """
    status_code = 409

    def __init__(self, kind: str, entity_id: str, missing_kind: str, missing_id: Optional[str]):
        super().__init__(
            f"{kind} {entity_id} references missing {missing_kind} {missing_id}",
            {
                "kind": kind,
                "id": entity_id,
                "missing_kind": missing_kind,
                "missing_id": missing_id,
            },
        )
        self.kind = kind
        self.entity_id = entity_id
        self.missing_kind = missing_kind
        self.missing_id = missing_id
