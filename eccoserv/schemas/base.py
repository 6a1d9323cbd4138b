"""
EccoServ - Schema helpers
Base camelCase, valores monetários e datas normalizadas para UTC
"""
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Annotated, Any, List, Type

from pydantic import BaseModel, ConfigDict, AfterValidator, BeforeValidator, PlainSerializer
from pydantic.alias_generators import to_camel

CENTS = Decimal("0.01")


def to_money(value: Any) -> Decimal:
    """Decimal exato com 2 casas, arredondamento half-up"""
    if value is None:
        value = 0
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def format_money(value: Any) -> str:
    return f"{to_money(value):.2f}"


def to_naive_utc(value: datetime) -> datetime:
    """O banco guarda datas sem timezone, sempre em UTC"""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def lenient_enum(enum_cls: Type, default):
    """
    Na leitura, valor fora do enum vira o default em vez de quebrar a resposta.
    A escrita continua validando com o enum estrito.
    """
    values = {member.value for member in enum_cls}

    def _coerce(value):
        if isinstance(value, enum_cls):
            return value
        if value in values:
            return enum_cls(value)
        return default

    return BeforeValidator(_coerce)


Money = Annotated[Decimal, PlainSerializer(format_money, return_type=str)]
UtcDateTime = Annotated[datetime, AfterValidator(to_naive_utc)]


class CamelModel(BaseModel):
    """Campos snake_case no Python, camelCase no JSON"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# Colunas JSON antigas podem estar NULL
StrList = Annotated[List[str], BeforeValidator(lambda value: value or [])]
