"""
Modelos de domínio (Pydantic): enums, registros vindos da API e payloads de escrita.

Seções:
- Imports
- Enums / Domínios
- Registros (leitura) — pedidos, clientes, lojas, canais
- Payloads (escrita) — fechados com extra="forbid"
- Sessão do usuário

Notas:
- A API fala camelCase; os modelos usam snake_case com alias.
- Registros ignoram campos extras (a API é a dona dos dados);
  payloads rejeitam chaves desconhecidas já na construção.
"""

# ======================================================================================
# Imports
# ======================================================================================
import enum
from typing import Annotated, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from pydantic.alias_generators import to_camel

# Texto obrigatório: sem espaços nas pontas e não vazio
TextoObrigatorio = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
TextoOpcional = Optional[Annotated[str, StringConstraints(strip_whitespace=True)]]

# ======================================================================================
# Enums / Domínios
# ======================================================================================
class Prioridade(str, enum.Enum):
    BAIXA = "BAIXA"
    MEDIA = "MEDIA"
    ALTA = "ALTA"


class Situacao(str, enum.Enum):
    """Motivo do pedido (9 valores fixos)."""
    ALTERACAO_DE_ENDERECO = "ALTERACAO_DE_ENDERECO"
    ATRASO_NA_ENTREGA = "ATRASO_NA_ENTREGA"
    AVARIA_DE_PRODUCAO = "AVARIA_DE_PRODUCAO"
    BARRAR_A_ENTREGA = "BARRAR_A_ENTREGA"
    CANCELAMENTO = "CANCELAMENTO"
    DEVOLUCAO = "DEVOLUCAO"
    ENTREGUE_E_NAO_RECEBIDO = "ENTREGUE_E_NAO_RECEBIDO"
    ERRO_DE_ENDERECO = "ERRO_DE_ENDERECO"
    FALTANDO_ITEM = "FALTANDO_ITEM"


class Situation(str, enum.Enum):
    """Andamento do pedido (calculado pelo backend)."""
    EM_ANDAMENTO = "EM_ANDAMENTO"
    FINALIZADO = "FINALIZADO"
    ATRASADO = "ATRASADO"


# Na leitura, valor fora do enum chega como texto cru (o backend pode ganhar valores novos)
PrioridadeLida = Annotated[Union[Prioridade, str, None], Field(union_mode="left_to_right")]
SituacaoLida = Annotated[Union[Situacao, str, None], Field(union_mode="left_to_right")]
SituationLida = Annotated[Union[Situation, str, None], Field(union_mode="left_to_right")]


# ======================================================================================
# Registros (leitura)
# ======================================================================================
class _Registro(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class ResumoEntidade(_Registro):
    """Referência desnormalizada (id + nome) embutida em outro registro."""
    id: int
    nome: Optional[str] = None


class Cliente(_Registro):
    id: int
    nome: Optional[str] = None
    cpf: Optional[str] = None


class Canal(_Registro):
    id: int
    nome: Optional[str] = None
    descricao: Optional[str] = None
    lojas: list[ResumoEntidade] = []


class Loja(_Registro):
    id: int
    nome: Optional[str] = None
    canal_id: Optional[int] = None
    canal: Optional[ResumoEntidade] = None


class Pedido(_Registro):
    id: int
    numero_pedido: Optional[str] = None
    numero_chamado: Optional[str] = None
    numero_jit: Optional[str] = None
    descricao: Optional[str] = None
    resolucao: Optional[str] = None
    # Datas ficam cruas: o filtro decide se são válidas
    data_inicio: Optional[str] = None
    data_atualizacao: Optional[str] = None
    data_finalizacao: Optional[str] = None
    prioridade: PrioridadeLida = None
    situacao: SituacaoLida = None
    situation: SituationLida = None
    cliente_id: Optional[int] = None
    cliente: Optional[ResumoEntidade] = None
    loja_id: Optional[int] = None
    loja: Optional[ResumoEntidade] = None
    criado_por_id: Optional[int] = None
    criado_por: Optional[ResumoEntidade] = None


# ======================================================================================
# Payloads (escrita)
# ======================================================================================
class _Payload(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    def para_api(self) -> dict:
        """Dict JSON-serializável em camelCase, sem campos None."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ClienteIn(_Payload):
    nome: TextoObrigatorio
    cpf: TextoObrigatorio


class CanalIn(_Payload):
    nome: TextoObrigatorio
    descricao: TextoOpcional = None


class LojaIn(_Payload):
    nome: TextoObrigatorio
    canal_id: int = Field(gt=0)


class PedidoIn(_Payload):
    numero_pedido: TextoObrigatorio
    numero_chamado: TextoOpcional = None
    numero_jit: TextoOpcional = None
    descricao: TextoObrigatorio
    # Só é enviada depois que o problema foi resolvido
    resolucao: TextoOpcional = None
    prioridade: Prioridade = Prioridade.MEDIA
    situacao: Situacao = Situacao.FALTANDO_ITEM
    cliente_id: int = Field(gt=0)
    loja_id: int = Field(gt=0)
    criado_por_id: Optional[int] = None

    def para_api(self) -> dict:
        dados = super().para_api()
        if not dados.get("resolucao"):
            dados.pop("resolucao", None)
        return dados


class AtualizacaoIn(_Payload):
    descricao: TextoObrigatorio


class FinalizacaoIn(_Payload):
    resolucao: TextoObrigatorio


class LoginIn(_Payload):
    email: TextoObrigatorio
    senha: TextoObrigatorio


# ======================================================================================
# Sessão do usuário
# ======================================================================================
class UsuarioSessao(BaseModel):
    """Usuário local criado após o login (o backend só devolve { message })."""
    nome: str
    email: str
    avatar: str
