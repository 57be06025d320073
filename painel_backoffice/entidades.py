"""
Registro das entidades do backoffice: endpoints, modelos e campos de filtro.

Cada entidade tem um conjunto FECHADO de campos de filtro; qualquer outro
nome é rejeitado pela lista filtrada.
"""

# ======================================================================================
# Imports
# ======================================================================================
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple, Type

from pydantic import BaseModel, TypeAdapter, ValidationError

from .constants import PRIORIDADES, SITUACOES
from .erros import CampoFiltroInvalido, ErroValidacao
from .filtros import CampoFiltro, TipoFiltro
from .models import Canal, CanalIn, Cliente, ClienteIn, Loja, LojaIn, Pedido, PedidoIn

# ======================================================================================
# Definição de entidade
# ======================================================================================
@dataclass(frozen=True)
class Entidade:
    chave: str
    endpoint: str
    endpoint_criacao: str
    modelo: Type[BaseModel]
    modelo_payload: Type[BaseModel]
    campos_filtro: Tuple[CampoFiltro, ...]
    rotulo: str
    rotulo_plural: str

    @property
    def campos(self) -> Dict[str, CampoFiltro]:
        return {c.nome: c for c in self.campos_filtro}

    def campo(self, nome: str) -> CampoFiltro:
        try:
            return self.campos[nome]
        except KeyError:
            raise CampoFiltroInvalido(nome, self.rotulo_plural) from None

    def criterios_vazios(self) -> Dict[str, Any]:
        return {c.nome: c.vazio() for c in self.campos_filtro}

    def converter_lista(self, dados: list) -> List[BaseModel]:
        """Converte o JSON da API nos registros tipados (ValidationError sobe para quem chamou)."""
        return TypeAdapter(List[self.modelo]).validate_python(dados)

    def validar_payload(self, payload: Any) -> dict:
        """Valida o payload de escrita e devolve o dict pronto para a API.

        Campo obrigatório vazio ou chave desconhecida: `ErroValidacao` com uma mensagem por problema.
        """
        if isinstance(payload, self.modelo_payload):
            return payload.para_api()
        try:
            return self.modelo_payload.model_validate(payload).para_api()
        except ValidationError as e:
            raise ErroValidacao(_mensagens_validacao(e)) from e


# Tipo de erro do pydantic -> texto exibido nas telas
MENSAGENS_POR_TIPO = {
    "missing": "obrigatório",
    "string_too_short": "obrigatório",
    "extra_forbidden": "campo não permitido",
    "greater_than": "selecione um valor",
    "int_parsing": "deve ser um número inteiro",
    "int_type": "deve ser um número inteiro",
    "enum": "opção inválida",
    "string_type": "deve ser um texto",
}


def _mensagens_validacao(e: ValidationError) -> List[str]:
    mensagens = []
    for erro in e.errors():
        campo = ".".join(str(p) for p in erro.get("loc", ())) or "payload"
        mensagens.append(f"{campo}: {MENSAGENS_POR_TIPO.get(erro.get('type'), 'valor inválido')}")
    return mensagens

# ======================================================================================
# Entidades
# ======================================================================================
PEDIDOS = Entidade(
    chave="pedidos",
    endpoint="/pedidos",
    endpoint_criacao="/pedidos/register",
    modelo=Pedido,
    modelo_payload=PedidoIn,
    campos_filtro=(
        CampoFiltro("numero_pedido", TipoFiltro.TEXTO, ("numero_pedido",), "Nº Pedido"),
        CampoFiltro("prioridade", TipoFiltro.EXATO, ("prioridade",), "Prioridade", tuple(PRIORIDADES)),
        CampoFiltro("situacao", TipoFiltro.EXATO, ("situacao",), "Motivo", tuple(SITUACOES)),
        CampoFiltro("cliente", TipoFiltro.TEXTO, ("cliente", "nome"), "Cliente"),
        CampoFiltro("loja", TipoFiltro.TEXTO, ("loja", "nome"), "Loja"),
        CampoFiltro("criado_por", TipoFiltro.TEXTO, ("criado_por", "nome"), "Criado por"),
        CampoFiltro("data_inicio", TipoFiltro.INTERVALO, ("data_inicio",), "Data de início"),
        CampoFiltro("data_atualizacao", TipoFiltro.INTERVALO, ("data_atualizacao",), "Última atualização"),
    ),
    rotulo="pedido",
    rotulo_plural="pedidos",
)

CLIENTES = Entidade(
    chave="clientes",
    endpoint="/clientes",
    endpoint_criacao="/clientes/register",
    modelo=Cliente,
    modelo_payload=ClienteIn,
    campos_filtro=(
        CampoFiltro("nome", TipoFiltro.TEXTO, ("nome",), "Nome"),
        CampoFiltro("cpf", TipoFiltro.TEXTO, ("cpf",), "CPF"),
    ),
    rotulo="cliente",
    rotulo_plural="clientes",
)

LOJAS = Entidade(
    chave="lojas",
    endpoint="/lojas",
    endpoint_criacao="/lojas",
    modelo=Loja,
    modelo_payload=LojaIn,
    campos_filtro=(
        CampoFiltro("nome", TipoFiltro.TEXTO, ("nome",), "Nome"),
        CampoFiltro("canal", TipoFiltro.TEXTO, ("canal", "nome"), "Canal"),
    ),
    rotulo="loja",
    rotulo_plural="lojas",
)

CANAIS = Entidade(
    chave="canais",
    endpoint="/canais",
    endpoint_criacao="/canais",
    modelo=Canal,
    modelo_payload=CanalIn,
    campos_filtro=(
        CampoFiltro("nome", TipoFiltro.TEXTO, ("nome",), "Nome"),
        CampoFiltro("descricao", TipoFiltro.TEXTO, ("descricao",), "Descrição"),
    ),
    rotulo="canal",
    rotulo_plural="canais",
)

ENTIDADES = {e.chave: e for e in (PEDIDOS, CLIENTES, LOJAS, CANAIS)}
