"""
Lista filtrada: cache local de uma coleção remota + filtros + paginação + CRUD.

Design (FilteredListView)
- Estado (só a própria instância escreve):
    registros: último snapshot carregado com sucesso (substituído inteiro a cada load)
    criterios: {campo -> valor} no conjunto fechado de campos da entidade
    pagina / tamanho_pagina: paginação (base 0)
    carregando / erro: estado observável pelas telas
- Leitura: visible_records() refaz filtro + paginação a cada chamada (coleções pequenas).
- Escrita: create/update/remove validam localmente, chamam a API e, em caso de
  sucesso, recarregam a coleção inteira (load) em vez de remendar o cache.
  Em caso de falha sobem o erro e NÃO recarregam.
- Cargas concorrentes: cada load() recebe um ticket crescente; com
  `descartar_obsoletas`, resposta de ticket mais antigo que o último aplicado é ignorada.
"""

import logging
import threading
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from . import config
from .entidades import PEDIDOS, Entidade
from .erros import ErroApi, ErroRemoto, ErroValidacao
from .filtros import aplicar_filtros, criterio_ativo, paginar, total_paginas
from .models import AtualizacaoIn, FinalizacaoIn
from .services import ApiClient

logger = logging.getLogger(__name__)


class FilteredListView:
    def __init__(
        self,
        cliente: ApiClient,
        entidade: Entidade,
        *,
        tamanho_pagina: int = config.PAGE_SIZE,
        limpar_em_falha: bool = config.LIMPAR_LISTA_EM_FALHA,
        descartar_obsoletas: bool = config.DESCARTAR_CARGAS_OBSOLETAS,
    ):
        if tamanho_pagina < 1:
            raise ValueError("tamanho_pagina deve ser >= 1")
        self.cliente = cliente
        self.entidade = entidade
        self.limpar_em_falha = limpar_em_falha
        self.descartar_obsoletas = descartar_obsoletas

        self.registros: List[Any] = []
        self.criterios: Dict[str, Any] = entidade.criterios_vazios()
        self.pagina = 0
        self.tamanho_pagina = tamanho_pagina
        self.erro: Optional[str] = None

        self._lock = threading.Lock()
        self._em_andamento = 0
        self._ultimo_ticket = 0
        self._ultimo_aplicado = 0

    # -------- Carga --------

    @property
    def carregando(self) -> bool:
        return self._em_andamento > 0

    def load(self) -> bool:
        """Busca a coleção inteira. Devolve True se a resposta foi aplicada com sucesso.

        - Sucesso: substitui `registros` e limpa `erro`.
        - Falha (rede, status != 2xx ou resposta malformada): preenche `erro` e,
          se `limpar_em_falha`, esvazia `registros`. Nada é relançado.
        """
        with self._lock:
            self._ultimo_ticket += 1
            ticket = self._ultimo_ticket
            self._em_andamento += 1

        try:
            dados = self.cliente.listar(self.entidade.endpoint)
            registros = self.entidade.converter_lista(dados)
        except (ErroApi, ValidationError) as e:
            logger.error("Erro ao carregar %s: %s", self.entidade.rotulo_plural, e)
            with self._lock:
                if self._obsoleta(ticket):
                    return False
                self._ultimo_aplicado = ticket
                self.erro = f"Erro ao carregar {self.entidade.rotulo_plural}"
                if isinstance(e, ErroRemoto):
                    self.erro += f": {e.mensagem}"
                if self.limpar_em_falha:
                    self.registros = []
            return False
        finally:
            with self._lock:
                self._em_andamento -= 1

        with self._lock:
            if self._obsoleta(ticket):
                return False
            self._ultimo_aplicado = ticket
            self.registros = registros
            self.erro = None
        logger.debug("%s carregados: %d", self.entidade.rotulo_plural, len(registros))
        return True

    def _obsoleta(self, ticket: int) -> bool:
        if self.descartar_obsoletas and ticket < self._ultimo_aplicado:
            logger.debug("Resposta de carga %d descartada (já aplicada %d)", ticket, self._ultimo_aplicado)
            return True
        return False

    # -------- Filtros --------

    def set_filter(self, campo: str, valor: Any) -> None:
        """Atualiza um único campo de filtro e volta para a primeira página."""
        definicao = self.entidade.campo(campo)
        self.criterios[campo] = definicao.normalizar(valor)
        self.pagina = 0

    def clear_filters(self) -> None:
        self.criterios = self.entidade.criterios_vazios()
        self.pagina = 0

    def tem_filtros_ativos(self) -> bool:
        return any(criterio_ativo(v) for v in self.criterios.values())

    # -------- Leitura --------

    def registros_filtrados(self) -> List[Any]:
        return aplicar_filtros(self.registros, self.entidade.campos, self.criterios)

    def visible_records(self) -> List[Any]:
        return paginar(self.registros_filtrados(), self.pagina, self.tamanho_pagina)

    def total_paginas(self) -> int:
        return total_paginas(len(self.registros_filtrados()), self.tamanho_pagina)

    def ir_para_pagina(self, pagina: int) -> None:
        self.pagina = min(max(0, pagina), self.total_paginas() - 1)

    def definir_tamanho_pagina(self, tamanho: int) -> None:
        if tamanho < 1:
            raise ValueError("tamanho_pagina deve ser >= 1")
        self.tamanho_pagina = tamanho
        self.pagina = 0

    def buscar_por_id(self, id_registro) -> Optional[Any]:
        for r in self.registros:
            if r.id == id_registro:
                return r
        return None

    # -------- Escrita (sempre seguida de recarga completa) --------

    def create(self, payload: Any) -> Any:
        dados = self.entidade.validar_payload(payload)
        resposta = self._chamar("criar", self.cliente.criar, self.entidade.endpoint_criacao, dados)
        self.load()
        return resposta

    def update(self, id_registro, payload: Any) -> Any:
        dados = self.entidade.validar_payload(payload)
        resposta = self._chamar("atualizar", self.cliente.atualizar, self.entidade.endpoint, id_registro, dados)
        self.load()
        return resposta

    def remove(self, id_registro) -> Any:
        resposta = self._chamar("excluir", self.cliente.remover, self.entidade.endpoint, id_registro)
        self.load()
        return resposta

    def _chamar(self, operacao: str, func, *args) -> Any:
        try:
            return func(*args)
        except ErroApi as e:
            logger.error("Falha ao %s %s: %s", operacao, self.entidade.rotulo, e)
            raise


class PedidosListView(FilteredListView):
    """Lista de pedidos com as ações de andamento (atualização e finalização)."""

    def __init__(self, cliente: ApiClient, **kw):
        super().__init__(cliente, PEDIDOS, **kw)

    def adicionar_atualizacao(self, id_pedido, descricao: str) -> Any:
        try:
            dados = AtualizacaoIn(descricao=descricao or "").para_api()
        except ValidationError as e:
            raise ErroValidacao(["Descrição da atualização é obrigatória."]) from e
        resposta = self._chamar(
            "adicionar atualização ao", self.cliente.enviar,
            f"{self.entidade.endpoint}/{id_pedido}/atualizacoes", dados,
        )
        self.load()
        return resposta

    def finalizar(self, id_pedido, resolucao: str) -> Any:
        try:
            dados = FinalizacaoIn(resolucao=resolucao or "").para_api()
        except ValidationError as e:
            raise ErroValidacao(["A resolução final é obrigatória."]) from e
        resposta = self._chamar(
            "finalizar", self.cliente.enviar,
            f"{self.entidade.endpoint}/{id_pedido}/finalizar", dados,
        )
        self.load()
        return resposta
