"""
Testes da lista filtrada
========================
Carga, filtros/paginação e escrita seguida de recarga.
"""

from datetime import date

import pytest
import requests

from painel_backoffice.entidades import CLIENTES, PEDIDOS
from painel_backoffice.erros import CampoFiltroInvalido, ErroRemoto, ErroValidacao
from painel_backoffice.filtros import IntervaloDatas
from painel_backoffice.lista import FilteredListView, PedidosListView

from conftest import BASE_URL, fazer_resposta, pedido_json


@pytest.fixture
def lista_pedidos(cliente):
    return FilteredListView(cliente, PEDIDOS)


@pytest.fixture
def lista_clientes(cliente):
    return FilteredListView(cliente, CLIENTES)


def _urls(sessao):
    return [(c.args[0], c.args[1]) for c in sessao.request.call_args_list]


# ═══════════════════════════════════════════════════════════
# CARGA
# ═══════════════════════════════════════════════════════════

class TestLoad:

    def test_load_substitui_colecao(self, sessao, lista_pedidos, pedidos_json):
        sessao.request.return_value = fazer_resposta(200, pedidos_json)

        assert lista_pedidos.load() is True

        assert [p.id for p in lista_pedidos.registros] == [1, 2, 3]
        assert lista_pedidos.erro is None
        assert lista_pedidos.carregando is False
        assert _urls(sessao) == [("GET", f"{BASE_URL}/pedidos")]
        assert sessao.request.call_args.kwargs["timeout"] == 5

    def test_falha_de_transporte_limpa_colecao(self, sessao, lista_pedidos, pedidos_json):
        sessao.request.return_value = fazer_resposta(200, pedidos_json)
        lista_pedidos.load()

        sessao.request.side_effect = requests.ConnectionError("sem rede")
        assert lista_pedidos.load() is False

        assert lista_pedidos.carregando is False
        assert lista_pedidos.erro == "Erro ao carregar pedidos"
        assert lista_pedidos.registros == []

    def test_falha_pode_manter_colecao(self, sessao, cliente, pedidos_json):
        lista = FilteredListView(cliente, PEDIDOS, limpar_em_falha=False)
        sessao.request.return_value = fazer_resposta(200, pedidos_json)
        lista.load()

        sessao.request.return_value = fazer_resposta(500, {"message": "banco fora"})
        lista.load()

        assert lista.erro == "Erro ao carregar pedidos: banco fora"
        assert len(lista.registros) == 3

    def test_resposta_que_nao_e_lista(self, sessao, lista_pedidos):
        sessao.request.return_value = fazer_resposta(200, {"pedidos": []})
        assert lista_pedidos.load() is False
        assert lista_pedidos.erro.startswith("Erro ao carregar pedidos")

    def test_registro_malformado(self, sessao, lista_pedidos):
        sessao.request.return_value = fazer_resposta(200, [{"numeroPedido": "sem id"}])
        assert lista_pedidos.load() is False
        assert lista_pedidos.erro == "Erro ao carregar pedidos"
        assert lista_pedidos.carregando is False

    def test_prioridade_desconhecida_nao_derruba_lista(self, sessao, lista_pedidos):
        sessao.request.return_value = fazer_resposta(200, [
            pedido_json(1, "P-1", "ALTA"),
            pedido_json(2, "P-2", "URGENTE"),
        ])

        assert lista_pedidos.load() is True
        assert lista_pedidos.erro is None
        assert [p.id for p in lista_pedidos.registros] == [1, 2]
        assert lista_pedidos.registros[1].prioridade == "URGENTE"

        lista_pedidos.set_filter("prioridade", "ALTA")
        assert [p.id for p in lista_pedidos.visible_records()] == [1]

    def test_nome_nulo_nao_derruba_lista(self, sessao, lista_clientes):
        sessao.request.return_value = fazer_resposta(200, [{"id": 1, "nome": "Ana"}, {"id": 2, "nome": None}])

        assert lista_clientes.load() is True
        assert [c.nome for c in lista_clientes.registros] == ["Ana", None]

        lista_clientes.set_filter("nome", "an")
        assert [c.id for c in lista_clientes.visible_records()] == [1]

    def test_corpo_vazio_vira_lista_vazia(self, sessao, lista_pedidos):
        sessao.request.return_value = fazer_resposta(200)
        assert lista_pedidos.load() is True
        assert lista_pedidos.registros == []

    def test_sucesso_limpa_erro_anterior(self, sessao, lista_pedidos, pedidos_json):
        sessao.request.side_effect = requests.Timeout()
        lista_pedidos.load()
        sessao.request.side_effect = None
        sessao.request.return_value = fazer_resposta(200, pedidos_json)
        lista_pedidos.load()
        assert lista_pedidos.erro is None


class TestCargasConcorrentes:
    """Uma segunda carga que termina antes da primeira."""

    def _sessao_com_carga_aninhada(self, sessao, lista, antiga, nova):
        estado = {"primeira": True, "carregando_durante": None}

        def _request(method, url, **kw):
            if estado["primeira"]:
                estado["primeira"] = False
                lista.load()
                estado["carregando_durante"] = lista.carregando
                return fazer_resposta(200, antiga)
            return fazer_resposta(200, nova)

        sessao.request.side_effect = _request
        return estado

    def test_resposta_obsoleta_descartada(self, sessao, cliente):
        lista = FilteredListView(cliente, PEDIDOS)
        estado = self._sessao_com_carga_aninhada(
            sessao, lista, [pedido_json(1, "velho")], [pedido_json(2, "novo")]
        )

        assert lista.load() is False

        assert [p.numero_pedido for p in lista.registros] == ["novo"]
        assert estado["carregando_durante"] is True
        assert lista.carregando is False

    def test_sem_descarte_a_ultima_a_chegar_vence(self, sessao, cliente):
        lista = FilteredListView(cliente, PEDIDOS, descartar_obsoletas=False)
        self._sessao_com_carga_aninhada(
            sessao, lista, [pedido_json(1, "velho")], [pedido_json(2, "novo")]
        )

        assert lista.load() is True

        assert [p.numero_pedido for p in lista.registros] == ["velho"]


# ═══════════════════════════════════════════════════════════
# FILTROS E PAGINAÇÃO
# ═══════════════════════════════════════════════════════════

class TestFiltrosEPaginas:

    @pytest.fixture
    def lista_cheia(self, sessao, lista_pedidos):
        itens = [pedido_json(i, f"P-{i:03d}", "ALTA" if i % 5 == 0 else "BAIXA") for i in range(1, 26)]
        sessao.request.return_value = fazer_resposta(200, itens)
        lista_pedidos.load()
        return lista_pedidos

    def test_visible_records_pagina(self, lista_cheia):
        assert len(lista_cheia.visible_records()) == 10
        lista_cheia.ir_para_pagina(2)
        assert [p.id for p in lista_cheia.visible_records()] == [21, 22, 23, 24, 25]
        assert lista_cheia.total_paginas() == 3

    def test_set_filter_volta_para_primeira_pagina(self, lista_cheia):
        lista_cheia.ir_para_pagina(2)
        lista_cheia.set_filter("prioridade", "ALTA")
        assert lista_cheia.pagina == 0
        assert [p.id for p in lista_cheia.visible_records()] == [5, 10, 15, 20, 25]
        assert lista_cheia.tem_filtros_ativos()

    def test_filtro_de_data_normalizado(self, lista_cheia):
        lista_cheia.set_filter("data_inicio", {"de": "2024-01-01", "ate": None})
        assert lista_cheia.criterios["data_inicio"] == IntervaloDatas(de=date(2024, 1, 1))

    def test_campo_desconhecido(self, lista_cheia):
        with pytest.raises(CampoFiltroInvalido):
            lista_cheia.set_filter("cor", "azul")
        with pytest.raises(KeyError):
            lista_cheia.set_filter("cor", "azul")

    def test_clear_filters(self, lista_cheia):
        lista_cheia.set_filter("numero_pedido", "P-00")
        lista_cheia.ir_para_pagina(1)
        lista_cheia.clear_filters()
        assert lista_cheia.pagina == 0
        assert not lista_cheia.tem_filtros_ativos()
        assert len(lista_cheia.registros_filtrados()) == 25

    def test_ir_para_pagina_limita(self, lista_cheia):
        lista_cheia.ir_para_pagina(99)
        assert lista_cheia.pagina == 2
        lista_cheia.ir_para_pagina(-3)
        assert lista_cheia.pagina == 0

    def test_definir_tamanho_pagina(self, lista_cheia):
        lista_cheia.ir_para_pagina(2)
        lista_cheia.definir_tamanho_pagina(20)
        assert lista_cheia.pagina == 0
        assert lista_cheia.total_paginas() == 2
        with pytest.raises(ValueError):
            lista_cheia.definir_tamanho_pagina(0)

    def test_tamanho_invalido_no_construtor(self, cliente):
        with pytest.raises(ValueError):
            FilteredListView(cliente, PEDIDOS, tamanho_pagina=0)

    def test_buscar_por_id(self, lista_cheia):
        assert lista_cheia.buscar_por_id(7).numero_pedido == "P-007"
        assert lista_cheia.buscar_por_id(700) is None


# ═══════════════════════════════════════════════════════════
# ESCRITA
# ═══════════════════════════════════════════════════════════

class TestEscrita:

    def test_create_recarrega(self, sessao, lista_clientes):
        sessao.request.side_effect = [
            fazer_resposta(201, {"id": 3, "nome": "Carla", "cpf": "123"}),
            fazer_resposta(200, [{"id": 3, "nome": "Carla", "cpf": "123"}]),
        ]

        resposta = lista_clientes.create({"nome": "  Carla ", "cpf": "123"})

        assert resposta["id"] == 3
        assert _urls(sessao) == [("POST", f"{BASE_URL}/clientes/register"), ("GET", f"{BASE_URL}/clientes")]
        assert sessao.request.call_args_list[0].kwargs["json"] == {"nome": "Carla", "cpf": "123"}
        assert [c.nome for c in lista_clientes.registros] == ["Carla"]

    def test_create_invalido_nao_faz_requisicao(self, sessao, lista_clientes):
        with pytest.raises(ErroValidacao) as exc:
            lista_clientes.create({"nome": "", "cpf": "123", "email": "x@y"})
        assert "nome: obrigatório" in exc.value.mensagens
        assert "email: campo não permitido" in exc.value.mensagens
        sessao.request.assert_not_called()

    def test_create_com_falha_nao_recarrega(self, sessao, lista_clientes):
        sessao.request.return_value = fazer_resposta(200, [{"id": 1, "nome": "Ana"}])
        lista_clientes.load()
        sessao.request.reset_mock()
        sessao.request.return_value = fazer_resposta(409, {"error": "CPF já cadastrado"})

        with pytest.raises(ErroRemoto) as exc:
            lista_clientes.create({"nome": "Ana", "cpf": "1"})

        assert exc.value.mensagem == "CPF já cadastrado"
        assert sessao.request.call_count == 1
        assert [c.id for c in lista_clientes.registros] == [1]

    def test_update_usa_put_no_item(self, sessao, lista_clientes):
        sessao.request.side_effect = [
            fazer_resposta(200, {"id": 3}),
            fazer_resposta(200, []),
        ]
        lista_clientes.update(3, {"nome": "Carla", "cpf": "9"})
        assert _urls(sessao)[0] == ("PUT", f"{BASE_URL}/clientes/3")

    def test_remove_de_id_inexistente(self, sessao, lista_clientes):
        sessao.request.return_value = fazer_resposta(200, [{"id": 1, "nome": "Ana"}])
        lista_clientes.load()
        lista_clientes.set_filter("nome", "an")
        sessao.request.reset_mock()
        sessao.request.return_value = fazer_resposta(404, {"message": "Cliente não encontrado"})

        with pytest.raises(ErroRemoto) as exc:
            lista_clientes.remove(99)

        assert exc.value.status_code == 404
        assert _urls(sessao) == [("DELETE", f"{BASE_URL}/clientes/99")]
        assert [c.id for c in lista_clientes.registros] == [1]
        assert lista_clientes.criterios["nome"] == "an"
        assert lista_clientes.pagina == 0

    def test_remove_recarrega(self, sessao, lista_clientes):
        sessao.request.side_effect = [fazer_resposta(204), fazer_resposta(200, [])]
        assert lista_clientes.remove(1) is None
        assert _urls(sessao)[-1] == ("GET", f"{BASE_URL}/clientes")


class TestAcoesDePedido:

    @pytest.fixture
    def pedidos(self, cliente):
        return PedidosListView(cliente)

    def test_adicionar_atualizacao(self, sessao, pedidos):
        sessao.request.side_effect = [fazer_resposta(201, {"ok": True}), fazer_resposta(200, [])]
        pedidos.adicionar_atualizacao(5, "Cliente contatado")
        assert _urls(sessao) == [
            ("POST", f"{BASE_URL}/pedidos/5/atualizacoes"),
            ("GET", f"{BASE_URL}/pedidos"),
        ]
        assert sessao.request.call_args_list[0].kwargs["json"] == {"descricao": "Cliente contatado"}

    def test_atualizacao_vazia(self, sessao, pedidos):
        with pytest.raises(ErroValidacao):
            pedidos.adicionar_atualizacao(5, "   ")
        sessao.request.assert_not_called()

    def test_finalizar(self, sessao, pedidos):
        sessao.request.side_effect = [fazer_resposta(200, {}), fazer_resposta(200, [])]
        pedidos.finalizar(5, "Item reenviado")
        assert _urls(sessao)[0] == ("POST", f"{BASE_URL}/pedidos/5/finalizar")
        assert sessao.request.call_args_list[0].kwargs["json"] == {"resolucao": "Item reenviado"}

    def test_finalizar_sem_resolucao(self, sessao, pedidos):
        with pytest.raises(ErroValidacao) as exc:
            pedidos.finalizar(5, None)
        assert exc.value.mensagens == ["A resolução final é obrigatória."]
        sessao.request.assert_not_called()

    def test_finalizar_com_falha_nao_recarrega(self, sessao, pedidos):
        sessao.request.return_value = fazer_resposta(400, texto="Pedido já finalizado")
        with pytest.raises(ErroRemoto) as exc:
            pedidos.finalizar(5, "ok")
        assert exc.value.mensagem == "Pedido já finalizado"
        assert sessao.request.call_count == 1
