"""
Fixtures compartilhadas
=======================
Sessão HTTP falsa (Mock de requests.Session) e fábrica de respostas.
"""

import json
from unittest.mock import Mock

import pytest
import requests
from requests.cookies import RequestsCookieJar

from painel_backoffice.services import ApiClient

BASE_URL = "http://api.teste"


def fazer_resposta(status=200, corpo=None, texto=None):
    """Cria um requests.Response real com corpo JSON (`corpo`) ou texto cru (`texto`)."""
    resp = requests.Response()
    resp.status_code = status
    resp.encoding = "utf-8"
    if corpo is not None:
        resp._content = json.dumps(corpo).encode()
        resp.headers["content-type"] = "application/json; charset=utf-8"
    else:
        resp._content = (texto or "").encode()
        resp.headers["content-type"] = "text/plain"
    return resp


def pedido_json(id_, numero, prioridade="MEDIA", **extra):
    dados = {
        "id": id_,
        "numeroPedido": numero,
        "prioridade": prioridade,
        "situacao": "FALTANDO_ITEM",
        "situation": "EM_ANDAMENTO",
        "descricao": f"Pedido {numero}",
    }
    dados.update(extra)
    return dados


# ═══════════════════════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════════════════════

@pytest.fixture
def sessao():
    """requests.Session falso; os testes definem request.return_value / side_effect"""
    s = Mock(spec=requests.Session)
    s.cookies = RequestsCookieJar()
    s.headers = {}
    return s


@pytest.fixture
def cliente(sessao):
    return ApiClient(base_url=BASE_URL, sessao=sessao, timeout=5)


@pytest.fixture
def pedidos_json():
    return [
        pedido_json(1, "P-001", "BAIXA", cliente={"id": 1, "nome": "Ana Souza"}, dataInicio="2024-03-01T10:00:00"),
        pedido_json(2, "P-002", "ALTA", cliente={"id": 2, "nome": "Bruno Lima"}, dataInicio="2024-03-10T00:00:00"),
        pedido_json(3, "P-003", "MEDIA", cliente={"id": 1, "nome": "Ana Souza"}, dataInicio="data ruim"),
    ]
