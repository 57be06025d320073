"""
Testes dos KPIs do Dashboard
============================
"""

import pandas as pd

from painel_backoffice.constants import PRIORIDADE_LABEL
from painel_backoffice.dashboard import calcular_kpis, contagem_por, pedidos_para_dataframe, pedidos_por_mes
from painel_backoffice.models import Pedido

from conftest import pedido_json


def _pedidos():
    return [
        Pedido.model_validate(pedido_json(1, "A", "ALTA", dataInicio="2024-01-15T10:00:00Z")),
        Pedido.model_validate(pedido_json(2, "B", "ALTA", situation="FINALIZADO", dataInicio="2024-01-20T10:00:00")),
        Pedido.model_validate(pedido_json(3, "C", "BAIXA", situation="ATRASADO", dataInicio="2024-02-02")),
        Pedido.model_validate(pedido_json(4, "D", "BAIXA", dataInicio=None)),
    ]


def test_dataframe_tem_uma_linha_por_pedido():
    df = pedidos_para_dataframe(_pedidos())
    assert len(df) == 4
    assert pd.api.types.is_datetime64_any_dtype(df["data_inicio"])
    assert df["data_inicio"].isna().sum() == 1


def test_dataframe_vazio():
    df = pedidos_para_dataframe([])
    assert df.empty
    assert list(df.columns)[:2] == ["id", "numero_pedido"]


def test_kpis():
    kpis = calcular_kpis(_pedidos(), clientes=[1, 2], lojas=[1], canais=[])
    assert kpis == {
        "total_pedidos": 4,
        "em_andamento": 2,
        "finalizados": 1,
        "atrasados": 1,
        "total_clientes": 2,
        "total_lojas": 1,
        "total_canais": 0,
    }


def test_contagem_por_prioridade_inclui_zeros():
    df = pedidos_para_dataframe(_pedidos())
    contagem = contagem_por(df, "prioridade", PRIORIDADE_LABEL)
    assert contagem["rotulo"].tolist() == ["Baixa", "Média", "Alta"]
    assert contagem["quantidade"].tolist() == [2, 0, 2]


def test_pedidos_por_mes():
    mensal = pedidos_por_mes(pedidos_para_dataframe(_pedidos()))
    assert mensal["mes"].tolist() == ["2024-01", "2024-02"]
    assert mensal["quantidade"].tolist() == [2, 1]
