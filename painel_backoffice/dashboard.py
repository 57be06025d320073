"""
Cálculo dos KPIs e séries do Dashboard (pandas), a partir das coleções carregadas.

- `pedidos_para_dataframe`: uma linha por pedido, datas já convertidas
- `calcular_kpis`: totais dos cartões do topo
- `contagem_por`: contagem por categoria na ordem declarada (inclui zeros)
- `pedidos_por_mes`: série mensal (AAAA-MM) pela data de início
"""

from typing import Dict, Iterable, Sequence

import pandas as pd

from .filtros import valor_do_registro
from .models import Situation
from .utils import parse_data

COLUNAS_PEDIDOS = [
    "id", "numero_pedido", "prioridade", "situacao", "situation",
    "cliente", "loja", "criado_por", "data_inicio", "data_atualizacao",
]


def _cru(valor):
    return getattr(valor, "value", valor)


def _data_naive(valor):
    dt = parse_data(valor)
    if dt is None:
        return pd.NaT
    # Mistura de datas com/sem fuso quebra a coluna; guardamos todas sem fuso
    return dt.replace(tzinfo=None)


def pedidos_para_dataframe(pedidos: Iterable) -> pd.DataFrame:
    linhas = []
    for p in pedidos:
        linhas.append({
            "id": p.id,
            "numero_pedido": p.numero_pedido,
            "prioridade": _cru(p.prioridade),
            "situacao": _cru(p.situacao),
            "situation": _cru(p.situation),
            "cliente": valor_do_registro(p, ("cliente", "nome")),
            "loja": valor_do_registro(p, ("loja", "nome")),
            "criado_por": valor_do_registro(p, ("criado_por", "nome")),
            "data_inicio": _data_naive(p.data_inicio),
            "data_atualizacao": _data_naive(p.data_atualizacao),
        })
    df = pd.DataFrame(linhas, columns=COLUNAS_PEDIDOS)
    df["data_inicio"] = pd.to_datetime(df["data_inicio"])
    df["data_atualizacao"] = pd.to_datetime(df["data_atualizacao"])
    return df


def calcular_kpis(pedidos: Sequence, clientes: Sequence, lojas: Sequence, canais: Sequence) -> Dict[str, int]:
    df = pedidos_para_dataframe(pedidos)
    andamento = df["situation"].value_counts()
    return {
        "total_pedidos": int(len(df)),
        "em_andamento": int(andamento.get(Situation.EM_ANDAMENTO.value, 0)),
        "finalizados": int(andamento.get(Situation.FINALIZADO.value, 0)),
        "atrasados": int(andamento.get(Situation.ATRASADO.value, 0)),
        "total_clientes": len(clientes),
        "total_lojas": len(lojas),
        "total_canais": len(canais),
    }


def contagem_por(df: pd.DataFrame, coluna: str, rotulos: Dict) -> pd.DataFrame:
    """Contagem de `coluna` na ordem de `rotulos` (valor -> rótulo), com zeros para valores ausentes."""
    contagem = df[coluna].value_counts()
    return pd.DataFrame({
        "rotulo": list(rotulos.values()),
        "quantidade": [int(contagem.get(_cru(valor), 0)) for valor in rotulos],
    })


def pedidos_por_mes(df: pd.DataFrame) -> pd.DataFrame:
    datas = df["data_inicio"].dropna()
    if datas.empty:
        return pd.DataFrame({"mes": [], "quantidade": []})
    serie = datas.dt.strftime("%Y-%m").value_counts().sort_index()
    return pd.DataFrame({"mes": serie.index.tolist(), "quantidade": serie.astype(int).tolist()})
