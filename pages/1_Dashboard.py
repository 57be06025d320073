"""
Página Streamlit — Dashboard de Pedidos

Seções:
- Imports e helpers visuais
- Configuração base da página + CSS
- Sessão (gate de acesso) e carga das coleções
- Cartões de KPI
- Gráficos (prioridade, motivo, andamento, tendência mensal)
"""

# ======================================================================================
# Imports e helpers visuais
# ======================================================================================
import html

import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from painel_backoffice.constants import PRIORIDADE_LABEL, SITUACAO_LABEL, SITUATION_LABEL
from painel_backoffice.dashboard import calcular_kpis, contagem_por, pedidos_para_dataframe, pedidos_por_mes
from ui_nav import garantir_sessao, obter_lista, render_menu_lateral


def render_metric_card(icon, label, value):
    st.markdown(
        f"""
        <div class="metric-card">
            <div class="metric-card-label">
                <span class="metric-card-icon">{icon}</span>
                {html.escape(str(label))}
            </div>
            <div class="metric-card-value">{html.escape(str(value))}</div>
        </div>
        """,
        unsafe_allow_html=True,
    )

# ======================================================================================
# Configuração base da página + CSS
# ======================================================================================
st.set_page_config(
    page_title="Dashboard de Pedidos",
    page_icon="📊",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.markdown(
    """
    <style>
    [data-testid='stSidebarNav']{display:none!important}
    .metric-card{ background:#fff; border-radius:12px; padding:16px; height:100px; border:1px solid rgba(148,163,184,.18); box-shadow:0 2px 4px rgba(0,0,0,.02); }
    .metric-card-label{ font-size:13px; color:#555; margin-bottom:8px; display:flex; align-items:center; }
    .metric-card-icon{ margin-right:8px; font-size:18px; }
    .metric-card-value{ font-size:24px; font-weight:700; color:#111; }
    </style>
    """,
    unsafe_allow_html=True,
)

# ======================================================================================
# Sessão e carga
# ======================================================================================
garantir_sessao()
render_menu_lateral(current_page="dashboard")

st.title("📊 Dashboard")
st.caption("Visão geral dos pedidos com problema e do cadastro do backoffice")

listas = {chave: obter_lista(chave) for chave in ("pedidos", "clientes", "lojas", "canais")}

if st.button("🔄 Recarregar dados"):
    for lista in listas.values():
        lista.load()

for lista in listas.values():
    if lista.erro:
        st.error(lista.erro)

pedidos = listas["pedidos"].registros
kpis = calcular_kpis(pedidos, listas["clientes"].registros, listas["lojas"].registros, listas["canais"].registros)
df = pedidos_para_dataframe(pedidos)

# ======================================================================================
# KPIs
# ======================================================================================
c1, c2, c3, c4 = st.columns(4)
with c1:
    render_metric_card("📦", "Total de pedidos", kpis["total_pedidos"])
with c2:
    render_metric_card("⏳", "Em andamento", kpis["em_andamento"])
with c3:
    render_metric_card("✅", "Finalizados", kpis["finalizados"])
with c4:
    render_metric_card("⚠️", "Atrasados", kpis["atrasados"])

c5, c6, c7 = st.columns(3)
with c5:
    render_metric_card("👤", "Clientes", kpis["total_clientes"])
with c6:
    render_metric_card("🏬", "Lojas", kpis["total_lojas"])
with c7:
    render_metric_card("🛒", "Canais", kpis["total_canais"])

if df.empty:
    st.info("Nenhum pedido carregado ainda.")
    st.stop()

# ======================================================================================
# Gráficos
# ======================================================================================
col_a, col_b = st.columns(2)
with col_a:
    with st.container(border=True):
        st.caption("🚦 Pedidos por prioridade")
        fig = px.bar(contagem_por(df, "prioridade", PRIORIDADE_LABEL), x="rotulo", y="quantidade", text_auto=True)
        fig.update_layout(margin=dict(l=10, r=10, t=20, b=10), height=320, xaxis_title=None, yaxis_title=None)
        st.plotly_chart(fig, use_container_width=True)

with col_b:
    with st.container(border=True):
        st.caption("📌 Andamento")
        fig = px.pie(contagem_por(df, "situation", SITUATION_LABEL), names="rotulo", values="quantidade", hole=0.5)
        fig.update_layout(margin=dict(l=10, r=10, t=20, b=10), height=320)
        st.plotly_chart(fig, use_container_width=True)

with st.container(border=True):
    st.caption("🧾 Pedidos por motivo")
    fig = px.bar(
        contagem_por(df, "situacao", SITUACAO_LABEL),
        x="quantidade", y="rotulo", orientation="h", text_auto=True,
    )
    fig.update_layout(margin=dict(l=10, r=10, t=20, b=10), height=380, xaxis_title=None, yaxis_title=None)
    st.plotly_chart(fig, use_container_width=True)

with st.container(border=True):
    st.caption("📈 Pedidos abertos por mês")
    mensal = pedidos_por_mes(df)
    fig_line = go.Figure()
    fig_line.add_trace(
        go.Scatter(
            x=mensal["mes"],
            y=mensal["quantidade"],
            mode="lines+markers",
            name="Pedidos",
        )
    )
    fig_line.update_layout(margin=dict(l=10, r=10, t=10, b=10), height=340, xaxis_title=None, yaxis_title="Pedidos")
    st.plotly_chart(fig_line, use_container_width=True)
