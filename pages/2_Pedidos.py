"""
Página Streamlit — Pedidos

Seções:
- Setup da página e Segurança/Navegação
- Filtros (ligados à lista filtrada por callbacks)
- Tabela paginada
- Detalhe do pedido + diálogos (atualização / finalização)
- Cadastro (novo pedido / novo cliente)

Notas:
- Os widgets de filtro só chamam `set_filter` quando mudam (on_change),
  então a página atual sobrevive aos reruns do Streamlit.
"""

# ======================================================================================
# Imports e Setup visual
# ======================================================================================
import pandas as pd
import streamlit as st

from painel_backoffice import config
from painel_backoffice.constants import PRIORIDADE_LABEL, PRIORIDADES, SITUACAO_LABEL, SITUACOES, VAZIO
from painel_backoffice.filtros import TipoFiltro, valor_do_registro
from painel_backoffice.models import Situation
from painel_backoffice.utils import formatar_data, rotulo_prioridade, rotulo_situacao, rotulo_situation
from ui_nav import (
    executar_acao,
    exibir_toast_pendente,
    garantir_sessao,
    obter_lista,
    render_menu_lateral,
    render_texto_literal,
)

st.set_page_config(page_title="Pedidos", page_icon="📦", layout="wide")
st.markdown(
    """
<style>
[data-testid="stSidebarNav"]{display:none!important}
.stButton > button { height: 44px; padding: 0 16px; border-radius: 10px; }
</style>
""",
    unsafe_allow_html=True,
)

# ======================================================================================
# Segurança / Navegação
# ======================================================================================
garantir_sessao()
render_menu_lateral(current_page="pedidos")
exibir_toast_pendente()

st.title("📦 Pedidos")
st.caption("Pedidos com problema: filtre, acompanhe e finalize")

pedidos = obter_lista("pedidos")
clientes = obter_lista("clientes")
lojas = obter_lista("lojas")

# ======================================================================================
# Filtros
# ======================================================================================
def _chave_widget(campo: str) -> str:
    return f"filtro_pedidos_{campo}"


def _ao_mudar_filtro(campo: str):
    valor = st.session_state[_chave_widget(campo)]
    if pedidos.entidade.campo(campo).tipo is TipoFiltro.INTERVALO:
        # date_input devolve (), (de,) ou (de, ate) enquanto o usuário escolhe
        valor = tuple(valor) + (None,) * (2 - len(valor))
    pedidos.set_filter(campo, valor)


def _limpar_filtros():
    pedidos.clear_filters()
    for campo in pedidos.entidade.campos_filtro:
        st.session_state.pop(_chave_widget(campo.nome), None)


def _rotulo_opcao(campo: str):
    rotulos = {"prioridade": PRIORIDADE_LABEL, "situacao": SITUACAO_LABEL}[campo]
    return lambda v: "Todos" if v == "" else rotulos.get(v, v)


with st.container(border=True):
    f1, f2, f3, f4 = st.columns(4)
    with f1:
        st.text_input("Nº Pedido", key=_chave_widget("numero_pedido"),
                      on_change=_ao_mudar_filtro, args=("numero_pedido",))
    with f2:
        st.selectbox("Prioridade", [""] + [p.value for p in PRIORIDADES], key=_chave_widget("prioridade"),
                     format_func=_rotulo_opcao("prioridade"), on_change=_ao_mudar_filtro, args=("prioridade",))
    with f3:
        st.selectbox("Motivo", [""] + [s.value for s in SITUACOES], key=_chave_widget("situacao"),
                     format_func=_rotulo_opcao("situacao"), on_change=_ao_mudar_filtro, args=("situacao",))
    with f4:
        st.text_input("Cliente", key=_chave_widget("cliente"),
                      on_change=_ao_mudar_filtro, args=("cliente",))

    f5, f6, f7, f8 = st.columns(4)
    with f5:
        st.text_input("Loja", key=_chave_widget("loja"), on_change=_ao_mudar_filtro, args=("loja",))
    with f6:
        st.text_input("Criado por", key=_chave_widget("criado_por"),
                      on_change=_ao_mudar_filtro, args=("criado_por",))
    with f7:
        st.date_input("Data de início (de / até)", value=(), key=_chave_widget("data_inicio"),
                      format="DD/MM/YYYY", on_change=_ao_mudar_filtro, args=("data_inicio",))
    with f8:
        st.date_input("Última atualização (de / até)", value=(), key=_chave_widget("data_atualizacao"),
                      format="DD/MM/YYYY", on_change=_ao_mudar_filtro, args=("data_atualizacao",))

    b1, b2, _ = st.columns([1, 1, 4])
    with b1:
        st.button("Limpar filtros", on_click=_limpar_filtros, disabled=not pedidos.tem_filtros_ativos(),
                  use_container_width=True)
    with b2:
        if st.button("🔄 Recarregar", use_container_width=True):
            pedidos.load()

if pedidos.erro:
    st.error(pedidos.erro)

# ======================================================================================
# Tabela paginada
# ======================================================================================
filtrados = pedidos.registros_filtrados()
visiveis = pedidos.visible_records()

linhas = [
    {
        "ID": p.id,
        "Nº Pedido": p.numero_pedido or VAZIO,
        "Prioridade": rotulo_prioridade(p.prioridade),
        "Motivo": rotulo_situacao(p.situacao),
        "Andamento": rotulo_situation(p.situation),
        "Cliente": valor_do_registro(p, ("cliente", "nome")) or VAZIO,
        "Loja": valor_do_registro(p, ("loja", "nome")) or VAZIO,
        "Criado por": valor_do_registro(p, ("criado_por", "nome")) or VAZIO,
        "Início": formatar_data(p.data_inicio),
        "Atualização": formatar_data(p.data_atualizacao),
    }
    for p in visiveis
]

st.caption(f"{len(filtrados)} de {len(pedidos.registros)} pedido(s)")
if linhas:
    st.dataframe(pd.DataFrame(linhas), use_container_width=True, hide_index=True)
else:
    st.info("Nenhum pedido encontrado.")

p1, p2, p3, p4 = st.columns([1, 2, 1, 2], vertical_alignment="center")
with p1:
    if st.button("◀ Anterior", disabled=pedidos.pagina <= 0, use_container_width=True):
        pedidos.ir_para_pagina(pedidos.pagina - 1)
        st.rerun()
with p2:
    st.markdown(
        f"<div style='text-align:center'>Página {pedidos.pagina + 1} de {pedidos.total_paginas()}</div>",
        unsafe_allow_html=True,
    )
with p3:
    if st.button("Próxima ▶", disabled=pedidos.pagina >= pedidos.total_paginas() - 1, use_container_width=True):
        pedidos.ir_para_pagina(pedidos.pagina + 1)
        st.rerun()
with p4:
    tamanho = st.selectbox(
        "Por página", config.TAMANHOS_PAGINA,
        index=config.TAMANHOS_PAGINA.index(pedidos.tamanho_pagina) if pedidos.tamanho_pagina in config.TAMANHOS_PAGINA else 0,
        label_visibility="collapsed",
    )
    if tamanho != pedidos.tamanho_pagina:
        pedidos.definir_tamanho_pagina(tamanho)
        st.rerun()

# ======================================================================================
# Detalhe + diálogos
# ======================================================================================
@st.dialog("Adicionar atualização")
def _dialogo_atualizacao(id_pedido: int):
    descricao = st.text_area("Descrição da atualização")
    if st.button("Salvar", type="primary"):
        executar_acao("Adicionar atualização", pedidos.adicionar_atualizacao, id_pedido, descricao,
                      sucesso="Atualização registrada.")


@st.dialog("Finalizar pedido")
def _dialogo_finalizacao(id_pedido: int):
    resolucao = st.text_area("Resolução final")
    if st.button("Finalizar", type="primary"):
        executar_acao("Finalizar pedido", pedidos.finalizar, id_pedido, resolucao,
                      sucesso="Pedido finalizado.")


if visiveis:
    st.subheader("Detalhe do pedido")
    sel = st.selectbox(
        "Pedido", [p.id for p in visiveis],
        format_func=lambda i: f"#{i} · {pedidos.buscar_por_id(i).numero_pedido or VAZIO}",
    )
    pedido = pedidos.buscar_por_id(sel)
    if pedido is not None:
        with st.container(border=True):
            d1, d2, d3 = st.columns(3)
            with d1:
                st.write(f"**Nº Pedido:** {pedido.numero_pedido or VAZIO}")
                st.write(f"**Nº Chamado:** {pedido.numero_chamado or VAZIO}")
                st.write(f"**Nº JIT:** {pedido.numero_jit or VAZIO}")
            with d2:
                st.write(f"**Prioridade:** {rotulo_prioridade(pedido.prioridade)}")
                st.write(f"**Motivo:** {rotulo_situacao(pedido.situacao)}")
                st.write(f"**Andamento:** {rotulo_situation(pedido.situation)}")
            with d3:
                st.write(f"**Início:** {formatar_data(pedido.data_inicio)}")
                st.write(f"**Atualização:** {formatar_data(pedido.data_atualizacao)}")
                st.write(f"**Finalização:** {formatar_data(pedido.data_finalizacao)}")
            st.write("**Descrição**")
            render_texto_literal(pedido.descricao)
            if pedido.resolucao:
                st.write("**Resolução**")
                render_texto_literal(pedido.resolucao)

            finalizado = pedido.situation == Situation.FINALIZADO
            a1, a2, _ = st.columns([1, 1, 3])
            with a1:
                if st.button("📝 Adicionar atualização", disabled=finalizado, use_container_width=True):
                    _dialogo_atualizacao(pedido.id)
            with a2:
                if st.button("✅ Finalizar", disabled=finalizado, use_container_width=True):
                    _dialogo_finalizacao(pedido.id)

# ======================================================================================
# Cadastro
# ======================================================================================
tab_pedido, tab_cliente = st.tabs(["Novo pedido", "Novo cliente"])

with tab_pedido:
    opcoes_cliente = {c.id: c.nome or f"ID {c.id}" for c in clientes.registros}
    opcoes_loja = {l.id: l.nome or f"ID {l.id}" for l in lojas.registros}
    if not opcoes_cliente or not opcoes_loja:
        st.info("Cadastre ao menos um cliente e uma loja antes de abrir pedidos.")
    with st.form("form_novo_pedido", clear_on_submit=True):
        c1, c2, c3 = st.columns(3)
        with c1:
            numero_pedido = st.text_input("Nº Pedido *")
        with c2:
            numero_chamado = st.text_input("Nº Chamado")
        with c3:
            numero_jit = st.text_input("Nº JIT")
        c4, c5, c6, c7 = st.columns(4)
        with c4:
            prioridade = st.selectbox("Prioridade", PRIORIDADES, index=1, format_func=rotulo_prioridade)
        with c5:
            situacao = st.selectbox("Motivo", SITUACOES, index=len(SITUACOES) - 1, format_func=rotulo_situacao)
        with c6:
            cliente_id = st.selectbox("Cliente *", list(opcoes_cliente), format_func=opcoes_cliente.get)
        with c7:
            loja_id = st.selectbox("Loja *", list(opcoes_loja), format_func=opcoes_loja.get)
        descricao = st.text_area("Descrição *")
        if st.form_submit_button("Criar pedido", use_container_width=True):
            executar_acao(
                "Criar pedido", pedidos.create,
                {
                    "numero_pedido": numero_pedido,
                    "numero_chamado": numero_chamado or None,
                    "numero_jit": numero_jit or None,
                    "descricao": descricao,
                    "prioridade": prioridade,
                    "situacao": situacao,
                    "cliente_id": cliente_id or 0,
                    "loja_id": loja_id or 0,
                },
                sucesso="Pedido criado.",
            )

with tab_cliente:
    with st.form("form_novo_cliente", clear_on_submit=True):
        nome = st.text_input("Nome *")
        cpf = st.text_input("CPF *")
        if st.form_submit_button("Cadastrar cliente", use_container_width=True):
            executar_acao("Cadastrar cliente", clientes.create, {"nome": nome, "cpf": cpf},
                          sucesso="Cliente cadastrado.")
