"""
Página Streamlit — Backoffice (Clientes, Lojas, Canais)

Seções:
- Setup da página e Segurança/Navegação
- Helpers comuns (busca, tabela, exclusão)
- Tab 1: Clientes
- Tab 2: Lojas
- Tab 3: Canais
"""

# ======================================================================================
# Imports e Setup visual
# ======================================================================================
import pandas as pd
import streamlit as st

from painel_backoffice.constants import VAZIO
from painel_backoffice.utils import nome_do_canal
from ui_nav import executar_acao, exibir_toast_pendente, garantir_sessao, obter_lista, render_menu_lateral

st.set_page_config(page_title="Backoffice", page_icon="🗂️", layout="wide")
st.markdown("<style>[data-testid='stSidebarNav']{display:none!important}</style>", unsafe_allow_html=True)

garantir_sessao()
render_menu_lateral(current_page="backoffice")
exibir_toast_pendente()

st.title("🗂️ Backoffice")
st.caption("Cadastro de clientes, lojas e canais de venda")

clientes = obter_lista("clientes")
lojas = obter_lista("lojas")
canais = obter_lista("canais")

# ======================================================================================
# Helpers comuns
# ======================================================================================
def _busca(lista, campo: str, rotulo: str):
    """Campo de busca ligado a um filtro de texto da lista (só reaplica quando muda)."""
    chave = f"busca_{lista.entidade.chave}_{campo}"

    def _ao_mudar():
        lista.set_filter(campo, st.session_state[chave])

    st.text_input(rotulo, key=chave, on_change=_ao_mudar)


def _tabela(lista, linhas):
    if lista.erro:
        st.error(lista.erro)
    if not linhas:
        st.info(f"Nenhum(a) {lista.entidade.rotulo} encontrado(a).")
        return
    st.dataframe(pd.DataFrame(linhas), use_container_width=True, hide_index=True)
    pag_a, pag_b, pag_c = st.columns([1, 2, 1], vertical_alignment="center")
    chave = lista.entidade.chave
    with pag_a:
        if st.button("◀", key=f"ant_{chave}", disabled=lista.pagina <= 0, use_container_width=True):
            lista.ir_para_pagina(lista.pagina - 1)
            st.rerun()
    with pag_b:
        st.caption(f"Página {lista.pagina + 1} de {lista.total_paginas()}")
    with pag_c:
        if st.button("▶", key=f"prox_{chave}", disabled=lista.pagina >= lista.total_paginas() - 1,
                     use_container_width=True):
            lista.ir_para_pagina(lista.pagina + 1)
            st.rerun()


def _seletor_registro(lista, rotulo_de):
    """Selectbox "novo ou existente"; devolve o registro escolhido ou None."""
    opcoes = [None] + [r.id for r in lista.registros]
    sel = st.selectbox(
        f"Editar {lista.entidade.rotulo}", opcoes,
        key=f"sel_{lista.entidade.chave}",
        format_func=lambda i: f"➕ Novo(a) {lista.entidade.rotulo}" if i is None else rotulo_de(lista.buscar_por_id(i)),
    )
    return lista.buscar_por_id(sel) if sel is not None else None


def _excluir(lista, registro, descricao: str):
    with st.popover(f"🗑️ Excluir — {descricao}", use_container_width=True):
        st.write("Essa ação é irreversível.")
        colx1, colx2 = st.columns([1, 1])
        with colx1:
            if st.button("Cancelar", key=f"cancel_{lista.entidade.chave}_{registro.id}"):
                st.rerun()
        with colx2:
            if st.button("Excluir", type="primary", key=f"del_{lista.entidade.chave}_{registro.id}"):
                st.session_state.pop(f"sel_{lista.entidade.chave}", None)
                executar_acao(f"Excluir {lista.entidade.rotulo}", lista.remove, registro.id,
                              sucesso=f"{descricao} excluído(a).")


def _salvar(lista, registro, payload: dict):
    if registro is None:
        executar_acao(f"Cadastrar {lista.entidade.rotulo}", lista.create, payload,
                      sucesso=f"{lista.entidade.rotulo.capitalize()} cadastrado(a).")
    else:
        executar_acao(f"Atualizar {lista.entidade.rotulo}", lista.update, registro.id, payload,
                      sucesso=f"{lista.entidade.rotulo.capitalize()} atualizado(a).")

# ======================================================================================
# Tabs
# ======================================================================================
tab_clientes, tab_lojas, tab_canais = st.tabs(["Clientes", "Lojas", "Canais"])

# ======================================================================================
# ABA 1 — CLIENTES
# ======================================================================================
with tab_clientes:
    c1, c2 = st.columns(2)
    with c1:
        _busca(clientes, "nome", "Buscar por nome")
    with c2:
        _busca(clientes, "cpf", "Buscar por CPF")

    _tabela(clientes, [{"ID": c.id, "Nome": c.nome or VAZIO, "CPF": c.cpf or VAZIO} for c in clientes.visible_records()])

    st.divider()
    alvo = _seletor_registro(clientes, lambda c: f"#{c.id} · {c.nome or VAZIO}")
    with st.form("form_cliente"):
        nome = st.text_input("Nome *", value=(alvo.nome or "") if alvo else "")
        cpf = st.text_input("CPF *", value=(alvo.cpf or "") if alvo else "")
        if st.form_submit_button("Salvar", use_container_width=True):
            _salvar(clientes, alvo, {"nome": nome, "cpf": cpf})
    if alvo is not None:
        _excluir(clientes, alvo, alvo.nome or f"#{alvo.id}")

# ======================================================================================
# ABA 2 — LOJAS
# ======================================================================================
with tab_lojas:
    c1, c2 = st.columns(2)
    with c1:
        _busca(lojas, "nome", "Buscar por nome")
    with c2:
        _busca(lojas, "canal", "Buscar por canal")

    _tabela(lojas, [
        {"ID": l.id, "Nome": l.nome or VAZIO, "Canal": nome_do_canal(l, canais.registros)}
        for l in lojas.visible_records()
    ])

    st.divider()
    alvo = _seletor_registro(lojas, lambda l: f"#{l.id} · {l.nome or VAZIO}")
    opcoes_canal = {c.id: c.nome or f"ID {c.id}" for c in canais.registros}
    if not opcoes_canal:
        st.info("Cadastre um canal antes de criar lojas.")
    with st.form("form_loja"):
        nome = st.text_input("Nome *", value=(alvo.nome or "") if alvo else "")
        ids_canal = list(opcoes_canal)
        canal_id = st.selectbox(
            "Canal *", ids_canal,
            index=ids_canal.index(alvo.canal_id) if alvo and alvo.canal_id in ids_canal else 0,
            format_func=opcoes_canal.get,
        )
        if st.form_submit_button("Salvar", use_container_width=True):
            _salvar(lojas, alvo, {"nome": nome, "canal_id": canal_id or 0})
    if alvo is not None:
        _excluir(lojas, alvo, alvo.nome or f"#{alvo.id}")

# ======================================================================================
# ABA 3 — CANAIS
# ======================================================================================
with tab_canais:
    c1, c2 = st.columns(2)
    with c1:
        _busca(canais, "nome", "Buscar por nome")
    with c2:
        _busca(canais, "descricao", "Buscar por descrição")

    _tabela(canais, [
        {"ID": c.id, "Nome": c.nome or VAZIO, "Descrição": c.descricao or VAZIO, "Lojas": len(c.lojas)}
        for c in canais.visible_records()
    ])

    st.divider()
    alvo = _seletor_registro(canais, lambda c: f"#{c.id} · {c.nome or VAZIO}")
    with st.form("form_canal"):
        nome = st.text_input("Nome *", value=(alvo.nome or "") if alvo else "")
        descricao = st.text_area("Descrição", value=(alvo.descricao or "") if alvo else "")
        if st.form_submit_button("Salvar", use_container_width=True):
            _salvar(canais, alvo, {"nome": nome, "descricao": descricao or None})
    if alvo is not None:
        _excluir(canais, alvo, alvo.nome or f"#{alvo.id}")
