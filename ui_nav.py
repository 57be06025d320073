import html
import logging
from typing import Optional

import streamlit as st
from streamlit.errors import StreamlitAPIException

from painel_backoffice import config
from painel_backoffice.entidades import ENTIDADES
from painel_backoffice.erros import ErroPainel, ErroValidacao
from painel_backoffice.lista import FilteredListView, PedidosListView
from painel_backoffice.services import ApiClient, AuthService

config.configurar_logging()
logger = logging.getLogger(__name__)

# ============================
# Sessão (cliente HTTP com cookie)
# ============================
def obter_cliente() -> ApiClient:
    """Um ApiClient por sessão do Streamlit; o cookie de login vive no requests.Session dele."""
    if "api_client" not in st.session_state:
        st.session_state["api_client"] = ApiClient()
    return st.session_state["api_client"]

def obter_auth() -> AuthService:
    return AuthService(obter_cliente())

def usuario_logado():
    return st.session_state.get("usuario")

def _limpar_session():
    for k in ("logged_in", "usuario", "api_client", "listas", "flash_toast"):
        st.session_state.pop(k, None)

def fazer_login(email: str, senha: str) -> bool:
    try:
        usuario = obter_auth().login(email, senha)
    except ErroValidacao as e:
        st.warning(str(e))
        return False
    except ErroPainel as e:
        st.error(f"Não foi possível entrar: {e}")
        return False
    st.session_state["logged_in"] = True
    st.session_state["usuario"] = usuario
    return True

def fazer_logout():
    try:
        obter_auth().logout()
    finally:
        _limpar_session()

def garantir_sessao():
    """Gate das páginas internas: sem login volta para a Home."""
    if st.session_state.get("logged_in"):
        return usuario_logado()
    try:
        st.switch_page("Home.py")
    except StreamlitAPIException:
        st.warning("Faça login para acessar esta página.")
    st.stop()

# ============================
# Listas filtradas (uma por entidade e por sessão)
# ============================
def obter_lista(chave: str) -> FilteredListView:
    """Instância da lista da entidade; a primeira chamada já faz o load()."""
    listas = st.session_state.setdefault("listas", {})
    if chave not in listas:
        cliente = obter_cliente()
        lista = PedidosListView(cliente) if chave == "pedidos" else FilteredListView(cliente, ENTIDADES[chave])
        lista.load()
        listas[chave] = lista
    return listas[chave]

# ============================
# Feedback (toast pós-rerun / erros)
# ============================
def agendar_toast(mensagem: str):
    st.session_state["flash_toast"] = mensagem

def exibir_toast_pendente():
    if "flash_toast" in st.session_state:
        st.toast(st.session_state.pop("flash_toast"), icon="✅")

def mostrar_erro(acao: str, erro: Exception):
    """Notificação bloqueante de falha (validação local ou API)."""
    if isinstance(erro, ErroValidacao):
        st.warning(f"{acao}: " + "; ".join(erro.mensagens))
    else:
        st.error(f"❌ {acao}: {erro}")

def executar_acao(acao: str, func, *args, sucesso: Optional[str] = None):
    """Roda uma escrita da lista; sucesso agenda toast e reroda a página, falha mostra o erro."""
    try:
        func(*args)
    except ErroPainel as e:
        logger.info("Ação '%s' falhou: %s", acao, e)
        mostrar_erro(acao, e)
        return
    if sucesso:
        agendar_toast(sucesso)
    st.rerun()

# ============================
# Visual helpers (Sidebar Skin)
# ============================
def _menu_lateral_layout():
    st.markdown("""
    <style>
      [data-testid="stSidebarNav"] { display:none !important; }

      section[data-testid="stSidebar"], [data-testid="stSidebar"]{
        background:#18181b!important; min-width:260px!important; max-width:260px!important;
      }
      .sidebar-header{ padding:16px 16px 12px; }
      .sidebar-logo{ display:flex; align-items:center; gap:10px; margin-bottom:12px; }
      .sidebar-logo-img{
        width:34px; height:34px; border-radius:7px; display:flex; align-items:center; justify-content:center;
        background:#ec4899; color:#fff; font-weight:700; font-size:14px;
      }
      .sidebar-logo-text h3{ margin:0; font-size:14px; font-weight:600; color:#f4f4f5; }
      .sidebar-logo-text p{ margin:0; font-size:12px; color:#a1a1aa; }
      .sidebar-user{ display:flex; gap:10px; align-items:center; padding:10px; background:#27272a; border-radius:8px; }
      .sidebar-user img{ width:32px; height:32px; border-radius:50%; background:#fff; }
      .meta-label{ font-size:10.5px; color:#a1a1aa; text-transform:uppercase; letter-spacing:.02em; }
      .value-email{ font-size:13px; font-weight:600; color:#f4f4f5; word-break:break-all; }

      .nav-row.active [data-testid="stPageLink"] > a{ background:#ec4899 !important; color:#fff !important; }
    </style>
    """, unsafe_allow_html=True)

def _cabecalho_menu_lateral():
    usuario = usuario_logado()
    email_safe = html.escape(usuario.email if usuario else "—")
    avatar = html.escape(usuario.avatar) if usuario else ""

    st.markdown(
        f"""
        <div class="sidebar-header">
          <div class="sidebar-logo">
            <div class="sidebar-logo-img">BO</div>
            <div class="sidebar-logo-text"><h3>Backoffice</h3><p>Dashboard</p></div>
          </div>
          <div class="sidebar-user">
            {'<img src="' + avatar + '" alt="avatar" />' if avatar else ''}
            <div>
              <div class="meta-label">Usuário conectado</div>
              <div class="value-email">{email_safe}</div>
            </div>
          </div>
        </div>
        """,
        unsafe_allow_html=True,
    )

def _nav_link_pagina_navegacao(label: str, icon: str, page: str, active: bool=False):
    st.markdown(f'<div class="nav-row{" active" if active else ""}">', unsafe_allow_html=True)
    st.page_link(page, label=f"{icon} {label}", use_container_width=True)
    st.markdown('</div>', unsafe_allow_html=True)

def _nav_logout(label: str = "Sair"):
    if st.button(f"↩ {label}", key="logout_link_btn", use_container_width=True):
        fazer_logout()
        try:
            st.switch_page("Home.py")
        except StreamlitAPIException:
            st.rerun()

# ============================
# Sidebar / navegação (visual)
# ============================
def render_menu_lateral(current_page: str | None = None):
    with st.sidebar:
        _menu_lateral_layout()
        _cabecalho_menu_lateral()

        _nav_link_pagina_navegacao("Home", "🏠", "Home.py", active=(current_page == "home"))
        _nav_link_pagina_navegacao("Dashboard", "📊", "pages/1_Dashboard.py", active=(current_page == "dashboard"))
        _nav_link_pagina_navegacao("Pedidos", "📦", "pages/2_Pedidos.py", active=(current_page == "pedidos"))
        _nav_link_pagina_navegacao("Backoffice", "🗂️", "pages/3_Backoffice.py", active=(current_page == "backoffice"))

        _nav_logout("Sair")

# ============================
# Outros helpers
# ============================
def render_texto_literal(text: str | None):
    if not isinstance(text, str):
        text = "" if text is None else str(text)
    safe = html.escape(text)
    st.markdown(f"<div style='white-space:pre-wrap'>{safe}</div>", unsafe_allow_html=True)
