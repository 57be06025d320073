import html

import streamlit as st
from ui_nav import fazer_login, render_menu_lateral, usuario_logado

st.set_page_config(
    page_title="Backoffice • Pedidos",
    page_icon="📦",
    layout="wide",
    initial_sidebar_state="expanded",
)

# Esconde a navegação nativa
st.markdown(
    """
<style>
[data-testid="stSidebarNav"] { display: none !important; }
/* Somente o botão de SUBMIT do formulário */
[data-testid="stForm"] .stFormSubmitButton button,
[data-testid="stForm"] button[type="submit"]{
  background:#ec4899 !important;
  color:#FFFFFF !important;
  border:1px solid #ec4899 !important;
  border-radius:10px !important;
  box-shadow:none !important;
}
[data-testid="stForm"] .stFormSubmitButton button:hover,
[data-testid="stForm"] button[type="submit"]:hover{
  filter:brightness(0.92);
}
</style>
""",
    unsafe_allow_html=True,
)

st.session_state.setdefault("logged_in", False)

# Tela de login
if not st.session_state["logged_in"]:
    col1, col2, col3 = st.columns([1, 1.2, 1])
    with col2:
        st.markdown(
            "<h3 style='text-align:center; font-weight:600; margin:0px 0 12px;'>Backoffice de Pedidos</h3>",
            unsafe_allow_html=True
        )
        with st.container(border=True):
            st.header("Fazer Login")
            st.markdown("Entre com suas credenciais para acessar o painel")

            with st.form("login_form"):
                email = st.text_input("Email", placeholder="seu.email@empresa.com")
                senha = st.text_input("Senha", type="password", placeholder="Digite sua senha")
                entrar = st.form_submit_button("Entrar", use_container_width=True)
                if entrar and fazer_login(email, senha):
                    st.rerun()
    st.stop()

# A partir daqui: logado
render_menu_lateral(current_page="home")
usuario = usuario_logado()

st.markdown("""
<style>
.main-header h3{ font-weight:700; color:#333 !important; margin-bottom:0; font-size:2.4rem; }
.main-header p{ color:#ec4899 !important; font-weight:500; font-size:1rem; margin-bottom:2rem; }

.white-card{
    background-color:#FFFFFF !important;
    border-radius:12px;
    padding:24px;
    margin-bottom:24px;
    box-shadow:0 4px 12px rgba(0,0,0,0.05);
    border:1px solid #E0E0E0;
}
.info-card{ border-left:4px solid #ec4899; }
.info-text{ color:#555 !important; font-size:1rem; line-height:1.6; }
</style>
""", unsafe_allow_html=True)

st.markdown(f"""
    <div class="main-header">
        <h3>Olá, {html.escape(usuario.nome if usuario else "")}</h3>
        <p>Acompanhe pedidos com problema, clientes, lojas e canais de venda</p>
    </div>
""", unsafe_allow_html=True)

st.markdown("""
    <div class="white-card info-card">
        <p class="info-text">
            Use o <strong>Dashboard</strong> para a visão geral dos pedidos, a tela de <strong>Pedidos</strong>
            para filtrar, registrar atualizações e finalizar chamados, e o <strong>Backoffice</strong>
            para manter clientes, lojas e canais.
        </p>
    </div>
""", unsafe_allow_html=True)

col1, col2, col3 = st.columns(3)
with col1:
    st.page_link("pages/1_Dashboard.py", label="📊 Dashboard", use_container_width=True)
with col2:
    st.page_link("pages/2_Pedidos.py", label="📦 Pedidos", use_container_width=True)
with col3:
    st.page_link("pages/3_Backoffice.py", label="🗂️ Backoffice", use_container_width=True)
