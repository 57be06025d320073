"""
Configuração de ambiente do painel (API remota, paginação, políticas da lista e logging).

Seções:
- Imports
- .env (carregamento de variáveis)
- API remota / HTTP
- Lista filtrada (paginação e políticas de carga)
- Datas
- Logging
"""

# ======================================================================================
# Imports
# ======================================================================================

import logging
import os

from dotenv import load_dotenv

# ======================================================================================
# .env — Carregamento de variáveis de ambiente
# ======================================================================================
load_dotenv()


def _env_bool(nome: str, padrao: str) -> bool:
    return os.getenv(nome, padrao).strip().lower() in ("1", "true", "sim", "yes", "on")


# ======================================================================================
# API remota / HTTP
# ======================================================================================
# Sem barra final: endpoints sempre começam com "/"
API_URL = os.getenv("API_URL", "http://localhost:3000").rstrip("/")
AUTH_PATH = os.getenv("AUTH_PATH", "/usuarios")

# 0 desliga o timeout local (fica valendo só o do transporte)
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", 10)) or None

# ======================================================================================
# Lista filtrada — paginação e políticas de carga
# ======================================================================================
PAGE_SIZE = int(os.getenv("PAGE_SIZE", 10))
TAMANHOS_PAGINA = [10, 20, 50, 100]

# Falha no load() descarta a lista exibida (comportamento do front original)
LIMPAR_LISTA_EM_FALHA = _env_bool("LIMPAR_LISTA_EM_FALHA", "1")

# Respostas de load() mais antigas que a última aplicada são ignoradas
DESCARTAR_CARGAS_OBSOLETAS = _env_bool("DESCARTAR_CARGAS_OBSOLETAS", "1")

# ======================================================================================
# Datas
# ======================================================================================
# Datas com fuso vindas da API são convertidas para este fuso antes do filtro por intervalo
FUSO_HORARIO = os.getenv("FUSO_HORARIO", "America/Sao_Paulo")

# ======================================================================================
# Logging
# ======================================================================================
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configurar_logging() -> None:
    """Configura o logging raiz uma única vez (chamado pelas páginas Streamlit)."""
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
