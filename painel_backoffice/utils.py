"""
Helpers utilitários usados pela lista filtrada e pelas telas.

- `parse_data`: converte ISO (com ou sem `Z`), `date` e `datetime`; inválido vira `None`
- `formatar_data`: `dd/mm/aaaa` ou "—"
- `mensagem_de_erro`: extrai a mensagem legível de uma resposta HTTP de erro
- `rotulo_*` / `nome_do_canal`: textos de exibição
"""

# ======================================================================================
# Imports
# ======================================================================================
from datetime import date, datetime
from typing import Any, Iterable, Optional

import requests

from .constants import PRIORIDADE_LABEL, SITUACAO_LABEL, SITUATION_LABEL, VAZIO

# ======================================================================================
# Datas
# ======================================================================================

def parse_data(valor: Any) -> Optional[datetime]:
    """Converte o valor para `datetime` ou devolve `None` se não for uma data válida.

    - `datetime` é devolvido como está; `date` vira meia-noite do dia.
    - Strings ISO aceitam sufixo `Z` (UTC), como as que a API envia.
    """
    if valor is None:
        return None
    if isinstance(valor, datetime):
        return valor
    if isinstance(valor, date):
        return datetime(valor.year, valor.month, valor.day)
    if not isinstance(valor, str):
        return None
    texto = valor.strip()
    if not texto:
        return None
    try:
        return datetime.fromisoformat(texto.replace("Z", "+00:00"))
    except ValueError:
        return None


def para_data(valor: Any) -> Optional[date]:
    """Normaliza o limite de um filtro de intervalo para `date` ("" / None -> None)."""
    if valor is None or valor == "":
        return None
    if isinstance(valor, datetime):
        return valor.date()
    if isinstance(valor, date):
        return valor
    dt = parse_data(valor)
    if dt is None:
        raise ValueError(f"Data inválida: {valor!r}")
    return dt.date()


def formatar_data(valor: Any) -> str:
    dt = parse_data(valor)
    if dt is None:
        return VAZIO
    return dt.strftime("%d/%m/%Y")

# ======================================================================================
# HTTP — mensagem de erro legível
# ======================================================================================

# Corpo de texto maior que isso (ex.: página de erro de proxy) não vira mensagem
LIMITE_MENSAGEM_TEXTO = 200


def mensagem_de_erro(resp: requests.Response) -> str:
    """Mensagem de uma resposta de erro.

    - JSON: campo `message`, `error` ou `detail`.
    - Texto puro curto: o próprio corpo.
    - Qualquer outra coisa (HTML, JSON sem mensagem, corpo vazio ou longo): `Erro <status>`.
    """
    tipo = (resp.headers.get("content-type") or "").lower()
    if "application/json" in tipo:
        try:
            corpo = resp.json()
        except ValueError:
            corpo = None
        if isinstance(corpo, dict):
            for chave in ("message", "error", "detail"):
                if corpo.get(chave):
                    return str(corpo[chave])
        return f"Erro {resp.status_code}"
    texto = (resp.text or "").strip()
    if texto and "html" not in tipo and not texto.startswith("<") and len(texto) <= LIMITE_MENSAGEM_TEXTO:
        return texto
    return f"Erro {resp.status_code}"

# ======================================================================================
# Rótulos de exibição
# ======================================================================================

def rotulo_prioridade(valor) -> str:
    return PRIORIDADE_LABEL.get(valor, str(valor)) if valor else VAZIO


def rotulo_situacao(valor) -> str:
    return SITUACAO_LABEL.get(valor, str(valor)) if valor else VAZIO


def rotulo_situation(valor) -> str:
    return SITUATION_LABEL.get(valor, str(valor)) if valor else VAZIO


def nome_do_canal(loja, canais: Iterable = ()) -> str:
    """Nome do canal da loja: embutido no registro, senão buscado na lista, senão `ID <n>`."""
    if loja.canal is not None and loja.canal.nome:
        return loja.canal.nome
    for canal in canais:
        if canal.id == loja.canal_id and canal.nome:
            return canal.nome
    return f"ID {loja.canal_id}"
