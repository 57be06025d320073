"""
Erros do painel.

- `ErroTransporte`: a requisição não chegou ao servidor ou a resposta não voltou.
- `ErroRemoto`: o servidor respondeu com status fora de 2xx (pode trazer mensagem).
- `ErroValidacao`: payload inválido detectado localmente, antes de qualquer requisição.
- `CampoFiltroInvalido`: campo de filtro fora do conjunto fixo da entidade.
"""

from typing import List, Optional


class ErroPainel(Exception):
    """Base de todos os erros tratados pelas telas."""


class ErroApi(ErroPainel):
    """Falha em uma chamada à API remota."""


class ErroTransporte(ErroApi):
    pass


class ErroRemoto(ErroApi):
    def __init__(self, status_code: int, mensagem: Optional[str] = None):
        self.status_code = status_code
        self.mensagem = mensagem or f"Erro {status_code}"
        super().__init__(self.mensagem)


class ErroValidacao(ErroPainel, ValueError):
    def __init__(self, mensagens: List[str]):
        self.mensagens = list(mensagens)
        super().__init__("; ".join(self.mensagens))


class CampoFiltroInvalido(ErroPainel, KeyError):
    def __init__(self, campo: str, entidade: str):
        self.campo = campo
        self.entidade = entidade
        super().__init__(f"Campo de filtro '{campo}' não existe para {entidade}.")

    def __str__(self) -> str:
        return self.args[0]
