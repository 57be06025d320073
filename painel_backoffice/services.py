"""
Serviços de acesso à API remota: cliente HTTP com sessão (cookie) e autenticação.

Seções
- Imports
- Sessão HTTP
- ApiClient — GET/POST/PUT/DELETE com tradução de erros
- AuthService — login/logout por cookie de sessão

Notas:
- O cookie de sessão fica no `requests.Session` do cliente; quem usa o cliente
  não inspeciona nem gerencia a credencial.
- Sem retry automático: cada falha é terminal para aquela chamada.
"""

# ======================================================================================
# Imports
# ======================================================================================
import logging
from typing import Any, Optional
from urllib.parse import quote

import requests
from pydantic import ValidationError

from . import config
from .erros import ErroRemoto, ErroTransporte, ErroValidacao
from .models import LoginIn, UsuarioSessao
from .utils import mensagem_de_erro

logger = logging.getLogger(__name__)

# ======================================================================================
# Sessão HTTP
# ======================================================================================

def criar_sessao() -> requests.Session:
    sessao = requests.Session()
    sessao.headers.update({"Accept": "application/json"})
    return sessao

# ======================================================================================
# ApiClient
# ======================================================================================
class ApiClient:
    """Cliente da API do backoffice (um por usuário logado).

    Todas as chamadas levam o cookie guardado em `self.sessao`.
    Status fora de 2xx vira `ErroRemoto`; falha de rede vira `ErroTransporte`.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        sessao: Optional[requests.Session] = None,
        timeout: Optional[float] = config.HTTP_TIMEOUT,
    ):
        self.base_url = (base_url or config.API_URL).rstrip("/")
        self.sessao = sessao if sessao is not None else criar_sessao()
        self.timeout = timeout

    def _url(self, path: str) -> str:
        if path.startswith("http"):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    def _requisitar(self, method: str, path: str, **kw) -> requests.Response:
        url = self._url(path)
        kw.setdefault("timeout", self.timeout)
        try:
            resp = self.sessao.request(method, url, **kw)
        except requests.RequestException as e:
            raise ErroTransporte(f"Falha de comunicação com a API ({method} {path}): {e}") from e
        if not 200 <= resp.status_code < 300:
            raise ErroRemoto(resp.status_code, mensagem_de_erro(resp))
        return resp

    @staticmethod
    def _json(resp: requests.Response) -> Any:
        """Corpo JSON da resposta; corpo vazio ou não-JSON devolve None."""
        try:
            return resp.json()
        except ValueError:
            return None

    @staticmethod
    def _caminho_item(endpoint: str, id_registro) -> str:
        return f"{endpoint.rstrip('/')}/{quote(str(id_registro), safe='')}"

    # -------- CRUD genérico --------

    def listar(self, endpoint: str) -> list:
        resp = self._requisitar("GET", endpoint)
        dados = self._json(resp)
        if dados is None:
            return []
        if not isinstance(dados, list):
            raise ErroRemoto(resp.status_code, f"Resposta inesperada de {endpoint}: esperado uma lista.")
        return dados

    def criar(self, endpoint: str, payload: dict) -> Any:
        return self._json(self._requisitar("POST", endpoint, json=payload))

    def atualizar(self, endpoint: str, id_registro, payload: dict) -> Any:
        return self._json(self._requisitar("PUT", self._caminho_item(endpoint, id_registro), json=payload))

    def remover(self, endpoint: str, id_registro) -> Any:
        return self._json(self._requisitar("DELETE", self._caminho_item(endpoint, id_registro)))

    def enviar(self, path: str, payload: Optional[dict] = None) -> Any:
        """POST de ação (ex.: `/pedidos/<id>/finalizar`)."""
        return self._json(self._requisitar("POST", path, json=payload))

# ======================================================================================
# AuthService (login/logout por cookie)
# ======================================================================================
class AuthService:
    AVATAR_URL = "https://api.dicebear.com/9.x/identicon/svg?seed="

    def __init__(self, cliente: ApiClient, auth_path: str = config.AUTH_PATH):
        self.cliente = cliente
        self.auth_path = "/" + auth_path.strip("/")

    def login(self, email: str, senha: str) -> UsuarioSessao:
        """Autentica e devolve o usuário local; o cookie httpOnly fica na sessão do cliente.

        - Email/senha vazios: `ErroValidacao` (nenhuma requisição é feita).
        - Credenciais recusadas: `ErroRemoto` com a mensagem do backend ou "Credenciais inválidas".
        """
        try:
            dados = LoginIn(email=email, senha=senha)
        except ValidationError as e:
            raise ErroValidacao(["Informe email e senha."]) from e

        try:
            self.cliente.enviar(f"{self.auth_path}/login", dados.para_api())
        except ErroRemoto as e:
            mensagem = e.mensagem if e.mensagem != f"Erro {e.status_code}" else "Credenciais inválidas"
            logger.warning("Login recusado para %s (status %s)", dados.email, e.status_code)
            raise ErroRemoto(e.status_code, mensagem) from e

        logger.info("Login efetuado: %s", dados.email)
        return UsuarioSessao(
            nome=dados.email.split("@")[0],
            email=dados.email,
            avatar=self.AVATAR_URL + quote(dados.email, safe=""),
        )

    def logout(self) -> None:
        """Encerra a sessão no backend; mesmo se falhar, os cookies locais são descartados."""
        try:
            self.cliente.enviar(f"{self.auth_path}/logout")
        except (ErroRemoto, ErroTransporte) as e:
            logger.warning("Falha ao sair: %s", e)
        finally:
            self.cliente.sessao.cookies.clear()
