"""
Filtros e paginação em memória (funções puras).

Seções:
- Tipos de campo (texto / exato / intervalo de datas)
- Leitura de valores do registro
- Predicados por tipo de campo
- Aplicação dos critérios (AND) e paginação

Regras:
- Critério vazio/ausente não restringe nada.
- Registro sem valor nunca passa em um critério preenchido.
- Todos os critérios ativos precisam ser satisfeitos (AND); a ordem original é mantida.
"""

# ======================================================================================
# Imports
# ======================================================================================
import enum
import math
from dataclasses import dataclass, field
from datetime import date, datetime, time, tzinfo
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple
from zoneinfo import ZoneInfo

from . import config
from .utils import para_data, parse_data

# ======================================================================================
# Tipos de campo
# ======================================================================================
class TipoFiltro(str, enum.Enum):
    TEXTO = "texto"
    EXATO = "exato"
    INTERVALO = "intervalo"


@dataclass(frozen=True)
class IntervaloDatas:
    """Limites opcionais de um filtro de data (dias inteiros, inclusivos)."""
    de: Optional[date] = None
    ate: Optional[date] = None

    @property
    def vazio(self) -> bool:
        return self.de is None and self.ate is None

    @classmethod
    def de_valor(cls, valor: Any) -> "IntervaloDatas":
        """Aceita `IntervaloDatas`, tupla/lista `(de, ate)`, dict `{"de", "ate"}` ou vazio."""
        if valor is None or valor == "":
            return cls()
        if isinstance(valor, IntervaloDatas):
            return cls(para_data(valor.de), para_data(valor.ate))
        if isinstance(valor, dict):
            return cls(para_data(valor.get("de")), para_data(valor.get("ate")))
        if isinstance(valor, (tuple, list)) and len(valor) == 2:
            return cls(para_data(valor[0]), para_data(valor[1]))
        raise ValueError(f"Intervalo de datas inválido: {valor!r}")


@dataclass(frozen=True)
class CampoFiltro:
    nome: str
    tipo: TipoFiltro
    # Caminho de atributos no registro, ex.: ("cliente", "nome")
    caminho: Tuple[str, ...]
    rotulo: str = ""
    opcoes: Tuple[Any, ...] = field(default_factory=tuple)

    def vazio(self) -> Any:
        return IntervaloDatas() if self.tipo is TipoFiltro.INTERVALO else ""

    def normalizar(self, valor: Any) -> Any:
        """Converte o valor digitado para a forma guardada nos critérios."""
        if self.tipo is TipoFiltro.INTERVALO:
            return IntervaloDatas.de_valor(valor)
        if valor is None:
            return ""
        if self.tipo is TipoFiltro.EXATO:
            valor = _valor_cru(valor)
            if valor != "" and self.opcoes and valor not in {_valor_cru(o) for o in self.opcoes}:
                raise ValueError(f"Valor '{valor}' não é opção de '{self.nome}'.")
            return valor
        return str(valor)

# ======================================================================================
# Leitura de valores do registro
# ======================================================================================

def _field(obj, name: str):
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def valor_do_registro(registro: Any, caminho: Sequence[str]) -> Any:
    """Segue o caminho de atributos/chaves; qualquer elo ausente devolve `None`."""
    atual = registro
    for parte in caminho:
        if atual is None:
            return None
        atual = _field(atual, parte)
    return atual


def _valor_cru(valor: Any) -> Any:
    return valor.value if isinstance(valor, enum.Enum) else valor

# ======================================================================================
# Predicados
# ======================================================================================

def contem_texto(valor: Any, filtro: Optional[str]) -> bool:
    if not filtro:
        return True
    if valor is None:
        return False
    return filtro.lower() in str(_valor_cru(valor)).lower()


def igual_exato(valor: Any, filtro: Any) -> bool:
    filtro = _valor_cru(filtro)
    if filtro is None or filtro == "":
        return True
    if valor is None:
        return False
    return _valor_cru(valor) == filtro


def _fuso_padrao() -> tzinfo:
    return ZoneInfo(config.FUSO_HORARIO)


def dentro_do_intervalo(valor: Any, intervalo: IntervaloDatas, fuso: Optional[tzinfo] = None) -> bool:
    """`de` vale a partir de 00:00 e `ate` até o fim do dia (23:59:59.999999).

    Datas com fuso são levadas para `fuso` (padrão: `config.FUSO_HORARIO`) antes da comparação.
    """
    if intervalo.vazio:
        return True
    dt = parse_data(valor)
    if dt is None:
        return False
    if dt.tzinfo is not None:
        dt = dt.astimezone(fuso or _fuso_padrao()).replace(tzinfo=None)
    if intervalo.de is not None and dt < datetime.combine(intervalo.de, time.min):
        return False
    if intervalo.ate is not None and dt > datetime.combine(intervalo.ate, time.max):
        return False
    return True


def satisfaz(registro: Any, campo: CampoFiltro, criterio: Any, fuso: Optional[tzinfo] = None) -> bool:
    valor = valor_do_registro(registro, campo.caminho)
    if campo.tipo is TipoFiltro.TEXTO:
        return contem_texto(valor, criterio)
    if campo.tipo is TipoFiltro.EXATO:
        return igual_exato(valor, criterio)
    return dentro_do_intervalo(valor, criterio, fuso)

# ======================================================================================
# Aplicação dos critérios e paginação
# ======================================================================================

def criterio_ativo(criterio: Any) -> bool:
    if isinstance(criterio, IntervaloDatas):
        return not criterio.vazio
    return criterio is not None and criterio != ""


def aplicar_filtros(
    registros: Iterable[Any],
    campos: Dict[str, CampoFiltro],
    criterios: Dict[str, Any],
    fuso: Optional[tzinfo] = None,
) -> List[Any]:
    ativos = [(campos[nome], crit) for nome, crit in criterios.items() if criterio_ativo(crit)]
    if not ativos:
        return list(registros)
    return [
        r for r in registros
        if all(satisfaz(r, campo, crit, fuso) for campo, crit in ativos)
    ]


def total_paginas(total_registros: int, tamanho_pagina: int) -> int:
    """Sempre pelo menos 1 página (mesmo com a lista vazia)."""
    return max(1, math.ceil(total_registros / tamanho_pagina))


def paginar(registros: Sequence[Any], pagina: int, tamanho_pagina: int) -> List[Any]:
    """Fatia da página `pagina` (base 0); página fora do intervalo devolve lista vazia."""
    if pagina < 0:
        return []
    inicio = pagina * tamanho_pagina
    return list(registros[inicio:inicio + tamanho_pagina])
