"""
Constantes de domínio usadas pelas telas e pelos filtros.

Notas rápidas:
- `PRIORIDADES` / `SITUACOES` / `SITUATIONS`: ordem de exibição (selects, gráficos).
- `*_LABEL`: rótulos amigáveis em PT-BR para cada valor de enum.
"""

# ======================================================================================
# Imports
# ======================================================================================
from .models import Prioridade, Situacao, Situation

# ======================================================================================
# Pedidos — listas auxiliares
# ======================================================================================
PRIORIDADES = [Prioridade.BAIXA, Prioridade.MEDIA, Prioridade.ALTA]

PRIORIDADE_LABEL = {
    Prioridade.BAIXA: "Baixa",
    Prioridade.MEDIA: "Média",
    Prioridade.ALTA: "Alta",
}

SITUACOES = list(Situacao)

SITUACAO_LABEL = {
    Situacao.ALTERACAO_DE_ENDERECO: "Alteração de endereço",
    Situacao.ATRASO_NA_ENTREGA: "Atraso na entrega",
    Situacao.AVARIA_DE_PRODUCAO: "Avaria de produção",
    Situacao.BARRAR_A_ENTREGA: "Barrar a entrega",
    Situacao.CANCELAMENTO: "Cancelamento",
    Situacao.DEVOLUCAO: "Devolução",
    Situacao.ENTREGUE_E_NAO_RECEBIDO: "Entregue e não recebido",
    Situacao.ERRO_DE_ENDERECO: "Erro de endereço",
    Situacao.FALTANDO_ITEM: "Faltando item",
}

SITUATIONS = list(Situation)

SITUATION_LABEL = {
    Situation.EM_ANDAMENTO: "Em andamento",
    Situation.FINALIZADO: "Finalizado",
    Situation.ATRASADO: "Atrasado",
}

# Valor exibido quando o campo está vazio
VAZIO = "—"
