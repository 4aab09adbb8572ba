"""
Business rule: outcomes that cannot be negative.

When the dependent variable's name contains one of these substrings
(case-insensitive), a negative simulated estimate is clipped to 0 and flagged.
No other variable is ever clipped, however implausible its estimate.

The list is overridable through ``[simulation] non_negative_targets`` in the
TOML config; the CLI passes the configured set to ``simulate_scenario``.
"""

from __future__ import annotations

from typing import Iterable

NON_NEGATIVE_TARGETS: frozenset[str] = frozenset({
    # people and headcounts
    "clientes", "funcionarios", "populacao", "alunos", "docentes",
    "empregados", "utilizadores", "turmas", "matriculas",
    # durations
    "idade", "tempo", "anos", "meses", "horas", "experiencia",
    # activity volumes
    "atendimentos", "vendas", "capacidade", "producao", "acessos",
    "frequencia", "crescimento", "visitas", "atividades", "provas",
    "cursos", "solicitacoes",
    # money
    "salario", "investimento", "receita",
})


def is_non_negative_target(
    dependent_variable: str,
    targets: Iterable[str] = NON_NEGATIVE_TARGETS,
) -> bool:
    """True if ``dependent_variable`` names an inherently non-negative quantity."""
    name = dependent_variable.lower()
    return any(t in name for t in targets)
