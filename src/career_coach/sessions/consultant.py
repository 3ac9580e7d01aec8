"""Consultant Session - follow-up coaching seeded with the synthesized profile."""

from __future__ import annotations

import json
import logging

from career_coach.errors import SessionStateError
from career_coach.models.profile import UserProfile
from career_coach.sessions.conversation import ConversationSession

logger = logging.getLogger(__name__)

CONSULTANT_SYSTEM_PROMPT = """\
Você é um Consultor de Carreira Sênior de Alto Nível (Nível Executivo).
Você tem acesso ao perfil completo do usuário.
Seu objetivo é elevar o nível profissional do usuário com estratégias de mercado do BRASIL.

ESTILO:
- Seja direto, técnico e estratégico.
- Evite frases genéricas de autoajuda.
- Se o usuário perguntar de salário, use dados do mercado brasileiro (Glassdoor, Robert Half).
- Use formatação Markdown (negrito, listas) para facilitar a leitura.
"""

CONSULTANT_GREETING = (
    "Olá! Analisei seu perfil e gerei sua estratégia completa. O que achou do plano? "
    "Posso ajudar a refinar o currículo ou treinar para entrevistas."
)


def build_consultant_instruction(profile: UserProfile) -> str:
    """Persona plus a full JSON dump of the profile as fixed context."""
    context = json.dumps(profile.to_wire(), ensure_ascii=False, indent=2)
    return f"{CONSULTANT_SYSTEM_PROMPT}\nDADOS DO USUÁRIO PARA CONTEXTO:\n{context}\n"


class ConsultantSession(ConversationSession):
    """Advisory chat. The profile context is captured once at ``open`` and is
    not refreshed when enrichment later replaces ``market_info``.
    """

    error_message = "Consultor indisponível no momento."

    def open(self, profile: UserProfile) -> None:
        if self.is_open:
            raise SessionStateError("Consultant session already open")
        self._chat = self.llm.open_chat(build_consultant_instruction(profile))
        self.transcript.append("model", CONSULTANT_GREETING)
        logger.info("Consultant session opened")
