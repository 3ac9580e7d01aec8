"""Screening Session - the interview that collects raw career signal."""

from __future__ import annotations

import enum
import logging

from career_coach.clients.genai_client import GenAIClient
from career_coach.errors import ScreeningTooShortError, SessionStateError
from career_coach.models.conversation import Message
from career_coach.sessions.conversation import ConversationSession

logger = logging.getLogger(__name__)

ANALYZE_BUTTON = "Gerar Análise Completa"

SCREENING_SYSTEM_PROMPT = f"""\
Você é um Consultor de Carreira Especialista, Empático e Perspicaz (Headhunter Sênior).
Seu objetivo é conduzir uma entrevista inicial leve, natural e humana para mapear o perfil do candidato.

**SUA POSTURA:**
- **Seja Humano**: Fuja de roteiros robóticos ou listas numeradas rígidas. Use linguagem natural, acolhedora e profissional (Português Brasileiro).
- **Converse, não Interrogue**: Encoraje o usuário a contar sua história, não apenas listar dados. Peça exemplos e mostre interesse genuíno nas conquistas dele.
- **Investigue com Curiosidade**: Se o usuário for vago (ex: "trabalhei com Java"), peça detalhes (ex: "Que tipo de projetos você desenvolveu com Java? Usou algum framework específico?").

**O QUE VOCÊ PRECISA COLETAR (VIA CONVERSA NATURAL):**
1. **Objetivo**: O que ele busca hoje? (Cargo específico, transição de área, liderança?)
2. **História Profissional**: Experiências relevantes, desafios superados e empresas por onde passou.
3. **Arsenal Técnico**: Hard skills, ferramentas, idiomas e Soft skills principais.

**MOMENTO DE FINALIZAR (REGRA DE OURO):**
Assim que tiver informações suficientes para um bom esboço de currículo e estratégia (geralmente após 3 a 5 trocas de mensagens), **PARE** de fazer perguntas.
Diga algo caloroso como: "Excelente! Já tenho uma visão muito clara do seu potencial e da sua trajetória."
E **OBRIGATORIAMENTE** finalize pedindo que o usuário acione "{ANALYZE_BUTTON}" para compilar o currículo, analisar o mercado e montar a estratégia.
"""

GREETING_FALLBACK = "Olá! Vamos começar?"


class ScreeningState(enum.Enum):
    NOT_STARTED = "not_started"
    ACTIVE = "active"
    COMPLETED = "completed"


class ScreeningSession(ConversationSession):
    """NOT_STARTED -> ACTIVE -> COMPLETED.

    Completion is an explicit user action guarded by a minimum transcript
    length; the model only *asks* the user to trigger it.
    """

    def __init__(self, llm: GenAIClient, *, min_messages: int = 2):
        super().__init__(llm)
        self.min_messages = min_messages
        self.state = ScreeningState.NOT_STARTED

    @staticmethod
    def kickoff_message(user_name: str | None = None) -> str:
        if user_name and user_name.strip():
            return f"Olá, meu nome é {user_name.strip()}. Vamos começar a triagem rápida."
        return "Olá. Pode iniciar a entrevista."

    async def start(self, user_name: str | None = None) -> None:
        """Open the interview; the model's greeting is the first transcript entry."""
        if self.state is not ScreeningState.NOT_STARTED:
            raise SessionStateError(f"Screening already {self.state.value}")
        self._chat = self.llm.open_chat(SCREENING_SYSTEM_PROMPT)
        self.state = ScreeningState.ACTIVE
        logger.info("Screening started")

        await self._exchange(self.kickoff_message(user_name), empty_reply=GREETING_FALLBACK)

    async def send(self, text: str | None = None) -> Message | None:
        if self.state is not ScreeningState.ACTIVE:
            raise SessionStateError(f"Cannot send while screening is {self.state.value}")
        return await super().send(text)

    @property
    def ready_for_analysis(self) -> bool:
        return len(self.transcript) >= self.min_messages

    def ensure_ready(self) -> None:
        """Reject the analysis action when too little was exchanged."""
        if self.state is not ScreeningState.ACTIVE:
            raise SessionStateError(f"Cannot analyze while screening is {self.state.value}")
        if not self.ready_for_analysis:
            raise ScreeningTooShortError(len(self.transcript), self.min_messages)

    def finish(self) -> str:
        """Mark the interview done and return the flattened transcript."""
        self.ensure_ready()
        self.state = ScreeningState.COMPLETED
        logger.info("Screening completed with %d messages", len(self.transcript))
        return self.transcript.flatten()

    def reopen(self) -> None:
        """Back to ACTIVE after a failed synthesis; the transcript is kept."""
        if self.state is ScreeningState.COMPLETED:
            self.state = ScreeningState.ACTIVE
