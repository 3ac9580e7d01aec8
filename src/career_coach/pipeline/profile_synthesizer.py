"""Profile Synthesizer - turns a screening transcript into a UserProfile."""

from __future__ import annotations

import logging

from career_coach.clients.genai_client import GenAIClient
from career_coach.models.conversation import PersonalData
from career_coach.models.market import MarketAnalytics
from career_coach.models.profile import UserProfile
from career_coach.models.resume import ResumeData
from career_coach.pipeline.sanitizer import sanitize_profile
from career_coach.pipeline.schemas import PROFILE_SCHEMA
from career_coach.utils.json_parser import extract_json_object

logger = logging.getLogger(__name__)

ANALYSIS_RULES = """\
REGRAS CRÍTICAS DE ANÁLISE:

1. SKILLS & GAPS (Inferência Obrigatória):
   - 'strengths' e 'weaknesses': Liste o que o usuário citou explicitamente.
   - 'inferredGaps': NÃO repita apenas o que o usuário disse. Analise a vaga desejada vs perfil atual e infira o que falta.
     Inclua Hard Skills (ferramentas, techs) e Soft Skills (negociação, liderança) essenciais que o usuário não possui ou não citou.
     Para cada gap, explique o 'impact' (por que isso trava a carreira dele).

2. PDI (Plano de Desenvolvimento Individual):
   - Seja robusto e detalhado. Não dê dicas genéricas.
   - 'executiveSummary': 3-5 frases com o "plano de ataque" geral.
   - 'axes': Divida o plano em eixos como "Desenvolvimento Técnico", "Comportamental", "Portfólio/Visibilidade", "Empregabilidade".
   - Para cada objetivo, defina prazo, ações concretas, recursos (livros, cursos) e indicadores de sucesso.

3. ÁREAS SUGERIDAS (Score):
   - 'matchScore' deve ser um NÚMERO INTEIRO entre 0 e 100 (ex: 85, 90). NÃO use decimais (0.9).

4. CURRÍCULO:
   - 'experience': use SOMENTE empresas e cargos citados na transcrição. Se o usuário não citou nenhuma experiência profissional, retorne a lista VAZIA. Nunca invente empregadores.
   - 'highlights': escreva no método STAR (Situação, Tarefa, Ação, Resultado), com verbos de ação e resultados mensuráveis quando o usuário os forneceu.
   - 'seniorityLevel': Estágio (sem experiência formal), Júnior (até 2 anos), Pleno (2 a 5 anos), Sênior (5 a 10 anos), Especialista (mais de 10 anos).
   - 'keywords': palavras-chave de ATS relevantes para a área desejada.

5. CONTEXTO: Mercado de trabalho brasileiro. Escreva tudo em português do Brasil."""


class ProfileSynthesizer:
    def __init__(self, llm: GenAIClient):
        self.llm = llm

    async def synthesize(
        self,
        transcript_text: str,
        personal_data: PersonalData | None = None,
    ) -> UserProfile:
        """Generate, sanitize and merge a profile. Any failure propagates."""
        if not transcript_text or not transcript_text.strip():
            raise ValueError("transcript_text must not be empty")

        prompt = f"""Analise a seguinte transcrição de entrevista de carreira e gere um perfil estruturado completo.
O output deve ser estritamente JSON.

{ANALYSIS_RULES}

TRANSCRIÇÃO:
{transcript_text}"""

        response = await self.llm.generate_structured(prompt=prompt, schema=PROFILE_SCHEMA)
        data = extract_json_object(response.text)
        profile = sanitize_profile(data)

        if personal_data is not None:
            profile.resume = merge_personal_data(profile.resume, personal_data)

        # Market data comes from enrichment, never from this call.
        profile.market_info = MarketAnalytics.placeholder()
        logger.info(
            "Profile synthesized: %d areas, %d gaps, %d experience entries",
            len(profile.strategy.suggested_areas),
            len(profile.skills_and_gaps.inferred_gaps),
            len(profile.resume.experience),
        )
        return profile


def merge_personal_data(resume: ResumeData, personal: PersonalData) -> ResumeData:
    """Overwrite the identity fields with user-supplied data; nothing else changes."""
    return resume.model_copy(update={
        "full_name": personal.full_name,
        "location": personal.address,
        "email": personal.email,
        "phone": personal.phone,
        "linkedin": personal.linkedin,
        "github": personal.github,
        "portfolio": personal.portfolio,
        "contact_placeholder": f"{personal.email} | {personal.phone}",
    })
