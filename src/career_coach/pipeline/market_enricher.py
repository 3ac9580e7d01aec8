"""Market/Jobs Enrichment - search-grounded refresh of market data and job listings."""

from __future__ import annotations

import logging

from career_coach.clients.genai_client import GenAIClient
from career_coach.errors import CareerCoachError
from career_coach.models.market import JobOpportunity, MarketAnalytics, MarketReport
from career_coach.models.profile import UserProfile
from career_coach.pipeline.sanitizer import sanitize_jobs, sanitize_market
from career_coach.pipeline.schemas import JOBS_SCHEMA, MARKET_SCHEMA
from career_coach.utils.json_parser import extract_json, extract_json_object

logger = logging.getLogger(__name__)

REPORT_FALLBACK = "Não foi possível gerar o relatório."


class MarketEnricher:
    def __init__(
        self,
        llm: GenAIClient,
        *,
        country: str = "Brasil",
        fallback_role: str = "Tecnologia",
    ):
        self.llm = llm
        self.country = country
        self.fallback_role = fallback_role

    def resolve_role(self, profile: UserProfile) -> str:
        """Resume title, else the best suggested area, else the fallback role."""
        if profile.resume.title:
            return profile.resume.title
        for area in profile.strategy.suggested_areas:
            if area.title:
                return area.title
        return self.fallback_role

    async def deep_analysis(self, profile: UserProfile) -> MarketAnalytics:
        """Fetch fresh market analytics for the profile's role. Raises on failure."""
        role = self.resolve_role(profile)
        user_skills = ", ".join(profile.resume.skills.hard + profile.resume.skills.soft)
        prompt = f"""Pesquise o mercado de trabalho atual para o cargo de "{role}" no {self.country}.
Use dados reais e recentes (Glassdoor, Robert Half, vagas publicadas).

Foque em:
1. Visão geral: resumo, nível de demanda (Alta/Média/Baixa) e tendências.
2. Faixa salarial mensal em reais (min, max, média) para Júnior, Pleno e Sênior, e projeção de crescimento salarial (%) para os próximos 5 anos.
3. Principais empresas contratando agora, com número aproximado de vagas e URL de carreiras.
4. Skills mais pedidas nas vagas recentes, com percentual de vagas que as pedem. Marque 'userHas' = true se a skill estiver entre as do candidato.
5. Insights: perspectiva de crescimento, ROI de certificações e desafios.

Skills do candidato: {user_skills or "não informadas"}"""

        response = await self.llm.generate_structured(
            prompt=prompt, schema=MARKET_SCHEMA, use_search=True
        )
        data = extract_json_object(response.text)
        market = sanitize_market(data)
        market.sources = response.sources
        return market

    async def refresh_market(self, profile: UserProfile) -> MarketAnalytics:
        """Replace ``profile.market_info`` wholesale, only after a full success."""
        market = await self.deep_analysis(profile)
        profile.market_info = market
        logger.info(
            "Market data refreshed: %d companies, %d skills",
            len(market.top_companies),
            len(market.skills_demand),
        )
        return market

    async def search_jobs(self, profile: UserProfile) -> list[JobOpportunity]:
        """Find open positions for the profile's role; any failure yields []."""
        role = self.resolve_role(profile)
        prompt = f"""Busque vagas abertas recentes para o cargo de "{role}" no {self.country}.
Retorne até 8 vagas reais com título, empresa, localização, URL da vaga e um 'fitScore' (0-100) estimando a aderência ao perfil abaixo.

Resumo do candidato: {profile.resume.summary or profile.strategy.summary or "não informado"}
Senioridade: {profile.resume.seniority_level or "não informada"}"""

        try:
            response = await self.llm.generate_structured(
                prompt=prompt, schema=JOBS_SCHEMA, use_search=True
            )
            data = extract_json(response.text)
        except CareerCoachError:
            logger.warning("Job search failed; returning no jobs", exc_info=True)
            return []
        jobs = sanitize_jobs(data)
        logger.info("Job search found %d positions for %s", len(jobs), role)
        return jobs

    async def market_report(self, profile: UserProfile | None = None, role: str | None = None) -> MarketReport:
        """Short grounded Markdown report plus the web sources behind it."""
        if role is None:
            role = self.resolve_role(profile) if profile is not None else self.fallback_role
        prompt = f"""Pesquise o mercado de trabalho atual para o cargo de "{role}" em "{self.country}".
Foque em:
1. Faixa salarial atualizada e real (Júnior, Pleno, Sênior).
2. Principais empresas contratando neste momento.
3. Tecnologias ou skills mais pedidas nas descrições de vaga recentes.
4. Tendência de crescimento para os próximos anos.

Responda com um relatório curto e direto em Markdown."""

        response = await self.llm.generate_text(prompt, use_search=True)
        return MarketReport(content=response.text or REPORT_FALLBACK, sources=response.sources)
