"""Pydantic models for market enrichment output."""

from __future__ import annotations

from pydantic import Field

from career_coach.models.common import CamelModel

PLACEHOLDER_SUMMARY = (
    "Dados de mercado ainda não carregados. Use a pesquisa de mercado para "
    "buscar salários, empresas e tendências atualizadas."
)


class GroundingSource(CamelModel):
    title: str = ""
    uri: str = ""


class MarketOverview(CamelModel):
    summary: str = ""
    demand_level: str = ""  # Alta / Média / Baixa
    trends: list[str] = Field(default_factory=list)


class SalaryBand(CamelModel):
    min: float = 0
    max: float = 0
    avg: float = 0


class SalaryInfo(CamelModel):
    junior: SalaryBand = Field(default_factory=SalaryBand)
    pleno: SalaryBand = Field(default_factory=SalaryBand)
    senior: SalaryBand = Field(default_factory=SalaryBand)
    growth_projection: list[float] = Field(default_factory=list)  # next 5 years


class TopCompany(CamelModel):
    name: str = ""
    vacancies: int = 0
    url: str = ""


class SkillDemand(CamelModel):
    name: str = ""
    percentage: int = 0
    user_has: bool = False


class MarketInsights(CamelModel):
    growth_perspective: str = ""
    roi_certifications: str = ""
    challenges: str = ""


class MarketAnalytics(CamelModel):
    overview: MarketOverview = Field(default_factory=MarketOverview)
    salary: SalaryInfo = Field(default_factory=SalaryInfo)
    top_companies: list[TopCompany] = Field(default_factory=list)
    skills_demand: list[SkillDemand] = Field(default_factory=list)
    insights: MarketInsights = Field(default_factory=MarketInsights)
    sources: list[GroundingSource] = Field(default_factory=list)

    @classmethod
    def placeholder(cls) -> MarketAnalytics:
        """Empty analytics shown until enrichment runs."""
        return cls(overview=MarketOverview(summary=PLACEHOLDER_SUMMARY))

    @property
    def is_placeholder(self) -> bool:
        return self.overview.summary == PLACEHOLDER_SUMMARY and not self.top_companies


class JobOpportunity(CamelModel):
    title: str = ""
    company: str = ""
    location: str = ""
    fit_score: int = 0
    url: str = ""


class MarketReport(CamelModel):
    """Free-text market research with its web citations."""

    content: str = ""
    sources: list[GroundingSource] = Field(default_factory=list)
