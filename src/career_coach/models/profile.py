"""Pydantic models for the synthesized career profile."""

from __future__ import annotations

from pydantic import Field

from career_coach.models.common import CamelModel
from career_coach.models.market import MarketAnalytics
from career_coach.models.resume import ResumeData


class StrategyArea(CamelModel):
    title: str = ""
    level: str = ""
    justification: str = ""
    match_score: int = 0  # integer 0-100
    risks: str = ""
    next_steps: list[str] = Field(default_factory=list)


class Strategy(CamelModel):
    summary: str = ""
    suggested_areas: list[StrategyArea] = Field(default_factory=list)
    short_term_goal: str = ""
    mid_term_goal: str = ""


class Skill(CamelModel):
    name: str = ""
    type: str = ""  # "hard" | "soft"
    level: str = ""
    evidence: str | None = None


class Gap(CamelModel):
    skill_name: str = ""
    type: str = ""
    priority: str = ""  # Alta / Média / Baixa
    impact: str = ""
    suggestion: str = ""


class SkillsAndGaps(CamelModel):
    strengths: list[Skill] = Field(default_factory=list)
    weaknesses: list[Skill] = Field(default_factory=list)
    inferred_gaps: list[Gap] = Field(default_factory=list)


class PDIObjective(CamelModel):
    description: str = ""
    deadline: str = ""
    actions: list[str] = Field(default_factory=list)
    resources: str = ""
    indicators: str = ""
    priority: str = ""


class PDIAxis(CamelModel):
    axis_name: str = ""
    objectives: list[PDIObjective] = Field(default_factory=list)


class PDI(CamelModel):
    """Individual development plan (Plano de Desenvolvimento Individual)."""

    executive_summary: str = ""
    axes: list[PDIAxis] = Field(default_factory=list)


class UserProfile(CamelModel):
    strategy: Strategy = Field(default_factory=Strategy)
    skills_and_gaps: SkillsAndGaps = Field(default_factory=SkillsAndGaps)
    pdi: PDI = Field(default_factory=PDI)
    market_info: MarketAnalytics = Field(default_factory=MarketAnalytics.placeholder)
    resume: ResumeData = Field(default_factory=ResumeData)
