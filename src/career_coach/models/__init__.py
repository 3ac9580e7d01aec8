"""Data models for the career coaching pipeline."""

from career_coach.models.conversation import Message, PersonalData
from career_coach.models.market import (
    GroundingSource,
    JobOpportunity,
    MarketAnalytics,
    MarketInsights,
    MarketOverview,
    MarketReport,
    SalaryBand,
    SalaryInfo,
    SkillDemand,
    TopCompany,
)
from career_coach.models.profile import (
    PDI,
    Gap,
    PDIAxis,
    PDIObjective,
    Skill,
    SkillsAndGaps,
    Strategy,
    StrategyArea,
    UserProfile,
)
from career_coach.models.resume import (
    EducationEntry,
    ExperienceEntry,
    ResumeData,
    ResumeSkills,
)

__all__ = [
    "EducationEntry",
    "ExperienceEntry",
    "Gap",
    "GroundingSource",
    "JobOpportunity",
    "MarketAnalytics",
    "MarketInsights",
    "MarketOverview",
    "MarketReport",
    "Message",
    "PDI",
    "PDIAxis",
    "PDIObjective",
    "PersonalData",
    "ResumeData",
    "ResumeSkills",
    "SalaryBand",
    "SalaryInfo",
    "Skill",
    "SkillDemand",
    "SkillsAndGaps",
    "Strategy",
    "StrategyArea",
    "TopCompany",
    "UserProfile",
]
