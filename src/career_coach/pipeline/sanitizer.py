"""Total normalization of untrusted model payloads into the internal models.

Every function here accepts anything (``None``, wrong types at any depth)
and never raises: missing or malformed values become their type's zero
value (``""``, ``[]``, empty sub-model, ``0``).
"""

from __future__ import annotations

import math
from typing import Any

from career_coach.models.market import (
    GroundingSource,
    JobOpportunity,
    MarketAnalytics,
    MarketInsights,
    MarketOverview,
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

GROWTH_PROJECTION_YEARS = 5


# --- primitive coercions ---


def as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def as_str(value: Any) -> str:
    if value is None or isinstance(value, (dict, list)):
        return ""
    if isinstance(value, bool):
        return "Sim" if value else "Não"
    return str(value).strip()


def as_optional_str(value: Any) -> str | None:
    text = as_str(value)
    return text or None


def as_str_list(value: Any) -> list[str]:
    return [s for s in (as_str(v) for v in as_list(value)) if s]


def as_number(value: Any) -> float:
    """Coerce to a finite float; numeric strings parse, anything else is 0."""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return 0.0
    elif isinstance(value, str):
        cleaned = value.strip().rstrip("%").strip()
        if "," in cleaned and "." not in cleaned:
            cleaned = cleaned.replace(",", ".")  # decimal comma
        try:
            number = float(cleaned)
        except ValueError:
            return 0.0
    else:
        return 0.0
    return number if math.isfinite(number) else 0.0


def as_int(value: Any) -> int:
    return _round_half_up(as_number(value))


def as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in ("true", "sim", "yes", "1")
    if isinstance(value, (int, float)):
        return value != 0
    return False


def as_score(value: Any) -> int:
    """Integer percentage in [0, 100].

    Decimals in (0, 1] are read as fractions (0.9 -> 90, 1.0 -> 100); the
    integer 1 stays 1. Everything is rounded half-up and clamped.
    """
    number = as_number(value)
    is_decimal = isinstance(value, float) or number != int(number)
    if 0 < number <= 1 and is_decimal:
        number *= 100
    return max(0, min(100, _round_half_up(number)))


def _round_half_up(number: float) -> int:
    if number >= 0:
        return int(math.floor(number + 0.5))
    return -int(math.floor(-number + 0.5))


# --- profile ---


def sanitize_strategy_area(raw: Any) -> StrategyArea:
    data = as_dict(raw)
    return StrategyArea(
        title=as_str(data.get("title")),
        level=as_str(data.get("level")),
        justification=as_str(data.get("justification")),
        match_score=as_score(data.get("matchScore")),
        risks=as_str(data.get("risks")),
        next_steps=as_str_list(data.get("nextSteps")),
    )


def sanitize_strategy(raw: Any) -> Strategy:
    data = as_dict(raw)
    return Strategy(
        summary=as_str(data.get("summary")),
        suggested_areas=[sanitize_strategy_area(a) for a in as_list(data.get("suggestedAreas"))],
        short_term_goal=as_str(data.get("shortTermGoal")),
        mid_term_goal=as_str(data.get("midTermGoal")),
    )


def sanitize_skill(raw: Any) -> Skill:
    data = as_dict(raw)
    return Skill(
        name=as_str(data.get("name")),
        type=as_str(data.get("type")).lower(),
        level=as_str(data.get("level")),
        evidence=as_optional_str(data.get("evidence")),
    )


def sanitize_gap(raw: Any) -> Gap:
    data = as_dict(raw)
    return Gap(
        skill_name=as_str(data.get("skillName")),
        type=as_str(data.get("type")).lower(),
        priority=as_str(data.get("priority")),
        impact=as_str(data.get("impact")),
        suggestion=as_str(data.get("suggestion")),
    )


def sanitize_skills_and_gaps(raw: Any) -> SkillsAndGaps:
    data = as_dict(raw)
    return SkillsAndGaps(
        strengths=[sanitize_skill(s) for s in as_list(data.get("strengths"))],
        weaknesses=[sanitize_skill(s) for s in as_list(data.get("weaknesses"))],
        inferred_gaps=[sanitize_gap(g) for g in as_list(data.get("inferredGaps"))],
    )


def sanitize_pdi(raw: Any) -> PDI:
    data = as_dict(raw)
    axes = []
    for axis in as_list(data.get("axes")):
        axis_data = as_dict(axis)
        objectives = []
        for obj in as_list(axis_data.get("objectives")):
            obj_data = as_dict(obj)
            objectives.append(PDIObjective(
                description=as_str(obj_data.get("description")),
                deadline=as_str(obj_data.get("deadline")),
                actions=as_str_list(obj_data.get("actions")),
                resources=as_str(obj_data.get("resources")),
                indicators=as_str(obj_data.get("indicators")),
                priority=as_str(obj_data.get("priority")),
            ))
        axes.append(PDIAxis(axis_name=as_str(axis_data.get("axisName")), objectives=objectives))
    return PDI(executive_summary=as_str(data.get("executiveSummary")), axes=axes)


def sanitize_resume(raw: Any) -> ResumeData:
    data = as_dict(raw)
    skills = as_dict(data.get("skills"))
    education = []
    for entry in as_list(data.get("education")):
        e = as_dict(entry)
        education.append(EducationEntry(
            course=as_str(e.get("course")),
            institution=as_str(e.get("institution")),
            period=as_str(e.get("period")),
            status=as_str(e.get("status")),
            details=as_optional_str(e.get("details")),
        ))
    experience = []
    for entry in as_list(data.get("experience")):
        e = as_dict(entry)
        experience.append(ExperienceEntry(
            role=as_str(e.get("role")),
            company=as_str(e.get("company")),
            period=as_str(e.get("period")),
            highlights=as_str_list(e.get("highlights")),
        ))
    return ResumeData(
        full_name=as_str(data.get("fullName")),
        title=as_str(data.get("title")),
        location=as_str(data.get("location")),
        contact_placeholder=as_str(data.get("contactPlaceholder")),
        email=as_optional_str(data.get("email")),
        phone=as_optional_str(data.get("phone")),
        linkedin=as_optional_str(data.get("linkedin")),
        github=as_optional_str(data.get("github")),
        portfolio=as_optional_str(data.get("portfolio")),
        summary=as_str(data.get("summary")),
        seniority_level=as_optional_str(data.get("seniorityLevel")),
        education=education,
        experience=experience,
        skills=ResumeSkills(
            hard=as_str_list(skills.get("hard")),
            soft=as_str_list(skills.get("soft")),
        ),
        certifications=as_str_list(data.get("certifications")),
        languages=as_str_list(data.get("languages")),
        keywords=as_str_list(data.get("keywords")),
    )


def sanitize_profile(raw: Any) -> UserProfile:
    """Build a fully populated UserProfile from an untrusted payload."""
    data = as_dict(raw)
    return UserProfile(
        strategy=sanitize_strategy(data.get("strategy")),
        skills_and_gaps=sanitize_skills_and_gaps(data.get("skillsAndGaps")),
        pdi=sanitize_pdi(data.get("pdi")),
        market_info=sanitize_market(data.get("marketInfo")),
        resume=sanitize_resume(data.get("resume")),
    )


# --- market ---


def _salary_band(raw: Any) -> SalaryBand:
    data = as_dict(raw)
    return SalaryBand(
        min=max(0.0, as_number(data.get("min"))),
        max=max(0.0, as_number(data.get("max"))),
        avg=max(0.0, as_number(data.get("avg"))),
    )


def sanitize_market(raw: Any) -> MarketAnalytics:
    """Build a fully populated MarketAnalytics from an untrusted payload."""
    data = as_dict(raw)
    overview = as_dict(data.get("overview"))
    salary = as_dict(data.get("salary"))
    insights = as_dict(data.get("insights"))
    growth = [
        as_number(v)
        for v in as_list(salary.get("growthProjection"))
        if isinstance(v, (int, float, str)) and not isinstance(v, bool)
    ]
    return MarketAnalytics(
        overview=MarketOverview(
            summary=as_str(overview.get("summary")),
            demand_level=as_str(overview.get("demandLevel")),
            trends=as_str_list(overview.get("trends")),
        ),
        salary=SalaryInfo(
            junior=_salary_band(salary.get("junior")),
            pleno=_salary_band(salary.get("pleno")),
            senior=_salary_band(salary.get("senior")),
            growth_projection=growth[:GROWTH_PROJECTION_YEARS],
        ),
        top_companies=[
            TopCompany(
                name=as_str(c.get("name")),
                vacancies=max(0, as_int(c.get("vacancies"))),
                url=as_str(c.get("url")),
            )
            for c in map(as_dict, as_list(data.get("topCompanies")))
        ],
        skills_demand=[
            SkillDemand(
                name=as_str(s.get("name")),
                percentage=as_score(s.get("percentage")),
                user_has=as_bool(s.get("userHas")),
            )
            for s in map(as_dict, as_list(data.get("skillsDemand")))
        ],
        insights=MarketInsights(
            growth_perspective=as_str(insights.get("growthPerspective")),
            roi_certifications=as_str(insights.get("roiCertifications")),
            challenges=as_str(insights.get("challenges")),
        ),
        sources=[
            GroundingSource(title=as_str(s.get("title")), uri=as_str(s.get("uri")))
            for s in map(as_dict, as_list(data.get("sources")))
        ],
    )


def sanitize_jobs(raw: Any) -> list[JobOpportunity]:
    """Accept ``{"jobs": [...]}`` or a bare list; drop entries without a title."""
    items = raw if isinstance(raw, list) else as_list(as_dict(raw).get("jobs"))
    jobs = []
    for item in map(as_dict, items):
        job = JobOpportunity(
            title=as_str(item.get("title")),
            company=as_str(item.get("company")),
            location=as_str(item.get("location")),
            fit_score=as_score(item.get("fitScore")),
            url=as_str(item.get("url")),
        )
        if job.title:
            jobs.append(job)
    return jobs
