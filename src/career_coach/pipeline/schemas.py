"""Response schemas declared to the generative service.

Written in the service's OpenAPI subset (OBJECT / ARRAY / STRING / INTEGER /
NUMBER / BOOLEAN, optional ``enum``). They steer the model; nothing here
guarantees what comes back, which is why every payload is sanitized.
"""

from __future__ import annotations

PRIORITIES = ["Alta", "Média", "Baixa"]
SKILL_TYPES = ["hard", "soft"]


def _string(description: str | None = None) -> dict:
    node: dict = {"type": "STRING"}
    if description:
        node["description"] = description
    return node


def _enum(values: list[str]) -> dict:
    return {"type": "STRING", "enum": values}


def _strings() -> dict:
    return {"type": "ARRAY", "items": {"type": "STRING"}}


def _object(**properties: dict) -> dict:
    return {"type": "OBJECT", "properties": properties}


def _array_of(item: dict) -> dict:
    return {"type": "ARRAY", "items": item}


_SKILL = _object(
    name=_string(),
    type=_enum(SKILL_TYPES),
    level=_string(),
    evidence=_string(),
)

_SALARY_BAND = _object(
    min={"type": "NUMBER"},
    max={"type": "NUMBER"},
    avg={"type": "NUMBER"},
)

PROFILE_SCHEMA: dict = _object(
    strategy=_object(
        summary=_string(),
        suggestedAreas=_array_of(_object(
            title=_string(),
            level=_string(),
            justification=_string(),
            matchScore={"type": "INTEGER", "description": "Score from 0 to 100"},
            risks=_string(),
            nextSteps=_strings(),
        )),
        shortTermGoal=_string(),
        midTermGoal=_string(),
    ),
    skillsAndGaps=_object(
        strengths=_array_of(_SKILL),
        weaknesses=_array_of(_SKILL),
        inferredGaps=_array_of(_object(
            skillName=_string(),
            type=_enum(SKILL_TYPES),
            priority=_enum(PRIORITIES),
            impact=_string(),
            suggestion=_string(),
        )),
    ),
    pdi=_object(
        executiveSummary=_string(),
        axes=_array_of(_object(
            axisName=_string(),
            objectives=_array_of(_object(
                description=_string(),
                deadline=_string(),
                actions=_strings(),
                resources=_string(),
                indicators=_string(),
                priority=_enum(PRIORITIES),
            )),
        )),
    ),
    resume=_object(
        fullName=_string(),
        title=_string(),
        location=_string(),
        contactPlaceholder=_string(),
        summary=_string(),
        seniorityLevel=_enum(["Estágio", "Júnior", "Pleno", "Sênior", "Especialista"]),
        education=_array_of(_object(
            course=_string(),
            institution=_string(),
            period=_string(),
            status=_string(),
            details=_string(),
        )),
        experience=_array_of(_object(
            role=_string(),
            company=_string(),
            period=_string(),
            highlights=_strings(),
        )),
        skills=_object(hard=_strings(), soft=_strings()),
        certifications=_strings(),
        languages=_strings(),
        keywords=_strings(),
    ),
)

MARKET_SCHEMA: dict = _object(
    overview=_object(
        summary=_string(),
        demandLevel=_enum(PRIORITIES),
        trends=_strings(),
    ),
    salary=_object(
        junior=_SALARY_BAND,
        pleno=_SALARY_BAND,
        senior=_SALARY_BAND,
        growthProjection=_array_of({"type": "NUMBER"}),
    ),
    topCompanies=_array_of(_object(
        name=_string(),
        vacancies={"type": "INTEGER"},
        url=_string(),
    )),
    skillsDemand=_array_of(_object(
        name=_string(),
        percentage={"type": "INTEGER"},
        userHas={"type": "BOOLEAN"},
    )),
    insights=_object(
        growthPerspective=_string(),
        roiCertifications=_string(),
        challenges=_string(),
    ),
)

JOBS_SCHEMA: dict = _object(
    jobs=_array_of(_object(
        title=_string(),
        company=_string(),
        location=_string(),
        fitScore={"type": "INTEGER", "description": "Score from 0 to 100"},
        url=_string(),
    )),
)
