"""Pydantic models for the generated resume."""

from __future__ import annotations

from pydantic import Field

from career_coach.models.common import CamelModel


class EducationEntry(CamelModel):
    course: str = ""
    institution: str = ""
    period: str = ""
    status: str = ""
    details: str | None = None  # TCC, relevant projects for junior profiles


class ExperienceEntry(CamelModel):
    role: str = ""
    company: str = ""
    period: str = ""
    highlights: list[str] = Field(default_factory=list)  # STAR bullets


class ResumeSkills(CamelModel):
    hard: list[str] = Field(default_factory=list)
    soft: list[str] = Field(default_factory=list)


class ResumeData(CamelModel):
    full_name: str = ""
    title: str = ""
    location: str = ""
    contact_placeholder: str = ""
    email: str | None = None
    phone: str | None = None
    linkedin: str | None = None
    github: str | None = None
    portfolio: str | None = None
    summary: str = ""
    seniority_level: str | None = None  # Estágio / Júnior / Pleno / Sênior / Especialista
    education: list[EducationEntry] = Field(default_factory=list)
    experience: list[ExperienceEntry] = Field(default_factory=list)
    skills: ResumeSkills = Field(default_factory=ResumeSkills)
    certifications: list[str] = Field(default_factory=list)
    languages: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)  # ATS keywords
