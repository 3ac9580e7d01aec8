"""Shared test fixtures."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from career_coach.clients.genai_client import ChatHandle, GenAIClient, LLMResponse
from career_coach.models.conversation import PersonalData
from career_coach.models.market import MarketAnalytics, MarketOverview, SkillDemand
from career_coach.models.profile import PDI, Strategy, StrategyArea, UserProfile
from career_coach.models.resume import ResumeData, ResumeSkills


@pytest.fixture
def sample_personal_data() -> PersonalData:
    return PersonalData(
        full_name="Ana Souza",
        email="ana@example.com",
        phone="(11) 98765-4321",
        address="São Paulo, SP",
        linkedin="linkedin.com/in/anasouza",
    )


@pytest.fixture
def sample_profile_payload() -> dict:
    """A well-formed synthesis payload, as the model would return it."""
    return {
        "strategy": {
            "summary": "Transição de suporte para desenvolvimento backend.",
            "suggestedAreas": [
                {
                    "title": "Desenvolvedora Backend Python",
                    "level": "Júnior",
                    "justification": "Automação de scripts no suporte e curso de Python.",
                    "matchScore": 85,
                    "risks": "Pouca experiência com produção.",
                    "nextSteps": ["Publicar projeto com FastAPI", "Estudar SQL"],
                },
            ],
            "shortTermGoal": "Primeira vaga como dev júnior em 6 meses.",
            "midTermGoal": "Pleno em 3 anos.",
        },
        "skillsAndGaps": {
            "strengths": [{"name": "Python", "type": "hard", "level": "Intermediário"}],
            "weaknesses": [{"name": "Inglês", "type": "soft", "level": "Básico"}],
            "inferredGaps": [
                {
                    "skillName": "Docker",
                    "type": "hard",
                    "priority": "Alta",
                    "impact": "Exigido na maioria das vagas backend.",
                    "suggestion": "Containerizar o projeto pessoal.",
                },
            ],
        },
        "pdi": {
            "executiveSummary": "Foco em portfólio e fundamentos de backend.",
            "axes": [
                {
                    "axisName": "Desenvolvimento Técnico",
                    "objectives": [
                        {
                            "description": "Dominar FastAPI",
                            "deadline": "3 meses",
                            "actions": ["Curso oficial", "Projeto CRUD"],
                            "resources": "Documentação FastAPI",
                            "indicators": "Projeto publicado no GitHub",
                            "priority": "Alta",
                        },
                    ],
                },
            ],
        },
        "marketInfo": {"overview": {"summary": "inventado pelo modelo"}},
        "resume": {
            "fullName": "Nome Inventado",
            "title": "Desenvolvedora Backend Python",
            "location": "Lugar Nenhum",
            "contactPlaceholder": "email | telefone",
            "summary": "Profissional de suporte migrando para backend.",
            "seniorityLevel": "Júnior",
            "education": [
                {"course": "ADS", "institution": "Fatec", "period": "2021-2023", "status": "Concluído"},
            ],
            "experience": [
                {
                    "role": "Analista de Suporte",
                    "company": "Empresa X",
                    "period": "2022-atual",
                    "highlights": ["Automatizei a triagem de chamados, reduzindo 30% do tempo."],
                },
            ],
            "skills": {"hard": ["Python", "SQL"], "soft": ["Comunicação"]},
            "certifications": [],
            "languages": ["Português (nativo)"],
            "keywords": ["Python", "API REST"],
        },
    }


@pytest.fixture
def sample_profile() -> UserProfile:
    return UserProfile(
        strategy=Strategy(
            summary="Transição para backend.",
            suggested_areas=[StrategyArea(title="Desenvolvedora Backend Python", match_score=85)],
        ),
        pdi=PDI(executive_summary="Foco em portfólio e fundamentos de backend."),
        resume=ResumeData(
            full_name="Ana Souza",
            title="Desenvolvedora Backend Python",
            summary="Profissional de suporte migrando para backend.",
            seniority_level="Júnior",
            skills=ResumeSkills(hard=["Python", "SQL"], soft=["Comunicação"]),
        ),
    )


@pytest.fixture
def sample_market() -> MarketAnalytics:
    return MarketAnalytics(
        overview=MarketOverview(summary="Mercado aquecido para backend.", demand_level="Alta"),
        skills_demand=[SkillDemand(name="Python", percentage=70, user_has=True)],
    )


@pytest.fixture
def mock_llm_client(sample_profile_payload) -> GenAIClient:
    """Create a mock Gemini client."""
    client = AsyncMock(spec=GenAIClient)
    client.open_chat = MagicMock(
        side_effect=lambda instruction: ChatHandle(
            chat=MagicMock(), system_instruction=instruction, model="gemini-test"
        )
    )
    client.send_turn = AsyncMock(return_value=LLMResponse(text="Olá! Conte-me sobre você."))
    client.generate_structured = AsyncMock(
        return_value=LLMResponse(text=json.dumps(sample_profile_payload))
    )
    client.generate_text = AsyncMock(return_value=LLMResponse(text="# Relatório"))
    client.transcribe_audio = AsyncMock(return_value="texto transcrito")
    client.generate_speech = AsyncMock(return_value=b"\x00\x00\x00\x40")
    client.get_token_summary = MagicMock(return_value={"input": 0, "output": 0, "calls": []})
    return client
