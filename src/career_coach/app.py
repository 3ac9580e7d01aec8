"""Application coordinator - owns the session state and drives every stage."""

from __future__ import annotations

import enum
import logging

from career_coach.audio.recorder import AudioClip
from career_coach.audio.service import AudioService
from career_coach.clients.genai_client import GenAIClient
from career_coach.config import AppConfig, load_config
from career_coach.errors import CareerCoachError, DeviceError, GenAIError, SessionStateError
from career_coach.models.conversation import Message, PersonalData
from career_coach.models.market import JobOpportunity, MarketAnalytics, MarketReport
from career_coach.models.profile import UserProfile
from career_coach.pipeline.market_enricher import MarketEnricher
from career_coach.pipeline.profile_synthesizer import ProfileSynthesizer
from career_coach.sessions.consultant import ConsultantSession
from career_coach.sessions.conversation import ConversationSession
from career_coach.sessions.screening import ScreeningSession

logger = logging.getLogger(__name__)

ANALYSIS_ERROR = "Houve um erro ao gerar a análise. Tente novamente ou verifique se respondeu as perguntas."
MARKET_ERROR = "Erro ao pesquisar dados de mercado."
TRANSCRIBE_ERROR = "Não foi possível transcrever o áudio. Tente novamente."
AUDIO_ERROR = "Erro ao reproduzir áudio."


class AppStage(enum.Enum):
    INTRO = "intro"
    PERSONAL_DETAILS = "personal-details"
    SCREENING = "screening"
    ANALYZING = "analyzing"
    DASHBOARD = "dashboard"


class CareerCoach:
    """Single owner of one in-memory coaching session.

    Each long-running operation has its own busy flag; a call made while its
    own flag is set is ignored, unrelated operations may overlap.
    """

    def __init__(
        self,
        llm: GenAIClient,
        *,
        config: AppConfig | None = None,
        audio: AudioService | None = None,
    ):
        self.config = config or AppConfig()
        self.llm = llm
        self.synthesizer = ProfileSynthesizer(llm)
        self.enricher = MarketEnricher(
            llm,
            country=self.config.market.country,
            fallback_role=self.config.market.fallback_role,
        )
        self.audio = audio or AudioService(llm)

        self.stage = AppStage.INTRO
        self.personal_data: PersonalData | None = None
        self.screening = ScreeningSession(llm, min_messages=self.config.screening.min_messages)
        self.consultant: ConsultantSession | None = None
        self.profile: UserProfile | None = None
        self.jobs: list[JobOpportunity] = []
        self.report: MarketReport | None = None
        self.status: str | None = None

        self.analyzing = False
        self.market_busy = False
        self.jobs_busy = False
        self.report_busy = False
        self.transcribing = False

    @classmethod
    def from_config(cls, config: AppConfig | None = None, api_key: str | None = None) -> CareerCoach:
        """Build the client from config; a missing key raises ConfigurationError."""
        config = config or load_config()
        llm = GenAIClient(
            api_key=api_key,
            timeout=config.genai.timeout,
            model=config.genai.chat_model,
            tts_model=config.genai.tts_model,
            voice=config.genai.voice_name,
            max_attempts=config.genai.max_attempts,
        )
        return cls(llm, config=config)

    # --- screening ---

    def begin(self) -> None:
        """Move from the intro to the personal details form."""
        self.stage = AppStage.PERSONAL_DETAILS

    async def submit_personal_details(self, data: PersonalData) -> None:
        self.personal_data = data
        await self.start_screening(data.full_name)

    async def start_screening(self, user_name: str | None = None) -> None:
        self.status = None
        self.stage = AppStage.SCREENING
        await self.screening.start(user_name)
        self.status = self.screening.last_error

    async def send_screening_message(self, text: str | None = None) -> Message | None:
        reply = await self.screening.send(text)
        self.status = self.screening.last_error
        return reply

    async def generate_analysis(self) -> UserProfile | None:
        """Screening -> analyzing -> dashboard.

        Rejected without any network call when the transcript is too short.
        On failure the stage reverts to screening and the error propagates.
        """
        if self.analyzing:
            return None
        self.screening.ensure_ready()
        transcript = self.screening.finish()
        self.stage = AppStage.ANALYZING
        self.analyzing = True
        try:
            profile = await self.synthesizer.synthesize(transcript, self.personal_data)
        except Exception:
            logger.error("Profile synthesis failed; back to screening", exc_info=True)
            self.screening.reopen()
            self.stage = AppStage.SCREENING
            self.status = ANALYSIS_ERROR
            raise
        finally:
            self.analyzing = False

        self.profile = profile
        self.consultant = ConsultantSession(self.llm)
        self.consultant.open(profile)
        self.stage = AppStage.DASHBOARD
        self.status = None
        return profile

    # --- dashboard ---

    def _require_profile(self) -> UserProfile:
        if self.profile is None:
            raise SessionStateError("No profile yet; finish the screening first")
        return self.profile

    @property
    def market_loaded(self) -> bool:
        """True once enrichment replaced the placeholder market data."""
        return self.profile is not None and not self.profile.market_info.is_placeholder

    async def send_consultant_message(self, text: str | None = None) -> Message | None:
        if self.consultant is None:
            raise SessionStateError("Consultant is available only on the dashboard")
        reply = await self.consultant.send(text)
        self.status = self.consultant.last_error
        return reply

    async def refresh_market(self) -> MarketAnalytics | None:
        """Replace the profile's market data; on failure the old data stays."""
        profile = self._require_profile()
        if self.market_busy:
            return None
        self.market_busy = True
        try:
            market = await self.enricher.refresh_market(profile)
        except CareerCoachError:
            logger.error("Market enrichment failed", exc_info=True)
            self.status = MARKET_ERROR
            return None
        finally:
            self.market_busy = False
        self.status = None
        return market

    async def search_jobs(self) -> list[JobOpportunity]:
        profile = self._require_profile()
        if self.jobs_busy:
            return self.jobs
        self.jobs_busy = True
        try:
            self.jobs = await self.enricher.search_jobs(profile)
        finally:
            self.jobs_busy = False
        return self.jobs

    async def market_report(self) -> MarketReport | None:
        profile = self._require_profile()
        if self.report_busy:
            return None
        self.report_busy = True
        try:
            self.report = await self.enricher.market_report(profile)
        except CareerCoachError:
            logger.error("Market report failed", exc_info=True)
            self.status = MARKET_ERROR
            return None
        finally:
            self.report_busy = False
        return self.report

    # --- audio ---

    @property
    def active_session(self) -> ConversationSession:
        if self.stage is AppStage.DASHBOARD and self.consultant is not None:
            return self.consultant
        return self.screening

    async def transcribe_into_draft(self, clip: AudioClip) -> str:
        """Transcribe a recording and append it to the active chat's draft."""
        if self.transcribing:
            return self.active_session.draft
        session = self.active_session
        self.transcribing = True
        try:
            text = await self.audio.transcribe(clip)
        except GenAIError:
            logger.error("Transcription failed", exc_info=True)
            self.status = TRANSCRIBE_ERROR
            return session.draft
        finally:
            self.transcribing = False
        return session.append_to_draft(text)

    async def speak_pdi_summary(self) -> bool:
        """Read the development plan summary aloud."""
        text = self._require_profile().pdi.executive_summary
        if not text:
            return False
        try:
            return await self.audio.speak(text)
        except (GenAIError, DeviceError):
            logger.error("Speech playback failed", exc_info=True)
            self.status = AUDIO_ERROR
            return False

    def shutdown(self) -> None:
        """Cancel chat turns still in flight."""
        self.screening.cancel()
        if self.consultant is not None:
            self.consultant.cancel()
