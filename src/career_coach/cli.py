"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import logging

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from career_coach.app import AppStage, CareerCoach
from career_coach.audio.recorder import MicrophoneRecorder
from career_coach.config import load_config
from career_coach.errors import (
    CareerCoachError,
    ConfigurationError,
    DeviceError,
    ScreeningTooShortError,
)
from career_coach.models.conversation import Message, PersonalData
from career_coach.models.profile import UserProfile
from career_coach.pipeline.market_enricher import MarketEnricher
from career_coach.sessions.screening import ANALYZE_BUTTON

app = typer.Typer(
    name="career-coach",
    help="Consultoria de carreira com IA: triagem, currículo, estratégia e mercado",
    no_args_is_help=True,
)
console = Console()

SCREENING_HELP = "[dim]Comandos: /gerar (análise completa), /mic (gravar/parar), /sair[/dim]"
DASHBOARD_HELP = (
    "[dim]Comandos: /mercado, /vagas, /relatorio, /ouvir (resumo do PDI), /mic, /sair[/dim]"
)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _build_coach() -> CareerCoach:
    try:
        return CareerCoach.from_config(load_config())
    except (ConfigurationError, ValueError) as e:
        console.print(f"[red]Configuração inválida: {e}[/red]")
        raise typer.Exit(1)


def _print_message(message: Message | None) -> None:
    if message is None:
        return
    if message.role == "model":
        console.print(Panel(Markdown(message.text), title="Consultor", border_style="cyan"))
    else:
        console.print(f"[bold]Você:[/bold] {message.text}")


def _print_status(coach: CareerCoach) -> None:
    if coach.status:
        console.print(f"[yellow]{coach.status}[/yellow]")


def _ask_personal_data() -> PersonalData:
    console.print("\n[bold]Dados pessoais[/bold] (usados no cabeçalho do currículo)\n")
    return PersonalData(
        full_name=typer.prompt("Nome completo"),
        email=typer.prompt("E-mail"),
        phone=typer.prompt("Telefone"),
        address=typer.prompt("Cidade/Estado"),
        linkedin=typer.prompt("LinkedIn", default="", show_default=False) or None,
        github=typer.prompt("GitHub", default="", show_default=False) or None,
        portfolio=typer.prompt("Portfólio", default="", show_default=False) or None,
    )


def _render_profile(profile: UserProfile) -> None:
    resume = profile.resume
    console.print(Panel(
        f"[bold]{resume.full_name or '-'}[/bold] | {resume.title or '-'} ({resume.seniority_level or '-'})\n"
        f"{resume.contact_placeholder}\n\n"
        f"{resume.summary}",
        title="Currículo",
    ))

    if profile.strategy.suggested_areas:
        table = Table(title="Áreas sugeridas")
        table.add_column("Área")
        table.add_column("Match", justify="right")
        table.add_column("Justificativa")
        for area in profile.strategy.suggested_areas:
            table.add_row(area.title, f"{area.match_score}%", area.justification)
        console.print(table)

    if profile.skills_and_gaps.inferred_gaps:
        console.print("\n[bold]Gaps:[/bold]")
        for gap in profile.skills_and_gaps.inferred_gaps:
            console.print(f"  - [{gap.priority}] {gap.skill_name}: {gap.suggestion}")

    console.print(Panel(profile.pdi.executive_summary or "-", title="PDI"))
    for axis in profile.pdi.axes:
        console.print(f"\n[bold]{axis.axis_name}[/bold]")
        for objective in axis.objectives:
            console.print(f"  - {objective.description} [dim]({objective.deadline})[/dim]")


def _render_market(profile: UserProfile) -> None:
    market = profile.market_info
    overview = market.overview
    console.print(Panel(
        f"Demanda: {overview.demand_level or '-'}\n{overview.summary}",
        title="Mercado",
    ))

    table = Table(title="Faixa salarial (R$)")
    table.add_column("Nível")
    table.add_column("Mín", justify="right")
    table.add_column("Média", justify="right")
    table.add_column("Máx", justify="right")
    for label, band in (
        ("Júnior", market.salary.junior),
        ("Pleno", market.salary.pleno),
        ("Sênior", market.salary.senior),
    ):
        table.add_row(label, f"{band.min:,.0f}", f"{band.avg:,.0f}", f"{band.max:,.0f}")
    console.print(table)

    for skill in market.skills_demand:
        mark = "[green]✓[/green]" if skill.user_has else " "
        console.print(f"  {mark} {skill.name}: {skill.percentage}%")
    for source in market.sources:
        console.print(f"  [dim]{source.title} - {source.uri}[/dim]")


async def _toggle_mic(coach: CareerCoach, recorder: MicrophoneRecorder) -> None:
    try:
        clip = recorder.toggle()
    except DeviceError as e:
        console.print(f"[red]{e}[/red]")
        return
    if clip is None:
        console.print("[dim]Gravando... digite /mic para parar.[/dim]")
        return
    with console.status("Transcrevendo áudio..."):
        draft = await coach.transcribe_into_draft(clip)
    _print_status(coach)
    console.print(f"[dim]Rascunho: {draft}[/dim]")
    console.print("[dim]Pressione Enter para enviar o rascunho.[/dim]")


async def _screening_loop(coach: CareerCoach, recorder: MicrophoneRecorder) -> bool:
    """Returns True once the dashboard is reached, False if the user quits."""
    console.print(SCREENING_HELP)
    while True:
        text = await asyncio.to_thread(console.input, "[bold green]> [/bold green]")
        command = text.strip().lower()

        if command == "/sair":
            return False
        if command == "/mic":
            await _toggle_mic(coach, recorder)
            continue
        if command == "/gerar":
            try:
                with console.status(f"{ANALYZE_BUTTON}: compilando currículo e estratégia..."):
                    profile = await coach.generate_analysis()
            except ScreeningTooShortError:
                console.print("[yellow]Converse um pouco mais antes de gerar a análise.[/yellow]")
                continue
            except CareerCoachError:
                _print_status(coach)
                continue
            if profile is not None:
                _render_profile(profile)
                return True
            continue

        message = await coach.send_screening_message(text if text.strip() else None)
        _print_message(message)
        _print_status(coach)


async def _dashboard_loop(coach: CareerCoach, recorder: MicrophoneRecorder) -> None:
    _print_message(coach.consultant.transcript.messages[-1])
    console.print(DASHBOARD_HELP)
    if not coach.market_loaded:
        console.print("[dim]Dados de mercado ainda não carregados: use /mercado.[/dim]")
    while True:
        text = await asyncio.to_thread(console.input, "[bold green]> [/bold green]")
        command = text.strip().lower()

        if command == "/sair":
            return
        if command == "/mic":
            await _toggle_mic(coach, recorder)
        elif command == "/mercado":
            with console.status("Pesquisando mercado..."):
                market = await coach.refresh_market()
            _print_status(coach)
            if market is not None:
                _render_market(coach.profile)
        elif command == "/vagas":
            with console.status("Buscando vagas..."):
                jobs = await coach.search_jobs()
            if not jobs:
                console.print("[yellow]Nenhuma vaga encontrada.[/yellow]")
            for job in jobs:
                console.print(
                    f"  [bold]{job.title}[/bold] - {job.company} ({job.location}) "
                    f"[cyan]{job.fit_score}%[/cyan]\n    [dim]{job.url}[/dim]"
                )
        elif command == "/relatorio":
            with console.status("Gerando relatório..."):
                report = await coach.market_report()
            _print_status(coach)
            if report is not None:
                console.print(Panel(Markdown(report.content), title="Relatório de mercado"))
        elif command == "/ouvir":
            if not await coach.speak_pdi_summary():
                _print_status(coach)
        else:
            message = await coach.send_consultant_message(text if text.strip() else None)
            _print_message(message)
            _print_status(coach)


async def _run_interview(coach: CareerCoach, personal: bool) -> None:
    config = coach.config
    recorder = MicrophoneRecorder(
        sample_rate=config.audio.record_sample_rate,
        channels=config.audio.channels,
    )
    coach.begin()
    try:
        if personal:
            data = _ask_personal_data()
            with console.status("Iniciando triagem..."):
                await coach.submit_personal_details(data)
        else:
            with console.status("Iniciando triagem..."):
                await coach.start_screening()
        _print_message(coach.screening.transcript.messages[-1] if len(coach.screening.transcript) else None)
        _print_status(coach)

        if await _screening_loop(coach, recorder) and coach.stage is AppStage.DASHBOARD:
            await _dashboard_loop(coach, recorder)
    finally:
        if recorder.is_recording:
            recorder.stop()
        coach.shutdown()


@app.command()
def interview(
    personal: bool = typer.Option(True, "--personal/--no-personal", help="Pedir dados pessoais antes da triagem"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Saída detalhada"),
) -> None:
    """Entrevista de triagem seguida do painel com consultor, mercado e vagas."""
    _setup_logging(verbose)
    coach = _build_coach()

    try:
        asyncio.run(_run_interview(coach, personal))
    except (KeyboardInterrupt, EOFError):
        console.print("\n[dim]Sessão encerrada.[/dim]")

    if verbose:
        summary = coach.llm.get_token_summary()
        console.print(f"[dim]Tokens: {summary}[/dim]")


@app.command()
def market(
    role: str = typer.Argument(help="Cargo a pesquisar"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Saída detalhada"),
) -> None:
    """Relatório de mercado para um cargo, com fontes da pesquisa."""
    _setup_logging(verbose)
    coach = _build_coach()
    enricher = MarketEnricher(
        coach.llm,
        country=coach.config.market.country,
        fallback_role=coach.config.market.fallback_role,
    )

    with console.status(f"Pesquisando mercado para {role}..."):
        try:
            report = asyncio.run(enricher.market_report(role=role))
        except CareerCoachError as e:
            console.print(f"[red]Falha na pesquisa: {e}[/red]")
            raise typer.Exit(1)

    console.print(Panel(Markdown(report.content), title=f"Mercado: {role}"))
    for source in report.sources:
        console.print(f"  [dim]{source.title} - {source.uri}[/dim]")

    if verbose:
        console.print(f"[dim]Tokens: {coach.llm.get_token_summary()}[/dim]")


if __name__ == "__main__":
    app()
