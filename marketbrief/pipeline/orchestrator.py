"""Run orchestration for the news and market reports."""

import logging
import time
from pathlib import Path
from typing import Callable, Dict, List, Optional, TypeVar

import pendulum
from rich.panel import Panel
from rich.table import Table

from ..classification import ClassificationService, LLMProvider, MockLLMProvider, OpenAIProvider
from ..config import Config, SourceCatalog
from ..delivery import EmailSender
from ..extraction import default_registry, strip_code_markers
from ..ingestion import BrowserFetcher, PageFetcher, ProxiedHttpFetcher, ProxyProvider, ScratchStore
from ..logs import console
from ..models import HttpProxy
from ..reporting import ReportAssembler
from .market import MarketPipeline
from .ranking import NewsPipeline

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PipelineStage:
    """Timing and outcome of one step of a run."""

    def __init__(self, name: str, description: str):
        self.name = name
        self.description = description
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None
        self.success = False
        self.error: Optional[str] = None
        self.stats: Dict = {}

    def start(self):
        self.start_time = time.time()

    def complete(self, stats: Optional[Dict] = None):
        self.end_time = time.time()
        self.success = True
        if stats:
            self.stats.update(stats)

    def fail(self, error: str):
        self.end_time = time.time()
        self.success = False
        self.error = error

    @property
    def duration(self) -> float:
        """Stage duration in seconds, 0 if it never finished."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


def format_stats(stats: Dict) -> str:
    return ", ".join(f"{value} {key.replace('_', ' ')}" for key, value in stats.items())


class ReportRunner:
    """
    Run the news and market reports end to end.

    Each run starts from empty scratch directories. Whatever happens, the
    browser is closed and the scratch directories are deleted before the
    run returns or raises.
    """

    def __init__(
        self,
        news_pipeline: NewsPipeline,
        market_pipeline: MarketPipeline,
        proxy_provider: ProxyProvider,
        assembler: ReportAssembler,
        sender: Optional[EmailSender],
        browser: PageFetcher,
        scratch: ScratchStore,
        output_dir: Path,
        news_subject: str = "Daily Report",
        market_subject: str = "Daily Jamstockex Report",
    ) -> None:
        self.news_pipeline = news_pipeline
        self.market_pipeline = market_pipeline
        self.proxy_provider = proxy_provider
        self.assembler = assembler
        self.sender = sender
        self.browser = browser
        self.scratch = scratch
        self.output_dir = output_dir
        self.news_subject = news_subject
        self.market_subject = market_subject
        self.stages: List[PipelineStage] = []

    def _run_stage(self, name: str, description: str, fn: Callable[..., T], *args) -> T:
        stage = PipelineStage(name, description)
        self.stages.append(stage)
        logger.info("%s...", description)

        stage.start()
        try:
            result = fn(*args)
        except Exception as e:
            stage.fail(str(e))
            raise
        stage.complete()
        return result

    def _deliver(self, html: str, subject: str, dry_run: bool, filename: str) -> Optional[Path]:
        html = strip_code_markers(html)

        if dry_run:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            path = self.output_dir / f"{filename}-{pendulum.today().to_date_string()}.html"
            path.write_text(html, encoding="utf-8")
            logger.info("Dry run: report written to %s", path)
            return path

        if self.sender is None:
            raise ValueError("Email delivery is not configured")
        self._run_stage("deliver", f"Sending '{subject}'", self.sender.send, html, subject)
        return None

    def _cleanup(self) -> None:
        try:
            self.browser.close()
        finally:
            self.scratch.purge()

    def run_news_report(self, dry_run: bool = False) -> Optional[Path]:
        """
        Rank, scrape and summarize newspaper headlines, then deliver the report.

        Returns:
            Path of the written report for dry runs, None when emailed
        """
        self.stages = []
        start = time.time()
        try:
            self.scratch.reset()

            gathered = self._run_stage(
                "ingest", "Ranking newspaper headlines", self.news_pipeline.gather_articles
            )
            self.stages[-1].stats.update(
                high_priority=len(gathered.high_priority), low_priority=len(gathered.low_priority)
            )

            scraped = self._run_stage(
                "scrape", "Scraping top stories", self.news_pipeline.scrape_top_stories,
                gathered.high_priority,
            )
            self.stages[-1].stats.update(scraped=len(scraped), dropped=len(gathered.high_priority) - len(scraped))

            summarized = self._run_stage(
                "summarize", "Summarizing top stories", self.news_pipeline.summarize, scraped
            )
            self.stages[-1].stats.update(summaries=len(summarized))

            processed = gathered.model_copy(update={"high_priority": summarized})
            html = self._run_stage(
                "assemble", "Assembling news report", self.assembler.assemble_news_report, processed
            )

            return self._deliver(html, self.news_subject, dry_run, "daily-report")
        except Exception as e:
            logger.error("News report failed: %s", e)
            raise
        finally:
            self._cleanup()
            self._print_summary("News report", time.time() - start)

    def run_market_report(self, dry_run: bool = False) -> Optional[Path]:
        """
        Collect exchange announcements and stock quotes, then deliver the report.

        Returns:
            Path of the written report for dry runs, None when emailed
        """
        self.stages = []
        start = time.time()
        try:
            self.scratch.reset()

            proxy: HttpProxy = self._run_stage(
                "proxy", "Acquiring proxy", self.proxy_provider.acquire_proxy
            )

            links = self._run_stage(
                "exchange", "Fetching stock exchange posts",
                self.market_pipeline.fetch_exchange_links, proxy,
            )
            self.stages[-1].stats.update(links=len(links))

            stocks = self._run_stage(
                "stocks", "Fetching stock summaries", self.market_pipeline.fetch_stock_summaries, proxy
            )
            self.stages[-1].stats.update(stocks=len(stocks))

            html = self._run_stage(
                "assemble", "Assembling market report",
                self.assembler.assemble_market_report, links, stocks,
            )

            return self._deliver(html, self.market_subject, dry_run, "daily-report-market")
        except Exception as e:
            logger.error("Market report failed: %s", e)
            raise
        finally:
            self._cleanup()
            self._print_summary("Market report", time.time() - start)

    def _print_summary(self, title: str, total_duration: float) -> None:
        table = Table(title=f"{title} Summary")
        table.add_column("Stage", style="cyan")
        table.add_column("Status", style="bold")
        table.add_column("Duration", style="yellow")
        table.add_column("Details", style="dim")

        for stage in self.stages:
            status = "[green]OK[/green]" if stage.success else "[red]FAILED[/red]"
            duration = f"{stage.duration:.1f}s" if stage.duration > 0 else "-"
            details = format_stats(stage.stats) if stage.success else (stage.error or "Failed")
            table.add_row(stage.name.title(), status, duration, details)

        console.print(table)

        if self.stages and all(stage.success for stage in self.stages):
            console.print(Panel(
                f"[green]{title} completed[/green]\nDuration: {total_duration:.1f} seconds",
                style="green",
            ))
        else:
            failed = [stage.name for stage in self.stages if not stage.success]
            console.print(Panel(
                f"[red]{title} failed[/red]\n"
                f"Failed stages: {', '.join(failed) or 'setup'}\n"
                f"Duration: {total_duration:.1f} seconds\n"
                f"Check logs for details.",
                style="red",
            ))


def get_llm_provider(config: Config, allow_mock: bool = False) -> LLMProvider:
    """
    Configured LLM provider.

    The mock provider is used when configured, or in place of OpenAI when
    ``allow_mock`` is set and no key is available.

    Raises:
        ValueError: unknown provider, or no OpenAI key for a real run
    """
    llm_config = config.get_llm_config()
    provider = llm_config.get("provider")

    if provider == "mock":
        return MockLLMProvider()

    if provider != "openai":
        raise ValueError(f"Unknown LLM provider: {provider}")

    api_key = llm_config.get("api_key")
    if not api_key:
        if not allow_mock:
            raise ValueError("No OpenAI API key found. Set OPENAI_API_KEY.")
        console.print("[yellow]Warning: No OpenAI API key found. Using mock LLM provider.[/yellow]")
        return MockLLMProvider()

    return OpenAIProvider(
        api_key=api_key,
        model=llm_config.get("model", "gpt-4o-mini"),
        base_url=llm_config.get("base_url"),
    )


def build_sender(config: Config) -> Optional[EmailSender]:
    email = config.config.email
    if not email.recipients:
        return None
    return EmailSender(
        host=email.smtp_host,
        port=email.smtp_port,
        username=email.username,
        password=config.get_email_password(),
        sender=email.sender,
        recipients=email.recipients,
        max_retries=email.max_retries,
    )


def build_runner(config: Config, allow_mock_llm: bool = False) -> ReportRunner:
    """
    Wire the concrete components described by the configuration.

    ``allow_mock_llm`` lets a run without an OpenAI key go ahead with the
    mock provider. Only dry runs and the market report, which never calls
    the LLM, set it.
    """
    settings = config.config
    catalog = SourceCatalog(config.catalog)
    scratch = ScratchStore(config.page_content_dir, config.scraped_articles_dir)
    cleaners = default_registry()
    browser = BrowserFetcher(settings.browser)

    classifier = ClassificationService(
        provider=get_llm_provider(config, allow_mock=allow_mock_llm),
        catalog=catalog,
        max_retries=settings.llm.max_retries,
        retry_wait_minutes=settings.llm.retry_wait_minutes,
    )

    news_pipeline = NewsPipeline(
        catalog=catalog,
        classifier=classifier,
        fetcher=browser,
        cleaners=cleaners,
        scratch=scratch,
        high_priority_threshold=settings.pipeline.high_priority_threshold,
        frequency=settings.pipeline.frequency,
    )

    def proxied_fetcher(proxy: HttpProxy) -> ProxiedHttpFetcher:
        return ProxiedHttpFetcher(
            proxy,
            timeout=settings.pipeline.http_timeout,
            user_agent=settings.browser.user_agent,
        )

    market_pipeline = MarketPipeline(
        catalog=catalog,
        cleaners=cleaners,
        scratch=scratch,
        fetcher_factory=proxied_fetcher,
        stock_fetch_delay_seconds=settings.pipeline.stock_fetch_delay_seconds,
        frequency=settings.pipeline.frequency,
    )

    proxy_provider = ProxyProvider(
        api_url=settings.proxy.api_url,
        api_token=config.get_proxy_token(),
        timeout=settings.proxy.timeout,
    )

    return ReportRunner(
        news_pipeline=news_pipeline,
        market_pipeline=market_pipeline,
        proxy_provider=proxy_provider,
        assembler=ReportAssembler(scratch),
        sender=build_sender(config),
        browser=browser,
        scratch=scratch,
        output_dir=config.workspace_root / "reports",
        news_subject=settings.email.news_subject,
        market_subject=settings.email.market_subject,
    )
