"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import json
import logging
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from bhasha_mitra.clients.gemini_client import GeminiClient
from bhasha_mitra.config import load_config
from bhasha_mitra.document.host import TextDocumentHost
from bhasha_mitra.document.sync import DocumentSync
from bhasha_mitra.models.suggestion import Category
from bhasha_mitra.pipeline.normalizer import ResponseNormalizer
from bhasha_mitra.pipeline.orchestrator import (
    AnalysisOrchestrator,
    AnalysisRunResult,
    AnalysisSelection,
)
from bhasha_mitra.pipeline.prompts import DOC_TYPE_CONFIG, STYLE_NAMES, TONE_NAMES
from bhasha_mitra.pipeline.store import VIEW_FILTERS, SuggestionStore
from bhasha_mitra.settings import SettingsStore

app = typer.Typer(
    name="bhasha-mitra",
    help="বাংলা লেখার বানান, যতিচিহ্ন, রীতি ও টোন বিশ্লেষণ",
    no_args_is_help=True,
)
console = Console()

SECTION_TITLES = {
    Category.SPELLING: "বানান",
    Category.TONE: "টোন",
    Category.STYLE: "রীতি",
    Category.MIXING: "সাধু-চলিত মিশ্রণ",
    Category.PUNCTUATION: "যতিচিহ্ন",
    Category.EUPHONY: "শ্রুতিমাধুর্য",
}


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def check(
    file: Path = typer.Argument(help="বিশ্লেষণ করার টেক্সট ফাইল"),
    tone: str = typer.Option("", "--tone", help="লক্ষ্য টোন (formal, informal, ...)"),
    style: str = typer.Option("none", "--style", help="লক্ষ্য রীতি: none | sadhu | cholito"),
    view: str = typer.Option("all", "--view", help="দেখানোর ফিল্টার: all | spelling | punctuation"),
    doc_type: str = typer.Option(None, "--doc-type", help="ডকুমেন্টের ধরন (সেটিংস ওভাররাইড)"),
    as_json: bool = typer.Option(False, "--json", help="ফলাফল JSON আকারে দেখান"),
    apply: bool = typer.Option(False, "--apply", help="প্রতিটি বানান সংশোধনের প্রথম প্রস্তাব প্রয়োগ করুন"),
    output: Path = typer.Option(None, "--output", "-o", help="--apply এর পর সংশোধিত টেক্সট লেখার পথ"),
    config_path: Path = typer.Option(None, "--config", help="config.yaml পথ"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="বিস্তারিত লগ"),
) -> None:
    """একটি টেক্সট ফাইল বিশ্লেষণ করে সাজেশন দেখায়।"""
    _setup_logging(verbose)
    if not file.exists():
        console.print(f"[red]ফাইল পাওয়া যায়নি: {file}[/red]")
        raise typer.Exit(1)
    if tone and tone not in TONE_NAMES:
        console.print(f"[red]অজানা টোন: {tone}[/red]")
        raise typer.Exit(1)
    if style not in STYLE_NAMES:
        console.print(f"[red]অজানা রীতি: {style}[/red]")
        raise typer.Exit(1)
    if view not in VIEW_FILTERS:
        console.print(f"[red]অজানা ফিল্টার: {view}[/red]")
        raise typer.Exit(1)

    config = load_config(config_path)
    settings_store = SettingsStore()
    settings = settings_store.current
    if not settings.api_key and os.environ.get("GEMINI_API_KEY"):
        settings = settings_store.update(api_key=os.environ["GEMINI_API_KEY"])
    if doc_type:
        settings = settings_store.update(doc_type=doc_type)

    host = TextDocumentHost(file.read_text(encoding="utf-8"))
    sync = DocumentSync(host, chunk_size=config.pipeline.highlight_chunk_size)
    store = SuggestionStore(sync)

    async def _run() -> AnalysisRunResult:
        client = GeminiClient(
            settings.api_key,
            model=settings.model,
            base_url=config.llm.base_url,
            timeout=config.llm.timeout,
            max_retries=config.llm.max_retries,
            backoff_base=config.llm.backoff_base,
            retry_on_parse_failure=config.llm.retry_on_parse_failure,
        )
        async with client:
            orchestrator = AnalysisOrchestrator(
                client,
                store,
                sync,
                settings,
                normalizer=ResponseNormalizer(config.thresholds.as_dict()),
                stagger_offsets=config.pipeline.stagger_offsets,
                hover_delay=config.pipeline.hover_debounce,
            )
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                console=console,
                transient=True,
            ) as progress:
                task = progress.add_task("বিশ্লেষণ করা হচ্ছে...", total=None)

                def on_phase(phase: str, detail: str) -> None:
                    progress.update(task, description=detail)

                result = await orchestrator.check(
                    AnalysisSelection(tone=tone, style=style), on_phase=on_phase
                )

            if apply and result.ok:
                applied = 0
                for item in list(store.spelling):
                    if item.replacement_candidates and await orchestrator.accept(
                        item, item.replacement_candidates[0]
                    ):
                        applied += 1
                console.print(f"[green]{applied}টি সংশোধন প্রয়োগ করা হয়েছে[/green]")
        return result

    result = asyncio.run(_run())

    if as_json:
        console.print_json(json.dumps(store.snapshot(view), ensure_ascii=False))
    else:
        _print_report(store, view)

    if result.message:
        color = "green" if result.message.type == "success" else "red"
        console.print(f"[{color}]{result.message.text}[/{color}]")

    if apply and result.ok:
        target = output or file
        target.write_text(host.body, encoding="utf-8")
        console.print(f"[green]সংরক্ষিত: {target}[/green]")

    if result.message and result.message.type == "error" and store.total_count == 0:
        raise typer.Exit(1)


def _print_report(store: SuggestionStore, view: str) -> None:
    stats = store.stats
    console.print(
        Panel(
            f"মোট শব্দ: {stats.total_words} | ভুল: {stats.error_count} | "
            f"[bold]নির্ভুলতা: {stats.accuracy}%[/bold]",
            title="ফলাফল",
        )
    )
    for category in store.visible_categories(view):
        items = store.items(category)
        if not items:
            continue
        table = Table(title=f"{SECTION_TITLES[category]} ({len(items)})", show_lines=False)
        table.add_column("লেখা", style="red")
        table.add_column("প্রস্তাব", style="green")
        table.add_column("কারণ", style="dim")
        table.add_column("আস্থা", justify="right")
        for item in items:
            reason = (
                getattr(item, "explanation", None)
                or getattr(item, "reason", None)
                or getattr(item, "type", None)
                or ""
            )
            table.add_row(
                item.identity,
                ", ".join(item.replacement_candidates),
                reason,
                f"{item.confidence_score:.2f}",
            )
        console.print(table)

    if view == "all" and store.mixing:
        console.print(
            f"[magenta]মিশ্রণ শনাক্ত হয়েছে, প্রস্তাবিত রীতি: {store.mixing.recommended_style or '-'}[/magenta]"
        )
    if view == "all" and store.content:
        content = store.content
        body = content.description or ""
        if content.missing_elements:
            body += "\nঅনুপস্থিত: " + ", ".join(content.missing_elements)
        if content.suggestions:
            body += "\nপরামর্শ: " + ", ".join(content.suggestions)
        console.print(Panel(body.strip(), title=f"কনটেন্ট: {content.content_type}"))


@app.command()
def settings(
    api_key: str = typer.Option(None, "--api-key", help="Gemini API key"),
    model: str = typer.Option(None, "--model", help="মডেল আইডি"),
    doc_type: str = typer.Option(None, "--doc-type", help="ডকুমেন্টের ধরন"),
) -> None:
    """সেটিংস দেখায়; কোনো অপশন দিলে পরিবর্তন করে সংরক্ষণ করে।"""
    store = SettingsStore()
    if doc_type and doc_type not in DOC_TYPE_CONFIG:
        console.print(f"[red]অজানা ডকুমেন্টের ধরন: {doc_type}[/red]")
        raise typer.Exit(1)

    changes = {
        k: v
        for k, v in {"api_key": api_key, "model": model, "doc_type": doc_type}.items()
        if v is not None
    }
    if changes:
        store.update(**changes)
        store.save()
        console.print("[green]সেটিংস সংরক্ষিত হয়েছে! ✓[/green]")

    current = store.current
    masked = f"{current.api_key[:4]}…" if current.api_key else "[dim](নেই)[/dim]"
    console.print(f"API Key: {masked}")
    console.print(f"মডেল: {current.model}")
    console.print(f"ডকুমেন্টের ধরন: {current.doc_type}")


@app.command()
def options() -> None:
    """উপলব্ধ ডকুমেন্টের ধরন, টোন ও রীতি দেখায়।"""
    table = Table(title="ডকুমেন্টের ধরন")
    table.add_column("id", style="cyan")
    table.add_column("নাম")
    table.add_column("বিবরণ", style="dim")
    for key, cfg in DOC_TYPE_CONFIG.items():
        table.add_row(key, cfg.label, cfg.description)
    console.print(table)

    console.print("\n[bold]টোন:[/bold] " + ", ".join(f"{k} ({v})" for k, v in TONE_NAMES.items()))
    console.print("[bold]রীতি:[/bold] " + ", ".join(f"{k} ({v})" for k, v in STYLE_NAMES.items()))


if __name__ == "__main__":
    app()
