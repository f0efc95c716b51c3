"""
Command-line interface for the exam screenshot reviewer.
시험 문제 스크린샷 분석기의 CLI 인터페이스입니다.
"""

import argparse
import logging
import sys
import tempfile
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .analyzer import HEAT_COLOR_HEX
from .config import get_settings
from .errors import ArchiveError, NoImagesError, OCRError, VocabularyError
from .export import format_markdown
from .pipeline import ReviewPipeline
from .schema import ReviewReport
from .storage import save_report

console = Console()


def format_summary(report: ReviewReport) -> None:
    """Display overall stats, category heatmap and recommendations."""
    summary = report.summary

    table = Table(title=f"Review Results - {report.processed_count} questions ({report.engine})")
    table.add_column("Metric", style="cyan", no_wrap=True)
    table.add_column("Value", style="magenta")
    table.add_row("Accuracy", report.quick_stats.accuracy)
    table.add_row("Correct", str(summary.correct_count))
    table.add_row("Incorrect", str(summary.incorrect_count))
    table.add_row("Categories Seen", str(report.quick_stats.total_categories))
    table.add_row("Weak Areas", str(report.quick_stats.weak_area_count))
    console.print(table)

    if report.heatmap:
        heat = Table(title="Category Heatmap")
        heat.add_column("Category", style="cyan")
        heat.add_column("Questions", justify="right")
        heat.add_column("Accuracy", justify="right")
        heat.add_column("Status")
        for item in report.heatmap:
            color = HEAT_COLOR_HEX[item.color]
            heat.add_row(
                item.category,
                str(item.total),
                f"{item.accuracy:.1f}%",
                f"[{color}]{item.status.upper()}[/]",
            )
        console.print(heat)

    if summary.domain_breakdown:
        domains = Table(title="Domain Breakdown")
        domains.add_column("Domain", style="cyan")
        domains.add_column("Correct", justify="right", style="green")
        domains.add_column("Incorrect", justify="right", style="red")
        domains.add_column("Accuracy", justify="right")
        for name, data in summary.domain_breakdown.items():
            domains.add_row(name, str(data.correct), str(data.incorrect), f"{data.accuracy:.1f}%")
        console.print(domains)

    if summary.top_keywords:
        keywords = ", ".join(f"{k.keyword} ({k.count})" for k in summary.top_keywords)
        console.print(Panel(keywords, title="Top Keywords", border_style="blue"))

    if summary.recommendations:
        console.print(Panel(
            "\n".join(f"- {r}" for r in summary.recommendations),
            title="Recommendations",
            border_style="yellow",
        ))


def main():
    """Main CLI entry point"""
    parser = argparse.ArgumentParser(
        description="OCR a ZIP (or folder) of exam-question screenshots and summarize weak areas"
    )

    parser.add_argument(
        "input_path",
        type=str,
        nargs="?",
        help="ZIP archive or directory of screenshots"
    )

    parser.add_argument(
        "-e", "--engine",
        type=str,
        default=None,
        help="OCR engine (default: OCR_ENGINE env var or tesseract)"
    )

    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Results directory (default: RESULTS_DIR env var or results/)"
    )

    parser.add_argument(
        "--no-save",
        action="store_true",
        help="Do not write a results JSON file"
    )

    parser.add_argument(
        "--export",
        type=str,
        default=None,
        help="Also write a Markdown review of every question to this file"
    )

    parser.add_argument(
        "--list-ocr",
        action="store_true",
        help="List OCR engines and exit"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log per-image progress"
    )

    args = parser.parse_args()
    settings = get_settings()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.LOG_LEVEL,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.list_ocr:
        from .ocr import list_available_engines

        table = Table(title="OCR Engines")
        table.add_column("Engine", style="cyan")
        table.add_column("Available", style="green")

        for name, info in list_available_engines().items():
            avail = "[green]Yes[/green]" if info["available"] else "[red]No[/red]"
            table.add_row(name, avail)

        console.print(table)
        console.print("\n[dim]Install:[/dim]")
        console.print("  tesseract: pip install pytesseract (plus the tesseract binary)")
        console.print("  easyocr:   pip install easyocr")
        console.print("  paddleocr: pip install paddleocr")
        return

    if not args.input_path:
        console.print("[red]Error:[/red] input_path is required (unless using --list-ocr)")
        sys.exit(1)

    input_path = Path(args.input_path)
    if not input_path.exists():
        console.print(f"[red]Error:[/red] Not found: {input_path}")
        sys.exit(1)

    try:
        pipeline = ReviewPipeline(engine_name=args.engine)
        console.print(f"[blue]Processing {input_path.name} with {pipeline.engine_name}...[/blue]")
        if input_path.is_dir():
            report = pipeline.run_directory(input_path)
        else:
            with tempfile.TemporaryDirectory(prefix="extracted-") as work_dir:
                report = pipeline.run_archive(input_path, work_dir)
    except (ArchiveError, NoImagesError, OCRError, VocabularyError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    format_summary(report)

    if not args.no_save:
        path = save_report(report, args.output or settings.RESULTS_DIR)
        console.print(f"[green]V[/green] Results saved to {path}")

    if args.export:
        Path(args.export).write_text(format_markdown(report.questions), encoding="utf-8")
        console.print(f"[green]V[/green] Markdown review written to {args.export}")


if __name__ == "__main__":
    main()
