#!/usr/bin/env python3

import argparse
import asyncio
import html
import json
import sys
from datetime import datetime
from pathlib import Path

from runner import Outcome, order_scenarios, run_suite, suite_succeeded
from scenarios import select_scenarios
from session import WAIT_STRATEGIES, DriverConfig


def write_results_json(summary: dict, json_path: Path):
    payload = {**summary, "tests": [r.to_dict() for r in summary.get("tests", [])]}
    with open(json_path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)


def write_html_report(summary: dict, html_path: Path):
    tests = summary.get("tests", [])
    page = f"""
<html><head><title>selenium.dev Suite Report</title>
<style>
body {{ font-family: Arial, sans-serif; padding: 20px; }}
.summary {{ margin-bottom: 16px; }}
.pass {{ color: #0a7b44; }}
.fail {{ color: #b00020; }}
.error {{ color: #8a4b00; }}
pre {{ background: #f6f8fa; padding: 12px; border-radius: 6px; overflow: auto; }}
</style>
</head><body>
  <h1>selenium.dev Suite Report</h1>
  <div class="summary">
    <strong>Total:</strong> {summary.get('total', 0)} &nbsp; <strong class="pass">Passed:</strong> {summary.get('passed', 0)} &nbsp; <strong class="fail">Failed:</strong> {summary.get('failed', 0)} &nbsp; <strong class="error">Errored:</strong> {summary.get('errored', 0)}
  </div>
  <hr />
  {''.join(render_result(r) for r in tests)}
</body></html>
"""
    with open(html_path, "w", encoding="utf-8") as f:
        f.write(page)


def render_result(result) -> str:
    status_class = {Outcome.PASSED: "pass", Outcome.FAILED: "fail"}.get(result.outcome, "error")
    error_block = f"<pre>{html.escape(result.error_kind)}: {html.escape(result.error)}</pre>" if result.error else ""
    lifecycle = " → ".join(s.value for s in result.lifecycle)
    return f"""
  <section>
    <h3 class="{status_class}">{html.escape(result.name)} — {result.outcome.value.upper()}</h3>
    <p>{html.escape(result.description)} ({result.duration:.1f}s)</p>
    <details>
      <summary>Lifecycle</summary>
      <pre>{lifecycle}</pre>
    </details>
    {error_block}
  </section>
  <hr />
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="End-to-end checks of the selenium.dev documentation site")
    parser.add_argument("-k", "--only", help="Run only scenarios whose name or description contains this text")
    parser.add_argument("--list", action="store_true", help="List scenarios and exit")
    parser.add_argument("--headful", action="store_true", help="Run browser headful for debugging")
    parser.add_argument("--channel", help="Browser channel to launch, e.g. chrome or msedge (default: bundled chromium)")
    parser.add_argument("--wait-strategy", choices=WAIT_STRATEGIES,
                        help="How to wait for search results: fixed 1s pause or polling for the element")
    parser.add_argument("--scenario-timeout", type=float, help="Abort a scenario after this many seconds")
    parser.add_argument("--shuffle", action="store_true", help="Run scenarios in random order")
    parser.add_argument("--seed", type=int, help="Seed for --shuffle")
    parser.add_argument("--report-dir", help="Write results.json and report.html into a timestamped run folder here")
    parser.add_argument("--verbose", action="store_true", help="Print every driver step")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    scenarios = select_scenarios(args.only)
    if args.list:
        for s in scenarios:
            print(f"{s.name:22} {s.description}")
        return 0
    if not scenarios:
        print(f"✖ No scenarios match '{args.only}'")
        return 2

    config = DriverConfig.from_env(headless=not args.headful, channel=args.channel, wait_strategy=args.wait_strategy)
    scenarios = order_scenarios(scenarios, shuffle=args.shuffle, seed=args.seed)
    if args.verbose:
        print(f"🔧 Wait strategy: {config.wait_strategy}; order: {', '.join(s.name for s in scenarios)}")
        if config.wait_strategy == "pause":
            print(f"⚠️  Search results are awaited with a fixed {config.pause_seconds:g}s pause; this is flaky on slow connections")

    print(f"🏃 Running {len(scenarios)} scenario(s) with Playwright...")
    summary = asyncio.run(run_suite(scenarios, config, verbose=args.verbose, timeout=args.scenario_timeout))

    if args.report_dir:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        run_dir = Path(args.report_dir) / f"run_{timestamp}"
        run_dir.mkdir(parents=True, exist_ok=True)
        results_path = run_dir / "results.json"
        write_results_json(summary, results_path)
        print(f"📊 Results written: {results_path}")
        report_path = run_dir / "report.html"
        write_html_report(summary, report_path)
        print(f"📝 HTML report: {report_path}")

    print(f"✅ Done. Total: {summary['total']}, Passed: {summary['passed']}, Failed: {summary['failed']}, "
          f"Errored: {summary['errored']}, Not run: {summary['not_run']}")
    return 0 if suite_succeeded(summary) else 1


def cli():
    sys.exit(main())


if __name__ == "__main__":
    cli()
