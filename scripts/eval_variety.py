#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import json
from collections import Counter
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


def _bootstrap_pythonpath() -> None:
    import sys

    src = _repo_root() / "src"
    if str(src) not in sys.path:
        sys.path.insert(0, str(src))


_bootstrap_pythonpath()

from role_model_matcher.config import get_settings  # noqa: E402
from role_model_matcher.errors import MatcherError  # noqa: E402
from role_model_matcher.workflow.recommendation import RecommendationWorkflow  # noqa: E402


@dataclass
class Sample:
    future: str
    stage: str = ""
    values: str = ""
    strengths: str = ""
    note: str = ""


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Measure how varied role model suggestions are across repeated runs.")
    parser.add_argument(
        "--input",
        default="eval/variety.sample.jsonl",
        help="JSONL file with fields: future, optional stage/values/strengths/note.",
    )
    parser.add_argument("--repeats", type=int, default=3, help="Runs per sample.")
    parser.add_argument(
        "--output-md",
        default="",
        help="Markdown report path. Default: eval/reports/variety_eval_<timestamp>.md",
    )
    parser.add_argument(
        "--output-json",
        default="",
        help="JSON report path. Default: eval/reports/variety_eval_<timestamp>.json",
    )
    parser.add_argument("--limit", type=int, default=0, help="Limit evaluated samples (0 means all).")
    return parser.parse_args()


def load_samples(path: Path, limit: int) -> list[Sample]:
    samples: list[Sample] = []
    with path.open("r", encoding="utf-8") as f:
        for line_no, line in enumerate(f, start=1):
            raw = line.strip()
            if not raw:
                continue
            row = json.loads(raw)
            future = str(row.get("future", "")).strip()
            if not future:
                raise ValueError(f"Invalid sample at line {line_no}: future required")
            samples.append(
                Sample(
                    future=future,
                    stage=str(row.get("stage", "")).strip(),
                    values=str(row.get("values", "")).strip(),
                    strengths=str(row.get("strengths", "")).strip(),
                    note=str(row.get("note", "")).strip(),
                )
            )
            if limit > 0 and len(samples) >= limit:
                break
    if not samples:
        raise ValueError("No samples loaded.")
    return samples


async def collect_runs(samples: list[Sample], repeats: int) -> list[dict[str, Any]]:
    workflow = RecommendationWorkflow(get_settings())
    rows: list[dict[str, Any]] = []
    for index, sample in enumerate(samples):
        for attempt in range(repeats):
            row: dict[str, Any] = {"sample": index, "attempt": attempt, "note": sample.note}
            try:
                result = await workflow.run(
                    sample.future,
                    stage=sample.stage or None,
                    values=sample.values or None,
                    strengths=sample.strengths or None,
                )
            except MatcherError as exc:
                row.update({"error": exc.__class__.__name__, "candidates": [], "matches": []})
            else:
                row.update(
                    {
                        "error": "",
                        "candidates": [candidate.name for candidate in result.candidates],
                        "matches": [match.name for match in result.matches],
                    }
                )
            rows.append(row)
    return rows


def compute_metrics(rows: list[dict[str, Any]]) -> dict[str, Any]:
    all_names: Counter[str] = Counter()
    per_sample: dict[int, Counter[str]] = {}
    candidate_total = 0
    match_total = 0
    errors = 0
    for row in rows:
        if row["error"]:
            errors += 1
        candidate_total += len(row["candidates"])
        match_total += len(row["matches"])
        all_names.update(row["matches"])
        per_sample.setdefault(row["sample"], Counter()).update(row["matches"])

    sample_variety: dict[int, float] = {}
    for sample, names in per_sample.items():
        total = sum(names.values())
        sample_variety[sample] = len(names) / max(total, 1)

    return {
        "runs": len(rows),
        "errors": errors,
        "candidates": candidate_total,
        "matches": match_total,
        "enrichment_rate": match_total / max(candidate_total, 1),
        "distinct_names": len(all_names),
        "top_names": all_names.most_common(10),
        "sample_variety": sample_variety,
    }


def _fmt_pct(x: float) -> str:
    return f"{x * 100:.2f}%"


def build_markdown_report(input_path: str, metrics: dict[str, Any]) -> str:
    lines: list[str] = []
    lines.append("# Variety Eval Report")
    lines.append("")
    lines.append(f"- input: `{input_path}`")
    lines.append(f"- runs: `{metrics['runs']}` errors: `{metrics['errors']}`")
    lines.append(f"- enrichment rate: `{_fmt_pct(metrics['enrichment_rate'])}`")
    lines.append(f"- distinct names: `{metrics['distinct_names']}`")
    lines.append("")
    lines.append("## Most Repeated Names")
    lines.append("")
    lines.append("| name | count |")
    lines.append("|---|---:|")
    for name, count in metrics["top_names"]:
        lines.append(f"| {name} | {count} |")
    lines.append("")
    lines.append("## Per-sample Variety (distinct / total)")
    lines.append("")
    for sample, ratio in sorted(metrics["sample_variety"].items()):
        lines.append(f"- sample `{sample}`: `{_fmt_pct(ratio)}`")
    lines.append("")
    return "\n".join(lines)


def write_report(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


async def main() -> int:
    args = parse_args()
    input_path = Path(args.input)
    samples = load_samples(input_path, args.limit)
    rows = await collect_runs(samples, max(args.repeats, 1))
    metrics = compute_metrics(rows)

    now = datetime.now().strftime("%Y%m%d_%H%M%S")
    md_path = Path(args.output_md) if args.output_md else Path(f"eval/reports/variety_eval_{now}.md")
    json_path = Path(args.output_json) if args.output_json else Path(f"eval/reports/variety_eval_{now}.json")

    write_report(md_path, build_markdown_report(str(input_path), metrics))
    write_report(
        json_path,
        json.dumps({"input": str(input_path), "metrics": metrics, "rows": rows}, ensure_ascii=False, indent=2),
    )

    print(f"[variety-eval] distinct={metrics['distinct_names']} runs={metrics['runs']} errors={metrics['errors']}")
    print(f"[variety-eval] markdown={md_path}")
    print(f"[variety-eval] json={json_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
