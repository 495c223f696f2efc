from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from jinja2 import Environment, select_autoescape

from .gate import GateDecision
from .types import EvaluationReport, LineKind


env = Environment(autoescape=select_autoescape(["html", "xml"]))

_SECTION_TITLES = {
    LineKind.OUTDATED: "Outdated dependencies",
    LineKind.TOOL: "Build tool",
    LineKind.UNRESOLVED: "Unresolved dependencies",
}


def _verdict(report: EvaluationReport, decision: Optional[GateDecision]) -> str:
    if decision is None:
        return "FAIL" if report.should_fail else "PASS"
    if decision.exit_non_zero:
        return "FAIL"
    if report.should_fail:
        return f"PASS ({decision.mode.value}: updates found but not enforced)"
    return "PASS"


def _sections(report: EvaluationReport) -> list[dict]:
    sections = []
    for kind, title in _SECTION_TITLES.items():
        entries = [entry for entry in report.entries if entry.kind is kind]
        if entries:
            sections.append({"kind": kind.value, "title": title, "entries": entries})
    return sections


def render_text(report: EvaluationReport, decision: Optional[GateDecision] = None) -> str:
    lines = list(report.lines)
    if not lines:
        lines.append("All dependencies are up to date.")
    lines.append(f"Verdict: {_verdict(report, decision)}")
    return "\n".join(lines)


def render_json(report: EvaluationReport, decision: Optional[GateDecision] = None) -> str:
    payload = report.as_dict()
    payload["verdict"] = _verdict(report, decision)
    if decision is not None:
        payload["gate"] = decision.as_dict()
    return json.dumps(payload, indent=2)


def render_markdown(report: EvaluationReport, decision: Optional[GateDecision] = None) -> str:
    lines = ["# Dependency Freshness Report", "", f"Verdict: **{_verdict(report, decision)}**"]
    if decision is not None:
        lines.append(f"Enforcement: {decision.mode.value}")

    sections = _sections(report)
    if not sections:
        lines.append("\nAll dependencies are up to date.")
    for section in sections:
        lines.append(f"\n## {section['title']}\n")
        for entry in section["entries"]:
            lines.append(f"- {entry.message}")

    if report.exempted:
        lines.append("\n## Exempted\n")
        lines.extend(f"- `{coordinate}`" for coordinate in report.exempted)
    return "\n".join(lines)


def render_html(report: EvaluationReport, decision: Optional[GateDecision] = None) -> str:
    template = env.from_string(
        """
<!doctype html>
<html lang=\"en\">
<head>
  <meta charset=\"utf-8\" />
  <title>Dependency Freshness Report</title>
  <style>
    body { font-family: Arial, sans-serif; margin: 2rem; }
    h1, h2 { color: #1f2937; }
    .badge { display: inline-block; padding: 0.35rem 0.6rem; border-radius: 0.4rem; font-weight: 600; }
    .badge.good { background: #d1fae5; color: #065f46; }
    .badge.bad { background: #fee2e2; color: #991b1b; }
    li.unresolved { color: #6b7280; }
  </style>
</head>
<body>
  <h1>Dependency Freshness Report</h1>
  <p>Verdict: <span class=\"badge {{ badge_class }}\">{{ verdict }}</span></p>
  {% if mode %}<p>Enforcement: {{ mode }}</p>{% endif %}
  {% for section in sections %}
  <section>
    <h2>{{ section.title }}</h2>
    <ul>
      {% for entry in section.entries %}
      <li class=\"{{ section.kind }}\">{{ entry.message }}</li>
      {% endfor %}
    </ul>
  </section>
  {% else %}
  <p>All dependencies are up to date.</p>
  {% endfor %}
  {% if exempted %}
  <section>
    <h2>Exempted</h2>
    <ul>{% for coordinate in exempted %}<li><code>{{ coordinate }}</code></li>{% endfor %}</ul>
  </section>
  {% endif %}
</body>
</html>
"""
    )
    verdict = _verdict(report, decision)
    return template.render(
        verdict=verdict,
        badge_class="bad" if verdict == "FAIL" else "good",
        mode=decision.mode.value if decision else None,
        sections=_sections(report),
        exempted=list(report.exempted),
    )


def render_report(report: EvaluationReport, fmt: str, decision: Optional[GateDecision] = None) -> str:
    fmt = fmt.lower()
    if fmt == "json":
        return render_json(report, decision)
    if fmt in {"md", "markdown"}:
        return render_markdown(report, decision)
    if fmt == "html":
        return render_html(report, decision)
    if fmt == "text":
        return render_text(report, decision)
    raise ValueError(f"Unsupported format: {fmt}")


def write_report(
    report: EvaluationReport,
    fmt: str,
    destination: Path | None = None,
    decision: Optional[GateDecision] = None,
) -> str:
    content = render_report(report, fmt, decision)
    if destination:
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(content)
    return content


def write_github_check(path: Path, report: EvaluationReport, decision: GateDecision) -> None:
    payload = {
        "conclusion": "failure" if decision.exit_non_zero else "success",
        "summary": "; ".join(report.lines) if report.entries else "All dependencies are up to date.",
        "details": report.as_dict(),
        "gate": decision.as_dict(),
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2))
