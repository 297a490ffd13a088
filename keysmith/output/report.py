"""
Keysmith Report Generator
==========================

Writes HTML and JSON reports for any :class:`shared.models.ScanResult`,
and the password export file.

The HTML report uses inline CSS so it renders without external assets.
The JSON report is a structured dump suitable for scripts and CI jobs.

Password export format::

    {
      "passwords": ["...", "..."],
      "exportDate": "2024-05-01T12:00:00+00:00",
      "generator": "Keysmith Password Generator & Strength Checker"
    }
"""

from __future__ import annotations

import html
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Sequence

from shared.models import ScanResult

EXPORT_GENERATOR_NAME = "Keysmith Password Generator & Strength Checker"
REPORT_VERSION = "1.0.0"


# ===================================================================== #
#  HTML Template
# ===================================================================== #

_HTML_TEMPLATE = """\
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Keysmith Report - {title}</title>
    <style>
        :root {{
            --bg-primary: #0d1117;
            --bg-secondary: #161b22;
            --bg-tertiary: #21262d;
            --text-primary: #c9d1d9;
            --text-secondary: #8b949e;
            --accent-cyan: #58a6ff;
            --accent-green: #3fb950;
            --accent-yellow: #d29922;
            --accent-red: #f85149;
            --accent-purple: #bc8cff;
            --border: #30363d;
        }}
        * {{ margin: 0; padding: 0; box-sizing: border-box; }}
        body {{
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Helvetica, Arial, sans-serif;
            background: var(--bg-primary);
            color: var(--text-primary);
            line-height: 1.6;
            padding: 2rem;
        }}
        .container {{ max-width: 1100px; margin: 0 auto; }}
        .header {{
            text-align: center;
            padding: 2rem;
            border: 1px solid var(--accent-cyan);
            border-radius: 8px;
            margin-bottom: 2rem;
            background: var(--bg-secondary);
        }}
        .header h1 {{ color: var(--accent-cyan); font-size: 2rem; }}
        .header .subtitle {{ color: var(--text-secondary); font-size: 0.9rem; }}
        .section {{
            background: var(--bg-secondary);
            border: 1px solid var(--border);
            border-radius: 8px;
            padding: 1.5rem;
            margin-bottom: 1.5rem;
        }}
        .section h2 {{
            color: var(--accent-purple);
            font-size: 1.4rem;
            margin-bottom: 1rem;
            padding-bottom: 0.5rem;
            border-bottom: 1px solid var(--border);
        }}
        table {{ width: 100%; border-collapse: collapse; margin: 1rem 0; }}
        th, td {{ padding: 0.75rem 1rem; text-align: left; border: 1px solid var(--border); }}
        th {{ background: var(--bg-tertiary); color: var(--accent-cyan); font-weight: 600; }}
        .badge {{
            display: inline-block;
            padding: 0.25rem 0.75rem;
            border-radius: 4px;
            font-weight: 700;
            font-size: 0.85rem;
        }}
        .finding {{
            padding: 1rem;
            margin: 0.5rem 0;
            border-left: 4px solid var(--border);
            background: var(--bg-tertiary);
            border-radius: 0 4px 4px 0;
        }}
        .finding h3 {{ font-size: 1rem; margin-bottom: 0.5rem; }}
        .finding p {{ color: var(--text-secondary); font-size: 0.9rem; }}
        .severity-critical {{ border-left-color: var(--accent-red); }}
        .severity-high {{ border-left-color: #ff7b72; }}
        .severity-medium {{ border-left-color: var(--accent-yellow); }}
        .severity-low {{ border-left-color: var(--accent-cyan); }}
        .severity-info {{ border-left-color: var(--accent-green); }}
        .severity-critical .badge {{ background: rgba(248, 81, 73, 0.4); color: #ff7b72; }}
        .severity-high .badge {{ background: rgba(248, 81, 73, 0.2); color: var(--accent-red); }}
        .severity-medium .badge {{ background: rgba(210, 153, 34, 0.2); color: var(--accent-yellow); }}
        .severity-low .badge {{ background: rgba(88, 166, 255, 0.2); color: var(--accent-cyan); }}
        .severity-info .badge {{ background: rgba(63, 185, 80, 0.2); color: var(--accent-green); }}
        pre {{
            background: var(--bg-tertiary);
            padding: 1rem;
            border-radius: 4px;
            overflow-x: auto;
            font-size: 0.85rem;
            color: var(--text-secondary);
        }}
        .footer {{
            text-align: center;
            padding: 1.5rem;
            color: var(--text-secondary);
            font-size: 0.8rem;
            border-top: 1px solid var(--border);
            margin-top: 2rem;
        }}
    </style>
</head>
<body>
    <div class="container">
        <div class="header">
            <h1>Keysmith</h1>
            <div class="subtitle">
                Password Report | {target}<br>
                Generated: {timestamp}
            </div>
        </div>

        <div class="section">
            <h2>Summary</h2>
            <p>{summary}</p>
            <table>
                <tr>
                    <th>Tool</th><td>{tool}</td>
                    <th>Target</th><td>{target}</td>
                </tr>
                <tr>
                    <th>Duration</th><td>{duration}</td>
                    <th>Findings</th><td>{finding_count}</td>
                </tr>
            </table>
        </div>

        <div class="section">
            <h2>Findings</h2>
            {findings_html}
        </div>

        {metadata_section}

        <div class="footer">
            Keysmith v{version} | Password Generator &amp; Strength Checker<br>
            Report generated {timestamp}
        </div>
    </div>
</body>
</html>
"""


class KeysmithReportGenerator:
    """Generates HTML and JSON reports and password export files.

    Usage::

        generator = KeysmithReportGenerator()
        generator.generate_html(scan_result, Path("report.html"))
        generator.generate_json(scan_result, Path("report.json"))
        generator.export_passwords(["pw1", "pw2"], Path("passwords.json"))
    """

    def generate_html(
        self,
        result: ScanResult,
        output_path: Path,
        title: Optional[str] = None,
    ) -> Path:
        """Write an HTML report for *result* and return its path."""
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")
        duration = result.duration_seconds
        html_content = _HTML_TEMPLATE.format(
            title=html.escape(title or result.target),
            target=html.escape(result.target),
            timestamp=timestamp,
            summary=html.escape(result.summary),
            tool=html.escape(result.tool_name),
            duration=f"{duration:.3f}s" if duration is not None else "n/a",
            finding_count=result.finding_count,
            findings_html=self._build_findings_html(result),
            metadata_section=self._build_metadata_section(result),
            version=REPORT_VERSION,
        )

        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(html_content, encoding="utf-8")
        return output_path

    def generate_json(self, result: ScanResult, output_path: Path) -> Path:
        """Write a JSON report for *result* and return its path."""
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(
            json.dumps(self.to_dict(result), indent=2, ensure_ascii=False, default=str),
            encoding="utf-8",
        )
        return output_path

    @staticmethod
    def to_dict(result: ScanResult) -> dict[str, Any]:
        """Structured report payload shared by file and stdout JSON output."""
        return {
            "report_metadata": {
                "generated_at": datetime.now(timezone.utc).isoformat(),
                "tool": result.tool_name,
                "target": result.target,
                "version": REPORT_VERSION,
            },
            "summary": {
                "total_findings": result.finding_count,
                "severity_counts": result.severity_counts,
                "highest_severity": (
                    result.highest_severity.value if result.highest_severity else None
                ),
                "duration_seconds": result.duration_seconds,
                "description": result.summary,
            },
            "findings": [f.model_dump(mode="json") for f in result.findings],
            "metadata": result.metadata,
        }

    # ------------------------------------------------------------------ #
    #  Password Export
    # ------------------------------------------------------------------ #

    @staticmethod
    def export_payload(
        passwords: Sequence[str], export_date: Optional[datetime] = None
    ) -> dict[str, Any]:
        moment = export_date or datetime.now(timezone.utc)
        return {
            "passwords": list(passwords),
            "exportDate": moment.isoformat(),
            "generator": EXPORT_GENERATOR_NAME,
        }

    def export_passwords(
        self,
        passwords: Sequence[str],
        output_path: Path,
        export_date: Optional[datetime] = None,
    ) -> Path:
        """Write *passwords* to *output_path* in the export format.

        Raises:
            ValueError: If *passwords* is empty.
        """
        if not passwords:
            raise ValueError("No passwords to export")
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(
            json.dumps(self.export_payload(passwords, export_date), indent=2, ensure_ascii=False),
            encoding="utf-8",
        )
        return output_path

    # ------------------------------------------------------------------ #
    #  Private HTML Builders
    # ------------------------------------------------------------------ #

    @staticmethod
    def _build_findings_html(result: ScanResult) -> str:
        if not result.findings:
            return '<p style="color: var(--text-secondary);">No findings.</p>'

        parts: list[str] = []
        for finding in result.findings:
            parts.append(
                f'<div class="finding {finding.severity.css_class}">'
                f'<h3><span class="badge">{finding.severity.value}</span> '
                f"{html.escape(finding.title)}</h3>"
                f"<p>{html.escape(finding.description)}</p>"
            )
            if finding.recommendation:
                parts.append(
                    f"<p><strong>Recommendation:</strong> "
                    f"{html.escape(finding.recommendation)}</p>"
                )
            parts.append("</div>")
        return "\n".join(parts)

    @staticmethod
    def _build_metadata_section(result: ScanResult) -> str:
        if not result.metadata:
            return ""
        dumped = json.dumps(result.metadata, indent=2, ensure_ascii=False, default=str)
        return (
            '<div class="section">'
            "<h2>Details</h2>"
            f"<pre>{html.escape(dumped)}</pre>"
            "</div>"
        )
