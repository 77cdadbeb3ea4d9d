# npminspector/reporter/html_reporter.py

"""
HtmlReporter formats package assessments into a single HTML page: a summary
line per package followed by a table of its findings.
"""

import json
from html import escape
from typing import List

from npminspector.utils.metadata import PackageAssessment

_LEVEL_COLORS = {
    "CRITICAL": "#c0392b",
    "HIGH": "#e67e22",
    "MEDIUM": "#f1c40f",
    "LOW": "#27ae60",
}


class HtmlReporter:
    def format(self, assessments: List[PackageAssessment]) -> str:
        """
        Return an HTML string containing every assessment.
        """
        # Basic CSS for readability
        style = """
        <style>
          body {
            font-family: Arial, sans-serif;
            margin: 20px;
          }
          table {
            border-collapse: collapse;
            width: 100%;
            margin-bottom: 24px;
          }
          th, td {
            border: 1px solid #ddd;
            padding: 8px;
            vertical-align: top;
          }
          th {
            background-color: #f2f2f2;
            text-align: left;
          }
          tr:nth-child(even) {
            background-color: #f9f9f9;
          }
          .level {
            font-weight: bold;
          }
          code {
            white-space: pre-wrap;
            word-break: break-all;
          }
        </style>
        """

        html_parts = [
            "<!DOCTYPE html>",
            "<html lang=\"en\">",
            "<head>",
            "  <meta charset=\"UTF-8\">",
            "  <meta name=\"viewport\" content=\"width=device-width, initial-scale=1.0\">",
            "  <title>npminspector Report</title>",
            style,
            "</head>",
            "<body>",
            "  <h1>npminspector Findings</h1>",
        ]

        if not assessments:
            html_parts.append("  <p>No packages scanned.</p>")

        for a in assessments:
            level = a.risk_level.value
            color = _LEVEL_COLORS.get(level, "#000")
            html_parts.append(f"  <h2>{escape(a.package_name)}</h2>")
            html_parts.append(
                f"  <p><span class=\"level\" style=\"color: {color}\">{level}</span>"
                f" &mdash; score {a.risk_score}/{a.max_risk_score},"
                f" confidence {a.confidence * 100:.1f}%,"
                f" {len(a.findings)} finding(s)</p>"
            )
            if a.error:
                html_parts.append(f"  <p><strong>Error:</strong> {escape(a.error)}</p>")
                continue
            if not a.findings:
                html_parts.append("  <p>No findings detected.</p>")
                continue

            html_parts.append("  <table>")
            html_parts.append("    <tr>")
            for header in ("File", "Type", "Severity", "Score", "Detail"):
                html_parts.append(f"      <th>{header}</th>")
            html_parts.append("    </tr>")

            for f in a.findings:
                detail = escape(json.dumps(f.detail, sort_keys=True, ensure_ascii=False))
                html_parts.append("    <tr>")
                html_parts.append(f"      <td>{escape(f.file)}</td>")
                html_parts.append(f"      <td>{escape(f.type)}</td>")
                html_parts.append(f"      <td>{f.severity.value}</td>")
                html_parts.append(f"      <td>{f.risk_contribution}</td>")
                html_parts.append(f"      <td><code>{detail}</code></td>")
                html_parts.append("    </tr>")

            html_parts.append("  </table>")

        html_parts.append("</body>")
        html_parts.append("</html>")

        return "\n".join(html_parts)
