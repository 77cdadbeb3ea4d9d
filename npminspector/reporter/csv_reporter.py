# npminspector/reporter/csv_reporter.py

import csv
import io
import json
from typing import List

from npminspector.utils.metadata import PackageAssessment

FIELDNAMES = ["package", "risk_level", "file", "type", "severity", "risk_score", "detail"]


class CsvReporter:
    """
    Reporter that outputs findings as CSV, one row per finding. Columns:
      package,risk_level,file,type,severity,risk_score,detail
    Packages without findings still get one row with empty finding columns,
    so every scanned package shows up in the sheet.
    """

    @staticmethod
    def format(assessments: List[PackageAssessment]) -> str:
        output = io.StringIO()
        writer = csv.DictWriter(output, fieldnames=FIELDNAMES)
        writer.writeheader()

        for a in assessments:
            if not a.findings:
                writer.writerow({
                    "package": a.package_name,
                    "risk_level": a.risk_level.value,
                    "file": "",
                    "type": "error" if a.error else "",
                    "severity": "",
                    "risk_score": 0,
                    "detail": a.error or "",
                })
                continue
            for f in a.findings:
                writer.writerow({
                    "package": a.package_name,
                    "risk_level": a.risk_level.value,
                    "file": f.file,
                    "type": f.type,
                    "severity": f.severity.value,
                    "risk_score": f.risk_contribution,
                    "detail": json.dumps(f.detail, sort_keys=True, ensure_ascii=False),
                })

        return output.getvalue()
