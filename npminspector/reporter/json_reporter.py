# npminspector/reporter/json_reporter.py

import json
from typing import Any, Dict, List

from npminspector.utils.metadata import PackageAssessment


class JSONReporter:
    """
    Reporter that outputs one JSON object per package assessment, in scan order.
    """

    @staticmethod
    def format(assessments: List[PackageAssessment]) -> str:
        """
        Return a JSON array of package assessments.
        """
        output_list: List[Dict[str, Any]] = [a.to_dict() for a in assessments]
        return json.dumps(output_list, indent=2, ensure_ascii=False)
