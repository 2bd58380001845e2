"""
GitGrade: repository quality assessment.
"""

from gitgrade.report import assemble, report_to_dict, report_to_json

__all__ = ["assemble", "report_to_dict", "report_to_json"]
