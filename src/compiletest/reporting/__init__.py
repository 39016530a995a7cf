"""Reporting exports."""
from .json_reporter import build_report, write_json_report
from .terminal import describe_failure, print_case_result, print_group_header, print_summary

__all__ = [
    "build_report",
    "describe_failure",
    "print_case_result",
    "print_group_header",
    "print_summary",
    "write_json_report",
]
