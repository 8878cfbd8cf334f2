"""Workloads image diff."""

from kdiff.controllers.workloads.diff.mismatch_detector import detect_mismatches

__all__ = ["detect_mismatches"]
