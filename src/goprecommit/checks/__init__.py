# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Checks that feed the commit gate verdict."""

from __future__ import annotations

from .classify import Classification, Outcome, TestOutputClassifier, classify_line
from .verdict import Verdict, branch_is_protected, eol_violations

__all__ = [
    "Classification",
    "Outcome",
    "TestOutputClassifier",
    "Verdict",
    "branch_is_protected",
    "classify_line",
    "eol_violations",
]
