"""
reports/base.py

Abstract base class for all report builders.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Generic, TypeVar

from app.domain.project import Project

RowT = TypeVar("RowT")


class BaseReportBuilder(ABC, Generic[RowT]):
    """
    Contract for report builders.

    Subclasses receive the normalized, year-filtered working set and
    return report rows in presentation order.

    No I/O and no side effects are permitted inside :meth:`build`; the
    project sequence is shared with the other builders and must not be
    mutated.
    """

    @abstractmethod
    def build(self, projects: Sequence[Project]) -> list[RowT]:
        """
        Derive the report rows from *projects*.

        Parameters
        ----------
        projects:
            Read-only working set.

        Returns
        -------
        list
            Report rows, already sorted for output.
        """
