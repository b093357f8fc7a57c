"""
LeakHunter Base Scanner

A scanner inspects one file record and returns findings.

Scanners:
- SensitiveFileScanner (file name only)
- ContentScanner (file content, line by line)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from leakhunter.core.finding import FileRecord, Finding


class BaseScanner(ABC):
    """
    Minimal scanner interface.
    Each scanner must implement scan().
    """

    name: str = "base"

    @abstractmethod
    def scan(self, record: FileRecord) -> List[Finding]:
        """
        Scan a single record and return findings.
        """
        raise NotImplementedError
