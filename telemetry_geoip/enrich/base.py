"""
Base processor class
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Any, List

from ..metric import Metric

logger = logging.getLogger("enrich.base")

class Processor(ABC):
    """Base class for metric processors.

    A processor is initialised once by the host pipeline and then handed
    batches of metrics, which it may mutate in place.
    """

    def __init__(self, name: str):
        self.name = name
        self.loaded = False
        self.last_refresh = 0
        self.error_count = 0

    @abstractmethod
    def init(self) -> None:
        """Acquire resources; raise to abort startup"""
        pass

    @abstractmethod
    def apply(self, *metrics: Metric) -> List[Metric]:
        """Process a batch of metrics and return it"""
        pass

    @abstractmethod
    def sample_config(self) -> str:
        pass

    @abstractmethod
    def description(self) -> str:
        pass

    def close(self) -> None:
        pass

    def get_status(self) -> Dict[str, Any]:
        """Get processor status"""
        return {
            "status": "loaded" if self.loaded else "missing",
            "last_refresh": self.last_refresh,
            "error_count": self.error_count
        }

    def __enter__(self):
        self.init()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
