from __future__ import annotations
"""Result containers serialised into the performance report.

Field names of `SystemInfo` and `BenchmarkRun` are the report's wire format.
"""

from dataclasses import dataclass, field, asdict
from typing import Dict, Any, List


@dataclass(frozen=True)
class SystemInfo:
    os: str
    total_memory: int  # whole gigabytes, truncated
    cpu_brand: str
    cpu_cores: int


@dataclass(frozen=True)
class BenchmarkRun:
    algorithm: str
    payload_size: str  # 'small' or 'medium'
    iterations: int
    time_ms: float

    @property
    def mean_ms(self) -> float:
        return self.time_ms / self.iterations


@dataclass
class PerformanceReport:
    system_info: SystemInfo
    test_results: List[BenchmarkRun] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "system_info": asdict(self.system_info),
            "test_results": [asdict(run) for run in self.test_results],
        }
