from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from pcconfigmanager.domain.models.pc_config import PCConfig
from pcconfigmanager.domain.services.pricing import is_complete, total_price


@dataclass(frozen=True)
class ConfigStats:
    count: int
    complete_count: int
    average_total: float
    max_total: float
    min_total: float


def compute_config_stats(configs: Sequence[PCConfig]) -> ConfigStats:
    """
    Aggregate pricing statistics over a list of configurations.

    An empty list yields zeros everywhere (no NaN, no infinity).
    """
    if not configs:
        return ConfigStats(
            count=0, complete_count=0, average_total=0.0, max_total=0.0, min_total=0.0
        )

    totals = [total_price(config) for config in configs]
    return ConfigStats(
        count=len(configs),
        complete_count=sum(1 for config in configs if is_complete(config)),
        average_total=math.fsum(totals) / len(totals),
        max_total=max(totals),
        min_total=min(totals),
    )
