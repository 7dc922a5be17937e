"""
Risk/Return Service

CONTRACT:
    Input:  list[AssetMarketStats]
    Output: list[RiskReturnPoint]

PURE PYTHON - deterministic projection, no LLM involvement.
"""

from coindash.services.risk.interface import RiskServiceInterface
from coindash.services.risk.service import (
    RiskService,
    get_risk_service,
    project_risk_return,
)

__all__ = [
    "RiskServiceInterface",
    "RiskService",
    "get_risk_service",
    "project_risk_return",
]
