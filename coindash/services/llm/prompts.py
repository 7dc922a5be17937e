"""
LLM Prompt Templates

Prompt for the AI risk/return insight.

RULES (enforced in the prompt):
- Output is a category pair plus a short justification, nothing else
- Never present the assessment as financial advice
"""

from typing import Optional

from coindash.core.formatting import format_currency, format_large_number
from coindash.schemas.market import AssetMarketStats

RISK_ANALYSIS_SYSTEM_PROMPT = """You are a cryptocurrency market analyst.

YOUR ROLE:
- Give a qualitative risk and return-potential assessment for one crypto asset
- Base it on the asset's size, maturity and typical market behaviour

RULES:
1. risk_level must be one of: "Low", "Medium", "High", "Very High".
2. return_potential must be one of: "Low", "Medium", "High", "Very High".
3. justification is 2-4 plain-English sentences.
4. Never claim certainty or promise returns. This is not financial advice.

OUTPUT FORMAT:
Respond with a single JSON object and nothing else:
{"risk_level": "...", "return_potential": "...", "justification": "..."}"""

RISK_ANALYSIS_USER_PROMPT_TEMPLATE = """Assess the risk and return potential of {name} ({symbol}).

MARKET DATA:
- Current price: approximately {price}
- Market cap: {market_cap}

Return only the JSON object."""


def _approx(value: Optional[float], formatter) -> str:
    return formatter(value) if value is not None else "unknown"


def format_risk_analysis_prompt(asset: AssetMarketStats) -> str:
    """Embed name, symbol, approximate price and market cap."""
    return RISK_ANALYSIS_USER_PROMPT_TEMPLATE.format(
        name=asset.name,
        symbol=asset.symbol.upper(),
        price=_approx(asset.current_price, format_currency),
        market_cap=_approx(asset.market_cap, lambda v: f"${format_large_number(v)}"),
    )
