"""
Rankings filter by market and asset type.
"""

from collections.abc import Iterable

from ...models.analysis import RankedInvestment
from ...models.view_state import FilterState


def _axis_matches(value: str, selected: frozenset) -> bool:
    # Empty selection is a wildcard
    return not selected or value in {str(option) for option in selected}


def filter_investments(
    investments: Iterable[RankedInvestment], filter_state: FilterState
) -> list[RankedInvestment]:
    """
    Keep investments whose market and asset type are both selected.

    An empty market (or asset-type) selection matches every investment on that
    axis. The input is not modified; a new list is returned in input order.

    Args:
        investments: Ranked investments from the current analysis
        filter_state: Current market / asset-type selection

    Returns:
        Matching investments, original relative order preserved
    """
    return [
        investment
        for investment in investments
        if _axis_matches(investment.market, filter_state.markets)
        and _axis_matches(investment.asset_type, filter_state.asset_types)
    ]
