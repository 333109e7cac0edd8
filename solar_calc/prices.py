"""
Electricity price module.
Average retail electricity price by US state, in $/kWh.
"""

from types import MappingProxyType
from typing import List, Mapping, Optional

DEFAULT_PRICE_PER_KWH = 0.13

# Source: ElectricChoice.com state averages
ELECTRICITY_PRICES = MappingProxyType({
    'Alabama': 0.1491, 'Alaska': 0.2238, 'Arizona': 0.1520, 'Arkansas': 0.1174,
    'California': 0.3055, 'Colorado': 0.1516, 'Connecticut': 0.2816,
    'Delaware': 0.1668, 'Florida': 0.1420, 'Georgia': 0.1349, 'Hawaii': 0.4234,
    'Idaho': 0.1097, 'Illinois': 0.1599, 'Indiana': 0.1442, 'Iowa': 0.1243,
    'Kansas': 0.1385, 'Kentucky': 0.1328, 'Louisiana': 0.1170, 'Maine': 0.2629,
    'Maryland': 0.1815, 'Massachusetts': 0.3122, 'Michigan': 0.1841,
    'Minnesota': 0.1405, 'Mississippi': 0.1344, 'Missouri': 0.1157,
    'Montana': 0.1187, 'Nebraska': 0.1078, 'Nevada': 0.1488,
    'New Hampshire': 0.2362, 'New Jersey': 0.1949, 'New Mexico': 0.1426,
    'New York': 0.2437, 'North Carolina': 0.1349, 'North Dakota': 0.1021,
    'Ohio': 0.1598, 'Oklahoma': 0.1152, 'Oregon': 0.1412, 'Pennsylvania': 0.1760,
    'Rhode Island': 0.2531, 'South Carolina': 0.1387, 'South Dakota': 0.1242,
    'Tennessee': 0.1304, 'Texas': 0.1532, 'Utah': 0.1102, 'Vermont': 0.2229,
    'Virginia': 0.1446, 'Washington': 0.1183, 'West Virginia': 0.1451,
    'Wisconsin': 0.1631, 'Wyoming': 0.1178, 'District of Columbia': 0.1883,
})


def get_price(state: Optional[str],
              table: Mapping[str, float] = ELECTRICITY_PRICES) -> float:
    """Price for a state, falling back to the default for unknown or empty states."""
    if not state:
        return DEFAULT_PRICE_PER_KWH
    return table.get(state, DEFAULT_PRICE_PER_KWH)


def is_known_state(state: Optional[str]) -> bool:
    return isinstance(state, str) and state in ELECTRICITY_PRICES


def state_options() -> List[str]:
    """
    Sorted state names labelled with their price, for selection lists.

    Returns:
        Labels such as "Alabama ($0.15/kWh)"
    """
    return [f"{state} (${ELECTRICITY_PRICES[state]:.2f}/kWh)"
            for state in sorted(ELECTRICITY_PRICES)]
