# core/network/defaults.py
"""
Built-in network description, in the same shape as a network YAML file.
"""

DEFAULT_NETWORK = {
    "version": 1.0,
    "base": {"voltage": "6.6 kV", "power": "10 MVA"},
    "branches": [
        {"between": ["source", "intermediate"], "conductance": 4.0, "susceptance": -12.0},
        {"between": ["intermediate", "consumer"], "conductance": 2.0, "susceptance": -6.0},
    ],
    "operating_point": {
        "v0": [1.05, 0.0],
        "i1": [0.0, 0.0],
        "v2": [1.01, 0.0],
    },
}


def default_network():
    """Validate DEFAULT_NETWORK and return it as a NetworkConfig."""
    from core.inout.network import network_from_dict
    return network_from_dict(DEFAULT_NETWORK)
