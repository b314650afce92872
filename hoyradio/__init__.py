"""Protocol helpers for Hoymiles micro-inverters on nRF24 radios: CRCs, packets, payloads and frame decoding."""

__version__ = "0.1.0"