"""Virtual trading ledger: simulated cash, holdings and trades against live prices."""

__version__ = "0.1.0"
