"""
Penalty Kernel

A stateless normalization and eligibility engine for penalty ledgers:
- Allow-list filtering of raw finance ledger lines
- Penalty / other charge classification per regime
- Reason resolution and debt-collection (DCA) detection
- Online payability decisions
- Integrity tokens for every produced record
"""

__version__ = "0.1.0"
