"""
Telecom Dimensioning Tool
=========================

Educational planning tool for telecommunication networks:
- Cellular access networks (GSM, UMTS, LTE): site count, capacity, coverage, cost
- Point-to-point microwave links: free-space path loss and link margin
- Optical fiber links: loss budget and link margin

Architecture:
- sizing/: Dimensioning calculator (closed-form formulas, parameter models, CLI)
- session.py: Parameter ownership with recompute-on-mutation
- export/: JSON snapshots, local project store, printable reports
- ui/: Streamlit visualization interface
"""

__version__ = "1.0.0"
