"""
Consultation Core - deadline-bounded public consultation ledger

A creator opens a topic, participants submit content-addressed inputs
tagged with categories, peers vote on submissions within eligibility
rules, and diversity metrics are tracked per category tag.

Core rules:
- Every mutation is validated in full before any state changes
- Caller identity and logical time are always supplied by the host
- One submission per identity, one submission per digest
- One vote per (submission owner, voter) pair, never on your own input
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
