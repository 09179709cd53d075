"""Domain services for the consultation core.

Domain services contain business logic that doesn't naturally fit in
the records themselves. They coordinate domain operations and enforce
invariants.

Available services:
- ConsultationLifecycleManager: State machine and call authorization
- SubmissionRegistry: One submission per identity and per digest
- VotingLedger: One vote per (owner, voter) pair, folded into tallies
- DiversityAggregator: Category tag occurrence counts
"""

from src.domain.services.consultation_lifecycle import ConsultationLifecycleManager
from src.domain.services.diversity_aggregator import DiversityAggregator
from src.domain.services.submission_registry import SubmissionRegistry
from src.domain.services.voting_ledger import VotingLedger

__all__ = [
    "ConsultationLifecycleManager",
    "DiversityAggregator",
    "SubmissionRegistry",
    "VotingLedger",
]
