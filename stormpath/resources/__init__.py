"""
Resource contracts for the identity service.
"""

from .base import DataStore, Saveable, Deletable, Auditable, Resource
from .mfa import (
    Account,
    AccountStatus,
    Factor,
    FactorType,
    FactorStatus,
    FactorVerificationStatus,
    SmsFactor,
    FactorList,
    Challenge,
    ChallengeStatus,
)

__all__ = [
    "DataStore",
    "Saveable",
    "Deletable",
    "Auditable",
    "Resource",
    "Account",
    "AccountStatus",
    "Factor",
    "FactorType",
    "FactorStatus",
    "FactorVerificationStatus",
    "SmsFactor",
    "FactorList",
    "Challenge",
    "ChallengeStatus",
]
