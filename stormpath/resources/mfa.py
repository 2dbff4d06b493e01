"""
Multi-factor authentication resources: accounts, factors and challenges.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterator, List, Optional

from .base import DeletableMixin, Resource, SaveableMixin


class AccountStatus(str, Enum):
    ENABLED = "ENABLED"
    DISABLED = "DISABLED"
    UNVERIFIED = "UNVERIFIED"


class FactorType(str, Enum):
    SMS = "SMS"
    GOOGLE_AUTHENTICATOR = "GOOGLE-AUTHENTICATOR"


class FactorStatus(str, Enum):
    ENABLED = "ENABLED"
    DISABLED = "DISABLED"


class FactorVerificationStatus(str, Enum):
    VERIFIED = "VERIFIED"
    UNVERIFIED = "UNVERIFIED"


class ChallengeStatus(str, Enum):
    """Lifecycle of an MFA challenge."""
    CREATED = "CREATED"
    WAITING_FOR_VALIDATION = "WAITING_FOR_VALIDATION"
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"
    DENIED = "DENIED"
    UNDELIVERED = "UNDELIVERED"


@dataclass
class AuditedResource(Resource):
    """Resource carrying server-assigned timestamps (Auditable)."""
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None


@dataclass
class Account(SaveableMixin, DeletableMixin, AuditedResource):
    username: Optional[str] = None
    email: Optional[str] = None
    given_name: Optional[str] = None
    surname: Optional[str] = None
    status: AccountStatus = AccountStatus.ENABLED

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.given_name, self.surname) if part)


@dataclass
class Factor(SaveableMixin, DeletableMixin, AuditedResource):
    type: FactorType = FactorType.SMS
    status: FactorStatus = FactorStatus.ENABLED
    verification_status: FactorVerificationStatus = FactorVerificationStatus.UNVERIFIED
    account: Optional[Account] = None

    @property
    def is_verified(self) -> bool:
        return self.verification_status == FactorVerificationStatus.VERIFIED


@dataclass
class SmsFactor(Factor):
    phone: Optional[str] = None


@dataclass
class Challenge(SaveableMixin, DeletableMixin, AuditedResource):
    """
    A single MFA challenge sent through a factor.

    The message may contain ``${code}``, which the service replaces with the
    generated code before delivery.
    """
    message: Optional[str] = None
    status: ChallengeStatus = ChallengeStatus.CREATED
    account: Optional[Account] = None
    factor: Optional[Factor] = None
    code: Optional[str] = field(default=None, repr=False)

    def validate(self, code: str) -> bool:
        """
        Submit a code for this challenge.

        Returns:
            True if the data store reports the challenge as successful
        """
        self.code = code
        result = self.save()
        if isinstance(result, Challenge) and result is not self:
            self.status = result.status
        return self.status == ChallengeStatus.SUCCESS


@dataclass
class FactorList(Resource):
    """A page of factors from a collection endpoint."""
    items: List[Factor] = field(default_factory=list)
    offset: int = 0
    limit: int = 25
    size: int = 0

    def __iter__(self) -> Iterator[Factor]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)
