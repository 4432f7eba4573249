"""Domain models - pure Python dataclasses representing group expense records"""

from dataclasses import dataclass, field
import datetime as dt
from typing import List, Optional


@dataclass(frozen=True)
class MemberInfo:
    """Group participant as seen by the balance engine"""

    id: str
    name: str  # display name, never empty

    @classmethod
    def from_user(cls, member_id: str, name: Optional[str], email: Optional[str]) -> "MemberInfo":
        """Resolve display name: real name if present, otherwise the contact identifier"""
        display_name = (name or "").strip() or (email or "").strip() or member_id
        return cls(id=member_id, name=display_name)


@dataclass
class Split:
    """One member's share of an expense"""

    member_id: str
    amount: float


@dataclass
class Expense:
    """Shared cost funded in full by a single payer"""

    amount: float
    payer_id: str
    splits: List[Split] = field(default_factory=list)
    id: Optional[str] = None
    description: str = ""
    date: Optional[dt.date] = None


@dataclass
class Settlement:
    """Payment already made from one member to another outside the engine"""

    from_id: str
    to_id: str
    amount: float
    note: Optional[str] = None
    settled_at: Optional[dt.datetime] = None
    id: Optional[str] = None


@dataclass
class MemberBalance:
    """Derived per-member totals (positive balance = is owed money)"""

    member: MemberInfo
    total_paid: float
    total_owed: float
    balance: float


@dataclass
class Transaction:
    """Suggested payment from a debtor to a creditor"""

    from_member: MemberInfo
    to_member: MemberInfo
    amount: float


@dataclass
class SettlementPlan:
    """Balances plus the transactions that would zero them"""

    balances: List[MemberBalance]
    transactions: List[Transaction]

    @property
    def is_settled(self) -> bool:
        return not self.transactions
