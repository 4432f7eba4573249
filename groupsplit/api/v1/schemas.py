"""Pydantic schemas for API request/response validation"""

import datetime as dt
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

from groupsplit.domain.models import (
    Expense,
    MemberBalance,
    MemberInfo,
    Settlement,
    SettlementPlan,
    Split,
    Transaction,
)
from groupsplit.domain.splits import SplitType


class MemberIn(BaseModel):
    """Group member; display name falls back to email, then id"""

    id: str = Field(..., min_length=1, description="Member identifier")
    name: Optional[str] = None
    email: Optional[str] = None

    def to_domain(self) -> MemberInfo:
        return MemberInfo.from_user(self.id, self.name, self.email)


class SplitIn(BaseModel):
    member_id: str = Field(..., min_length=1)
    amount: float = Field(..., ge=0, description="Share owed by the member")

    def to_domain(self) -> Split:
        return Split(member_id=self.member_id, amount=self.amount)


class ExpenseIn(BaseModel):
    """Expense paid by one member and split across members"""

    id: Optional[str] = None
    description: str = ""
    date: Optional[dt.date] = None
    amount: float = Field(..., gt=0, description="Total expense amount")
    payer_id: str = Field(..., min_length=1)
    splits: List[SplitIn] = Field(default_factory=list)

    @model_validator(mode="after")
    def one_split_per_member(self) -> "ExpenseIn":
        ids = [s.member_id for s in self.splits]
        if len(ids) != len(set(ids)):
            raise ValueError("A member can appear in at most one split per expense")
        return self

    def to_domain(self) -> Expense:
        return Expense(
            id=self.id,
            description=self.description,
            date=self.date,
            amount=self.amount,
            payer_id=self.payer_id,
            splits=[s.to_domain() for s in self.splits],
        )


class SettlementIn(BaseModel):
    """Payment already made between two members"""

    id: Optional[str] = None
    from_id: str = Field(..., min_length=1)
    to_id: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0)
    note: Optional[str] = None
    settled_at: Optional[dt.datetime] = None

    def to_domain(self) -> Settlement:
        return Settlement(
            id=self.id,
            from_id=self.from_id,
            to_id=self.to_id,
            amount=self.amount,
            note=self.note,
            settled_at=self.settled_at,
        )


class GroupLedgerRequest(BaseModel):
    """Request body for POST /v1/settlement-plan and POST /v1/balances"""

    members: List[MemberIn]
    expenses: List[ExpenseIn] = Field(default_factory=list)
    settlements: List[SettlementIn] = Field(default_factory=list)

    @model_validator(mode="after")
    def unique_member_ids(self) -> "GroupLedgerRequest":
        ids = [m.id for m in self.members]
        if len(ids) != len(set(ids)):
            raise ValueError("Member ids must be unique")
        return self


class MemberSchema(BaseModel):
    id: str
    name: str

    @classmethod
    def from_domain(cls, member: MemberInfo) -> "MemberSchema":
        return cls(id=member.id, name=member.name)

    def to_domain(self) -> MemberInfo:
        return MemberInfo(id=self.id, name=self.name)


class MemberBalanceSchema(BaseModel):
    """Net position of one member"""

    member: MemberSchema
    total_paid: float = 0.0
    total_owed: float = 0.0
    balance: float

    @classmethod
    def from_domain(cls, balance: MemberBalance) -> "MemberBalanceSchema":
        return cls(
            member=MemberSchema.from_domain(balance.member),
            total_paid=balance.total_paid,
            total_owed=balance.total_owed,
            balance=balance.balance,
        )

    def to_domain(self) -> MemberBalance:
        return MemberBalance(
            member=self.member.to_domain(),
            total_paid=self.total_paid,
            total_owed=self.total_owed,
            balance=self.balance,
        )


class TransactionSchema(BaseModel):
    """Suggested payment; serialized with `from` / `to` keys"""

    model_config = ConfigDict(populate_by_name=True)

    from_member: MemberSchema = Field(..., alias="from")
    to_member: MemberSchema = Field(..., alias="to")
    amount: float

    @classmethod
    def from_domain(cls, txn: Transaction) -> "TransactionSchema":
        return cls(
            from_member=MemberSchema.from_domain(txn.from_member),
            to_member=MemberSchema.from_domain(txn.to_member),
            amount=txn.amount,
        )


class SettlementPlanResponse(BaseModel):
    """Response for POST /v1/settlement-plan"""

    balances: List[MemberBalanceSchema]
    transactions: List[TransactionSchema]
    settled: bool

    @classmethod
    def from_domain(cls, plan: SettlementPlan) -> "SettlementPlanResponse":
        return cls(
            balances=[MemberBalanceSchema.from_domain(b) for b in plan.balances],
            transactions=[TransactionSchema.from_domain(t) for t in plan.transactions],
            settled=plan.is_settled,
        )


class BalancesResponse(BaseModel):
    """Response for POST /v1/balances"""

    balances: List[MemberBalanceSchema]


class SimplifyRequest(BaseModel):
    """Request body for POST /v1/debts/simplify"""

    balances: List[MemberBalanceSchema]


class SimplifyResponse(BaseModel):
    """Response for POST /v1/debts/simplify"""

    transactions: List[TransactionSchema]


class SplitRequest(BaseModel):
    """Request body for POST /v1/splits"""

    amount: float = Field(..., gt=0)
    split_type: SplitType = SplitType.EQUAL
    member_ids: List[str] = Field(default_factory=list)
    values: Dict[str, float] = Field(default_factory=dict, description="Amount, percent or shares per member")


class SplitOut(BaseModel):
    member_id: str
    amount: float


class SplitResponse(BaseModel):
    """Response for POST /v1/splits"""

    split_type: SplitType
    amount: float
    splits: List[SplitOut]
