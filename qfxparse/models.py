"""
Typed records produced by the decoder.

Each record mirrors one OFX aggregate. Records are built once, from the
tokens between their open and close tags, and never change afterwards.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Iterator, Optional, Tuple, Union


@dataclass(frozen=True)
class Status:
    """Represents a STATUS aggregate"""
    code: str
    severity: str
    message: Optional[str] = None


@dataclass(frozen=True)
class LedgerBal:
    """Represents a LEDGERBAL aggregate. The amount is kept verbatim."""
    balance_amount: str
    dt_as_of: datetime


@dataclass(frozen=True)
class AvailableBalance:
    """Represents an AVAILBAL aggregate. The amount is kept verbatim."""
    balance_amount: str
    dt_as_of: datetime


@dataclass(frozen=True)
class Stmttrn:
    """Represents a single statement transaction"""
    trans_type: str
    dt_posted: datetime
    trans_amount: float
    fit_id: str
    name: str
    correct_fit_id: Optional[str] = None  # FITID of the transaction being corrected
    correct_action: Optional[str] = None  # REPLACE or DELETE
    memo: Optional[str] = None
    check_num: Optional[str] = None


@dataclass(frozen=True)
class BankTranList:
    """Transactions for a statement period, in document order"""
    dt_start: datetime
    dt_end: datetime
    transactions: Tuple[Stmttrn, ...] = ()


@dataclass(frozen=True)
class FinancialInstitution:
    """Represents an FI aggregate"""
    org: Optional[str] = None
    fid: Optional[str] = None


@dataclass(frozen=True)
class Sonrs:
    """Sign-on response"""
    status: Optional[Status] = None
    fi: Optional[FinancialInstitution] = None
    bid: Optional[str] = None
    dt_server: Optional[str] = None
    language: Optional[str] = None
    cookie: Optional[str] = None
    user_id: Optional[str] = None


@dataclass(frozen=True)
class SignOnMsgSrsV1:
    """Represents a SIGNONMSGSRSV1 aggregate"""
    sonrs: Optional[Sonrs] = None


@dataclass(frozen=True)
class BankAcctFrom:
    """Represents a BANKACCTFROM aggregate"""
    acct_id: str
    acct_type: str
    bank_id: Optional[str] = None


@dataclass(frozen=True)
class CCAcctFrom:
    """Represents a CCACCTFROM aggregate"""
    acct_id: str


@dataclass(frozen=True)
class Stmtrs:
    """Bank statement body"""
    bankacctfrom: BankAcctFrom
    banktranlist: BankTranList
    currency: Optional[str] = None
    ledgerbal: Optional[LedgerBal] = None
    availbal: Optional[AvailableBalance] = None

    @property
    def account(self) -> BankAcctFrom:
        return self.bankacctfrom


@dataclass(frozen=True)
class CCStmtrs:
    """Credit card statement body"""
    ccacctfrom: CCAcctFrom
    banktranlist: BankTranList
    currency: Optional[str] = None
    ledgerbal: Optional[LedgerBal] = None
    availbal: Optional[AvailableBalance] = None

    @property
    def account(self) -> CCAcctFrom:
        return self.ccacctfrom


Statement = Union[Stmtrs, CCStmtrs]


@dataclass(frozen=True)
class Stmttrnrs:
    """Represents a STMTTRNRS aggregate"""
    stmtrs: Stmtrs
    trnuid: Optional[str] = None
    status: Optional[Status] = None


@dataclass(frozen=True)
class CCStmttrnrs:
    """Represents a CCSTMTTRNRS aggregate"""
    ccstmtrs: CCStmtrs
    trnuid: Optional[str] = None
    status: Optional[Status] = None


@dataclass(frozen=True)
class BankMsgSrsV1:
    """Represents a BANKMSGSRSV1 aggregate"""
    stmttrnrs: Stmttrnrs


@dataclass(frozen=True)
class CCMsgSrsV1:
    """Represents a CREDITCARDMSGSRSV1 aggregate"""
    ccstmttrnrs: CCStmttrnrs


@dataclass(frozen=True)
class QFXDocument:
    """Represents a decoded OFX envelope"""
    sign_on_msg_srs_v1: Optional[SignOnMsgSrsV1] = None
    bank_msg_srs_v1: Optional[BankMsgSrsV1] = None
    credit_card_msg_srs_v1: Optional[CCMsgSrsV1] = None

    def statements(self) -> Iterator[Statement]:
        """Yield the statements present, bank first"""
        if self.bank_msg_srs_v1 is not None:
            yield self.bank_msg_srs_v1.stmttrnrs.stmtrs
        if self.credit_card_msg_srs_v1 is not None:
            yield self.credit_card_msg_srs_v1.ccstmttrnrs.ccstmtrs

    def transactions(self) -> Iterator[Stmttrn]:
        """Yield every transaction in document order"""
        for statement in self.statements():
            yield from statement.banktranlist.transactions
