"""
Shared fixtures for the qfxparse test suite.
"""
from pathlib import Path

import pytest

DATA_DIR = Path(__file__).parent / "data"

BANK_DOCUMENT = """
<OFX>
    <BANKMSGSRSV1>
        <STMTTRNRS>
            <TRNUID>1001
            <STMTRS>
                <CURDEF>USD
                <BANKACCTFROM>
                    <BANKID>121000248
                    <ACCTID>1234567890
                    <ACCTTYPE>CHECKING
                </BANKACCTFROM>
                <BANKTRANLIST>
                    <DTSTART>20250701000000
                    <DTEND>20250731000000
                    <STMTTRN>
                        <TRNTYPE>DEBIT
                        <DTPOSTED>20250725T143000Z
                        <TRNAMT>-100.51
                        <FITID>T-1
                        <NAME>Coffee Roasters
                        <MEMO>Card purchase
                    </STMTTRN>
                    <STMTTRN>
                        <TRNTYPE>CHECK
                        <DTPOSTED>20250726143000[-7:PDT]
                        <TRNAMT>-20.00
                        <FITID>T-2
                        <NAME>Check 1001
                        <CHECKNUM>1001
                    </STMTTRN>
                </BANKTRANLIST>
                <LEDGERBAL>
                    <BALAMT>879.49
                    <DTASOF>20250731000000
                </LEDGERBAL>
            </STMTRS>
        </STMTTRNRS>
    </BANKMSGSRSV1>
</OFX>
"""


@pytest.fixture
def data_dir() -> Path:
    return DATA_DIR


@pytest.fixture
def bank_document_text() -> str:
    """Envelope with one bank statement holding two transactions."""
    return BANK_DOCUMENT
