"""
Tests for QFXLoader and envelope location.
"""
import logging
from datetime import datetime, timezone

import pytest

from qfxparse.config import DecoderOptions
from qfxparse.errors import (
    MissingRequiredValueError,
    QFXFileNotFoundError,
    QFXFileReadError,
    UnexpectedTokenError,
)
from qfxparse.loader import QFXLoader, locate_envelope


# =============================================================================
# ENVELOPE
# =============================================================================

def test_locate_envelope_drops_header():
    content = "OFXHEADER:100\nDATA:OFXSGML\n\n<OFX></OFX>"
    assert locate_envelope(content) == "<OFX></OFX>"


def test_locate_envelope_without_ofx_tag():
    with pytest.raises(UnexpectedTokenError) as excinfo:
        locate_envelope("OFXHEADER:100\n<NOTOFX>")
    assert "Could not find the <OFX> tag" in str(excinfo.value)


# =============================================================================
# SINGLE FILES
# =============================================================================

def test_load_sample_bank_file(data_dir):
    document = QFXLoader().load_file(data_dir / "sample_bank_msg_transactions.qfx")

    sonrs = document.sign_on_msg_srs_v1.sonrs
    assert sonrs.status.message == 'SUCCESS'
    assert sonrs.fi.org == 'B1'

    response = document.bank_msg_srs_v1.stmttrnrs
    assert response.trnuid == '1'
    assert response.status.code == '0'

    statement = response.stmtrs
    assert statement.bankacctfrom.bank_id == '123456789'
    assert statement.banktranlist.dt_start == datetime(2025, 7, 1, 12, tzinfo=timezone.utc)
    assert [t.name for t in statement.banktranlist.transactions] == ['GROCERY STORE', 'PAYROLL']
    assert statement.ledgerbal.balance_amount == '3120.45'
    assert statement.availbal.balance_amount == '3100.00'
    assert document.credit_card_msg_srs_v1 is None


def test_load_sample_credit_card_file(data_dir):
    document = QFXLoader().load_file(data_dir / "sample_credit_card.ofx")

    statement = document.credit_card_msg_srs_v1.ccstmttrnrs.ccstmtrs
    assert statement.currency == 'GBP'
    assert statement.ccacctfrom.acct_id == '4929000011112222'

    first, refund = statement.banktranlist.transactions
    assert first.dt_posted == datetime(2025, 6, 12, 9, 30, 15, 250000, tzinfo=timezone.utc)
    assert refund.correct_fit_id == 'CC-0001'
    assert refund.correct_action == 'REPLACE'


def test_missing_file(tmp_path):
    with pytest.raises(QFXFileNotFoundError) as excinfo:
        QFXLoader().load_file(tmp_path / "missing.qfx")
    assert excinfo.value.path.endswith("missing.qfx")


def test_unreadable_path(tmp_path):
    with pytest.raises(QFXFileReadError):
        QFXLoader().load_file(tmp_path)


def test_undecodable_bytes(tmp_path):
    path = tmp_path / "latin.qfx"
    path.write_bytes(b"<OFX><NAME>Caf\xe9</OFX>")
    with pytest.raises(QFXFileReadError) as excinfo:
        QFXLoader().load_file(path)
    assert excinfo.value.path == str(path)


def test_configured_encoding_is_used(tmp_path):
    path = tmp_path / "latin.qfx"
    path.write_bytes(
        "<OFX><SIGNONMSGSRSV1><SONRS><FI><ORG>Café Bank</FI></SONRS></SIGNONMSGSRSV1></OFX>".encode("cp1252")
    )
    document = QFXLoader(options=DecoderOptions(encoding="cp1252")).load_file(path)
    assert document.sign_on_msg_srs_v1.sonrs.fi.org == 'Café Bank'


def test_file_without_envelope(tmp_path):
    path = tmp_path / "empty.qfx"
    path.write_text("OFXHEADER:100\n")
    with pytest.raises(UnexpectedTokenError):
        QFXLoader().load_file(path)


# =============================================================================
# FOLDERS
# =============================================================================

def test_load_all_skips_broken_files(tmp_path, data_dir, caplog):
    account = tmp_path / "bank-current"
    account.mkdir()
    (account / "good.qfx").write_text((data_dir / "sample_bank_msg_transactions.qfx").read_text())
    (account / "broken.ofx").write_text("<OFX><BANKMSGSRSV1></BANKMSGSRSV1></OFX>")
    (account / "notes.txt").write_text("ignored")

    loader = QFXLoader(base_path=str(tmp_path), subfolder="bank-current")
    with caplog.at_level(logging.ERROR, logger="qfxparse.loader"):
        documents = loader.load_all()

    assert list(documents) == [account / "good.qfx"]
    assert "Skipping file" in caplog.text
    assert [p.name for p in loader.statement_files()] == ["broken.ofx", "good.qfx"]


def test_load_all_missing_folder(tmp_path):
    loader = QFXLoader(base_path=str(tmp_path), subfolder="nowhere")
    assert loader.load_all() == {}


def test_load_all_uses_configured_patterns(tmp_path, data_dir):
    (tmp_path / "statement.txt").write_text((data_dir / "sample_credit_card.ofx").read_text())
    (tmp_path / "statement.qfx").write_text("not a statement")

    loader = QFXLoader(base_path=str(tmp_path), options=DecoderOptions(file_patterns=("*.txt",)))
    documents = loader.load_all()

    assert list(documents) == [tmp_path / "statement.txt"]


def test_errors_propagate_from_load_file(tmp_path):
    path = tmp_path / "broken.qfx"
    path.write_text("<OFX><BANKMSGSRSV1></BANKMSGSRSV1></OFX>")
    with pytest.raises(MissingRequiredValueError):
        QFXLoader().load_file(path)
