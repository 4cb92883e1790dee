import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from tabulate import tabulate

from qfxparse.config import DecoderOptions, load_options
from qfxparse.errors import QFXParsingError
from qfxparse.loader import QFXLoader
from qfxparse.logging_config import get_logger, setup_logging
from qfxparse.models import CCStmtrs, QFXDocument

logger = get_logger(__name__)

STATEMENT_HEADERS = ['Account', 'Kind', 'Currency', 'Start', 'End', 'Ledger', 'Available', 'Num Trans']
TRANSACTION_HEADERS = ['Posted', 'Type', 'Amount', 'FITID', 'Name', 'Memo', 'Check']


def statement_rows(document: QFXDocument) -> List[list]:
    """One row per statement in the document"""
    rows = []
    for statement in document.statements():
        tran_list = statement.banktranlist
        if isinstance(statement, CCStmtrs):
            kind = 'CREDITCARD'
        else:
            kind = statement.account.acct_type
        rows.append([
            statement.account.acct_id,
            kind,
            statement.currency or '',
            tran_list.dt_start.date(),
            tran_list.dt_end.date(),
            statement.ledgerbal.balance_amount if statement.ledgerbal else 'N/A',
            statement.availbal.balance_amount if statement.availbal else 'N/A',
            len(tran_list.transactions),
        ])
    return rows


def transaction_rows(document: QFXDocument) -> List[list]:
    """One row per transaction, in document order"""
    return [
        [
            trans.dt_posted.date(),
            trans.trans_type,
            f"{trans.trans_amount:,.2f}",
            trans.fit_id,
            trans.name,
            trans.memo or '',
            trans.check_num or '',
        ]
        for trans in document.transactions()
    ]


def load_documents(paths: List[Path], options: DecoderOptions) -> Dict[Path, Optional[QFXDocument]]:
    """
    Decode every file, and every statement file inside each folder.

    Failed single files map to None so the caller can report them.
    """
    documents = {}
    for path in paths:
        if path.is_dir():
            loader = QFXLoader(base_path=str(path), options=options)
            found = loader.statement_files()
            loaded = loader.load_all()
            for file_path in found:
                documents[file_path] = loaded.get(file_path)
        else:
            try:
                documents[path] = QFXLoader(options=options).load_file(path)
            except QFXParsingError as e:
                logger.error("Failed to decode file", file=str(path), error=str(e))
                documents[path] = None
    return documents


def write_summary(documents: Dict[Path, Optional[QFXDocument]], show_transactions: bool = False, out=None) -> None:
    """Write a grid per file"""
    out = out or sys.stdout
    for file_path, document in documents.items():
        out.write(f"\n{file_path}\n")
        out.write("=" * 100 + "\n")
        if document is None:
            out.write("Could not be decoded\n")
            continue
        out.write(tabulate(statement_rows(document), headers=STATEMENT_HEADERS, tablefmt='grid'))
        out.write("\n")
        if show_transactions:
            out.write(tabulate(transaction_rows(document), headers=TRANSACTION_HEADERS, tablefmt='grid'))
            out.write("\n")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Summarise QFX/OFX statement files")
    parser.add_argument('paths', nargs='*', type=Path, default=[Path("financial-data")],
                        help="Files or folders to decode")
    parser.add_argument('--transactions', action='store_true', help="List every transaction")
    parser.add_argument('--config', help="Decoder properties file")
    parser.add_argument('--log-level', default='WARNING', help="Logging level")
    parser.add_argument('--log-file', help="Also write JSON log lines to this file")
    args = parser.parse_args(argv)

    setup_logging(getattr(logging, args.log_level.upper(), logging.WARNING), args.log_file)
    options = load_options(args.config)

    documents = load_documents(args.paths, options)
    if not documents:
        print("No statements found")
        return 1

    write_summary(documents, show_transactions=args.transactions)
    return 1 if any(document is None for document in documents.values()) else 0


if __name__ == "__main__":
    sys.exit(main())
