"""
Field tables for the supported subset of the OFX grammar.

    OFX
      SIGNONMSGSRSV1 > SONRS > STATUS, FI
      BANKMSGSRSV1 > STMTTRNRS > STMTRS > BANKACCTFROM, BANKTRANLIST > STMTTRN, LEDGERBAL, AVAILBAL
      CREDITCARDMSGSRSV1 > CCSTMTTRNRS > CCSTMTRS > CCACCTFROM, BANKTRANLIST > STMTTRN, ...
"""
from qfxparse import models
from qfxparse.schema import FieldKind, FieldRule, RecordSchema

REQUIRED = FieldKind.REQUIRED_SCALAR
OPTIONAL = FieldKind.OPTIONAL_SCALAR
DATETIME = FieldKind.REQUIRED_DATETIME
AMOUNT = FieldKind.REQUIRED_AMOUNT


def nested(tag: str, attr: str, schema: RecordSchema, singleton: bool = False) -> FieldRule:
    return FieldRule(tag, attr, FieldKind.REQUIRED_NESTED, schema, singleton)


def optional_nested(tag: str, attr: str, schema: RecordSchema, singleton: bool = False) -> FieldRule:
    return FieldRule(tag, attr, FieldKind.OPTIONAL_NESTED, schema, singleton)


def repeated(tag: str, attr: str, schema: RecordSchema) -> FieldRule:
    return FieldRule(tag, attr, FieldKind.REPEATED_NESTED, schema)


STATUS_SCHEMA = RecordSchema('STATUS', models.Status, (
    FieldRule('CODE', 'code', REQUIRED),
    FieldRule('SEVERITY', 'severity', REQUIRED),
    FieldRule('MESSAGE', 'message', OPTIONAL),
))

LEDGERBAL_SCHEMA = RecordSchema('LEDGERBAL', models.LedgerBal, (
    FieldRule('BALAMT', 'balance_amount', REQUIRED),
    FieldRule('DTASOF', 'dt_as_of', DATETIME),
))

AVAILBAL_SCHEMA = RecordSchema('AVAILBAL', models.AvailableBalance, (
    FieldRule('BALAMT', 'balance_amount', REQUIRED),
    FieldRule('DTASOF', 'dt_as_of', DATETIME),
))

STMTTRN_SCHEMA = RecordSchema('STMTTRN', models.Stmttrn, (
    FieldRule('TRNTYPE', 'trans_type', REQUIRED),
    FieldRule('DTPOSTED', 'dt_posted', DATETIME),
    FieldRule('TRNAMT', 'trans_amount', AMOUNT),
    FieldRule('FITID', 'fit_id', REQUIRED),
    FieldRule('CORRECTFITID', 'correct_fit_id', OPTIONAL),
    FieldRule('CORRECTACTION', 'correct_action', OPTIONAL),
    FieldRule('NAME', 'name', REQUIRED),
    FieldRule('MEMO', 'memo', OPTIONAL),
    FieldRule('CHECKNUM', 'check_num', OPTIONAL),
))

BANKTRANLIST_SCHEMA = RecordSchema('BANKTRANLIST', models.BankTranList, (
    FieldRule('DTSTART', 'dt_start', DATETIME),
    FieldRule('DTEND', 'dt_end', DATETIME),
    repeated('STMTTRN', 'transactions', STMTTRN_SCHEMA),
))

# Sign-on

FI_SCHEMA = RecordSchema('FI', models.FinancialInstitution, (
    FieldRule('ORG', 'org', OPTIONAL),
    FieldRule('FID', 'fid', OPTIONAL),
))

SONRS_SCHEMA = RecordSchema('SONRS', models.Sonrs, (
    optional_nested('STATUS', 'status', STATUS_SCHEMA),
    FieldRule('DTSERVER', 'dt_server', OPTIONAL),
    FieldRule('LANGUAGE', 'language', OPTIONAL),
    optional_nested('FI', 'fi', FI_SCHEMA),
    FieldRule('INTU.BID', 'bid', OPTIONAL),
    FieldRule('INTU.USERID', 'user_id', OPTIONAL),
    FieldRule('SESSCOOKIE', 'cookie', OPTIONAL),
))

SIGNONMSGSRSV1_SCHEMA = RecordSchema('SIGNONMSGSRSV1', models.SignOnMsgSrsV1, (
    optional_nested('SONRS', 'sonrs', SONRS_SCHEMA),
))

# Account identification, the only part that differs between bank and card

BANKACCTFROM_SCHEMA = RecordSchema('BANKACCTFROM', models.BankAcctFrom, (
    FieldRule('ACCTID', 'acct_id', REQUIRED),
    FieldRule('ACCTTYPE', 'acct_type', REQUIRED),
    FieldRule('BANKID', 'bank_id', OPTIONAL),
))

CCACCTFROM_SCHEMA = RecordSchema('CCACCTFROM', models.CCAcctFrom, (
    FieldRule('ACCTID', 'acct_id', REQUIRED),
))


def statement_message_set_schema(
    message_set_tag: str,
    message_set_type: type,
    transaction_response_tag: str,
    transaction_response_type: type,
    statement_tag: str,
    statement_type: type,
    account_rule: FieldRule,
) -> RecordSchema:
    """
    Build the message set > transaction response > statement chain.

    Bank and credit card statements share everything except the tag names
    and the account-from aggregate.
    """
    statement_attr = statement_tag.lower()
    statement = RecordSchema(statement_tag, statement_type, (
        FieldRule('CURDEF', 'currency', OPTIONAL),
        account_rule,
        nested('BANKTRANLIST', 'banktranlist', BANKTRANLIST_SCHEMA),
        optional_nested('LEDGERBAL', 'ledgerbal', LEDGERBAL_SCHEMA),
        optional_nested('AVAILBAL', 'availbal', AVAILBAL_SCHEMA),
    ))

    transaction_response = RecordSchema(transaction_response_tag, transaction_response_type, (
        FieldRule('TRNUID', 'trnuid', OPTIONAL),
        optional_nested('STATUS', 'status', STATUS_SCHEMA),
        nested(statement_tag, statement_attr, statement),
    ))

    return RecordSchema(message_set_tag, message_set_type, (
        nested(transaction_response_tag, transaction_response_tag.lower(), transaction_response),
    ))


BANKMSGSRSV1_SCHEMA = statement_message_set_schema(
    'BANKMSGSRSV1', models.BankMsgSrsV1,
    'STMTTRNRS', models.Stmttrnrs,
    'STMTRS', models.Stmtrs,
    nested('BANKACCTFROM', 'bankacctfrom', BANKACCTFROM_SCHEMA),
)

CREDITCARDMSGSRSV1_SCHEMA = statement_message_set_schema(
    'CREDITCARDMSGSRSV1', models.CCMsgSrsV1,
    'CCSTMTTRNRS', models.CCStmttrnrs,
    'CCSTMTRS', models.CCStmtrs,
    nested('CCACCTFROM', 'ccacctfrom', CCACCTFROM_SCHEMA),
)

STMTTRNRS_SCHEMA = BANKMSGSRSV1_SCHEMA.rule_for('STMTTRNRS').schema
STMTRS_SCHEMA = STMTTRNRS_SCHEMA.rule_for('STMTRS').schema
CCSTMTTRNRS_SCHEMA = CREDITCARDMSGSRSV1_SCHEMA.rule_for('CCSTMTTRNRS').schema
CCSTMTRS_SCHEMA = CCSTMTTRNRS_SCHEMA.rule_for('CCSTMTRS').schema

# Only sign-on and bank sections reject a second occurrence; a second
# credit card section replaces the first.
DOCUMENT_SCHEMA = RecordSchema('OFX', models.QFXDocument, (
    optional_nested('SIGNONMSGSRSV1', 'sign_on_msg_srs_v1', SIGNONMSGSRSV1_SCHEMA, singleton=True),
    optional_nested('BANKMSGSRSV1', 'bank_msg_srs_v1', BANKMSGSRSV1_SCHEMA, singleton=True),
    optional_nested('CREDITCARDMSGSRSV1', 'credit_card_msg_srs_v1', CREDITCARDMSGSRSV1_SCHEMA),
))
