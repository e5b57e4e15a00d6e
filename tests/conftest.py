"""
Shared fixtures: deterministic keys, a test network and a source account.
"""
import pytest

from stellar_client.crypto import KeyPair
from stellar_client.network import Network
from stellar_client.operations import BumpSequenceOperation
from stellar_client.tx import Account, Transaction, TransactionBuilder


SOURCE_SEED = bytes(range(32))
FEE_SOURCE_SEED = bytes(range(32, 64))
INITIAL_SEQUENCE = 2908908335136768


@pytest.fixture
def keypair():
    """Deterministic signing key pair used as transaction source."""
    return KeyPair.from_raw_seed(SOURCE_SEED)


@pytest.fixture
def fee_keypair():
    """Second deterministic key pair, used as fee bump fee source."""
    return KeyPair.from_raw_seed(FEE_SOURCE_SEED)


@pytest.fixture
def network():
    return Network.testnet()


@pytest.fixture
def account(keypair):
    """Source account with a known ledger sequence number."""
    return Account(keypair.account_id, INITIAL_SEQUENCE)


@pytest.fixture
def make_operations():
    """Factory for N distinct BumpSequence operations."""
    def _make(count):
        return [BumpSequenceOperation(INITIAL_SEQUENCE + 100 + i) for i in range(count)]
    return _make


@pytest.fixture
def build_transaction(account, network, make_operations):
    """Factory building an unsigned transaction with N operations."""
    def _build(count=1):
        builder = TransactionBuilder(account, network)
        for operation in make_operations(count):
            builder.add_operation(operation)
        return builder.build()
    return _build


@pytest.fixture
def signed_transaction(build_transaction, keypair) -> Transaction:
    """A one-operation transaction signed by the source key."""
    transaction = build_transaction(1)
    transaction.sign(keypair)
    return transaction
