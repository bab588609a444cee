"""
Linda Python SDK - Transaction Client

Builds, binds, signs and decodes transactions for the Linda chain, and
broadcasts them through a network gateway.
"""

__version__ = "0.1.0"

# Data model
from .enums import *
from .transactions import *

# Runtime components
from .runtime.address import Address, is_valid_address
from .runtime.errors import *

# Codec, transaction pipeline and signing
from .codec import decode_parameters, serialize_raw, serialize_transaction, compute_txid
from .tx import *
from .crypto import *
from .signers import *

# Client
from .config import ClientConfig
from .gateway import NetworkGateway, HttpGateway
from .api_client import TransactionClient, encode_note

__all__ = [
    "__version__",

    # Client
    "ClientConfig",
    "TransactionClient",
    "encode_note",
    "NetworkGateway",
    "HttpGateway",

    # Addresses
    "Address",
    "is_valid_address",

    # Enums
    "ContractType",
    "ResourceCode",
    "PermissionType",
    "DecodableContract",

    # Data model
    "RawTransaction",
    "BlockReference",
    "SignedEnvelope",
    "BroadcastResult",
    "Permission",
    "PermissionKey",

    # Transaction pipeline
    "build_transfer",
    "build_transfer_asset",
    "build_send",
    "build_transfer_hex",
    "build_freeze_balance",
    "build_unfreeze_balance",
    "build_unfreeze_asset",
    "build_withdraw_balance",
    "build_vote",
    "build_witness_create",
    "build_witness_update",
    "build_account_update",
    "build_asset_participate",
    "build_asset_issue",
    "build_exchange_create",
    "build_exchange_inject",
    "build_exchange_withdraw",
    "build_exchange_transaction",
    "build_trigger_smart_contract",
    "build_account_permission_update",
    "bind",
    "bind_latest",
    "EXPIRATION_WINDOW_MS",
    "get_builder_for",

    # Codec
    "decode_parameters",
    "serialize_raw",
    "serialize_transaction",
    "compute_txid",

    # Signing
    "TransactionSigner",
    "PrivateKeySigner",
    "RemoteSigner",
    "Secp256k1PrivateKey",
    "address_from_private_key",
    "recover_address",

    # Errors
    "ErrorCode",
    "LindaError",
    "InvalidArgumentError",
    "InvalidAddressError",
    "EncodingError",
    "DecodeError",
    "UnsupportedContractTypeError",
    "NetworkError",
    "StaleReferenceError",
    "BroadcastError",
    "SignerError",
    "UnboundTransactionError",
]
