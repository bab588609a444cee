"""
Transaction client.

Orchestrates the transaction pipeline against a node:
build -> fetch latest block -> bind -> sign -> broadcast.

Every send method takes the key handle for the signer plus an optional
``signer``; without one, a ``PrivateKeySigner`` is used and the key handle
is the hex private key.
"""

from __future__ import annotations
import logging
from typing import Any, Dict, Iterable, Mapping, Optional, Union
from urllib.parse import quote

from .codec.bytecodec import encode_string
from .codec.parameters import decode_parameters
from .codec.transaction_codec import raw_hex
from .config import ClientConfig
from .crypto.secp256k1 import address_from_private_key
from .enums import DecodableContract, ResourceCode
from .gateway import HttpGateway, NetworkGateway
from .runtime.address import Address
from .signers import PrivateKeySigner, TransactionSigner
from .transactions import BlockReference, BroadcastResult, Permission, RawTransaction, SignedEnvelope
from .tx import factory
from .tx.reference import bind_latest

# characters encodeURIComponent leaves alone
_URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_note(note: str) -> bytes:
    """Memo bytes for a transfer note (URI-component encoded, UTF-8)."""
    return encode_string(quote(note, safe=_URI_COMPONENT_SAFE))


class TransactionClient:
    """
    Client for building, signing and broadcasting transactions.

    Stateless apart from its configuration and gateway; safe to share across
    threads as long as the gateway is.
    """

    def __init__(self, config: Union[str, ClientConfig], gateway: Optional[NetworkGateway] = None):
        """
        Initialize the client.

        Args:
            config: Either an endpoint URL / alias or a ClientConfig object
            gateway: Network gateway (defaults to an HttpGateway for the endpoint)
        """
        if isinstance(config, str):
            self.config = ClientConfig(endpoint=config)
        else:
            self.config = config

        self.logger = logging.getLogger(__name__)
        if self.config.debug:
            self.logger.setLevel(logging.DEBUG)

        self.gateway = gateway if gateway is not None else HttpGateway(self.config)

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def get_latest_block(self) -> BlockReference:
        return self.gateway.fetch_latest_block()

    def get_address(self, private_key: Any) -> Address:
        """Address of ``private_key`` (hex, bytes or key object) under ``config.address_prefix``."""
        return address_from_private_key(private_key, self.config.address_prefix)

    def sign_transaction(self, tx: RawTransaction, key_handle: Any,
                         signer: Optional[TransactionSigner] = None) -> SignedEnvelope:
        """
        Bind ``tx`` to the latest block and sign it, without broadcasting.

        Raises:
            StaleReferenceError: If the latest block cannot be fetched
            SignerError: If signing fails
        """
        bind_latest(tx, self.gateway)
        signer = signer or PrivateKeySigner()
        return signer.sign_transaction(tx, key_handle)

    def send_transaction(self, tx: RawTransaction, key_handle: Any,
                         signer: Optional[TransactionSigner] = None) -> BroadcastResult:
        """
        Bind, sign and broadcast ``tx``.

        Returns:
            The node's broadcast result

        Raises:
            StaleReferenceError: If the latest block cannot be fetched
            SignerError: If signing fails
            NetworkError: If the broadcast fails
        """
        envelope = self.sign_transaction(tx, key_handle, signer)
        self.logger.debug("Broadcasting %s transaction %s", tx.contract_type.message_name, envelope.txid)
        result = self.gateway.broadcast(envelope.hex)
        if result.txid is None:
            result.txid = envelope.txid
        return result

    def send_transaction_raw(self, transaction_hex: str) -> BroadcastResult:
        """Broadcast an already signed transaction hex."""
        return self.gateway.broadcast(transaction_hex)

    # ------------------------------------------------------------------
    # Transfers
    # ------------------------------------------------------------------

    def send(self, token: str, from_address: str, to_address: str, amount: int,
             key_handle: Any, signer: Optional[TransactionSigner] = None) -> BroadcastResult:
        """Send native or issued tokens."""
        tx = factory.build_send(token, from_address, to_address, amount,
                                native_token=self.config.native_token)
        return self.send_transaction(tx, key_handle, signer)

    def send_with_note(self, token: str, from_address: str, to_address: str, amount: int,
                       note: str, key_handle: Any,
                       signer: Optional[TransactionSigner] = None) -> BroadcastResult:
        """Send tokens with a memo; an empty note sends no memo."""
        tx = factory.build_send(token, from_address, to_address, amount,
                                native_token=self.config.native_token)
        if note:
            tx.memo = encode_note(note)
        return self.send_transaction(tx, key_handle, signer)

    def get_send_hex(self, token: str, from_address: str, to_address: str, amount: int) -> str:
        """Unbound raw-data hex of a transfer, for offline preview."""
        return factory.build_transfer_hex(token, from_address, to_address, amount,
                                          native_token=self.config.native_token)

    # ------------------------------------------------------------------
    # Accounts and witnesses
    # ------------------------------------------------------------------

    def update_account_name(self, address: str, name: str, key_handle: Any,
                            signer: Optional[TransactionSigner] = None) -> BroadcastResult:
        return self.send_transaction(factory.build_account_update(address, name), key_handle, signer)

    def update_witness_url(self, address: str, url: str, key_handle: Any,
                           signer: Optional[TransactionSigner] = None) -> BroadcastResult:
        return self.send_transaction(factory.build_witness_update(address, url), key_handle, signer)

    def apply_for_delegate(self, address: str, url: str, key_handle: Any,
                           signer: Optional[TransactionSigner] = None) -> BroadcastResult:
        """Register ``address`` as a witness candidate."""
        return self.send_transaction(factory.build_witness_create(address, url), key_handle, signer)

    def vote_for_witnesses(self, address: str, votes: Mapping[str, int], key_handle: Any,
                           signer: Optional[TransactionSigner] = None) -> BroadcastResult:
        return self.send_transaction(factory.build_vote(address, votes), key_handle, signer)

    def withdraw_balance(self, address: str, key_handle: Any,
                         signer: Optional[TransactionSigner] = None) -> BroadcastResult:
        return self.send_transaction(factory.build_withdraw_balance(address), key_handle, signer)

    def update_account_permissions(self, address: str, owner: Union[Permission, dict],
                                   key_handle: Any,
                                   actives: Iterable[Union[Permission, dict]] = (),
                                   witness: Optional[Union[Permission, dict]] = None,
                                   signer: Optional[TransactionSigner] = None) -> BroadcastResult:
        tx = factory.build_account_permission_update(address, owner, actives=actives, witness=witness)
        return self.send_transaction(tx, key_handle, signer)

    # ------------------------------------------------------------------
    # Resources
    # ------------------------------------------------------------------

    def freeze_balance(self, address: str, amount: int, duration: int, key_handle: Any,
                       resource: Union[ResourceCode, str, int] = ResourceCode.BANDWIDTH,
                       receiver: Optional[str] = None,
                       signer: Optional[TransactionSigner] = None) -> BroadcastResult:
        tx = factory.build_freeze_balance(address, amount, duration, resource, receiver)
        return self.send_transaction(tx, key_handle, signer)

    def unfreeze_balance(self, address: str, key_handle: Any,
                         resource: Union[ResourceCode, str, int] = ResourceCode.BANDWIDTH,
                         receiver: Optional[str] = None,
                         signer: Optional[TransactionSigner] = None) -> BroadcastResult:
        tx = factory.build_unfreeze_balance(address, resource, receiver)
        return self.send_transaction(tx, key_handle, signer)

    def unfreeze_assets(self, address: str, key_handle: Any,
                        signer: Optional[TransactionSigner] = None) -> BroadcastResult:
        return self.send_transaction(factory.build_unfreeze_asset(address), key_handle, signer)

    # ------------------------------------------------------------------
    # Assets
    # ------------------------------------------------------------------

    def participate_asset(self, address: str, issuer_address: str, token: str, amount: int,
                          key_handle: Any, signer: Optional[TransactionSigner] = None) -> BroadcastResult:
        tx = factory.build_asset_participate(address, issuer_address, token, amount)
        return self.send_transaction(tx, key_handle, signer)

    def create_token(self, options: Dict[str, Any], key_handle: Any,
                     signer: Optional[TransactionSigner] = None) -> BroadcastResult:
        """Issue an asset; ``options`` uses AssetIssueContract field names."""
        return self.send_transaction(factory.build_asset_issue(options), key_handle, signer)

    # ------------------------------------------------------------------
    # Exchanges
    # ------------------------------------------------------------------

    def create_exchange(self, address: str, first_token_id: str, second_token_id: str,
                        first_token_balance: int, second_token_balance: int,
                        key_handle: Any, signer: Optional[TransactionSigner] = None) -> BroadcastResult:
        tx = factory.build_exchange_create(address, first_token_id, second_token_id,
                                           first_token_balance, second_token_balance)
        return self.send_transaction(tx, key_handle, signer)

    def inject_exchange(self, address: str, exchange_id: int, token_id: str, quant: int,
                        key_handle: Any, signer: Optional[TransactionSigner] = None) -> BroadcastResult:
        tx = factory.build_exchange_inject(address, exchange_id, token_id, quant)
        return self.send_transaction(tx, key_handle, signer)

    def withdraw_exchange(self, address: str, exchange_id: int, token_id: str, quant: int,
                          key_handle: Any, signer: Optional[TransactionSigner] = None) -> BroadcastResult:
        tx = factory.build_exchange_withdraw(address, exchange_id, token_id, quant)
        return self.send_transaction(tx, key_handle, signer)

    def transaction_exchange(self, address: str, exchange_id: int, token_id: str, quant: int,
                             expected: int, key_handle: Any,
                             signer: Optional[TransactionSigner] = None) -> BroadcastResult:
        tx = factory.build_exchange_transaction(address, exchange_id, token_id, quant, expected)
        return self.send_transaction(tx, key_handle, signer)

    # ------------------------------------------------------------------
    # Smart contracts and decoding
    # ------------------------------------------------------------------

    def get_trigger_smart_contract_hex(self, address: str, contract_address: str,
                                       data: Union[bytes, str] = b"", call_value: int = 0,
                                       token_id: int = 0, call_token_value: int = 0,
                                       fee_limit: Optional[int] = None) -> str:
        """Unbound raw-data hex of a contract call, for external signing."""
        tx = factory.build_trigger_smart_contract(
            address, contract_address, data=data, call_value=call_value,
            token_id=token_id, call_token_value=call_token_value, fee_limit=fee_limit,
        )
        return raw_hex(tx)

    def get_parameter_value(self, hex_payload: str,
                            contract_type: Union[str, DecodableContract]) -> Dict[str, Any]:
        """Decode a contract parameter payload for display."""
        return decode_parameters(hex_payload, contract_type)

    def close(self) -> None:
        close = getattr(self.gateway, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> TransactionClient:
        return self

    def __exit__(self, *exc) -> None:
        self.close()


__all__ = [
    "ClientConfig",
    "TransactionClient",
    "encode_note",
]
