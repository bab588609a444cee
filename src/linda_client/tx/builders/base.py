"""
Base transaction builder.

Builders collect contract fields, validate them through the contract's
pydantic model and produce an unsigned, unbound ``RawTransaction``. No
network or signing side effects happen here.
"""

from __future__ import annotations
import logging
import time
from typing import TypeVar, Generic, Type, Dict, Any, Optional, Union
from abc import ABC, abstractmethod

from pydantic import ValidationError

from ...codec.bytecodec import encode_string
from ...codec.transaction_codec import raw_hex
from ...enums import ContractType
from ...runtime.address import Address
from ...runtime.errors import InvalidArgumentError
from ...transactions import ContractBody, RawTransaction

logger = logging.getLogger(__name__)

ContractT = TypeVar('ContractT', bound=ContractBody)


class BuilderError(InvalidArgumentError):
    """Transaction builder specific errors."""
    pass


def now_ms() -> int:
    """Current time in milliseconds since the Unix epoch."""
    return int(time.time() * 1000)


class BaseTxBuilder(Generic[ContractT], ABC):
    """
    Base class for all transaction builders.

    Generic over ContractT = the contract payload model.
    """

    def __init__(self):
        """Initialize the builder."""
        self._fields: Dict[str, Any] = {}

    @property
    @abstractmethod
    def contract_cls(self) -> Type[ContractT]:
        """Get the contract payload class."""
        pass

    @property
    def contract_type(self) -> ContractType:
        return self.contract_cls.contract_type

    def with_field(self, name: str, value: Any) -> BaseTxBuilder[ContractT]:
        """
        Set a field value (chainable).

        Args:
            name: Field name
            value: Field value

        Returns:
            Self for chaining
        """
        self._fields[name] = value
        return self

    def get_field(self, name: str, default: Any = None) -> Any:
        return self._fields.get(name, default)

    def owner(self, address: Union[str, Address]) -> BaseTxBuilder[ContractT]:
        """Set the owner (sending) account."""
        return self.with_field('owner_address', address)

    def to_contract(self) -> ContractT:
        """
        Validate the collected fields and create the contract payload.

        Raises:
            BuilderError: If any field is missing or invalid
        """
        try:
            return self.contract_cls.model_validate(self._fields)
        except ValidationError as e:
            problems = [
                f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
                for err in e.errors()
            ]
            raise BuilderError(
                f"Invalid {self.contract_cls.__name__}: {'; '.join(problems)}",
                details={"errors": problems},
                cause=e,
            )

    def validate(self) -> None:
        """
        Validate the current fields without building.

        Raises:
            BuilderError: If validation fails
        """
        self.to_contract()

    def build(
        self,
        timestamp: Optional[int] = None,
        memo: Optional[Union[str, bytes]] = None,
        fee_limit: Optional[int] = None,
    ) -> RawTransaction:
        """
        Build an unsigned, unbound transaction.

        Args:
            timestamp: Creation time in ms (defaults to now)
            memo: Optional memo, strings are stored as UTF-8
            fee_limit: Optional fee limit in base units

        Returns:
            RawTransaction with ``contract`` populated and no binding fields

        Raises:
            BuilderError: If the contract fields or options are invalid
        """
        contract = self.to_contract()

        if timestamp is None:
            timestamp = now_ms()
        if isinstance(memo, str):
            memo = encode_string(memo)

        try:
            tx = RawTransaction(
                contract=contract,
                timestamp=timestamp,
                memo=memo or None,
                fee_limit=fee_limit,
            )
        except ValidationError as e:
            raise BuilderError(f"Invalid transaction options: {e}", cause=e)

        logger.debug("Built %s transaction at %d", contract.contract_type.message_name, timestamp)
        return tx

    def to_hex(self, timestamp: Optional[int] = None) -> str:
        """Hex of the unbound ``raw_data`` serialization."""
        return raw_hex(self.build(timestamp=timestamp))

    def clone(self) -> BaseTxBuilder[ContractT]:
        cloned = self.__class__()
        cloned._fields = self._fields.copy()
        return cloned

    def reset(self) -> BaseTxBuilder[ContractT]:
        self._fields.clear()
        return self

    def __str__(self) -> str:
        return f"{self.__class__.__name__}({self.contract_type.message_name}, {len(self._fields)} fields)"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(type='{self.contract_type.message_name}', fields={list(self._fields.keys())})"


__all__ = [
    "BaseTxBuilder",
    "BuilderError",
    "now_ms",
]
