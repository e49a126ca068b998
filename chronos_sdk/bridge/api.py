"""
Bridge REST client.

Routes: arbitrum <-> solana, arbitrum <-> ton, solana <-> ton.
"""

import logging
from typing import Optional, Dict, Any, List

from ..api import ApiClient
from ..config import SDKConfig
from ..core import (
    ChainId, ChainLike, parse_chain,
    BridgeTransaction, BridgeTransactionStatus, BridgeStatus, BridgeFees,
    get_contract_address,
)
from ..errors import ValidationError

log = logging.getLogger(__name__)

ROUTES = [
    (ChainId.ARBITRUM, ChainId.SOLANA),
    (ChainId.ARBITRUM, ChainId.TON),
    (ChainId.SOLANA, ChainId.TON),
]


def is_route_available(source_chain: ChainLike, target_chain: ChainLike) -> bool:
    """Any ordered pair of distinct supported chains."""
    try:
        source, target = parse_chain(source_chain), parse_chain(target_chain)
    except ValidationError:
        return False
    return (source, target) in ROUTES or (target, source) in ROUTES


def _check_route(source_chain: ChainLike, target_chain: ChainLike):
    source, target = parse_chain(source_chain), parse_chain(target_chain)
    if not is_route_available(source, target):
        raise ValidationError(f"Unsupported route: {source.value} -> {target.value}", "target_chain")
    return source, target


class BridgeClient:
    """REST client for cross-chain transfers."""

    def __init__(self, config: SDKConfig, api: Optional[ApiClient] = None):
        self.config = config
        self.api = api or ApiClient(config)

    def update_config(self, config: SDKConfig):
        self.config = config
        self.api.update_config(config)

    def get_bridge_statuses(self) -> List[BridgeStatus]:
        return [BridgeStatus.from_dict(s) for s in self.api.get("/api/bridge/status")]

    def get_bridge_status(self, source_chain: ChainLike, target_chain: ChainLike) -> BridgeStatus:
        source, target = _check_route(source_chain, target_chain)
        return BridgeStatus.from_dict(self.api.get(f"/api/bridge/status/{source.value}/{target.value}"))

    def initialize_bridge(self, source_chain: ChainLike, target_chain: ChainLike) -> Dict[str, Any]:
        """Returns {"bridgeId": ..., "status": ...}."""
        source, target = _check_route(source_chain, target_chain)
        return self.api.post("/api/bridge/initialize", json={
            "sourceChain": source.value,
            "targetChain": target.value,
        })

    def transfer(self, source_chain: ChainLike, target_chain: ChainLike, amount: str,
                 asset_type: str, sender_address: str, recipient_address: str) -> BridgeTransaction:
        """
        Start a cross-chain transfer.

        Raises:
            ValidationError: unsupported route, or missing sender/recipient
        """
        source, target = _check_route(source_chain, target_chain)
        if not sender_address:
            raise ValidationError("sender_address is required", "sender_address")
        if not recipient_address:
            raise ValidationError("recipient_address is required", "recipient_address")

        tx = BridgeTransaction.from_dict(self.api.post("/api/bridge/transfer", json={
            "sourceChain": source.value,
            "targetChain": target.value,
            "amount": str(amount),
            "assetType": asset_type,
            "senderAddress": sender_address,
            "recipientAddress": recipient_address,
        }))
        log.info(f"Bridge transfer {tx.id}: {amount} {asset_type} {source.value} -> {target.value}")
        return tx

    def get_transfer(self, transfer_id: str) -> BridgeTransaction:
        return BridgeTransaction.from_dict(self.api.get(f"/api/bridge/transfer/{transfer_id}"))

    def get_transfers_by_address(self, address: str) -> List[BridgeTransaction]:
        return [BridgeTransaction.from_dict(t) for t in self.api.get(f"/api/bridge/transfers/address/{address}")]

    def get_recent_transfers(self, limit: int = 10) -> List[BridgeTransaction]:
        data = self.api.get("/api/bridge/transactions", params={"limit": limit})
        return [BridgeTransaction.from_dict(t) for t in data]

    def estimate_fees(self, source_chain: ChainLike, target_chain: ChainLike,
                      amount: str, asset_type: str) -> BridgeFees:
        source, target = _check_route(source_chain, target_chain)
        return BridgeFees.from_dict(self.api.post("/api/bridge/estimate", json={
            "sourceChain": source.value,
            "targetChain": target.value,
            "amount": str(amount),
            "assetType": asset_type,
        }))

    def get_supported_assets(self) -> List[Dict[str, Any]]:
        return self.api.get("/api/bridge/assets")

    def get_contract_addresses(self) -> Dict[str, Any]:
        network = self.config.network
        return {
            "arbitrum": {
                "relay": get_contract_address("arbitrum", network, "CrossChainMessageRelay"),
                "exit": get_contract_address("arbitrum", network, "TrinityExitGateway"),
            },
            "solana": get_contract_address("solana", network, "BridgeProgram"),
            "ton": get_contract_address("ton", network, "CrossChainBridge"),
        }

    def get_available_routes(self) -> List[Dict[str, Any]]:
        return [
            {"source": source.value, "target": target.value, "bidirectional": True}
            for source, target in ROUTES
        ]

    def is_transfer_complete(self, transfer: BridgeTransaction) -> bool:
        return transfer.status == BridgeTransactionStatus.COMPLETED

    def is_transfer_failed(self, transfer: BridgeTransaction) -> bool:
        return transfer.status == BridgeTransactionStatus.FAILED
