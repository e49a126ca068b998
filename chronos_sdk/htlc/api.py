"""
HTLC REST client.

The backend coordinates the swap; callers fund/claim on-chain and report
the transaction back.
"""

import time
import logging
from typing import Optional, Dict, List, Tuple

from ..api import ApiClient
from ..config import SDKConfig
from ..core import (
    ChainLike, parse_chain, HTLCSwap, HTLCSwapStatus,
    generate_secret, get_contract_address, DEFAULT_TIMELOCK_HOURS,
)
from ..errors import ValidationError

log = logging.getLogger(__name__)


class HTLCClient:
    """REST client for backend-coordinated HTLC swaps."""

    def __init__(self, config: SDKConfig, api: Optional[ApiClient] = None):
        self.config = config
        self.api = api or ApiClient(config)

    def update_config(self, config: SDKConfig):
        self.config = config
        self.api.update_config(config)

    def create_swap(self, source_chain: ChainLike, target_chain: ChainLike, amount: str,
                    participant: str, time_lock_hours: Optional[int] = None) -> HTLCSwap:
        """
        Register a new swap.

        Args:
            source_chain: Chain the initiator locks funds on
            target_chain: Chain the participant locks funds on
            amount: Decimal amount string
            participant: Counterparty address
            time_lock_hours: Defaults to 24

        Raises:
            ValidationError: same source and target chain, or empty inputs
        """
        source = parse_chain(source_chain)
        target = parse_chain(target_chain)
        if source == target:
            raise ValidationError("Source and target chain must differ", "target_chain")
        if not participant:
            raise ValidationError("participant is required", "participant")
        if not amount or not str(amount).strip():
            raise ValidationError("amount is required", "amount")

        data = self.api.post("/api/htlc/create", json={
            "sourceChain": source.value,
            "targetChain": target.value,
            "amount": str(amount),
            "participant": participant,
            "timeLockHours": time_lock_hours or DEFAULT_TIMELOCK_HOURS,
        })
        swap = HTLCSwap.from_dict(data)
        log.info(f"HTLC swap created: {swap.id} ({source.value} -> {target.value}, {amount})")
        return swap

    def get_swap(self, swap_id: str) -> HTLCSwap:
        return HTLCSwap.from_dict(self.api.get(f"/api/htlc/swap/{swap_id}"))

    def get_swaps_by_address(self, address: str) -> List[HTLCSwap]:
        return [HTLCSwap.from_dict(s) for s in self.api.get(f"/api/htlc/swaps/address/{address}")]

    def get_recent_swaps(self, limit: int = 10) -> List[HTLCSwap]:
        return [HTLCSwap.from_dict(s) for s in self.api.get("/api/scanner/swaps", params={"limit": limit})]

    def fund_swap(self, swap_id: str, tx_hash: str) -> HTLCSwap:
        """Report the on-chain lock transaction."""
        return HTLCSwap.from_dict(self.api.post(f"/api/htlc/fund/{swap_id}", json={"txHash": tx_hash}))

    def claim_swap(self, swap_id: str, secret: str) -> HTLCSwap:
        swap = HTLCSwap.from_dict(self.api.post(f"/api/htlc/claim/{swap_id}", json={"secret": secret}))
        log.info(f"HTLC swap claimed: {swap_id}")
        return swap

    def refund_swap(self, swap_id: str) -> HTLCSwap:
        swap = HTLCSwap.from_dict(self.api.post(f"/api/htlc/refund/{swap_id}"))
        log.info(f"HTLC swap refunded: {swap_id}")
        return swap

    def generate_secret(self) -> Tuple[str, str]:
        """(secret, keccak256 hashlock), both 0x-hex."""
        return generate_secret()

    def get_contract_addresses(self) -> Dict[str, str]:
        network = self.config.network
        return {
            "arbitrum": get_contract_address("arbitrum", network, "HTLCChronosBridge"),
            "solana": get_contract_address("solana", network, "BridgeProgram"),
            "ton": get_contract_address("ton", network, "CrossChainBridge"),
        }

    def can_claim(self, swap: HTLCSwap, now: Optional[float] = None) -> bool:
        """Funded and the timelock has not passed."""
        now = time.time() if now is None else now
        return swap.status == HTLCSwapStatus.FUNDED and now < swap.time_lock

    def can_refund(self, swap: HTLCSwap, now: Optional[float] = None) -> bool:
        """Not claimed or refunded, and the timelock has passed."""
        now = time.time() if now is None else now
        return (swap.status in (HTLCSwapStatus.INITIATED, HTLCSwapStatus.FUNDED)
                and now >= swap.time_lock)
