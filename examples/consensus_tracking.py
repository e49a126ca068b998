#!/usr/bin/env python3
"""
Example: Track Trinity consensus for a vault withdrawal

1. Submit a consensus operation over REST
2. Watch it in the background until 2-of-3 chains confirm
3. With an Arbitrum RPC configured, cross-check the on-chain record

Usage:
    CHRONOS_MODE=hybrid CHRONOS_ARBITRUM_RPC=https://sepolia-rollup.arbitrum.io/rpc \
    python consensus_tracking.py <vault_id>
"""

import sys
import threading
import logging
from pathlib import Path

# Add SDK to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from chronos_sdk import ChronosVaultSDK, SDKConfig, SDKError, ConsensusMonitor, WatcherConfig

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s [%(levelname)s] %(message)s'
)
log = logging.getLogger(__name__)


def main():
    if len(sys.argv) < 2:
        print(f"Usage: {sys.argv[0]} <vault_id>")
        return 1
    vault_id = sys.argv[1]

    with ChronosVaultSDK(SDKConfig.from_env()) as sdk:
        # =================================================================
        # 1. Submit
        # =================================================================
        try:
            op = sdk.trinity.submit_consensus_operation("vault_withdrawal", {"vaultId": vault_id})
        except SDKError as e:
            log.error(f"Submit failed [{e.code}]: {e.message}")
            return 1

        # =================================================================
        # 2. Watch
        # =================================================================
        done = threading.Event()
        result = {}

        monitor = ConsensusMonitor(sdk.trinity, WatcherConfig(poll_interval=5))
        monitor.on("confirmation", lambda o, prev: log.info(
            f"{o.id}: {prev} -> {o.confirmations}/{o.required_confirmations} ({o.chains})"))
        monitor.on("consensus", lambda o: (result.update(op=o), done.set()))
        monitor.on("failed", lambda o: (result.update(op=o), done.set()))

        monitor.track(op.id)
        monitor.start()
        try:
            if not done.wait(timeout=600):
                log.error(f"No consensus for {op.id} after 10 minutes")
                return 1
        finally:
            monitor.stop()

        final = result["op"]
        if not final.has_consensus:
            log.error(f"Operation {final.id} {final.status}")
            return 1
        log.info(f"Consensus reached: {final.tx_hashes}")

        # =================================================================
        # 3. On-chain cross-check
        # =================================================================
        if sdk.is_rpc_enabled() and sdk.providers.arbitrum is not None:
            try:
                status = sdk.trinity_rpc.get_confirmation_status(final.id)
                log.info(f"On-chain: {status.confirmations} confirmations "
                         f"(arb={status.arbitrum}, sol={status.solana}, ton={status.ton})")
            except SDKError as e:
                log.warning(f"On-chain check skipped: {e}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
