#!/usr/bin/env python3
"""
Example: ETH -> SOL atomic swap with client-side secrets

1. Generate the HTLC secret locally (only its keccak256 hash is sent)
2. Create the order on the atomic-swap service
3. Wait for Trinity 2-of-3 consensus on the locks
4. Claim by revealing the secret

Usage:
    CHRONOS_API_URL=https://api.chronosvault.org \
    CHRONOS_SECRET_PASSWORD=... \
    python atomic_swap.py 0xYourAddress
"""

import os
import sys
import logging
from pathlib import Path

# Add SDK to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from chronos_sdk import SDKConfig, SDKError
from chronos_sdk.htlc import AtomicSwapClient, SwapParams, SecretStore

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s [%(levelname)s] %(message)s'
)
log = logging.getLogger(__name__)


def main():
    if len(sys.argv) < 2:
        print(f"Usage: {sys.argv[0]} <user_address>")
        return 1
    user_address = sys.argv[1]

    # =================================================================
    # 1. Initialize client
    # =================================================================
    config = SDKConfig.from_env()
    store = SecretStore(password=os.environ.get("CHRONOS_SECRET_PASSWORD"))
    client = AtomicSwapClient(config, store=store)

    params = SwapParams(
        user_address=user_address,
        from_token="ETH",
        to_token="SOL",
        from_amount="0.01",
        min_amount="0.4",
        from_network="arbitrum",
        to_network="solana",
    )

    # =================================================================
    # 2. Run the swap
    # =================================================================
    def on_progress(step, data):
        if step == "consensus_progress":
            log.info(f"Consensus: {data['valid_proofs']}/{data['required']} proofs")
        elif data:
            log.info(f"{step}: {data}")
        else:
            log.info(step)

    try:
        tx_hash = client.execute_swap(params, on_progress)
    except SDKError as e:
        log.error(f"Swap failed [{e.code}]: {e.message}")
        return 1
    finally:
        client.close()

    log.info(f"Swap complete - claim tx {tx_hash}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
