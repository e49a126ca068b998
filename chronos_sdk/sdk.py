"""
ChronosVaultSDK facade.

One object holding the REST clients (always) and, in rpc/hybrid mode
with RPC endpoints configured, the contract-level clients.
"""

import copy
import logging
from typing import Optional, Dict, Any

from .api import ApiClient
from .config import SDKConfig
from .core import SDKMode
from .chains.multichain import MultiChainProvider, probe_chains
from .trinity import TrinityProtocolClient, TrinityRPCClient
from .htlc import HTLCClient, HTLCRPCClient
from .vault import VaultClient, VaultRPCClient
from .bridge import BridgeClient, BridgeRPCClient

log = logging.getLogger(__name__)

VERSION = "1.1.0"


class ChronosVaultSDK:
    """
    Entry point for the Chronos Vault / Trinity Protocol SDK.

    Usage:
        sdk = ChronosVaultSDK(mode="hybrid", rpc=RPCConfig(arbitrum=ArbitrumConfig()))
        stats = sdk.trinity.get_stats()
        state = sdk.trinity_rpc.get_operation_state(op_id)
    """

    version = VERSION

    def __init__(self, config: Optional[SDKConfig] = None, **overrides):
        config = config or SDKConfig()
        self.config = config.merged(**overrides) if overrides else config

        self.api = ApiClient(self.config)
        self.trinity = TrinityProtocolClient(self.config, self.api)
        self.htlc = HTLCClient(self.config, self.api)
        self.vault = VaultClient(self.config, self.api)
        self.bridge = BridgeClient(self.config, self.api)

        self.providers: Optional[MultiChainProvider] = None
        self.trinity_rpc: Optional[TrinityRPCClient] = None
        self.htlc_rpc: Optional[HTLCRPCClient] = None
        self.vault_rpc: Optional[VaultRPCClient] = None
        self.bridge_rpc: Optional[BridgeRPCClient] = None
        self._init_rpc()

    def _init_rpc(self):
        if self.config.mode == SDKMode.API or self.config.rpc.is_empty():
            return

        self.providers = MultiChainProvider(self.config.rpc)
        network = self.config.network
        self.trinity_rpc = TrinityRPCClient(self.config.rpc, network, self.providers)
        self.htlc_rpc = HTLCRPCClient(self.config.rpc, network, self.providers)
        self.vault_rpc = VaultRPCClient(self.config.rpc, network, self.providers)
        self.bridge_rpc = BridgeRPCClient(self.config.rpc, network, self.providers)
        log.info(f"RPC clients initialized ({self.config.mode.value} mode)")

    def _close_rpc(self):
        if self.providers is not None:
            self.providers.close()
        self.providers = None
        self.trinity_rpc = None
        self.htlc_rpc = None
        self.vault_rpc = None
        self.bridge_rpc = None

    def get_config(self) -> SDKConfig:
        """Copy of the active config."""
        return copy.deepcopy(self.config)

    def update_config(self, **overrides):
        """Apply a partial update; RPC clients are rebuilt from the new config."""
        self.config = self.config.merged(**overrides)
        self.api.update_config(self.config)
        for client in (self.trinity, self.htlc, self.vault, self.bridge):
            client.config = self.config

        self._close_rpc()
        self._init_rpc()

    def get_mode(self) -> str:
        return self.config.mode.value

    def is_rpc_enabled(self) -> bool:
        return self.config.mode != SDKMode.API and self.providers is not None

    def get_chain_status(self) -> Dict[str, Dict[str, Any]]:
        """Connectivity per chain. All disconnected without RPC."""
        if self.providers is None:
            return probe_chains(None, None, None)
        return self.providers.get_chain_statuses()

    def close(self):
        self.api.close()
        self._close_rpc()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
