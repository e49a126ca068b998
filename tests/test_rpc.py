#!/usr/bin/env python3
"""
Contract-level client tests

The Arbitrum provider is a MagicMock; tests check which contract, method
and arguments each client sends, and how results are decoded.
"""

import sys
import os
import unittest
from unittest.mock import MagicMock, patch

from web3 import Web3

# Add SDK to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from chronos_sdk.chains import MultiChainProvider, TransactionResult
from chronos_sdk.config import RPCConfig
from chronos_sdk.core import NetworkType, ZERO_ADDRESS
from chronos_sdk.errors import SDKError, ConsensusError, TransactionError, ValidationError
from chronos_sdk.trinity import TrinityRPCClient
from chronos_sdk.htlc import HTLCRPCClient
from chronos_sdk.htlc.rpc import SWAP_CREATED_TOPIC, swap_id_from_logs
from chronos_sdk.vault import VaultRPCClient
from chronos_sdk.bridge import BridgeRPCClient
from chronos_sdk.bridge.rpc import MESSAGE_SENT_TOPIC, EXIT_INITIATED_TOPIC

VERIFIER = "0x59396D58Fa856025bD5249E342729d5550Be151C"
HTLC_BRIDGE = "0x82C3AbF6036cEE41E151A90FE00181f6b18af8ca"
VAULT = "0xAE408eC592f0f865bA0012C480E8867e12B4F32D"
RELAY = "0xC6F4f855fc690CB52159eE3B13C9d9Fb8D403E59"
EXIT_GATEWAY = "0xE6FeBd695e4b5681DCF274fDB47d786523796C04"

OP_ID = "0x" + "11" * 32
SWAP_ID = "0x" + "22" * 32
HASHLOCK = "0x" + "33" * 32
PREIMAGE = "0x" + "44" * 32
USER = "0x" + "ab" * 20
OTHER = "0x" + "cd" * 20


def tx_result(logs=None, status="success", tx_hash="0xfeed"):
    return TransactionResult(hash=tx_hash, block_number=100, status=status,
                             gas_used="50000", logs=logs or [])


def make_client(cls, network=NetworkType.TESTNET):
    providers = MultiChainProvider(RPCConfig())
    providers.arbitrum = MagicMock()
    return cls(RPCConfig(), network, providers), providers.arbitrum


def by_method(values):
    """side_effect for call_contract_method keyed on method name."""
    def call(address, abi, method, args=None):
        return values[method]
    return call


class TestChainRPCClient(unittest.TestCase):

    def test_requires_arbitrum(self):
        client = TrinityRPCClient(RPCConfig())
        with self.assertRaises(SDKError) as ctx:
            client.get_consensus_threshold()
        self.assertIn("not configured", ctx.exception.message)

    def test_missing_deployment(self):
        client, arbitrum = make_client(TrinityRPCClient, NetworkType.MAINNET)
        with self.assertRaises(SDKError):
            client.has_consensus(OP_ID)
        arbitrum.call_contract_method.assert_not_called()

    def test_network_from_string(self):
        client = TrinityRPCClient(RPCConfig(), "testnet")
        self.assertEqual(client.network, NetworkType.TESTNET)

    def test_provider_accessors(self):
        client, arbitrum = make_client(TrinityRPCClient)
        self.assertIs(client.get_arbitrum_provider(), arbitrum)
        self.assertIsNone(client.get_solana_provider())
        self.assertIsNone(client.get_ton_provider())


class TestRevertedWrites(unittest.TestCase):
    """A mined-but-reverted receipt must never come back as a tx hash."""

    WRITES = [
        (TrinityRPCClient, "confirmOperation", lambda c: c.confirm_operation(OP_ID, 1, "0xdeadbeef")),
        (TrinityRPCClient, "executeOperation", lambda c: c.execute_operation(OP_ID, USER, "0x")),
        (HTLCRPCClient, "createSwap", lambda c: c.create_swap(USER, HASHLOCK, 3600, 2, "0.1")),
        (HTLCRPCClient, "claimSwap", lambda c: c.claim_swap(SWAP_ID, PREIMAGE)),
        (HTLCRPCClient, "refundSwap", lambda c: c.refund_swap(SWAP_ID)),
        (VaultRPCClient, "deposit", lambda c: c.deposit(10, USER)),
        (VaultRPCClient, "withdraw", lambda c: c.withdraw(10, USER, OTHER)),
        (VaultRPCClient, "redeem", lambda c: c.redeem(10, USER, OTHER)),
        (BridgeRPCClient, "sendMessage", lambda c: c.send_message("solana", USER, "0x01")),
        (BridgeRPCClient, "initiateExit", lambda c: c.initiate_exit(OTHER, "1", "ton", USER)),
    ]

    def test_reverted_receipt_raises(self):
        for cls, method, write in self.WRITES:
            with self.subTest(method=method):
                client, arbitrum = make_client(cls)
                # state that lets every pre-check pass
                arbitrum.call_contract_method.side_effect = by_method({
                    "hasConsensus": True,
                    "getSwapStatus": (True, False, False, True),
                    "getMessageFee": 0,
                })
                arbitrum.send_transaction.return_value = tx_result(status="failed", tx_hash="0xdead")
                with self.assertRaises(TransactionError) as ctx:
                    write(client)
                self.assertEqual(ctx.exception.tx_hash, "0xdead")
                self.assertEqual(ctx.exception.chain, "arbitrum")
                self.assertEqual(arbitrum.send_transaction.call_args[0][2], method)

    def test_provider_revert_propagates(self):
        client, arbitrum = make_client(VaultRPCClient)
        arbitrum.send_transaction.side_effect = TransactionError("deposit reverted", "0xdead", "arbitrum")
        with self.assertRaises(TransactionError):
            client.deposit(10, USER)


class TestInputValidation(unittest.TestCase):
    """Bad caller input is a ValidationError and never reaches the chain."""

    def test_bad_inputs(self):
        cases = [
            (BridgeRPCClient, "recipient", lambda c: c.send_message("solana", "not-an-address", "0x01")),
            (BridgeRPCClient, "data", lambda c: c.send_message("solana", USER, "0xzz")),
            (BridgeRPCClient, "amount_eth", lambda c: c.initiate_exit(OTHER, "1.2.3", "ton", USER)),
            (BridgeRPCClient, "token_address", lambda c: c.initiate_exit("0x1234", "1", "ton", USER)),
            (BridgeRPCClient, "recipient", lambda c: c.estimate_gas("ton", "nope", "0x")),
            (TrinityRPCClient, "target", lambda c: c.execute_operation(OP_ID, "nope", "0x")),
            (TrinityRPCClient, "signature", lambda c: c.confirm_operation(OP_ID, 1, "sig")),
            (HTLCRPCClient, "recipient", lambda c: c.create_swap("nope", HASHLOCK, 3600, 2, "0.1")),
            (HTLCRPCClient, "amount_eth", lambda c: c.create_swap(USER, HASHLOCK, 3600, 2, "a lot")),
            (VaultRPCClient, "receiver", lambda c: c.deposit(10, "nope")),
            (VaultRPCClient, "assets", lambda c: c.deposit("ten", USER)),
            (VaultRPCClient, "vault_address", lambda c: c.get_balance(USER, vault_address="0xnope")),
        ]
        for cls, field, call in cases:
            with self.subTest(field=field):
                client, arbitrum = make_client(cls)
                arbitrum.call_contract_method.side_effect = by_method({
                    "hasConsensus": True, "getMessageFee": 0})
                with self.assertRaises(ValidationError) as ctx:
                    call(client)
                self.assertEqual(ctx.exception.field, field)
                arbitrum.send_transaction.assert_not_called()
                arbitrum.estimate_gas.assert_not_called()


class TestTrinityRPCClient(unittest.TestCase):

    def setUp(self):
        self.client, self.arbitrum = make_client(TrinityRPCClient)

    def test_threshold(self):
        self.arbitrum.call_contract_method.return_value = 2
        self.assertEqual(self.client.get_consensus_threshold(), 2)
        address, _, method, args = self.arbitrum.call_contract_method.call_args[0]
        self.assertEqual(address, VERIFIER)
        self.assertEqual(method, "CONSENSUS_THRESHOLD")
        self.assertEqual(args, [])

    def test_validator_unset(self):
        self.arbitrum.call_contract_method.return_value = None
        self.assertEqual(self.client.get_validator(2), ZERO_ADDRESS)

    def test_operation_state(self):
        self.arbitrum.call_contract_method.return_value = (2, True, False, True, 1700000000, False)
        state = self.client.get_operation_state(OP_ID)
        self.assertEqual(state.chain_confirmations, 2)
        self.assertTrue(state.ton_confirmed)
        self.assertTrue(state.exists)
        args = self.arbitrum.call_contract_method.call_args[0][3]
        self.assertEqual(args, [b"\x11" * 32])

    def test_operation_state_missing(self):
        self.arbitrum.call_contract_method.return_value = (0, False, False, False, 0, False)
        self.assertFalse(self.client.get_operation_state(OP_ID).exists)

    def test_bad_operation_id(self):
        with self.assertRaises(ValidationError):
            self.client.has_consensus("0x1234")

    def test_confirmation_status(self):
        self.arbitrum.call_contract_method.return_value = (1, True, False, False)
        status = self.client.get_confirmation_status(OP_ID)
        self.assertEqual(status.confirmations, 1)
        self.assertTrue(status.arbitrum)
        self.assertFalse(status.solana)

    def test_confirm_operation(self):
        self.arbitrum.send_transaction.return_value = tx_result()
        tx_hash = self.client.confirm_operation(OP_ID, 1, "0xdeadbeef")
        self.assertEqual(tx_hash, "0xfeed")
        address, _, method, args = self.arbitrum.send_transaction.call_args[0]
        self.assertEqual(method, "confirmOperation")
        self.assertEqual(args, [b"\x11" * 32, 1, b"\xde\xad\xbe\xef"])

    def test_execute_without_consensus(self):
        self.arbitrum.call_contract_method.return_value = False
        with self.assertRaises(ConsensusError) as ctx:
            self.client.execute_operation(OP_ID, USER, "0x")
        self.assertEqual(ctx.exception.operation_id, OP_ID)
        self.arbitrum.send_transaction.assert_not_called()

    def test_execute_with_consensus(self):
        self.arbitrum.call_contract_method.return_value = True
        self.arbitrum.send_transaction.return_value = tx_result()
        self.client.execute_operation(OP_ID, USER, "0x1234", value=5)
        args = self.arbitrum.send_transaction.call_args[0][3]
        self.assertEqual(args, [b"\x11" * 32, Web3.to_checksum_address(USER), b"\x12\x34", 5])

    def test_multi_chain_status(self):
        self.arbitrum.get_block_number.return_value = 42
        status = self.client.get_multi_chain_status()
        self.assertEqual(status["arbitrum"], {"connected": True, "block_number": 42})
        self.assertFalse(status["solana"]["connected"])


class TestHTLCRPCClient(unittest.TestCase):

    def setUp(self):
        self.client, self.arbitrum = make_client(HTLCRPCClient)

    @patch("chronos_sdk.htlc.rpc.time.time", return_value=1_000_000)
    def test_create_swap(self, _):
        self.arbitrum.send_transaction.return_value = tx_result(logs=[
            {"address": HTLC_BRIDGE, "topics": ["0x" + "99" * 32], "data": "0x"},
            {"address": HTLC_BRIDGE, "topics": [SWAP_CREATED_TOPIC, SWAP_ID], "data": "0x"},
        ])
        created = self.client.create_swap(USER, HASHLOCK, 3600, 2, "0.1")
        self.assertEqual(created.swap_id, SWAP_ID)
        self.assertEqual(created.tx_hash, "0xfeed")

        call = self.arbitrum.send_transaction.call_args
        address, _, method, args = call[0]
        self.assertEqual(address, HTLC_BRIDGE)
        self.assertEqual(method, "createSwap")
        self.assertEqual(args, [Web3.to_checksum_address(USER), b"\x33" * 32, 1_003_600, 2])
        self.assertEqual(call[1]["value_wei"], 10 ** 17)

    def test_create_swap_reverted(self):
        self.arbitrum.send_transaction.return_value = tx_result(status="failed")
        with self.assertRaises(TransactionError) as ctx:
            self.client.create_swap(USER, HASHLOCK, 3600, 2, "0.1")
        self.assertEqual(ctx.exception.tx_hash, "0xfeed")

    def test_swap_id_fallback(self):
        swap_id = swap_id_from_logs([], "0xtx", HASHLOCK)
        self.assertEqual(swap_id, Web3.to_hex(Web3.keccak(text=f"0xtx-{HASHLOCK}")))

    def test_claim(self):
        self.arbitrum.call_contract_method.return_value = (True, False, False, False)
        self.arbitrum.send_transaction.return_value = tx_result()
        self.assertEqual(self.client.claim_swap(SWAP_ID, PREIMAGE), "0xfeed")
        args = self.arbitrum.send_transaction.call_args[0][3]
        self.assertEqual(args, [b"\x22" * 32, b"\x44" * 32])

    def test_claim_rejected(self):
        for status, message in (((False, False, False, False), "does not exist"),
                                ((True, True, False, False), "already claimed"),
                                ((True, False, True, False), "already refunded")):
            self.arbitrum.call_contract_method.return_value = status
            with self.assertRaises(TransactionError) as ctx:
                self.client.claim_swap(SWAP_ID, PREIMAGE)
            self.assertIn(message, ctx.exception.message)
        self.arbitrum.send_transaction.assert_not_called()

    def test_refund_before_expiry(self):
        self.arbitrum.call_contract_method.return_value = (True, False, False, False)
        with self.assertRaises(TransactionError):
            self.client.refund_swap(SWAP_ID)

    def test_refund(self):
        self.arbitrum.call_contract_method.return_value = (True, False, False, True)
        self.arbitrum.send_transaction.return_value = tx_result()
        self.assertEqual(self.client.refund_swap(SWAP_ID), "0xfeed")
        self.assertEqual(self.arbitrum.send_transaction.call_args[0][2], "refundSwap")

    def test_swap_state(self):
        self.arbitrum.call_contract_method.return_value = (
            USER, OTHER, 10 ** 17, b"\x33" * 32, 1_003_600, 2, False, False)
        state = self.client.get_swap_state(SWAP_ID)
        self.assertEqual(state.amount, "100000000000000000")
        self.assertEqual(state.hashlock, HASHLOCK)
        self.assertEqual(state.destination_chain_id, 2)

    def test_timelock_bounds(self):
        self.arbitrum.call_contract_method.side_effect = by_method({
            "MIN_TIMELOCK": 3600, "MAX_TIMELOCK": 604800})
        self.assertEqual(self.client.get_min_timelock(), 3600)
        self.assertEqual(self.client.get_max_timelock(), 604800)


class TestVaultRPCClient(unittest.TestCase):

    def setUp(self):
        self.client, self.arbitrum = make_client(VaultRPCClient)

    def test_vault_info(self):
        self.arbitrum.call_contract_method.side_effect = by_method({
            "asset": OTHER,
            "totalAssets": 5000,
            "totalSupply": 4000,
            "consensusRequired": True,
            "trinityVerifier": VERIFIER,
        })
        info = self.client.get_vault_info()
        self.assertEqual(info.total_assets, "5000")
        self.assertEqual(info.total_supply, "4000")
        self.assertTrue(info.consensus_required)
        self.assertEqual(self.arbitrum.call_contract_method.call_args[0][0], VAULT)

    def test_custom_vault_address(self):
        self.arbitrum.call_contract_method.return_value = 7
        self.client.get_balance(USER, vault_address=OTHER)
        address, _, method, args = self.arbitrum.call_contract_method.call_args[0]
        self.assertEqual(address, Web3.to_checksum_address(OTHER))
        self.assertEqual(method, "balanceOf")
        self.assertEqual(args, [Web3.to_checksum_address(USER)])

    def test_conversions(self):
        self.arbitrum.call_contract_method.return_value = 2000
        self.assertEqual(self.client.convert_to_assets("1000"), "2000")
        self.assertEqual(self.arbitrum.call_contract_method.call_args[0][3], [1000])
        self.assertEqual(self.client.convert_to_shares(10), "2000")

    def test_deposit_withdraw_redeem(self):
        self.arbitrum.send_transaction.return_value = tx_result()
        self.assertEqual(self.client.deposit("100", USER), "0xfeed")
        self.assertEqual(self.arbitrum.send_transaction.call_args[0][3],
                         [100, Web3.to_checksum_address(USER)])

        self.client.withdraw(50, USER, OTHER)
        _, _, method, args = self.arbitrum.send_transaction.call_args[0]
        self.assertEqual(method, "withdraw")
        self.assertEqual(args, [50, Web3.to_checksum_address(USER), Web3.to_checksum_address(OTHER)])

        self.client.redeem(25, USER, OTHER)
        self.assertEqual(self.arbitrum.send_transaction.call_args[0][2], "redeem")


class TestBridgeRPCClient(unittest.TestCase):

    def setUp(self):
        self.client, self.arbitrum = make_client(BridgeRPCClient)

    def test_message_fee(self):
        self.arbitrum.call_contract_method.return_value = 10 ** 15
        self.assertEqual(self.client.get_message_fee("ton"), "0.001")
        address, _, method, args = self.arbitrum.call_contract_method.call_args[0]
        self.assertEqual(address, RELAY)
        self.assertEqual(method, "getMessageFee")
        self.assertEqual(args, [3])

    def test_send_message_pays_fee(self):
        message_id = "0x" + "55" * 32
        self.arbitrum.call_contract_method.return_value = 10 ** 15
        self.arbitrum.send_transaction.return_value = tx_result(logs=[
            {"address": RELAY, "topics": [MESSAGE_SENT_TOPIC, message_id], "data": "0x"},
        ])
        result = self.client.send_message("solana", USER, "0xcafe")
        self.assertEqual(result, {"tx_hash": "0xfeed", "message_id": message_id})

        call = self.arbitrum.send_transaction.call_args
        self.assertEqual(call[0][3], [2, Web3.to_checksum_address(USER), b"\xca\xfe"])
        self.assertEqual(call[1]["value_wei"], 10 ** 15)

    def test_send_message_without_event(self):
        self.arbitrum.call_contract_method.return_value = 0
        self.arbitrum.send_transaction.return_value = tx_result()
        self.assertEqual(self.client.send_message("ton", USER, "")["message_id"], "")

    def test_statuses(self):
        self.arbitrum.call_contract_method.return_value = 2
        self.assertEqual(self.client.get_message_status("0x" + "55" * 32), "executed")
        self.assertEqual(self.client.get_exit_status("0x" + "66" * 32), "failed")

        self.arbitrum.call_contract_method.return_value = 9
        self.assertEqual(self.client.get_message_status("0x" + "55" * 32), "pending")
        self.assertEqual(self.client.get_exit_status("0x" + "66" * 32), "pending")

    def test_initiate_exit(self):
        exit_id = "0x" + "66" * 32
        self.arbitrum.send_transaction.return_value = tx_result(logs=[
            {"address": EXIT_GATEWAY, "topics": [EXIT_INITIATED_TOPIC, exit_id], "data": "0x"},
        ])
        result = self.client.initiate_exit(OTHER, "1.5", "solana", USER)
        self.assertEqual(result["exit_id"], exit_id)

        address, _, method, args = self.arbitrum.send_transaction.call_args[0]
        self.assertEqual(address, EXIT_GATEWAY)
        self.assertEqual(method, "initiateExit")
        self.assertEqual(args[1], 1_500_000_000_000_000_000)
        self.assertEqual(args[2], 2)

    def test_pending_exits(self):
        self.arbitrum.call_contract_method.return_value = [b"\x66" * 32, "0x" + "77" * 32]
        self.assertEqual(self.client.get_pending_exits(USER), ["0x" + "66" * 32, "0x" + "77" * 32])

    def test_estimate_gas(self):
        self.arbitrum.call_contract_method.return_value = 10 ** 15
        self.arbitrum.estimate_gas.return_value = 85000
        self.assertEqual(self.client.estimate_gas("arbitrum", USER, "0x"), "85000")
        self.assertEqual(self.arbitrum.estimate_gas.call_args[1]["value_wei"], 10 ** 15)

    def test_routes_and_addresses(self):
        self.assertTrue(self.client.is_route_available("solana", "ton"))
        self.assertEqual(self.client.get_contract_addresses(), {"relay": RELAY, "exit": EXIT_GATEWAY})


if __name__ == "__main__":
    unittest.main(verbosity=2)
