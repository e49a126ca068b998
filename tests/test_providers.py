#!/usr/bin/env python3
"""
Chain provider tests

Solana and TON JSON-RPC run against httpx.MockTransport; Arbitrum is
exercised through a mocked web3 instance.
"""

import sys
import os
import json
import unittest
from unittest.mock import MagicMock, PropertyMock

import httpx

# Add SDK to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from chronos_sdk.chains import ArbitrumProvider, SolanaProvider, TonProvider, MultiChainProvider
from chronos_sdk.chains.arbitrum import _receipt_to_result
from chronos_sdk.chains.multichain import probe_chains
from chronos_sdk.config import ArbitrumConfig, SolanaConfig, TonConfig, RPCConfig
from chronos_sdk.errors import SDKError, ProviderError, TransactionError, ValidationError

# Well-known test key from the web3.py docs
TEST_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
TEST_ADDRESS = "0x2c7536E3605D9C16a7a3D7b1898e529396a65c23"


class JsonRpcServer:
    """MockTransport handler answering by JSON-RPC method."""

    def __init__(self, answers):
        self.answers = answers
        self.calls = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        self.calls.append(body)
        answer = self.answers[body["method"]]
        if isinstance(answer, httpx.Response):
            return answer
        return httpx.Response(200, json=answer)


class TestSolanaProvider(unittest.TestCase):

    def make(self, answers):
        server = JsonRpcServer(answers)
        provider = SolanaProvider(SolanaConfig(rpc_url="https://sol.test"),
                                  transport=httpx.MockTransport(server))
        return provider, server

    def test_slot(self):
        provider, server = self.make({"getSlot": {"jsonrpc": "2.0", "id": 1, "result": 312}})
        self.assertEqual(provider.get_slot(), 312)
        self.assertEqual(server.calls[0]["params"], [{"commitment": "confirmed"}])

    def test_request_ids_increment(self):
        provider, server = self.make({"getSlot": {"jsonrpc": "2.0", "id": 1, "result": 1}})
        provider.get_slot()
        provider.get_slot()
        self.assertEqual([c["id"] for c in server.calls], [1, 2])

    def test_balance_in_sol(self):
        provider, _ = self.make({"getBalance": {"result": {"context": {}, "value": 2_500_000_000}}})
        self.assertEqual(provider.get_balance("addr"), 2.5)

    def test_account_info_missing(self):
        provider, _ = self.make({"getAccountInfo": {"result": {"context": {}, "value": None}}})
        self.assertIsNone(provider.get_account_info("addr"))

    def test_blockhash(self):
        provider, _ = self.make({"getLatestBlockhash": {"result": {"value": {"blockhash": "abc"}}}})
        self.assertEqual(provider.get_latest_blockhash(), "abc")

    def test_signature_status(self):
        provider, _ = self.make({"getSignatureStatuses": {"result": {"value": [None]}}})
        self.assertIsNone(provider.get_signature_status("sig"))

    def test_send_raw_transaction(self):
        provider, server = self.make({"sendTransaction": {"result": "5sig"}})
        self.assertEqual(provider.send_raw_transaction("AQID"), "5sig")
        self.assertEqual(server.calls[0]["params"][0], "AQID")
        self.assertEqual(server.calls[0]["params"][1]["encoding"], "base64")

    def test_rpc_error(self):
        provider, _ = self.make({"getSlot": {"error": {"code": -32005, "message": "behind"}}})
        with self.assertRaises(ProviderError) as ctx:
            provider.get_slot()
        self.assertEqual(ctx.exception.chain, "solana")

    def test_http_error(self):
        provider, _ = self.make({"getSlot": httpx.Response(503)})
        with self.assertRaises(ProviderError):
            provider.get_slot()


class TestTonProvider(unittest.TestCase):

    def make(self, answers, api_key=""):
        server = JsonRpcServer(answers)
        self.headers = []

        def handler(request):
            self.headers.append(request.headers)
            return server(request)

        provider = TonProvider(TonConfig(endpoint="https://ton.test", api_key=api_key),
                               transport=httpx.MockTransport(handler))
        return provider, server

    def test_balance(self):
        provider, server = self.make({"getAddressBalance": {"ok": True, "result": "1500000000"}})
        self.assertEqual(provider.get_balance("EQaddr"), "1.5")
        self.assertEqual(server.calls[0]["params"], {"address": "EQaddr"})

    def test_balance_exact(self):
        provider, _ = self.make({"getAddressBalance": {"ok": True, "result": "1"}})
        self.assertEqual(provider.get_balance("EQaddr"), "0.000000001")
        provider, _ = self.make({"getAddressBalance": {"ok": True, "result": "123456789012345678"}})
        self.assertEqual(provider.get_balance("EQaddr"), "123456789.012345678")

    def test_api_key_header(self):
        provider, _ = self.make({"getMasterchainInfo": {"ok": True, "result": {}}}, api_key="tk")
        provider.get_masterchain_info()
        self.assertEqual(self.headers[0]["X-API-Key"], "tk")

    def test_not_ok(self):
        provider, _ = self.make({"getAddressBalance": {"ok": False, "error": "bad address", "code": 416}})
        with self.assertRaises(ProviderError) as ctx:
            provider.get_balance("nope")
        self.assertEqual(ctx.exception.chain, "ton")

    def test_run_get_method(self):
        provider, _ = self.make({"runGetMethod": {"ok": True, "result": {
            "exit_code": 0, "stack": [["num", "0x2"]]}}})
        self.assertEqual(provider.run_get_method("EQ", "get_threshold"), [["num", "0x2"]])

    def test_run_get_method_failure(self):
        provider, _ = self.make({"runGetMethod": {"ok": True, "result": {"exit_code": 11, "stack": []}}})
        with self.assertRaises(ProviderError):
            provider.run_get_method("EQ", "missing")

    def test_is_contract_deployed(self):
        provider, _ = self.make({"getAddressState": {"ok": True, "result": "active"}})
        self.assertTrue(provider.is_contract_deployed("EQ"))
        provider, _ = self.make({"getAddressState": {"ok": True, "result": "uninitialized"}})
        self.assertFalse(provider.is_contract_deployed("EQ"))

    def test_send_boc(self):
        provider, server = self.make({"sendBoc": {"ok": True, "result": {"@type": "ok"}}})
        provider.send_boc("te6cc")
        self.assertEqual(server.calls[0]["params"], {"boc": "te6cc"})


class TestArbitrumProvider(unittest.TestCase):

    def test_read_only(self):
        provider = ArbitrumProvider(ArbitrumConfig())
        self.assertFalse(provider.has_signer)
        with self.assertRaises(SDKError):
            provider.get_signer_address()
        with self.assertRaises(SDKError):
            provider.send_transaction(TEST_ADDRESS, [], "foo")

    def test_signer_without_prefix(self):
        provider = ArbitrumProvider(ArbitrumConfig(private_key=TEST_KEY[2:]))
        self.assertTrue(provider.has_signer)
        self.assertEqual(provider.get_signer_address(), TEST_ADDRESS)

    def test_block_number_failure(self):
        provider = ArbitrumProvider(ArbitrumConfig())
        provider._web3 = MagicMock()
        type(provider._web3.eth).block_number = PropertyMock(side_effect=ConnectionError("down"))
        with self.assertRaises(ProviderError) as ctx:
            provider.get_block_number()
        self.assertEqual(ctx.exception.chain, "arbitrum")

    def test_call_contract_method(self):
        provider = ArbitrumProvider(ArbitrumConfig())
        provider._web3 = MagicMock()
        contract = provider._web3.eth.contract.return_value
        contract.functions.hasConsensus.return_value.call.return_value = True

        self.assertTrue(provider.call_contract_method(TEST_ADDRESS, [], "hasConsensus", [b"\x00" * 32]))
        contract.functions.hasConsensus.assert_called_once_with(b"\x00" * 32)

    def make_signing_provider(self, receipt_status):
        provider = ArbitrumProvider(ArbitrumConfig(private_key=TEST_KEY))
        provider._account = MagicMock(address=TEST_ADDRESS)
        provider._web3 = MagicMock()
        eth = provider._web3.eth
        eth.gas_price = 100
        eth.get_transaction_count.return_value = 0
        eth.send_raw_transaction.return_value = b"\x0a" * 32
        eth.wait_for_transaction_receipt.return_value = {
            "transactionHash": b"\x0a" * 32,
            "blockNumber": 7,
            "status": receipt_status,
            "gasUsed": 30000,
            "logs": [],
        }
        fn = eth.contract.return_value.functions.claimSwap.return_value
        fn.estimate_gas.return_value = 25000
        return provider

    def test_send_transaction(self):
        provider = self.make_signing_provider(1)
        result = provider.send_transaction(TEST_ADDRESS, [], "claimSwap", [b"\x00" * 32], value_eth="0.5")
        self.assertTrue(result.success)
        self.assertEqual(result.hash, "0x" + "0a" * 32)
        fn = provider._web3.eth.contract.return_value.functions.claimSwap.return_value
        self.assertEqual(fn.build_transaction.call_args[0][0]["value"], 5 * 10 ** 17)

    def test_send_transaction_reverted(self):
        provider = self.make_signing_provider(0)
        with self.assertRaises(TransactionError) as ctx:
            provider.send_transaction(TEST_ADDRESS, [], "claimSwap", [b"\x00" * 32])
        self.assertEqual(ctx.exception.tx_hash, "0x" + "0a" * 32)
        self.assertEqual(ctx.exception.chain, "arbitrum")

    def test_send_transaction_bad_value(self):
        provider = self.make_signing_provider(1)
        with self.assertRaises(ValidationError):
            provider.send_transaction(TEST_ADDRESS, [], "claimSwap", [], value_eth="lots")
        provider._web3.eth.send_raw_transaction.assert_not_called()

    def test_balance_exact(self):
        provider = ArbitrumProvider(ArbitrumConfig())
        provider._web3 = MagicMock()
        provider._web3.eth.get_balance.return_value = 1
        self.assertEqual(provider.get_balance(TEST_ADDRESS), "0.000000000000000001")
        provider._web3.eth.get_balance.return_value = 123456789012345678901
        self.assertEqual(provider.get_balance(TEST_ADDRESS), "123.456789012345678901")

    def test_balance_bad_address(self):
        provider = ArbitrumProvider(ArbitrumConfig())
        provider._web3 = MagicMock()
        with self.assertRaises(ValidationError):
            provider.get_balance("not-an-address")
        provider._web3.eth.get_balance.assert_not_called()

    def test_receipt_decoding(self):
        receipt = {
            "transactionHash": b"\x01" * 32,
            "blockNumber": 99,
            "status": 1,
            "gasUsed": 21000,
            "logs": [{"address": TEST_ADDRESS, "topics": [b"\x02" * 32], "data": b"\x03"}],
        }
        result = _receipt_to_result(receipt)
        self.assertTrue(result.success)
        self.assertEqual(result.hash, "0x" + "01" * 32)
        self.assertEqual(result.gas_used, "21000")
        self.assertEqual(result.logs[0]["topics"], ["0x" + "02" * 32])
        self.assertEqual(result.logs[0]["data"], "0x03")

        receipt["status"] = 0
        self.assertFalse(_receipt_to_result(receipt).success)


class TestMultiChain(unittest.TestCase):

    def test_only_configured_chains(self):
        providers = MultiChainProvider(RPCConfig(ton=TonConfig()))
        self.assertIsNone(providers.arbitrum)
        self.assertIsNone(providers.solana)
        self.assertIsInstance(providers.ton, TonProvider)
        providers.close()

    def test_probe_chains(self):
        arbitrum = MagicMock()
        arbitrum.get_block_number.return_value = 1234
        solana = MagicMock()
        solana.get_slot.side_effect = ProviderError("RPC call failed: getSlot", "solana")
        ton = MagicMock()
        ton.get_masterchain_info.return_value = {"last": {"seqno": 77}}

        status = probe_chains(arbitrum, solana, ton)
        self.assertEqual(status["arbitrum"], {"connected": True, "block_number": 1234})
        self.assertEqual(status["solana"], {"connected": False})
        self.assertEqual(status["ton"], {"connected": True, "block_number": 77})

    def test_probe_nothing(self):
        status = probe_chains(None, None, None)
        self.assertEqual(set(status), {"arbitrum", "solana", "ton"})
        self.assertFalse(any(s["connected"] for s in status.values()))


if __name__ == "__main__":
    unittest.main(verbosity=2)
